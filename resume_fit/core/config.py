from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    rate_limit: str
    rate_limit_enabled: bool
    max_upload_bytes: int
    ocr_enabled: bool
    ocr_lang: str
    ocr_pdf_dpi: int
    ocr_max_pages: int
    ocr_max_concurrency: int
    ocr_timeout_s: float
    ocr_warmup: bool
    tesseract_cmd: str | None
    ai_provider: str
    ai_model: str | None
    openai_api_key: str | None
    openai_base_url: str | None
    gemini_api_key: str | None
    llm_timeout_s: float
    llm_max_retries: int
    llm_temperature: float
    llm_max_output_tokens: int


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
            ],
        ),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        ocr_enabled=_get_env_bool("OCR_ENABLED", True),
        ocr_lang=_get_env("OCR_LANG", "eng") or "eng",
        ocr_pdf_dpi=_get_env_int("OCR_PDF_DPI", 200),
        ocr_max_pages=_get_env_int("OCR_MAX_PAGES", 10),
        ocr_max_concurrency=max(1, _get_env_int("OCR_MAX_CONCURRENCY", 1)),
        ocr_timeout_s=_get_env_float("OCR_TIMEOUT_S", 60.0),
        ocr_warmup=_get_env_bool("OCR_WARMUP", False),
        tesseract_cmd=_get_env("TESSERACT_CMD"),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=_get_env("AI_MODEL"),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        gemini_api_key=_get_env("GEMINI_API_KEY") or _get_env("GOOGLE_API_KEY"),
        llm_timeout_s=_get_env_float("LLM_TIMEOUT_S", 60.0),
        llm_max_retries=_get_env_int("LLM_MAX_RETRIES", 2),
        llm_temperature=_get_env_float("LLM_TEMPERATURE", 0.3),
        llm_max_output_tokens=_get_env_int("LLM_MAX_OUTPUT_TOKENS", 4096),
    )


settings = load_settings()
