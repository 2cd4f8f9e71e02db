from __future__ import annotations

import logging
import threading

from resume_fit.ai.config import load_ai_config
from resume_fit.ai.types import AIClient
from resume_fit.ai.providers.gemini_provider import GeminiProvider
from resume_fit.ai.providers.openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

_client: AIClient | None = None
_client_lock = threading.Lock()


def _build_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model)

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def get_ai_client() -> AIClient:
    global _client
    client = _client
    if client is not None:
        return client
    with _client_lock:
        if _client is None:
            _client = _build_ai_client()
            logger.info("ai_client_ready provider=%s", type(_client).__name__)
        return _client


async def close_ai_client() -> None:
    global _client
    with _client_lock:
        client, _client = _client, None
    if client is not None:
        await client.aclose()
