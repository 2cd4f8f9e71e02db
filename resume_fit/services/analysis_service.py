from __future__ import annotations

import asyncio
import json
import logging
import re
import time

from resume_fit.ai.factory import get_ai_client
from resume_fit.ai.types import AIClient
from resume_fit.core.config import settings
from resume_fit.schemas.analysis import AnalysisResult
from resume_fit.services.errors import (
    AnalysisError,
    AnalysisFailedError,
    EmptyModelResponseError,
    MalformedResponseError,
    ModelAuthenticationError,
    ModelQuotaExceededError,
    ModelRateLimitError,
    ValidationError,
)
from resume_fit.services.prompts import ANALYSIS_RESPONSE_SCHEMA, SYSTEM_PROMPT, build_user_prompt
from resume_fit.services.sanitizer import sanitize

logger = logging.getLogger(__name__)

_AUTH_MARKERS = ("api key", "api_key", "unauthorized", "permission denied", "permission_denied")
_QUOTA_MARKERS = ("quota",)
_RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "too many requests", "resource_exhausted")

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _upstream_status(exc: Exception) -> int | None:
    for attr in ("status_code", "code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def translate_upstream_error(exc: Exception) -> AnalysisError:
    """Map a provider failure onto the error kinds the API reports to users."""
    message = str(exc) or type(exc).__name__
    lowered = message.lower()
    status = _upstream_status(exc)

    if status in {401, 403} or any(marker in lowered for marker in _AUTH_MARKERS):
        return ModelAuthenticationError()
    if any(marker in lowered for marker in _QUOTA_MARKERS):
        return ModelQuotaExceededError()
    if status == 429 or any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
        return ModelRateLimitError()
    return AnalysisFailedError(message)


def parse_model_json(raw_text: str | None):
    if raw_text is None or not raw_text.strip():
        raise EmptyModelResponseError()
    candidate = raw_text.strip()
    fenced = _CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("analysis_response_not_json chars=%s: %s", len(raw_text), exc)
        raise MalformedResponseError() from exc


async def analyze_resume(
    resume_text: str,
    job_description: str,
    *,
    client: AIClient | None = None,
) -> AnalysisResult:
    """Score a resume against a job description with the configured model.

    Raises ``ValidationError`` for blank inputs before any model call, and an
    ``AnalysisError`` subclass for every upstream failure. The returned record
    has always been through ``sanitize``.
    """
    if not (resume_text or "").strip():
        raise ValidationError("Resume text is required", field="resumeText")
    if not (job_description or "").strip():
        raise ValidationError("Job description is required", field="jobDescription")

    started = time.perf_counter()
    try:
        ai_client = client or get_ai_client()
        raw_text = await asyncio.wait_for(
            ai_client.generate_json(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=build_user_prompt(resume_text, job_description),
                response_schema=ANALYSIS_RESPONSE_SCHEMA,
                temperature=settings.llm_temperature,
            ),
            timeout=settings.llm_timeout_s,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("analysis_timeout timeout_s=%s", settings.llm_timeout_s)
        raise AnalysisFailedError("the AI model did not answer in time") from exc
    except AnalysisError:
        raise
    except Exception as exc:
        translated = translate_upstream_error(exc)
        logger.warning(
            "analysis_upstream_failed code=%s resume_len=%s jd_len=%s: %s",
            translated.code,
            len(resume_text),
            len(job_description),
            exc,
        )
        raise translated from exc

    result = sanitize(parse_model_json(raw_text))
    logger.info(
        "analysis_completed latency_ms=%s match=%s missing_skills=%s suggestions=%s",
        int((time.perf_counter() - started) * 1000),
        result.match_score,
        len(result.missing_skills),
        len(result.suggestions),
    )
    return result
