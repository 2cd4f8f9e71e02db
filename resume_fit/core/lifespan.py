import asyncio
import logging
from contextlib import asynccontextmanager

from resume_fit.ai.factory import close_ai_client
from resume_fit.core.config import settings
from resume_fit.extraction import OcrUnavailableError, get_ocr_engine, shutdown_ocr_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    _ = app
    if settings.ocr_enabled and settings.ocr_warmup:
        try:
            await asyncio.to_thread(get_ocr_engine)
        except OcrUnavailableError as exc:
            logger.warning("ocr_warmup_skipped: %s", exc)

    yield

    try:
        await close_ai_client()
    finally:
        shutdown_ocr_engine()
