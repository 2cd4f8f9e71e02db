"""Process-wide OCR engine.

Tesseract is probed once per process; every request then shares the same
engine. Recognition runs in worker threads, so the engine guards itself with
a semaphore sized by ``OCR_MAX_CONCURRENCY``.
"""
from __future__ import annotations

import logging
import threading

import pytesseract
from pdf2image import convert_from_bytes
from PIL import Image

from resume_fit.core.config import settings
from resume_fit.extraction.errors import OcrUnavailableError

logger = logging.getLogger(__name__)


class OcrEngine:
    def __init__(
        self,
        *,
        lang: str = "eng",
        timeout_s: float = 60.0,
        max_concurrency: int = 1,
        tesseract_cmd: str | None = None,
    ):
        self._lang = lang
        self._timeout_s = timeout_s
        self._slots = threading.BoundedSemaphore(max(1, max_concurrency))
        self._tesseract_cmd = tesseract_cmd
        self.version: str | None = None

    def start(self) -> None:
        if self._tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd
        try:
            self.version = str(pytesseract.get_tesseract_version())
        except (pytesseract.TesseractNotFoundError, OSError) as exc:
            logger.warning("ocr_engine_unavailable: %s", exc)
            raise OcrUnavailableError() from exc
        logger.info("ocr_engine_started version=%s lang=%s", self.version, self._lang)

    def recognize(self, image: Image.Image) -> str:
        if image.mode not in {"RGB", "L"}:
            image = image.convert("RGB")
        with self._slots:
            text = pytesseract.image_to_string(image, lang=self._lang, timeout=self._timeout_s)
        return (text or "").strip()


_engine: OcrEngine | None = None
_engine_lock = threading.Lock()


def get_ocr_engine() -> OcrEngine:
    global _engine
    engine = _engine
    if engine is not None:
        return engine
    with _engine_lock:
        if _engine is None:
            candidate = OcrEngine(
                lang=settings.ocr_lang,
                timeout_s=settings.ocr_timeout_s,
                max_concurrency=settings.ocr_max_concurrency,
                tesseract_cmd=settings.tesseract_cmd,
            )
            # Publish only a fully started engine; a failed start leaves the slot empty.
            candidate.start()
            _engine = candidate
        return _engine


def shutdown_ocr_engine() -> None:
    global _engine
    with _engine_lock:
        if _engine is not None:
            logger.info("ocr_engine_stopped")
        _engine = None


def rasterize_pdf(content: bytes, *, dpi: int, max_pages: int) -> list[Image.Image]:
    """Render PDF pages to images, first page first."""
    return convert_from_bytes(content, dpi=dpi, first_page=1, last_page=max(1, max_pages))
