from __future__ import annotations

import asyncio
import logging
import re
from io import BytesIO
from typing import Callable
from zipfile import BadZipFile, ZipFile

import defusedxml.ElementTree as ET
from docx import Document
from PIL import Image, UnidentifiedImageError
from pypdf import PdfReader

from resume_fit.core.config import settings
from resume_fit.extraction import ocr
from resume_fit.extraction.errors import (
    EmptyExtractionError,
    ImageBasedPdfError,
    OcrUnavailableError,
    UnsupportedTypeError,
)
from resume_fit.extraction.signatures import (
    DOC_MIME,
    DOCX_MIME,
    IMAGE_MIMES,
    PDF_MIME,
    is_zip_payload,
    normalize_mime_type,
)

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


def normalize_extracted_text(text: str) -> str:
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    normalized = re.sub(r"[ \t]{2,}", " ", normalized)
    normalized = re.sub(r"\n{3,}", "\n\n", normalized)
    return normalized.strip()


def _pdf_text_layer(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    page_chunks: list[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            page_chunks.append(page_text)
    return PAGE_SEPARATOR.join(page_chunks)


def _ocr_pdf_pages(content: bytes) -> str:
    engine = ocr.get_ocr_engine()
    pages = ocr.rasterize_pdf(content, dpi=settings.ocr_pdf_dpi, max_pages=settings.ocr_max_pages)
    page_texts: list[str] = []
    for index, page in enumerate(pages, start=1):
        page_text = engine.recognize(page)
        logger.debug("pdf_ocr_page page=%s chars=%s", index, len(page_text))
        if page_text.strip():
            page_texts.append(page_text.strip())
    return PAGE_SEPARATOR.join(page_texts)


def extract_pdf(content: bytes) -> str:
    try:
        text = normalize_extracted_text(_pdf_text_layer(content))
    except Exception as exc:  # pypdf surfaces damaged files through many exception types
        logger.warning("pdf_text_layer_failed: %s", exc)
        text = ""
    if text:
        return text

    if not settings.ocr_enabled:
        raise ImageBasedPdfError()

    logger.info("pdf_without_text_layer falling back to OCR")
    try:
        recovered = normalize_extracted_text(_ocr_pdf_pages(content))
    except Exception as exc:
        logger.warning("pdf_ocr_fallback_failed: %s", exc)
        raise ImageBasedPdfError() from exc
    if not recovered:
        raise ImageBasedPdfError()
    logger.info("pdf_ocr_fallback_recovered chars=%s", len(recovered))
    return recovered


def _docx_xml_fallback(content: bytes) -> str:
    with ZipFile(BytesIO(content)) as archive:
        raw = archive.read("word/document.xml")
    root = ET.fromstring(raw)
    paragraphs: list[str] = []
    for paragraph in root.iter():
        if not paragraph.tag.endswith("}p"):
            continue
        texts = [node.text for node in paragraph.iter() if node.tag.endswith("}t") and node.text]
        joined = "".join(texts).strip()
        if joined:
            paragraphs.append(joined)
    return "\n".join(paragraphs)


def _docx_text(content: bytes) -> str:
    document = Document(BytesIO(content))
    parts = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells: list[str] = []
            for cell in row.cells:
                value = cell.text.strip()
                # Merged cells repeat the same object across the row.
                if value and (not cells or cells[-1] != value):
                    cells.append(value)
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_word(content: bytes) -> str:
    if not is_zip_payload(content):
        raise EmptyExtractionError(
            "Legacy .doc files cannot be read. Please save the resume as .docx or PDF and upload it again."
        )
    try:
        text = _docx_text(content)
    except Exception as exc:  # python-docx rejects some packages Word itself opens
        logger.info("docx_parser_failed using xml fallback: %s", exc)
        try:
            text = _docx_xml_fallback(content)
        except (BadZipFile, KeyError, ET.ParseError) as fallback_exc:
            raise EmptyExtractionError("Unable to read text from this Word document.") from fallback_exc

    normalized = normalize_extracted_text(text)
    if not normalized:
        raise EmptyExtractionError("No text found in Word document. The document might be empty.")
    return normalized


def extract_image(content: bytes) -> str:
    try:
        image = Image.open(BytesIO(content))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise EmptyExtractionError(
            "The image could not be decoded. Please upload a valid JPG, PNG or WEBP file."
        ) from exc

    if not settings.ocr_enabled:
        raise OcrUnavailableError()

    text = normalize_extracted_text(ocr.get_ocr_engine().recognize(image))
    if not text:
        raise EmptyExtractionError(
            "No text could be recognized in this image. Please upload a sharper image or a PDF/Word document."
        )
    return text


ExtractionStrategy = Callable[[bytes], str]

STRATEGIES: dict[str, ExtractionStrategy] = {
    PDF_MIME: extract_pdf,
    DOC_MIME: extract_word,
    DOCX_MIME: extract_word,
    **{mime: extract_image for mime in IMAGE_MIMES},
}


def extract_text(content: bytes, mime_type: str) -> str:
    """Turn an uploaded document into trimmed plain text.

    Raises ``UnsupportedTypeError`` for MIME types outside the dispatch table and
    ``EmptyExtractionError`` / ``ImageBasedPdfError`` when nothing readable is found.
    A successful return is never empty.
    """
    mime = normalize_mime_type(mime_type)
    strategy = STRATEGIES.get(mime)
    if strategy is None:
        raise UnsupportedTypeError(mime or (mime_type or ""))

    text = strategy(content)
    if not text or not text.strip():
        raise EmptyExtractionError()
    return text.strip()


async def extract_text_async(content: bytes, mime_type: str) -> str:
    return await asyncio.to_thread(extract_text, content, mime_type)
