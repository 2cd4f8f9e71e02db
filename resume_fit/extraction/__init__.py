from .errors import (
    EmptyExtractionError,
    ExtractionError,
    ImageBasedPdfError,
    OcrUnavailableError,
    SignatureMismatchError,
    UnsupportedTypeError,
)
from .extractor import extract_text, extract_text_async, normalize_extracted_text
from .ocr import get_ocr_engine, shutdown_ocr_engine
from .signatures import ALLOWED_UPLOAD_MIME_TYPES, normalize_mime_type, validate_upload_signature

__all__ = [
    "ExtractionError",
    "UnsupportedTypeError",
    "EmptyExtractionError",
    "ImageBasedPdfError",
    "SignatureMismatchError",
    "OcrUnavailableError",
    "extract_text",
    "extract_text_async",
    "normalize_extracted_text",
    "get_ocr_engine",
    "shutdown_ocr_engine",
    "ALLOWED_UPLOAD_MIME_TYPES",
    "normalize_mime_type",
    "validate_upload_signature",
]
