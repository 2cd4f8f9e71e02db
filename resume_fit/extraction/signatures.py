from __future__ import annotations

from io import BytesIO
from zipfile import ZipFile

from resume_fit.extraction.errors import SignatureMismatchError

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
IMAGE_MIMES = ("image/jpeg", "image/jpg", "image/png", "image/webp")

ALLOWED_UPLOAD_MIME_TYPES = frozenset({PDF_MIME, DOC_MIME, DOCX_MIME, *IMAGE_MIMES})

PDF_MAGIC = b"%PDF-"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"
WEBP_RIFF_MAGIC = b"RIFF"
WEBP_WEBP_MAGIC = b"WEBP"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def normalize_mime_type(mime_type: str | None) -> str:
    return (mime_type or "").split(";")[0].strip().lower()


def is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
        return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)
    except Exception:
        return False


def is_ooxml_word_payload(content: bytes) -> bool:
    return is_zip_payload(content) and _zip_has_paths(content, ("word/",))


def validate_upload_signature(*, mime_type: str, content: bytes) -> None:
    mime = normalize_mime_type(mime_type)

    if mime == PDF_MIME:
        if not content.startswith(PDF_MAGIC):
            raise SignatureMismatchError(mime)
        return

    if mime == DOCX_MIME:
        if not is_ooxml_word_payload(content):
            raise SignatureMismatchError(mime)
        return

    if mime == DOC_MIME:
        # Browsers often label .docx files as application/msword.
        if not content.startswith(OLE2_MAGIC) and not is_ooxml_word_payload(content):
            raise SignatureMismatchError(mime)
        return

    if mime == "image/png":
        if not content.startswith(PNG_MAGIC):
            raise SignatureMismatchError(mime)
        return

    if mime in {"image/jpeg", "image/jpg"}:
        if not content.startswith(JPEG_MAGIC):
            raise SignatureMismatchError(mime)
        return

    if mime == "image/webp":
        if len(content) < 12 or not content.startswith(WEBP_RIFF_MAGIC) or content[8:12] != WEBP_WEBP_MAGIC:
            raise SignatureMismatchError(mime)
        return
