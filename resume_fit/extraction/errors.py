from __future__ import annotations


class ExtractionError(ValueError):
    """Base class for upload problems the user can fix by sending a different file."""

    def __init__(self, message: str, *, code: str = "extraction_failed"):
        super().__init__(message)
        self.code = code


class UnsupportedTypeError(ExtractionError):
    def __init__(self, mime_type: str):
        super().__init__(
            f"Unsupported file type: {mime_type or 'unknown'}. "
            "Please upload a PDF, Word document, or image (JPG, PNG, WEBP).",
            code="unsupported_type",
        )
        self.mime_type = mime_type


class EmptyExtractionError(ExtractionError):
    def __init__(
        self,
        message: str = "No text could be extracted from the file. Please ensure the file contains readable text.",
    ):
        super().__init__(message, code="empty_extraction")


class ImageBasedPdfError(ExtractionError):
    def __init__(
        self,
        message: str = (
            "This PDF appears to be image-based or scanned and has no readable text layer. "
            "Please upload the resume as an image (JPG, PNG, WEBP) or as a Word document."
        ),
    ):
        super().__init__(message, code="image_based_pdf")


class SignatureMismatchError(ExtractionError):
    def __init__(self, mime_type: str):
        super().__init__(
            f"File content does not match its declared type ({mime_type}).",
            code="signature_mismatch",
        )
        self.mime_type = mime_type


class OcrUnavailableError(ExtractionError):
    def __init__(
        self,
        message: str = (
            "Text recognition for images is not available right now. "
            "Please upload a PDF or Word document instead."
        ),
    ):
        super().__init__(message, code="ocr_unavailable")
