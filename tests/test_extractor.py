import os
import sys
import unittest
from dataclasses import replace
from pathlib import Path
from unittest.mock import patch

# Keep tests deterministic: no rate limiting, no OCR warmup.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("OCR_WARMUP", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_fit.core.config import settings  # noqa: E402
from resume_fit.extraction import (  # noqa: E402
    EmptyExtractionError,
    ImageBasedPdfError,
    OcrUnavailableError,
    UnsupportedTypeError,
    extract_text,
    normalize_extracted_text,
)
from tests.support import (  # noqa: E402
    FakeOcrEngine,
    build_blank_pdf,
    build_docx,
    build_png,
    build_text_pdf,
)

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

OCR_ON = replace(settings, ocr_enabled=True, ocr_max_pages=5)
OCR_OFF = replace(settings, ocr_enabled=False)


class PdfExtractionTests(unittest.TestCase):
    def test_text_layer_is_returned_trimmed(self):
        content = build_text_pdf(["Experienced backend engineer skilled in SQL"])
        text = extract_text(content, PDF)
        self.assertEqual(text, "Experienced backend engineer skilled in SQL")

    def test_multi_line_text_layer(self):
        content = build_text_pdf(["Jane Doe", "Senior Data Engineer", "Python, Spark, Airflow"])
        text = extract_text(content, "application/pdf; charset=binary")
        self.assertIn("Jane Doe", text)
        self.assertIn("Python, Spark, Airflow", text)
        self.assertEqual(text, text.strip())

    def test_pdf_without_text_layer_raises_image_based_error_when_ocr_disabled(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_OFF):
            with self.assertRaises(ImageBasedPdfError) as ctx:
                extract_text(build_blank_pdf(), PDF)
        self.assertEqual(ctx.exception.code, "image_based_pdf")
        self.assertIn("image", str(ctx.exception).lower())

    def test_pdf_without_text_layer_recovers_pages_in_order_via_ocr(self):
        engine = FakeOcrEngine(["Page one text", "", "Page three text"])
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", return_value=engine
        ), patch("resume_fit.extraction.ocr.rasterize_pdf", return_value=["p1", "p2", "p3"]) as rasterize:
            text = extract_text(build_blank_pdf(pages=3), PDF)
        self.assertEqual(text, "Page one text\n\nPage three text")
        self.assertEqual(engine.calls, 3)
        self.assertEqual(rasterize.call_args.kwargs["max_pages"], 5)

    def test_ocr_fallback_with_no_recovered_text_is_image_based_error(self):
        engine = FakeOcrEngine(["   ", ""])
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", return_value=engine
        ), patch("resume_fit.extraction.ocr.rasterize_pdf", return_value=["p1", "p2"]):
            with self.assertRaises(ImageBasedPdfError):
                extract_text(build_blank_pdf(pages=2), PDF)

    def test_rasterization_failure_becomes_image_based_error(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", return_value=FakeOcrEngine([])
        ), patch("resume_fit.extraction.ocr.rasterize_pdf", side_effect=RuntimeError("poppler missing")):
            with self.assertRaises(ImageBasedPdfError) as ctx:
                extract_text(build_blank_pdf(), PDF)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_missing_ocr_engine_becomes_image_based_error(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", side_effect=OcrUnavailableError()
        ):
            with self.assertRaises(ImageBasedPdfError):
                extract_text(build_blank_pdf(), PDF)

    def test_corrupt_pdf_never_succeeds_empty(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_OFF):
            with self.assertRaises(ImageBasedPdfError):
                extract_text(b"%PDF-1.4\nthis is not really a pdf", PDF)


class WordExtractionTests(unittest.TestCase):
    def test_docx_paragraphs_and_tables(self):
        content = build_docx(
            ["Jane Doe", "", "Backend engineer"],
            table_rows=[["Skill", "Years"], ["SQL", "6"]],
        )
        text = extract_text(content, DOCX)
        self.assertIn("Jane Doe\nBackend engineer", text)
        self.assertIn("SQL | 6", text)

    def test_docx_labelled_as_msword_is_read(self):
        content = build_docx(["Resume body"])
        self.assertEqual(extract_text(content, "application/msword"), "Resume body")

    def test_empty_docx_raises_empty_extraction(self):
        with self.assertRaises(EmptyExtractionError):
            extract_text(build_docx([]), DOCX)

    def test_legacy_binary_doc_raises_empty_extraction(self):
        content = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 512
        with self.assertRaises(EmptyExtractionError) as ctx:
            extract_text(content, "application/msword")
        self.assertIn(".docx", str(ctx.exception))


class ImageExtractionTests(unittest.TestCase):
    def test_image_goes_through_ocr_engine(self):
        engine = FakeOcrEngine(["  Jane Doe\r\nPython   developer  "])
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", return_value=engine
        ):
            text = extract_text(build_png(), "image/png")
        self.assertEqual(text, "Jane Doe\nPython developer")

    def test_image_without_recognized_text_raises_empty_extraction(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_ON), patch(
            "resume_fit.extraction.ocr.get_ocr_engine", return_value=FakeOcrEngine([""])
        ):
            with self.assertRaises(EmptyExtractionError):
                extract_text(build_png(), "image/png")

    def test_image_with_ocr_disabled_reports_unavailable(self):
        with patch("resume_fit.extraction.extractor.settings", OCR_OFF):
            with self.assertRaises(OcrUnavailableError):
                extract_text(build_png(), "image/png")

    def test_undecodable_image_raises_empty_extraction(self):
        with self.assertRaises(EmptyExtractionError):
            extract_text(b"\x89PNG\r\n\x1a\nbroken", "image/png")


class DispatchTests(unittest.TestCase):
    def test_unsupported_type_names_mime(self):
        with self.assertRaises(UnsupportedTypeError) as ctx:
            extract_text(b"plain words", "text/plain")
        self.assertEqual(ctx.exception.mime_type, "text/plain")
        self.assertIn("text/plain", str(ctx.exception))

    def test_missing_mime_is_unsupported(self):
        with self.assertRaises(UnsupportedTypeError):
            extract_text(b"data", "")

    def test_normalize_extracted_text(self):
        raw = "\r\n  Name\t\tSurname \r\n\r\n\r\n\r\nSkills  "
        self.assertEqual(normalize_extracted_text(raw), "Name Surname \n\nSkills")


if __name__ == "__main__":
    unittest.main()
