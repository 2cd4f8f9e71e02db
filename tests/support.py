"""In-memory document fixtures and a scripted AI client for the test suite."""
from __future__ import annotations

import json
from io import BytesIO
from typing import Any

from docx import Document
from PIL import Image
from pypdf import PdfWriter


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_text_pdf(lines: list[str]) -> bytes:
    """Single-page PDF whose text layer holds ``lines`` in Helvetica."""
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            ops.append("T*")
        ops.append(f"({_pdf_escape(line)}) Tj")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length " + str(len(stream)).encode("ascii") + b" >>\nstream\n" + stream + b"\nendstream",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("ascii")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("ascii")
    return bytes(out)


def build_blank_pdf(pages: int = 1) -> bytes:
    """PDF with pages but no text layer, like a scanned resume."""
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def build_docx(paragraphs: list[str], table_rows: list[list[str]] | None = None) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row_index, row in enumerate(table_rows):
            for col_index, value in enumerate(row):
                table.cell(row_index, col_index).text = value
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def build_png(width: int = 40, height: int = 20) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color="white").save(buffer, format="PNG")
    return buffer.getvalue()


class FakeOcrEngine:
    def __init__(self, page_texts: list[str]):
        self._page_texts = list(page_texts)
        self.calls = 0

    def recognize(self, image: Any) -> str:
        _ = image
        text = self._page_texts[self.calls] if self.calls < len(self._page_texts) else ""
        self.calls += 1
        return text


class FakeAIClient:
    def __init__(self, response: Any = None, *, error: Exception | None = None):
        if isinstance(response, (dict, list)):
            response = json.dumps(response)
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_json(self, **kwargs: Any) -> str | None:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self) -> None:
        return None


KUBERNETES_GAP_RESPONSE = {
    "matchScore": 61.6,
    "skillsMatch": 55,
    "experienceMatch": 72.2,
    "missingSkills": [
        {"skill": "Kubernetes", "priority": "high", "category": "technical"},
        {"skill": "Stakeholder communication", "priority": "low", "category": "soft"},
    ],
    "optimizedResume": {
        "summary": "Backend engineer with strong SQL skills.",
        "skills": "SQL, backend development",
        "experience": "Built and maintained SQL-backed services.",
        "education": "",
        "certifications": "",
    },
    "suggestions": [
        {
            "title": "Highlight container exposure",
            "description": "Mention any deployment work that touched containers.",
            "priority": "high",
        }
    ],
}
