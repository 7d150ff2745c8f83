import io
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from pptx import Presentation
from pptx.util import Inches

from docqa.answer import AnswerRequester
from docqa.config import Settings
from docqa.main import create_app
from docqa.store import DocumentStore


def completion(content):
    """Fake chat completion with a single choice."""
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


def make_pdf(text: str) -> bytes:
    """Single page PDF showing ``text`` in Helvetica."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


def make_pptx(*slides: str) -> bytes:
    """Deck with one text box per slide; newlines in a slide become paragraphs."""
    presentation = Presentation()
    blank = presentation.slide_layouts[6]
    for text in slides:
        slide = presentation.slides.add_slide(blank)
        box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(1))
        box.text_frame.text = text
    buf = io.BytesIO()
    presentation.save(buf)
    return buf.getvalue()


@pytest.fixture
def openai_client():
    """Stub for the OpenAI client; every chunk gets an empty answer by default."""
    client = MagicMock()
    client.chat.completions.create.return_value = completion("")
    return client


@pytest.fixture
def store(tmp_path):
    return DocumentStore(str(tmp_path / "Documents"))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        openai_api_key="test-key",
        documents_dir=str(tmp_path / "Documents"),
        response_delay_ms=0,
    )


@pytest.fixture
def client(settings, store, openai_client):
    app = create_app(
        settings=settings,
        store=store,
        requester=AnswerRequester(openai_client, model=settings.llm_model),
    )
    return TestClient(app)
