import io
import zlib
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

RESUME_SENTENCES = [
    "Senior data engineer with eight years of experience building reliable pipelines.",
    "Designed and maintained streaming ingestion for analytics and reporting teams.",
    "Led a migration of nightly batch jobs to an event driven architecture.",
    "Mentored junior engineers and wrote internal documentation on testing practices.",
    "Improved query performance for the billing warehouse by tuning partitions.",
    "Comfortable with cloud infrastructure, containers and continuous delivery.",
]


def make_words(count: int) -> str:
    """Readable, well punctuated prose with exactly `count` words."""
    words = []
    while len(words) < count:
        for sentence in RESUME_SENTENCES:
            words.extend(sentence.split())
    words = words[:count]
    text = " ".join(words)
    return text if text.endswith(".") else text + "."


def _pdf_escape(line: str) -> str:
    return line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[str], compress: bool = False, lang: str | None = None) -> bytes:
    """Write a small but structurally valid PDF, one Helvetica text object per page."""
    page_count = len(pages)
    page_ids = [4 + 2 * i for i in range(page_count)]
    objects: dict[int, bytes] = {}

    catalog = "<< /Type /Catalog /Pages 2 0 R"
    if lang:
        catalog += f" /Lang ({lang})"
    objects[1] = (catalog + " >>").encode("latin-1")
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode("latin-1")
    objects[3] = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>"

    for page_id, page_text in zip(page_ids, pages):
        words = page_text.split()
        lines = [" ".join(words[i:i + 12]) for i in range(0, len(words), 12)]
        ops = ["BT", "/F1 10 Tf", "12 TL", "40 760 Td"]
        for line in lines:
            ops.append(f"({_pdf_escape(line)}) Tj T*")
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")

        filters = ""
        if compress:
            stream = zlib.compress(stream)
            filters = " /Filter /FlateDecode"
        stream_dict = f"<< /Length {len(stream)}{filters} >>"

        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {page_id + 1} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
        ).encode("latin-1")
        objects[page_id + 1] = stream_dict.encode("latin-1") + b"\nstream\n" + stream + b"\nendstream"

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = out.tell()
        out.write(f"{obj_id} 0 obj\n".encode("latin-1"))
        out.write(objects[obj_id])
        out.write(b"\nendobj\n")

    xref_offset = out.tell()
    size = max(objects) + 1
    out.write(f"xref\n0 {size}\n".encode("latin-1"))
    out.write(b"0000000000 65535 f \n")
    for obj_id in range(1, size):
        out.write(f"{offsets[obj_id]:010d} 00000 n \n".encode("latin-1"))
    out.write(f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode("latin-1"))
    return out.getvalue()


def build_docx(paragraphs: list[str], table: list[list[str]] | None = None) -> bytes:
    from docx import Document

    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    if table:
        docx_table = doc.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                docx_table.cell(r, c).text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_builder():
    return build_pdf


@pytest.fixture
def docx_builder():
    return build_docx


@pytest.fixture
def resume_text() -> str:
    return make_words(120)


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Three pages of 500 words each."""
    return build_pdf([make_words(500) for _ in range(3)])


@pytest.fixture
def hello_pdf_bytes() -> bytes:
    """Minimal one-page PDF whose only text is 'Hello World'."""
    return build_pdf(["Hello World"])


@pytest.fixture
def sample_docx_bytes() -> bytes:
    return build_docx(
        [
            "Jane Smith",
            make_words(60),
            make_words(40),
        ],
        table=[["Skill", "Years"], ["Python", "8"], ["SQL", "6"]],
    )


@pytest.fixture
def sample_txt_bytes(resume_text) -> bytes:
    return resume_text.encode("utf-8")


@pytest.fixture
def sample_rtf_bytes() -> bytes:
    body = make_words(80)
    return (
        "{\\rtf1\\ansi\\deff0{\\fonttbl{\\f0 Times New Roman;}}"
        "{\\colortbl;\\red0\\green0\\blue0;}"
        "\\f0\\fs24 Jane Smith\\par "
        f"{body}\\par "
        "}"
    ).encode("ascii")


@pytest.fixture
def sample_html_bytes() -> bytes:
    body = make_words(80)
    return (
        "<!DOCTYPE html><html lang=\"en\"><head><title>Jane Smith</title>"
        "<style>body { font-family: sans-serif; color: #333; }</style>"
        "<script>window.trackingId = 'UA-SECRET-42'; console.log('loaded');</script>"
        "</head><body><h1>Jane Smith</h1>"
        f"<p>{body}</p>"
        "<p>Contact: jane&#64;example.com &amp; references on request.</p>"
        "</body></html>"
    ).encode("utf-8")


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    from docextract.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
