"""Pytest fixtures and shared test configuration.

Fixtures:
    - make_pdf: Builds PDF bytes with one text line list per page
    - sample_pdf: Three-page PDF with a title
    - parser_config: ParserConfig independent of the environment
    - app / async_client: Fresh FastAPI app and HTTPX client for API tests
"""

import io
from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

from pdfparse.api.app import create_app
from pdfparse.config import ParserConfig, get_parser_config

SAMPLE_PAGES = [
    ["Invoice Alpha", "Customer reference"],
    ["Second Page"],
    ["Third Page"],
]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _content_stream(lines: list[str]) -> bytes:
    ops = ["BT", "/F1 12 Tf", "72 720 Td", "14 TL"]
    for line in lines:
        ops.append(f"({_escape(line)}) Tj T*")
    ops.append("ET")
    return "\n".join(ops).encode("latin-1")


def build_pdf(pages: list[list[str]], title: str | None = "Sample Document") -> bytes:
    """Build a PDF whose pages show the given lines in Helvetica."""
    writer = PdfWriter()
    font = writer._add_object(
        DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            }
        )
    )

    for lines in pages:
        page = writer.add_blank_page(width=612, height=792)
        if not lines:
            continue
        stream = DecodedStreamObject()
        stream.set_data(_content_stream(lines))
        page[NameObject("/Contents")] = writer._add_object(stream)
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font})}
        )

    if title:
        writer.add_metadata({"/Title": title, "/Author": "PDF Parse Tests"})

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the PDF builder."""
    return build_pdf


@pytest.fixture
def sample_pdf() -> bytes:
    """Return a three-page PDF with a title."""
    return build_pdf(SAMPLE_PAGES)


@pytest.fixture
def parser_config() -> ParserConfig:
    """Return a configuration with explicit values."""
    return ParserConfig(
        max_file_size=10 * 1024 * 1024,
        fetch_timeout=5.0,
        text_formatting="raw",
        continue_on_fail=False,
        output_property="result",
    )


@pytest.fixture
def app(parser_config: ParserConfig) -> FastAPI:
    """Create a fresh application using the test configuration."""
    application = create_app()
    application.dependency_overrides[get_parser_config] = lambda: parser_config
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
