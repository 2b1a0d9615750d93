"""Tests for the FastAPI web service."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from md2docx.server import app
from md2docx.style_manager import PAGE_SIZES, StyleManager
from md2docx.xml_utils import DOCX_MEDIA_TYPE

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE_MD = FIXTURE_DIR / "sample.md"


@pytest.fixture
def client():
    """Create an async test client."""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


def document_xml(content: bytes) -> str:
    with zipfile.ZipFile(io.BytesIO(content)) as zf:
        return zf.read("word/document.xml").decode("utf-8")


@pytest.mark.asyncio
class TestHealthEndpoint:

    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert "version" in data


@pytest.mark.asyncio
class TestStylesEndpoint:

    async def test_list_styles(self, client):
        resp = await client.get("/styles")
        assert resp.status_code == 200
        data = resp.json()
        assert data["presets"] == StyleManager.PRESETS
        assert data["page_sizes"] == list(PAGE_SIZES)
        assert data["link_modes"] == ["colored_text", "inline_url", "hyperlink"]


@pytest.mark.asyncio
class TestConvertEndpoint:

    async def test_convert_file(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("test.md", b"# Hello\n\nWorld", "text/markdown")},
            data={"style": "default"},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == DOCX_MEDIA_TYPE
        assert "Hello" in document_xml(resp.content)

    async def test_convert_with_style(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("test.md", b"# Hello", "text/markdown")},
            data={"style": "academic"},
        )
        assert resp.status_code == 200

    async def test_content_disposition_header(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("myfile.md", b"# Hello", "text/markdown")},
        )
        assert resp.status_code == 200
        assert 'filename="myfile.docx"' in resp.headers.get("content-disposition", "")

    async def test_non_ascii_filename(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("보고서.md", b"# Hello", "text/markdown")},
        )
        assert resp.status_code == 200
        disposition = resp.headers.get("content-disposition", "")
        assert "filename*=UTF-8''" in disposition
        assert "%EB%B3%B4%EA%B3%A0%EC%84%9C.docx" in disposition

    async def test_page_size_and_link_mode(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("links.md", b"[site](https://example.com)", "text/markdown")},
            data={"page_size": "a4", "link_mode": "hyperlink"},
        )
        assert resp.status_code == 200
        body = document_xml(resp.content)
        assert '<w:pgSz w:w="11900" w:h="16840"/>' in body
        assert "<w:hyperlink" in body

    async def test_undecodable_upload(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("bad.md", b"caf\xe9", "text/markdown")},
        )
        assert resp.status_code == 400

    async def test_unknown_encoding(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("test.md", b"# Hello", "text/markdown")},
            data={"encoding": "no-such-codec"},
        )
        assert resp.status_code == 400

    async def test_unknown_preset(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("test.md", b"# Hello", "text/markdown")},
            data={"style": "fancy"},
        )
        assert resp.status_code == 400

    async def test_convert_sample_fixture(self, client):
        resp = await client.post(
            "/convert",
            files={"file": ("sample.md", SAMPLE_MD.read_bytes(), "text/markdown")},
        )
        assert resp.status_code == 200
        assert zipfile.is_zipfile(io.BytesIO(resp.content))


@pytest.mark.asyncio
class TestConvertTextEndpoint:

    async def test_convert_text(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "# Hello\n\nParagraph."},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == DOCX_MEDIA_TYPE
        assert "document.docx" in resp.headers.get("content-disposition", "")

    async def test_convert_text_with_style(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "# Hello", "style": "business"},
        )
        assert resp.status_code == 200

    async def test_unicode_text(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "# 한글 제목\n\n한글 본문입니다."},
        )
        assert resp.status_code == 200
        assert "한글 본문입니다." in document_xml(resp.content)

    async def test_table_conversion(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "| A | B |\n|---|---|\n| 1 | 2 |"},
        )
        assert resp.status_code == 200
        assert "<w:tbl>" in document_xml(resp.content)

    async def test_unknown_page_size(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "# Hello", "page_size": "b5"},
        )
        assert resp.status_code == 400

    async def test_unknown_link_mode(self, client):
        resp = await client.post(
            "/convert/text",
            data={"markdown": "# Hello", "link_mode": "underline"},
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
class TestWebUI:

    async def test_index_returns_html(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers.get("content-type", "")

    async def test_index_contains_form(self, client):
        resp = await client.get("/")
        html = resp.text
        assert "<form" in html
        assert "<select" in html
        assert "<button" in html
