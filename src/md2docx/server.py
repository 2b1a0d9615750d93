"""FastAPI web service for Markdown to DOCX conversion.

Endpoints::

    GET  /              Minimal upload form.
    POST /convert       Upload a .md file and receive .docx back.
    POST /convert/text  Send raw Markdown text, receive .docx bytes.
    GET  /health        Health check.
    GET  /styles        List available style presets, page sizes and link modes.

Run::

    uvicorn md2docx.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, Response

from md2docx import __version__
from md2docx.converter import Converter
from md2docx.style_manager import PAGE_SIZES, HyperlinkMode, PageSize, StyleManager, StylingConfig
from md2docx.xml_utils import DOCX_MEDIA_TYPE

app = FastAPI(
    title="md2docx",
    description="Markdown to DOCX conversion service",
    version=__version__,
)

_INDEX_HTML = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>md2docx</title></head>
<body>
<h1>md2docx</h1>
<form action="/convert" method="post" enctype="multipart/form-data">
  <input type="file" name="file" accept=".md,.markdown,.txt">
  <select name="style">
    <option>default</option><option>academic</option>
    <option>business</option><option>minimal</option>
  </select>
  <button type="submit">Convert</button>
</form>
</body>
</html>
"""


def _content_disposition(filename: str) -> str:
    """Build Content-Disposition header, RFC 5987 for non-ASCII names."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        encoded = quote(filename)
        return f"attachment; filename*=UTF-8''{encoded}"


def _build_config(style: str, page_size: Optional[str], link_mode: Optional[str]) -> StylingConfig:
    """Resolve form fields to a configuration; bad names become HTTP 400."""
    try:
        config = StyleManager(style).config
        if page_size:
            config = config.derive(page_size=PageSize.from_name(page_size))
        if link_mode:
            config = config.derive(hyperlink_mode=HyperlinkMode(link_mode))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return config


def _docx_response(docx_bytes: bytes, filename: str) -> Response:
    return Response(
        content=docx_bytes,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the upload form."""
    return HTMLResponse(content=_INDEX_HTML)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/styles")
async def list_styles() -> dict[str, list[str]]:
    """List available style presets."""
    return {
        "presets": StyleManager.PRESETS,
        "page_sizes": list(PAGE_SIZES),
        "link_modes": [mode.value for mode in HyperlinkMode],
    }


@app.post("/convert")
async def convert_file(
    file: UploadFile = File(...),
    style: str = Form("default"),
    encoding: str = Form("utf-8"),
    page_size: Optional[str] = Form(None),
    link_mode: Optional[str] = Form(None),
) -> Response:
    """Upload a Markdown file and receive DOCX back.

    - **file**: Markdown file (.md)
    - **style**: Style preset name (default, academic, business, minimal)
    - **encoding**: Source file encoding
    - **page_size**: Optional paper size (letter, a4, ...)
    - **link_mode**: Optional link rendering (colored_text, inline_url, hyperlink)
    """
    config = _build_config(style, page_size, link_mode)
    raw = await file.read()
    try:
        md_text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise HTTPException(status_code=400, detail=f"Cannot decode upload: {exc}") from exc

    docx_bytes = Converter(config).convert_text(md_text)

    filename = (file.filename or "document.md").rsplit(".", 1)[0] + ".docx"
    return _docx_response(docx_bytes, filename)


@app.post("/convert/text")
async def convert_text(
    markdown: str = Form(...),
    style: str = Form("default"),
    page_size: Optional[str] = Form(None),
    link_mode: Optional[str] = Form(None),
) -> Response:
    """Send raw Markdown text and receive DOCX bytes.

    - **markdown**: Markdown source text
    - **style**: Style preset name
    """
    config = _build_config(style, page_size, link_mode)
    docx_bytes = Converter(config).convert_text(markdown)
    return _docx_response(docx_bytes, "document.docx")
