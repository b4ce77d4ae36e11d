"""PDF text-layer readers using PyMuPDF and pdfplumber."""

from __future__ import annotations

import io

import fitz  # PyMuPDF
import pdfplumber

IMAGE_MAGIC = {
    b"\x89PNG\r\n\x1a\n": "png",
    b"\xff\xd8": "jpeg",
    b"II*\x00": "tiff",
    b"MM\x00*": "tiff",
}


def detect_file_type(file_bytes: bytes) -> str:
    """Return ``"pdf"``, an image type (``"png"``, ``"jpeg"``, ``"tiff"``) or ``"unknown"``."""
    if file_bytes.startswith(b"%PDF"):
        return "pdf"
    for magic, kind in IMAGE_MAGIC.items():
        if file_bytes.startswith(magic):
            return kind
    return "unknown"


def read_text_pymupdf(file_bytes: bytes) -> tuple[str, int]:
    """Return the text of all pages, one page per block, and the page count.

    PyMuPDF keeps the line breaks of the text layer, which the bill parser
    relies on to keep a label next to its amount.
    """
    with fitz.open(stream=file_bytes, filetype="pdf") as doc:
        pages = [page.get_text() for page in doc]
    return "\n".join(pages), len(pages)


def read_text_pdfplumber(file_bytes: bytes) -> tuple[str, int]:
    """Layout-preserving fallback reader; same return shape as PyMuPDF's."""
    with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages), len(pages)
