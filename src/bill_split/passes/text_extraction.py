"""Text extraction: read the text layer of a bill PDF -- pure code, no OCR."""
from __future__ import annotations

import structlog

from ..models.extraction import TextExtraction
from ..utils.hashing import compute_file_hash
from ..utils.pdf import detect_file_type, read_text_pdfplumber, read_text_pymupdf

logger = structlog.get_logger(__name__)

MIN_TEXT_CHARS = 50

READERS = (
    ("pymupdf", read_text_pymupdf),
    ("pdfplumber", read_text_pdfplumber),
)

NOT_A_PDF = "The file is not a PDF. Use manual or JSON input instead."
NO_TEXT_LAYER = (
    "The document has no readable text layer. A PDF with selectable text is "
    "needed (not a scanned image); use manual or JSON input instead."
)
UNREADABLE = "The PDF could not be read. Try a different file or use manual input."


def extract_text(file_bytes: bytes, min_chars: int = MIN_TEXT_CHARS) -> TextExtraction:
    """Extract the raw text of a bill document.

    Steps:
    1. Reject anything that is not a PDF (images have no text layer)
    2. Read the text with PyMuPDF
    3. If that yields fewer than *min_chars* characters, retry with pdfplumber
    4. Still too little text means a scanned document: fail explicitly

    Never raises; failures are reported through ``success``/``error`` so the
    caller can point the user to manual input.
    """
    file_type = detect_file_type(file_bytes)
    file_hash = compute_file_hash(file_bytes)[:16]
    if file_type != "pdf":
        logger.warning("text_extraction_unsupported_file", file_type=file_type, file_hash=file_hash)
        return TextExtraction(success=False, error=NOT_A_PDF)

    readable = False
    for reader_name, reader in READERS:
        try:
            text, page_count = reader(file_bytes)
        except Exception as exc:  # PyMuPDF and pdfminer share no error base class
            logger.warning("text_extraction_reader_failed", reader=reader_name, error=str(exc))
            continue

        readable = True
        char_count = len(text.strip())
        logger.info(
            "text_extraction_read",
            reader=reader_name,
            page_count=page_count,
            char_count=char_count,
            file_hash=file_hash,
        )
        if char_count >= min_chars:
            return TextExtraction(success=True, text=text)

    if not readable:
        return TextExtraction(success=False, error=UNREADABLE)

    logger.warning("text_extraction_no_text_layer", file_hash=file_hash, min_chars=min_chars)
    return TextExtraction(success=False, error=NO_TEXT_LAYER)
