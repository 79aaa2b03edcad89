import io
import logging
from typing import Dict, Union

from PyPDF2 import PdfReader

from .errors import ExtractionError

logger = logging.getLogger("deckgen.pdf")


def _document_info(reader: PdfReader) -> Dict[str, str]:
    metadata = reader.metadata
    if not metadata:
        return {}
    return {str(key).lstrip("/"): str(value) for key, value in metadata.items()}


def extract_pdf_text(payload: Union[bytes, io.BufferedIOBase]) -> Dict[str, object]:
    """Return ``{"text", "pages", "info"}`` for a PDF, or raise ExtractionError."""
    stream = io.BytesIO(payload) if isinstance(payload, (bytes, bytearray)) else payload

    try:
        reader = PdfReader(stream)
        page_texts = [page.extract_text() or "" for page in reader.pages]
        info = _document_info(reader)
    except Exception as exc:
        raise ExtractionError(
            "Failed to parse PDF content",
            str(exc) or "The file may not be a valid PDF or may be corrupted",
        ) from exc

    text = "\n\n".join(t for t in page_texts if t.strip())
    logger.info("Extracted %d characters from %d page(s)", len(text), len(page_texts))

    if not text.strip():
        raise ExtractionError(
            "No text could be extracted from the PDF",
            "The PDF may be scanned images or protected against text extraction",
        )

    return {"text": text, "pages": len(page_texts), "info": info}
