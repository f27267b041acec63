import io
import logging
import os

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def pdf_to_text(source) -> str:
    """
    Extract text from a PDF.
    Works with file paths, raw bytes, and in-memory file-like objects (uploads).
    Returns an empty string when the document cannot be read.
    """

    try:
        if isinstance(source, (str, os.PathLike)):
            doc = fitz.open(source)
        elif isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            # file-like object from an upload
            file_bytes = source.read()
            doc = fitz.open(stream=io.BytesIO(file_bytes), filetype="pdf")

        with doc:
            text = "\n".join(page.get_text("text") for page in doc)
        return text.strip()

    except Exception as e:
        logger.warning(f"PDF extraction failed: {e}")
        return ""
