"""
Plain-text extraction from uploaded job description files (.txt, .pdf, .docx).
"""
from pathlib import Path

import docx
import pdfplumber

from jobpilot.app.core.config import ALLOWED_JOB_UPLOAD_EXTENSIONS
from jobpilot.app.core.logging_config import get_logger

logger = get_logger("services.text_extraction")

_TEXT_ENCODINGS = ("utf-8", "latin-1")


def extract_text_from_pdf(file_path: str | Path) -> str:
    """Extract raw text from PDF using pdfplumber."""
    text_parts = []
    with pdfplumber.open(file_path) as pdf:
        for page in pdf.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
    return "\n".join(text_parts)


def extract_text_from_docx(file_path: str | Path) -> str:
    """Paragraphs first, then table cells row by row."""
    document = docx.Document(str(file_path))
    parts = [p.text for p in document.paragraphs if p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_text_from_txt(file_path: str | Path) -> str:
    raw = Path(file_path).read_bytes()
    for encoding in _TEXT_ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace")


def extract_text(file_path: str | Path) -> str:
    """Dispatch on extension. Raises ValueError for unsupported types."""
    suffix = Path(file_path).suffix.lower()
    if suffix not in ALLOWED_JOB_UPLOAD_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {suffix or 'none'}")
    if suffix == ".pdf":
        text = extract_text_from_pdf(file_path)
    elif suffix == ".docx":
        text = extract_text_from_docx(file_path)
    else:
        text = extract_text_from_txt(file_path)
    logger.info("Extracted text file=%s chars=%d", Path(file_path).name, len(text))
    return text.strip()
