"""
Multi-format Resume Parser - Extract plain text from uploaded resumes.

Supports:
- PDF (.pdf): Text from every page via pypdf
- Word Documents (.docx): Paragraphs and table cells via python-docx
- Plain Text (.txt): Decoded as UTF-8
- Legacy Word (.doc): Best-effort UTF-8 decode

Uploads are parsed from bytes in memory; nothing is written to disk.
"""
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any

from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

PARSED_CONTENT_CHARS = 1000


@dataclass
class ParsedResume:
    """Result of parsing a resume file.

    Attributes:
        text: Extracted plain text
        format: Detected file format (e.g., 'txt', 'docx', 'pdf')
        filename: Original upload name
    """
    text: str
    format: str
    filename: str

    @property
    def word_count(self) -> int:
        return len(self.text.split())


class ResumeParser:
    """Parse resume uploads into plain text.

    Format is detected from the file extension. Every format yields text only;
    scoring works on that text.
    """

    SUPPORTED_FORMATS = {
        '.pdf', '.docx', '.doc', '.txt'
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse(self, filename: str, data: bytes) -> ParsedResume:
        """Parse an uploaded resume and extract its text.

        Args:
            filename: Original file name (used for format detection)
            data: Raw file bytes

        Returns:
            ParsedResume with extracted text

        Raises:
            ValueError: If format is unsupported, parsing fails or no text is found
        """
        ext = Path(filename).suffix.lower()

        if not self.is_supported(filename):
            supported = ', '.join(sorted(self.SUPPORTED_FORMATS))
            raise ValueError(
                f"Unsupported resume format: {ext or '(none)'}. "
                f"Supported formats: {supported}"
            )

        self.logger.info(f"Parsing resume {filename} (format: {ext}, {len(data)} bytes)")

        if ext == '.pdf':
            text = self._parse_pdf(filename, data)
        elif ext == '.docx':
            text = self._parse_docx(filename, data)
        else:
            text = self._parse_text(filename, data)

        if not text.strip():
            raise ValueError(f"No text could be extracted from {filename}")

        return ParsedResume(text=text, format=ext.lstrip('.'), filename=filename)

    def _parse_text(self, filename: str, data: bytes) -> str:
        """Decode plain text. Legacy .doc files are read the same way."""
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError:
            self.logger.warning(f"{filename} is not valid UTF-8, undecodable bytes replaced")
            return data.decode('utf-8', errors='replace')

    def _parse_docx(self, filename: str, data: bytes) -> str:
        """Parse DOCX resume bytes.

        Extracts paragraph text and table cell text, in document order
        per kind.
        """
        try:
            doc = Document(io.BytesIO(data))
        except Exception as e:
            raise ValueError(f"Failed to parse DOCX file {filename}: {e}") from e

        parts = [p.text.strip() for p in doc.paragraphs if p.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    parts.append(' | '.join(cells))

        self.logger.debug(f"Parsed DOCX resume {filename} ({len(parts)} blocks)")
        return '\n'.join(parts)

    def _parse_pdf(self, filename: str, data: bytes) -> str:
        """Parse PDF resume bytes.

        Extracts text from all pages. Pages that fail extraction are skipped
        with a warning.
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = reader.pages
            page_count = len(pages)
        except Exception as e:
            raise ValueError(f"Failed to parse PDF file {filename}: {e}") from e

        if page_count == 0:
            raise ValueError(f"PDF file {filename} has no pages")

        pages_text = []
        for i, page in enumerate(pages):
            try:
                page_text = page.extract_text()
                if page_text and page_text.strip():
                    pages_text.append(page_text.strip())
            except Exception as e:
                self.logger.warning(f"Failed to extract text from page {i + 1} of {filename}: {e}")

        text = '\n\n'.join(pages_text)

        if not text.strip():
            self.logger.warning(
                f"No text extracted from PDF {filename}. "
                f"The PDF may be scanned images or have text extraction disabled."
            )

        self.logger.debug(
            f"Parsed PDF resume {filename} ({page_count} pages, {len(text)} chars extracted)"
        )
        return text

    def is_supported(self, filename: str) -> bool:
        return Path(filename).suffix.lower() in self.SUPPORTED_FORMATS


def build_parsed_data(parsed: ParsedResume) -> Dict[str, Any]:
    """Summary stored alongside the full text of a resume."""
    return {
        'filename': parsed.filename,
        'content': parsed.text[:PARSED_CONTENT_CHARS],
        'word_count': parsed.word_count,
        'extracted_at': datetime.now(timezone.utc).isoformat(),
    }
