import io
import re
import zlib

from docextract.core.exceptions import StrategyFailedError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)
from docextract.services.extraction.confidence import calculate_pdf_confidence

logger = get_logger(__name__)

# Content stream scanning (used when the document structure can't be parsed)
STREAM_PATTERN = re.compile(rb"(?<!end)stream\r?\n(.*?)\r?\n?endstream", re.DOTALL)
TEXT_OBJECT_PATTERN = re.compile(r"\bBT\b(.*?)\bET\b", re.DOTALL)
LITERAL = r"\((?:\\.|[^\\)])*\)"
HEX = r"<[0-9A-Fa-f\s]*>"
# (string) Tj, (string) ', aw ac (string) " and [(str) -120 (ing)] TJ
SHOW_PATTERN = re.compile(
    rf"({LITERAL}|{HEX})\s*(?:Tj|'|\")|\[((?:{LITERAL}|{HEX}|[^\]()<>])*)\]\s*TJ",
    re.DOTALL,
)
ARRAY_TOKEN_PATTERN = re.compile(rf"({LITERAL})|({HEX})|(-?\d+(?:\.\d+)?)", re.DOTALL)
ESCAPE_PATTERN = re.compile(r"\\([0-7]{1,3}|\r\n|\n|\r|.)", re.DOTALL)

# Raw scan of the whole file for parenthesized strings
RAW_LITERAL_PATTERN = re.compile(r"\(([^)]+)\)")
HAS_LETTER = re.compile(r"[a-zA-Z]")

ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f"}

# TJ kerning offsets (thousandths of an em) wide enough to mean a word gap
TJ_SPACE_THRESHOLD = -200


class PdfPlumberStrategy(ExtractionStrategy):
    """Full structural parse with pdfplumber."""

    name = "pdfplumber"
    LARGE_DOCUMENT_PAGES = 10

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        import pdfplumber

        page_texts = []
        with pdfplumber.open(io.BytesIO(file_data)) as pdf:
            language = _document_language(pdf)
            info = pdf.metadata or {}
            for page in pdf.pages:
                page_texts.append(page.extract_text() or "")

        page_count = len(page_texts)
        if page_count == 0:
            raise StrategyFailedError("PDF contains no pages")

        logger.debug(f"pdfplumber parsed {page_count} pages, producer={info.get('Producer')!r}")

        text = "\n\n".join(t for t in page_texts if t)
        confidence = calculate_pdf_confidence(text, page_count)

        warnings = []
        if page_count > self.LARGE_DOCUMENT_PAGES:
            warnings.append("Large document - extraction may take longer")
        if confidence < 0.7:
            warnings.append("Low confidence extraction - document may be image-based or corrupted")

        return TextExtractionResult(
            text=text,
            confidence=confidence,
            method=self.name,
            warnings=warnings,
            metadata=ExtractionMetadata(pages=page_count, language=language),
        )


class PdfStructuralStrategy(ExtractionStrategy):
    """Reads text-showing operators straight out of the content streams."""

    name = "pdf-fallback"
    CONFIDENCE = 0.6

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        blocks = []
        for stream in _content_streams(file_data):
            for text_object in TEXT_OBJECT_PATTERN.finditer(stream):
                block = _show_operators_text(text_object.group(1))
                if block:
                    blocks.append(block)

        text = "\n".join(blocks).strip()
        if not text:
            raise StrategyFailedError("No text-showing operators found in content streams")

        return TextExtractionResult(
            text=text,
            confidence=self.CONFIDENCE,
            method=self.name,
            warnings=["Used fallback PDF extraction method"],
            metadata=ExtractionMetadata(),
        )


class PdfRawTextStrategy(ExtractionStrategy):
    """Last resort: every parenthesized string in the file that looks like words."""

    name = "pdf-raw"
    CONFIDENCE = 0.4
    MIN_TEXT_LENGTH = 50

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        content = file_data.decode("latin-1")
        pieces = [
            match
            for match in RAW_LITERAL_PATTERN.findall(content)
            if len(match) > 2 and HAS_LETTER.search(match)
        ]
        text = " ".join(pieces)

        if len(text) < self.MIN_TEXT_LENGTH:
            raise StrategyFailedError(
                f"Insufficient text extracted from PDF ({len(text)} characters)"
            )

        return TextExtractionResult(
            text=text,
            confidence=self.CONFIDENCE,
            method=self.name,
            warnings=["Used raw PDF text extraction - quality may be poor"],
            metadata=ExtractionMetadata(),
        )


PDF_STRATEGIES: list[ExtractionStrategy] = [
    PdfPlumberStrategy(),
    PdfStructuralStrategy(),
    PdfRawTextStrategy(),
]


def _document_language(pdf) -> str | None:
    from pdfplumber.utils import resolve

    lang = resolve(pdf.doc.catalog.get("Lang"))
    if isinstance(lang, bytes):
        lang = lang.decode("latin-1")
    if isinstance(lang, str) and lang.strip():
        return lang.strip()
    return None


def _content_streams(file_data: bytes):
    """Yield every stream body as text, inflating Flate-compressed ones."""
    for match in STREAM_PATTERN.finditer(file_data):
        header = file_data[max(0, match.start() - 512):match.start()]
        header = header[header.rfind(b"obj") + 1:]
        body = match.group(1)

        if b"/FlateDecode" in header:
            try:
                body = zlib.decompressobj().decompress(body)
            except zlib.error as e:
                logger.debug(f"Skipping undecodable stream at offset {match.start()}: {e}")
                continue
        elif b"/Filter" in header:
            # Other filters (DCT, JBIG2, ...) carry images, not text
            continue

        yield body.decode("latin-1")


def _show_operators_text(text_object: str) -> str:
    parts = []
    for match in SHOW_PATTERN.finditer(text_object):
        string, array = match.groups()
        parts.append(_decode_string(string) if string else _decode_array(array))
    return " ".join(p.strip() for p in parts if p.strip())


def _decode_array(array: str) -> str:
    out = []
    for literal, hex_string, number in ARRAY_TOKEN_PATTERN.findall(array):
        if literal or hex_string:
            out.append(_decode_string(literal or hex_string))
        elif float(number) <= TJ_SPACE_THRESHOLD:
            out.append(" ")
    return "".join(out)


def _decode_string(token: str) -> str:
    if token.startswith("<"):
        digits = re.sub(r"\s", "", token[1:-1])
        if len(digits) % 2:
            digits += "0"
        return bytes.fromhex(digits).decode("latin-1")
    return ESCAPE_PATTERN.sub(_unescape, token[1:-1])


def _unescape(match: re.Match) -> str:
    escaped = match.group(1)
    if escaped[0] in "01234567":
        return chr(int(escaped, 8) & 0xFF)
    if escaped in ("\r\n", "\n", "\r"):
        return ""
    return ESCAPES.get(escaped, escaped)
