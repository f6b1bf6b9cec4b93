from dataclasses import dataclass
from enum import Enum

from docextract.core.exceptions import UnsupportedFormatError
from docextract.services.extraction.chain import StrategyChain
from docextract.services.extraction.docx_extractor import WORD_STRATEGIES
from docextract.services.extraction.html_extractor import HTML_STRATEGIES
from docextract.services.extraction.pdf_extractor import PDF_STRATEGIES
from docextract.services.extraction.rtf_extractor import RTF_STRATEGIES
from docextract.services.extraction.txt_extractor import TEXT_STRATEGIES

SNIFF_WINDOW = 1024


class DocumentFormat(str, Enum):
    PDF = "pdf"
    WORD = "word"
    PLAIN_TEXT = "plain_text"
    RTF = "rtf"
    HTML = "html"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FormatInfo:
    format: DocumentFormat
    category: str
    extensions: tuple[str, ...]
    mime_types: tuple[str, ...]
    description: str
    reliability: str


# Checked in order; the first row matching the MIME type or extension wins
SUPPORTED_FORMATS: list[FormatInfo] = [
    FormatInfo(
        format=DocumentFormat.PDF,
        category="PDF Documents",
        extensions=(".pdf",),
        mime_types=("application/pdf",),
        description="Portable Document Format with multiple extraction strategies",
        reliability="high",
    ),
    FormatInfo(
        format=DocumentFormat.WORD,
        category="Microsoft Word",
        extensions=(".docx", ".doc"),
        mime_types=(
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/msword",
        ),
        description="Microsoft Word documents with excellent text extraction",
        reliability="high",
    ),
    FormatInfo(
        format=DocumentFormat.PLAIN_TEXT,
        category="Plain Text",
        extensions=(".txt",),
        mime_types=("text/plain",),
        description="Plain text files with encoding detection",
        reliability="high",
    ),
    FormatInfo(
        format=DocumentFormat.RTF,
        category="Rich Text Format",
        extensions=(".rtf",),
        mime_types=("application/rtf", "text/rtf"),
        description="Rich Text Format with enhanced parsing",
        reliability="medium",
    ),
    FormatInfo(
        format=DocumentFormat.HTML,
        category="Web Documents",
        extensions=(".html", ".htm"),
        mime_types=("text/html",),
        description="HTML documents converted to plain text",
        reliability="medium",
    ),
]

STRATEGY_CHAINS: dict[DocumentFormat, StrategyChain] = {
    DocumentFormat.PDF: StrategyChain("PDF", PDF_STRATEGIES),
    DocumentFormat.WORD: StrategyChain("Word", WORD_STRATEGIES),
    DocumentFormat.PLAIN_TEXT: StrategyChain("Text", TEXT_STRATEGIES),
    DocumentFormat.RTF: StrategyChain("RTF", RTF_STRATEGIES),
    DocumentFormat.HTML: StrategyChain("HTML", HTML_STRATEGIES),
}


@dataclass(frozen=True)
class FormatDetection:
    format: DocumentFormat
    sniffed: bool = False


def get_supported_formats() -> list[dict]:
    return [
        {
            "category": info.category,
            "formats": list(info.extensions),
            "mime_types": list(info.mime_types),
            "description": info.description,
            "reliability": info.reliability,
        }
        for info in SUPPORTED_FORMATS
    ]


def supported_extensions() -> list[str]:
    return [ext.lstrip(".").upper() for info in SUPPORTED_FORMATS for ext in info.extensions]


def format_from_declaration(mime_type: str | None, filename: str | None) -> DocumentFormat:
    mime = (mime_type or "").split(";", 1)[0].strip().lower()
    name = (filename or "").strip().lower()

    for info in SUPPORTED_FORMATS:
        if mime in info.mime_types or (name and name.endswith(info.extensions)):
            return info.format
    return DocumentFormat.UNSUPPORTED


def sniff_format(file_data: bytes) -> DocumentFormat:
    """Guess the format from leading byte signatures. Defaults to plain text."""
    sample = file_data[:SNIFF_WINDOW]
    lowered = sample.lower()

    if b"%PDF-" in sample:
        return DocumentFormat.PDF
    if b"{\\rtf" in sample:
        return DocumentFormat.RTF
    if b"<html" in lowered or b"<!doctype" in lowered:
        return DocumentFormat.HTML
    if sample.startswith(b"PK"):
        return DocumentFormat.WORD
    return DocumentFormat.PLAIN_TEXT


def detect_format(
    file_data: bytes,
    mime_type: str | None,
    filename: str | None = None,
    fallback_strategies: bool = True,
) -> FormatDetection:
    declared = format_from_declaration(mime_type, filename)
    if declared is not DocumentFormat.UNSUPPORTED:
        return FormatDetection(declared)
    if not fallback_strategies:
        return FormatDetection(DocumentFormat.UNSUPPORTED)
    return FormatDetection(sniff_format(file_data), sniffed=True)


class ExtractorFactory:
    @staticmethod
    def get_chain(document_format: DocumentFormat, mime_type: str | None = None) -> StrategyChain:
        chain = STRATEGY_CHAINS.get(document_format)
        if chain is None:
            raise UnsupportedFormatError(mime_type, supported_extensions())
        return chain
