from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    TextExtractionResult,
    ValidationReport,
)
from docextract.services.extraction.factory import (
    DocumentFormat,
    detect_format,
    get_supported_formats,
)
from docextract.services.extraction.service import TextExtractionService, extract_text_from_file
from docextract.services.extraction.text_cleaner import normalize_text
from docextract.services.extraction.validator import validate_extracted_text

__all__ = [
    "DocumentFormat",
    "ExtractionMetadata",
    "ExtractionOptions",
    "TextExtractionResult",
    "TextExtractionService",
    "ValidationReport",
    "detect_format",
    "extract_text_from_file",
    "get_supported_formats",
    "normalize_text",
    "validate_extracted_text",
]
