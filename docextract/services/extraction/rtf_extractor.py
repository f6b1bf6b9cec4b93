from striprtf.striprtf import rtf_to_text

from docextract.core.exceptions import StrategyFailedError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)
from docextract.services.extraction.confidence import calculate_text_confidence
from docextract.services.extraction.text_cleaner import tidy_whitespace

logger = get_logger(__name__)

RTF_SIGNATURE = "{\\rtf"


class StripRtfStrategy(ExtractionStrategy):
    name = "rtf-striprtf"
    COMPLEX_FORMATTING_THRESHOLD = 0.6

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        try:
            content = file_data.decode("utf-8")
            encoding = "utf-8"
        except UnicodeDecodeError:
            content = file_data.decode("windows-1252", errors="replace")
            encoding = "windows-1252"

        content = content.lstrip("\ufeff \t\r\n")
        if not content.startswith(RTF_SIGNATURE):
            raise StrategyFailedError("Missing {\\rtf header")

        # striprtf drops header destinations (fonttbl, colortbl, info, ...),
        # control words and braces, and maps \par/\line/\tab to whitespace
        text = tidy_whitespace(rtf_to_text(content, errors="replace"))

        confidence = calculate_text_confidence(text)
        warnings = []
        if confidence < self.COMPLEX_FORMATTING_THRESHOLD:
            warnings.append("RTF parsing may be incomplete - complex formatting detected")

        return TextExtractionResult(
            text=text,
            confidence=confidence,
            method=self.name,
            warnings=warnings,
            metadata=ExtractionMetadata(encoding=encoding),
        )


RTF_STRATEGIES: list[ExtractionStrategy] = [StripRtfStrategy()]
