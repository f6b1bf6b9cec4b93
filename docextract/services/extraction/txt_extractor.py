from charset_normalizer import from_bytes

from docextract.core.exceptions import EncodingUndeterminedError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)
from docextract.services.extraction.confidence import calculate_text_confidence

logger = get_logger(__name__)

CANDIDATE_ENCODINGS = ["utf-8", "utf-16", "iso-8859-1", "windows-1252"]
MIN_ENCODING_CONFIDENCE = 0.5


class TextDecoderStrategy(ExtractionStrategy):
    """Strict-decodes with each candidate encoding and keeps the most readable one."""

    name = "text-decoder"

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        best_text, best_encoding, best_confidence = "", "utf-8", 0.0

        for encoding in CANDIDATE_ENCODINGS:
            try:
                text = file_data.decode(encoding, errors="strict")
            except UnicodeDecodeError:
                continue

            confidence = calculate_text_confidence(text)
            logger.debug(f"Decoded as {encoding} with confidence {confidence}")
            if confidence > best_confidence:
                best_text, best_encoding, best_confidence = text, encoding, confidence

        if best_confidence < MIN_ENCODING_CONFIDENCE:
            raise EncodingUndeterminedError(best_confidence)

        warnings = []
        if best_encoding != "utf-8":
            warnings.append(f"Detected encoding: {best_encoding}")

        return TextExtractionResult(
            text=best_text,
            confidence=best_confidence,
            method=self.name,
            warnings=warnings,
            metadata=ExtractionMetadata(
                encoding=best_encoding,
                language=detect_language(file_data) if options.extract_metadata else None,
            ),
        )


TEXT_STRATEGIES: list[ExtractionStrategy] = [TextDecoderStrategy()]


def detect_language(file_data: bytes) -> str | None:
    detection = from_bytes(file_data).best()
    if detection is None or detection.language in ("", "Unknown"):
        return None
    return detection.language
