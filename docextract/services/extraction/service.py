from dataclasses import replace

from docextract.core.exceptions import (
    AllStrategiesExhaustedError,
    EncodingUndeterminedError,
    UnsupportedFormatError,
)
from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    TextExtractionResult,
    ValidationReport,
)
from docextract.services.extraction.confidence import count_words
from docextract.services.extraction.factory import (
    DocumentFormat,
    ExtractorFactory,
    detect_format,
    supported_extensions,
)
from docextract.services.extraction.text_cleaner import normalize_text
from docextract.services.extraction.validator import validate_extracted_text

logger = get_logger(__name__)


class TextExtractionService:
    """Document bytes in, normalized text plus confidence and quality report out.

    Stateless: one instance can serve any number of concurrent calls.
    """

    def extract(
        self,
        file_data: bytes,
        mime_type: str | None,
        filename: str | None = None,
        options: ExtractionOptions | None = None,
    ) -> TextExtractionResult:
        options = options or ExtractionOptions.from_settings()
        logger.info(
            f"Starting extraction for {mime_type or 'unknown type'} "
            f"({filename or 'unnamed'}), size: {len(file_data)} bytes"
        )

        detection = detect_format(file_data, mime_type, filename, options.fallback_strategies)
        if detection.format is DocumentFormat.UNSUPPORTED:
            raise UnsupportedFormatError(mime_type, supported_extensions())
        if detection.sniffed:
            logger.info(
                f"Unknown MIME type {mime_type!r}, content detection chose {detection.format.value}"
            )

        try:
            raw = self._run_chain(detection.format, file_data, mime_type, options)
        except AllStrategiesExhaustedError as e:
            # ZIP signature is only a hint, the archive may not be a Word document
            if not (detection.sniffed and detection.format is DocumentFormat.WORD):
                raise
            logger.info("Sniffed ZIP content is not a readable Word document, trying plain text")
            raw = self._run_chain(DocumentFormat.PLAIN_TEXT, file_data, mime_type, options)
            raw = replace(raw, warnings=e.failures + raw.warnings)

        result = self._finalize(raw, options)
        logger.info(
            f"Extraction finished: method={result.method}, confidence={result.confidence}, "
            f"{len(result.text)} characters, {len(result.warnings)} warnings"
        )
        return result

    def extract_and_validate(
        self,
        file_data: bytes,
        mime_type: str | None,
        filename: str | None = None,
        options: ExtractionOptions | None = None,
    ) -> tuple[TextExtractionResult, ValidationReport]:
        result = self.extract(file_data, mime_type, filename, options)
        return result, validate_extracted_text(result)

    @staticmethod
    def _run_chain(
        document_format: DocumentFormat,
        file_data: bytes,
        mime_type: str | None,
        options: ExtractionOptions,
    ) -> TextExtractionResult:
        chain = ExtractorFactory.get_chain(document_format, mime_type)
        try:
            return chain.run(file_data, options)
        except AllStrategiesExhaustedError as e:
            if isinstance(e.last_error, EncodingUndeterminedError):
                raise e.last_error from e
            raise

    @staticmethod
    def _finalize(raw: TextExtractionResult, options: ExtractionOptions) -> TextExtractionResult:
        text = raw.text if options.preserve_formatting else normalize_text(raw.text)

        metadata = None
        if options.extract_metadata:
            base = raw.metadata or ExtractionMetadata()
            metadata = replace(base, words=count_words(text), characters=len(text))

        return replace(raw, text=text, metadata=metadata)


def extract_text_from_file(
    file_data: bytes,
    mime_type: str | None,
    filename: str | None = None,
    options: ExtractionOptions | None = None,
) -> TextExtractionResult:
    return TextExtractionService().extract(file_data, mime_type, filename, options)
