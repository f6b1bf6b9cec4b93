import io

from docextract.core.logging import get_logger
from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)
from docextract.services.extraction.confidence import calculate_word_confidence

logger = get_logger(__name__)


class DocxStrategy(ExtractionStrategy):
    name = "python-docx"
    MIN_TEXT_LENGTH = 20

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        from docx import Document as DocxDocument

        doc = DocxDocument(io.BytesIO(file_data))
        parser_warnings = []

        paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]

        # Tables are flattened row by row, cells separated by pipes
        table_blocks = []
        for table in doc.tables:
            rows = []
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    rows.append(" | ".join(cells))
            if rows:
                table_blocks.append("\n".join(rows))

        image_count = len(doc.inline_shapes)
        if image_count:
            parser_warnings.append(f"Skipped {image_count} embedded image(s)")
        if not paragraphs and not table_blocks:
            parser_warnings.append("Document body contains no text paragraphs")

        text = "\n".join(paragraphs)
        if table_blocks:
            text = "\n\n".join([text] + table_blocks) if text else "\n\n".join(table_blocks)

        confidence = calculate_word_confidence(text, parser_warnings)

        warnings = list(parser_warnings)
        if len(text) < self.MIN_TEXT_LENGTH:
            warnings.append("Very little text extracted - document may be mostly images")

        logger.debug(
            f"python-docx read {len(paragraphs)} paragraphs, {len(table_blocks)} tables"
        )

        return TextExtractionResult(
            text=text,
            confidence=confidence,
            method=self.name,
            warnings=warnings,
            metadata=ExtractionMetadata(language=_core_language(doc)),
        )


WORD_STRATEGIES: list[ExtractionStrategy] = [DocxStrategy()]


def _core_language(doc) -> str | None:
    language = doc.core_properties.language
    return language.strip() if language and language.strip() else None
