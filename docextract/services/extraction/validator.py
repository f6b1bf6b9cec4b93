"""
Quality report for an extraction result.

The score starts at 100 and loses points per detected problem; callers show
the issues to the user verbatim (e.g. to ask for a better scan) and use
is_valid to decide whether to accept the text at all.
"""

import re

from docextract.services.extraction.base import TextExtractionResult, ValidationReport
from docextract.services.extraction.confidence import (
    GARBLED_RUN_PATTERN,
    count_words,
    sentence_fragments,
)

REPEATED_CHAR_PATTERN = re.compile(r"(.)\1{5,}")

MIN_VALID_SCORE = 50
MAX_ISSUES = 3


def validate_extracted_text(result: TextExtractionResult) -> ValidationReport:
    text = result.text or ""
    issues: list[str] = []
    score = 100

    if not text.strip():
        return ValidationReport(
            is_valid=False,
            issues=["No text was extracted from the file"],
            score=0,
        )

    if len(text) < 50:
        issues.append("Very little text was extracted - file may be corrupted or mostly images")
        score -= 30
    elif len(text) < 200:
        issues.append("Limited text extracted - this may be a brief document")
        score -= 10

    if result.confidence < 0.3:
        issues.append("Very low extraction confidence - text may be severely corrupted")
        score -= 40
    elif result.confidence < 0.6:
        issues.append("Low extraction confidence - some text may be inaccurate")
        score -= 20

    words = count_words(text)
    if words < 10:
        issues.append("Too few words extracted - document may not contain readable text")
        score -= 25

    if len(GARBLED_RUN_PATTERN.findall(text)) > words * 0.1:
        issues.append("Text contains many special characters - may be garbled or corrupted")
        score -= 15

    if len(REPEATED_CHAR_PATTERN.findall(text)) > 3:
        issues.append("Text contains repeated character patterns - may indicate OCR errors")
        score -= 10

    if words > 20 and not sentence_fragments(text, 10):
        issues.append("No proper sentence structure detected - text may be fragmented")
        score -= 15

    score = max(0, score)
    return ValidationReport(
        is_valid=score >= MIN_VALID_SCORE and len(issues) < MAX_ISSUES,
        issues=issues,
        score=score,
    )
