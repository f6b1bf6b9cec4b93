"""
Confidence heuristics for extracted text.

Every function here is pure: it looks only at the text (and, for PDFs, the
page count) and returns a score in [0.1, 1.0]. The generic text heuristic is
used directly by the plain text, RTF and HTML extractors; PDF and Word have
their own variants with format-specific base values.
"""

import re

# Anything outside ASCII and Latin letters, digits, whitespace and common punctuation.
# CJK and other scripts count as garbled: they are what mis-decoded bytes look like.
GARBLED_CHAR_PATTERN = re.compile(r"[^A-Za-z0-9\u00C0-\u024F_\s\-.,!?@()\[\]{}:;\"'/\\]")
GARBLED_RUN_PATTERN = re.compile(r"[^A-Za-z0-9\u00C0-\u024F_\s\-.,!?@()\[\]{}:;\"'/\\]+")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0


def clamp_confidence(value: float) -> float:
    return round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value)), 2)


def count_words(text: str) -> int:
    return len(text.split())


def garbled_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(GARBLED_CHAR_PATTERN.findall(text)) / len(text)


def sentence_fragments(text: str, min_length: int) -> list[str]:
    """Pieces of text between terminal punctuation longer than min_length."""
    return [s for s in SENTENCE_SPLIT_PATTERN.split(text) if len(s.strip()) > min_length]


def calculate_text_confidence(text: str) -> float:
    if len(text) < 10:
        return MIN_CONFIDENCE

    confidence = 0.7

    words = count_words(text)
    if words:
        avg_word_length = len(text) / words
        if 2 < avg_word_length < 15:
            confidence += 0.1

    if sentence_fragments(text, 5):
        confidence += 0.1

    if garbled_ratio(text) > 0.2:
        confidence -= 0.3

    return clamp_confidence(confidence)


def calculate_pdf_confidence(text: str, pages: int) -> float:
    confidence = 0.8

    words_per_page = count_words(text) / max(pages, 1)
    if words_per_page < 10:
        # Sparse text layer, probably a scanned/image PDF
        confidence -= 0.3
    if words_per_page > 200:
        confidence += 0.1

    if garbled_ratio(text) > 0.1:
        confidence -= 0.2

    return clamp_confidence(confidence)


def calculate_word_confidence(text: str, parser_warnings: list[str]) -> float:
    confidence = 0.9

    if parser_warnings:
        confidence -= 0.1
    if len(text) < 100:
        confidence -= 0.3
    if garbled_ratio(text) > 0.05:
        confidence -= 0.2

    return clamp_confidence(confidence)
