"""
Text normalization for extracted document text.
Strips null bytes, fixes OCR/concatenation artifacts and collapses whitespace.

Every step only deletes characters, inserts spaces or shortens runs, and the
steps run in an order where no later step can create input for an earlier
one, so normalize_text(normalize_text(x)) == normalize_text(x).
"""

import re

NULL_BYTES = re.compile(r"\x00")
LINE_ENDINGS = re.compile(r"\r\n?")

# "Wait!!!!!" -> "Wait!!!"; a mixed run keeps its last mark, "Really?!?!" -> "Really!!!"
REPEATED_PUNCTUATION = re.compile(r"([.!?]){3,}")

# OCR and copy/paste artifacts where words run together
BOUNDARY_PATTERNS = [
    (re.compile(r"([a-z])([A-Z])"), r"\1 \2"),  # wordWord
    (re.compile(r"(\d)([A-Za-z])"), r"\1 \2"),  # 50lbs
    (re.compile(r"([A-Za-z])(\d)"), r"\1 \2"),  # page2
]

INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    if not text:
        return ""

    cleaned = NULL_BYTES.sub("", text)
    cleaned = LINE_ENDINGS.sub("\n", cleaned)
    cleaned = REPEATED_PUNCTUATION.sub(r"\1\1\1", cleaned)

    for pattern, replacement in BOUNDARY_PATTERNS:
        cleaned = pattern.sub(replacement, cleaned)

    return tidy_whitespace(cleaned)


def tidy_whitespace(text: str) -> str:
    """Single spaces within lines, at most one blank line between paragraphs."""
    cleaned = LINE_ENDINGS.sub("\n", text)
    cleaned = INLINE_WHITESPACE.sub(" ", cleaned)
    cleaned = SPACE_AROUND_NEWLINE.sub("\n", cleaned)
    cleaned = EXCESS_NEWLINES.sub("\n\n", cleaned)
    return cleaned.strip()


def collapse_whitespace(text: str) -> str:
    """Flatten all whitespace, including line breaks, to single spaces."""
    return " ".join(text.split())
