from bs4 import BeautifulSoup

from docextract.services.extraction.base import (
    ExtractionMetadata,
    ExtractionOptions,
    ExtractionStrategy,
    TextExtractionResult,
)
from docextract.services.extraction.confidence import calculate_text_confidence
from docextract.services.extraction.text_cleaner import collapse_whitespace

# Removed together with their content before any text is read
NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


class HtmlParserStrategy(ExtractionStrategy):
    """HTML to plain text for web-based resumes and job pages. Never fails."""

    name = "html-parser"

    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        soup = BeautifulSoup(file_data, "html.parser")
        for tag in soup(NON_CONTENT_TAGS):
            tag.decompose()

        # get_text() has already decoded &nbsp;, &amp;, &#233; etc.
        text = collapse_whitespace(soup.get_text(separator=" "))

        return TextExtractionResult(
            text=text,
            confidence=calculate_text_confidence(text),
            method=self.name,
            warnings=["HTML content converted to plain text"],
            metadata=ExtractionMetadata(
                encoding=soup.original_encoding,
                language=_declared_language(soup),
            ),
        )


HTML_STRATEGIES: list[ExtractionStrategy] = [HtmlParserStrategy()]


def _declared_language(soup: BeautifulSoup) -> str | None:
    html_tag = soup.find("html")
    if html_tag is None:
        return None
    lang = html_tag.get("lang")
    return lang.strip() if isinstance(lang, str) and lang.strip() else None
