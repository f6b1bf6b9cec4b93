from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field

from docextract.config import settings


@dataclass
class ExtractionOptions:
    fallback_strategies: bool = True
    max_retries: int = 3
    timeout: float | None = 30.0
    preserve_formatting: bool = False
    extract_metadata: bool = True

    @classmethod
    def from_settings(cls, **overrides) -> "ExtractionOptions":
        values = {
            "fallback_strategies": settings.extraction_fallback_strategies,
            "max_retries": settings.extraction_max_retries,
            "timeout": settings.extraction_timeout_seconds,
            "preserve_formatting": settings.extraction_preserve_formatting,
            "extract_metadata": settings.extraction_extract_metadata,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class ExtractionMetadata:
    pages: int | None = None
    words: int | None = None
    characters: int | None = None
    encoding: str | None = None
    language: str | None = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class TextExtractionResult:
    text: str
    confidence: float
    method: str
    warnings: list[str] = field(default_factory=list)
    metadata: ExtractionMetadata | None = None

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "method": self.method,
            "warnings": list(self.warnings),
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }


@dataclass
class ValidationReport:
    is_valid: bool
    issues: list[str] = field(default_factory=list)
    score: int = 100

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "issues": list(self.issues), "score": self.score}


class ExtractionStrategy(ABC):
    """One way of turning a document's bytes into text.

    Strategies raise on failure; the chain executor decides what happens next.
    The returned text is raw, normalization happens after the chain.
    """

    name: str = "unknown"

    @abstractmethod
    def attempt(self, file_data: bytes, options: ExtractionOptions) -> TextExtractionResult:
        ...
