from pydantic import BaseModel, Field

from docextract.services.extraction.base import TextExtractionResult, ValidationReport


class ExtractionMetadataSchema(BaseModel):
    pages: int | None = None
    words: int | None = None
    characters: int | None = None
    encoding: str | None = None
    language: str | None = None


class TextExtractionResultSchema(BaseModel):
    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    method: str
    warnings: list[str] = Field(default_factory=list)
    metadata: ExtractionMetadataSchema | None = None

    @classmethod
    def from_result(cls, result: TextExtractionResult) -> "TextExtractionResultSchema":
        return cls.model_validate(result.to_dict())


class ValidationReportSchema(BaseModel):
    is_valid: bool
    issues: list[str] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)

    @classmethod
    def from_report(cls, report: ValidationReport) -> "ValidationReportSchema":
        return cls.model_validate(report.to_dict())


class ExtractionResponse(BaseModel):
    filename: str
    result: TextExtractionResultSchema
    validation: ValidationReportSchema


class ValidateTextRequest(BaseModel):
    text: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    method: str = "client"


class SupportedFormatResponse(BaseModel):
    category: str
    formats: list[str]
    mime_types: list[str]
    description: str
    reliability: str
