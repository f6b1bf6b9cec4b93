from typing import Optional

from fastapi import APIRouter, File, Query, UploadFile

from docextract.config import settings
from docextract.core.exceptions import FileTooLargeError
from docextract.core.logging import get_logger
from docextract.schemas.extraction import (
    ExtractionResponse,
    SupportedFormatResponse,
    TextExtractionResultSchema,
    ValidateTextRequest,
    ValidationReportSchema,
)
from docextract.services.extraction.base import ExtractionOptions, TextExtractionResult
from docextract.services.extraction.factory import get_supported_formats
from docextract.services.extraction.service import TextExtractionService
from docextract.services.extraction.validator import validate_extracted_text
from docextract.services.extraction.worker_pool import get_worker_pool

router = APIRouter(prefix="/extraction", tags=["Extraction"])
logger = get_logger(__name__)


def _check_size(size: int | None) -> None:
    max_bytes = settings.max_file_size_mb * 1024 * 1024
    if size and size > max_bytes:
        raise FileTooLargeError(size_mb=size / (1024 * 1024), max_mb=settings.max_file_size_mb)


@router.get("/formats", response_model=list[SupportedFormatResponse])
async def list_supported_formats():
    return [SupportedFormatResponse(**entry) for entry in get_supported_formats()]


@router.post("/extract", response_model=ExtractionResponse)
async def extract_document(
    file: UploadFile = File(...),
    preserve_formatting: Optional[bool] = Query(default=None),
    fallback_strategies: Optional[bool] = Query(default=None),
):
    # Header size first, then the real byte count
    _check_size(file.size)
    content = await file.read()
    _check_size(len(content))

    filename = file.filename or "unnamed"
    # Unset query flags fall back to the configured defaults
    flags = {"preserve_formatting": preserve_formatting, "fallback_strategies": fallback_strategies}
    options = ExtractionOptions.from_settings(**{k: v for k, v in flags.items() if v is not None})

    service = TextExtractionService()
    result, report = await get_worker_pool().run(
        service.extract_and_validate, content, file.content_type, filename, options
    )

    if not report.is_valid:
        logger.info(f"Extraction of {filename} scored {report.score}: {report.issues}")

    return ExtractionResponse(
        filename=filename,
        result=TextExtractionResultSchema.from_result(result),
        validation=ValidationReportSchema.from_report(report),
    )


@router.post("/validate", response_model=ValidationReportSchema)
async def validate_text(request: ValidateTextRequest):
    report = validate_extracted_text(
        TextExtractionResult(text=request.text, confidence=request.confidence, method=request.method)
    )
    return ValidationReportSchema.from_report(report)
