import base64
import binascii

from docextract.core.exceptions import DocExtractError
from docextract.core.logging import get_logger
from docextract.services.extraction.base import ExtractionOptions
from docextract.services.extraction.service import TextExtractionService
from docextract.tasks.celery_app import celery_app

logger = get_logger(__name__)


@celery_app.task(bind=True)
def extract_document_task(
    self,
    content_b64: str,
    mime_type: str | None,
    filename: str | None = None,
    options: dict | None = None,
):
    """Extract and validate one document queued by the upload layer.

    Failed extractions are reported in the result, never retried: the same
    bytes would fail the same way.
    """
    try:
        file_data = base64.b64decode(content_b64, validate=True)
    except binascii.Error as e:
        logger.error(f"Task {self.request.id}: payload is not valid base64: {e}")
        return {"error": f"Invalid base64 payload: {e}", "status_code": 400}

    extraction_options = ExtractionOptions.from_settings(**(options or {}))
    service = TextExtractionService()

    try:
        result, report = service.extract_and_validate(file_data, mime_type, filename, extraction_options)
    except DocExtractError as e:
        logger.warning(f"Task {self.request.id}: extraction of {filename or 'unnamed'} failed: {e.message}")
        return {"error": e.message, "status_code": e.status_code}

    logger.info(
        f"Task {self.request.id}: {filename or 'unnamed'} extracted via {result.method}, "
        f"score {report.score}"
    )
    return {"result": result.to_dict(), "validation": report.to_dict()}
