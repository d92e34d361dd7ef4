"""Vocabulary extraction routes."""

import logging
import os
import tempfile
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from lerndeutsch.dependencies import get_extractor
from lerndeutsch.extraction.extractor_interface import ExtractorInterface
from lerndeutsch.schemas.common import ApiResponse
from lerndeutsch.schemas.extraction import ExtractionOutcomeRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract", response_model=ApiResponse[ExtractionOutcomeRead])
async def extract_vocabulary(
    file: UploadFile = File(...),
    extractor: ExtractorInterface = Depends(get_extractor),
) -> ApiResponse[ExtractionOutcomeRead]:
    """Extract vocabulary candidates from an uploaded photo.

    The upload is spooled to a temporary file that keeps the client filename's
    suffix, since the MIME type is derived from it.
    """

    suffix = PurePath(file.filename or "").suffix.lower()
    content = await file.read()
    path = await run_in_threadpool(_write_temp_image, content, suffix)
    try:
        outcome = await extractor.extract(path)
    finally:
        os.unlink(path)
    logger.info(
        "extraction.request_served filename_suffix=%s bytes=%d succeeded=%s",
        suffix or "-",
        len(content),
        outcome.succeeded,
    )
    return ApiResponse(data=ExtractionOutcomeRead.model_validate(outcome))


def _write_temp_image(content: bytes, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(prefix="lerndeutsch-", suffix=suffix, delete=False) as handle:
        handle.write(content)
        return handle.name
