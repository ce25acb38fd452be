"""POST /api/convert and /api/convert/batch: screenshot to object graph."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from screensight.dependencies import get_pipeline
from screensight.errors import VisionError
from screensight.models.requests import BatchConvertRequest, ConvertRequest
from screensight.models.responses import BatchConvertResponse, BatchItemResponse
from screensight.models.results import ConversionResult
from screensight.pipeline.orchestrator import ConversionPipeline, categorize

router = APIRouter()


def _error_kind(error: BaseException | None) -> str | None:
    if error is None:
        return None
    if isinstance(error, VisionError):
        return error.kind
    return type(error).__name__


@router.post("/convert", response_model=ConversionResult)
async def convert(
    req: ConvertRequest,
    pipeline: ConversionPipeline = Depends(get_pipeline),
) -> ConversionResult:
    return await pipeline.convert(req.image, req.options)


@router.post("/convert/batch", response_model=BatchConvertResponse)
async def convert_batch(
    req: BatchConvertRequest,
    pipeline: ConversionPipeline = Depends(get_pipeline),
) -> BatchConvertResponse:
    batch = await pipeline.batch_convert(req.images, req.options, req.batch_size)
    return BatchConvertResponse(
        total=batch.total,
        successful=batch.successful,
        failed=batch.failed,
        results=[
            BatchItemResponse(
                index=item.index,
                result=item.value,
                error=None if item.error is None else str(item.error),
                error_kind=_error_kind(item.error),
            )
            for item in batch.results
        ],
        categories=categorize(batch.results),
    )
