"""POST /api/analyze: vision analysis only, no conversion."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from screensight.dependencies import get_preprocessor, get_vision_client
from screensight.imaging.preprocessor import ImagePreprocessor
from screensight.models.elements import AnalysisResponse
from screensight.models.requests import AnalyzeRequest
from screensight.vision.client import VisionClient

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(
    req: AnalyzeRequest,
    client: VisionClient = Depends(get_vision_client),
    preprocessor: ImagePreprocessor = Depends(get_preprocessor),
) -> AnalysisResponse:
    image = await preprocessor.process(req.image, req.preprocessing)
    return await client.analyze_image(image, req.analysis)
