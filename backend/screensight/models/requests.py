"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from screensight.models.options import AnalysisOptions, ConversionOptions, PreprocessingOptions


class ConvertRequest(BaseModel):
    image: str = Field(..., description="http(s) URL, data: URI, or bare base64 string")
    options: ConversionOptions = Field(default_factory=ConversionOptions)


class BatchConvertRequest(BaseModel):
    images: list[str] = Field(..., description="Image sources, same forms as ConvertRequest.image")
    options: ConversionOptions = Field(default_factory=ConversionOptions)
    batch_size: int | None = Field(default=None, ge=1, description="Concurrent conversions per chunk")


class AnalyzeRequest(BaseModel):
    image: str = Field(..., description="http(s) URL, data: URI, or bare base64 string")
    preprocessing: PreprocessingOptions = Field(default_factory=PreprocessingOptions)
    analysis: AnalysisOptions = Field(default_factory=AnalysisOptions)
