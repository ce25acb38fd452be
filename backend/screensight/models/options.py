"""Per-call options. ``None`` means "use the configured default"."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PreprocessingOptions(BaseModel):
    max_width: int | None = None
    max_height: int | None = None
    # Pillow quality scale, 1-95
    quality: int | None = Field(default=None, ge=1, le=100)
    format: str | None = None


class AnalysisOptions(BaseModel):
    model: str | None = None
    max_tokens: int | None = None
    extract_colors: bool = True
    extract_text: bool = True
    detect_components: bool = True
    # Raise Unconfigured / ApiError instead of degrading to the mock analysis
    strict: bool = False


class ConverterOptions(BaseModel):
    use_design_system: bool = True
    theme: str = "modern"
    fidelity: Literal["exact", "approximate", "design-system"] = "approximate"
    scale_x: float = 1.0
    scale_y: float = 1.0


class ConversionOptions(BaseModel):
    preprocessing: PreprocessingOptions = Field(default_factory=PreprocessingOptions)
    analysis: AnalysisOptions = Field(default_factory=AnalysisOptions)
    converter: ConverterOptions = Field(default_factory=ConverterOptions)
    auto_crop: bool = False
    crop_padding: int = 20
    map_components: bool = True
    retry_attempts: int | None = None
    retry_base_delay_ms: int | None = None
    timeout_s: float | None = None
