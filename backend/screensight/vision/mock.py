"""Fixed analysis returned when the model is unavailable (offline/demo mode)."""

from __future__ import annotations

from screensight.models.elements import (
    AnalysisResult,
    Dimensions,
    LayoutInfo,
    Typography,
)

MOCK_MODEL_NAME = "mock"

_MOCK_PAYLOAD = {
    "elements": [
        {
            "id": "mock-button",
            "type": "button",
            "boundingBox": {"x": 100, "y": 100, "width": 120, "height": 40},
            "confidence": 0.95,
            "text": "Submit",
            "color": "#3b82f6",
            "styles": {"borderRadius": "8px", "color": "#ffffff"},
            "children": [],
        },
        {
            "id": "mock-input",
            "type": "input",
            "boundingBox": {"x": 100, "y": 50, "width": 200, "height": 40},
            "confidence": 0.92,
            "text": "",
            "color": "#ffffff",
            "styles": {"border": "1px solid #d1d5db", "borderRadius": "6px"},
            "children": [],
        },
    ],
    "colors": ["#3b82f6", "#ffffff", "#d1d5db", "#1f2937"],
    "typography": {"fonts": ["Inter", "Arial", "sans-serif"], "sizes": [14, 16, 20, 24]},
    "layout": {"type": "flex", "direction": "column", "gap": 16},
    "dimensions": {"width": 1280, "height": 800},
}


def mock_analysis() -> AnalysisResult:
    """Return a fresh copy of the mock analysis. Always identical."""
    return AnalysisResult(
        elements=[
            {**e, "boundingBox": dict(e["boundingBox"]), "styles": dict(e["styles"]), "children": []}
            for e in _MOCK_PAYLOAD["elements"]
        ],
        colors=list(_MOCK_PAYLOAD["colors"]),
        typography=Typography(**_MOCK_PAYLOAD["typography"]),
        layout=LayoutInfo(**_MOCK_PAYLOAD["layout"]),
        dimensions=Dimensions(**_MOCK_PAYLOAD["dimensions"]),
    )
