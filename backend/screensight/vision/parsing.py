"""Model text → JSON object, via an ordered list of parsing strategies.

Each strategy returns a ``ParseOutcome`` instead of raising; the first
success wins.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from screensight.errors import InvalidResponse
from screensight.models.elements import AnalysisResult, Dimensions, LayoutInfo, Typography

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ParseOutcome:
    value: dict[str, Any] | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None


ParseStrategy = Callable[[str], ParseOutcome]


def _loads_object(text: str) -> ParseOutcome:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        return ParseOutcome(error=f"JSON decode error: {e}")
    if not isinstance(data, dict):
        return ParseOutcome(error=f"expected a JSON object, got {type(data).__name__}")
    return ParseOutcome(value=data)


def parse_direct(text: str) -> ParseOutcome:
    """The whole response is the payload."""
    return _loads_object(text.strip())


def parse_fenced_block(text: str) -> ParseOutcome:
    """Payload inside a ```json fence."""
    match = _FENCE_RE.search(text)
    if not match:
        return ParseOutcome(error="no fenced code block")
    return _loads_object(match.group(1))


def parse_first_object(text: str) -> ParseOutcome:
    """Outermost ``{...}`` span in the text."""
    match = _OBJECT_RE.search(text)
    if not match:
        return ParseOutcome(error="no {...} object found")
    return _loads_object(match.group(0))


DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    parse_direct,
    parse_fenced_block,
    parse_first_object,
)


def parse_model_response(
    text: str,
    strategies: Sequence[ParseStrategy] = DEFAULT_STRATEGIES,
) -> dict[str, Any]:
    """Run strategies in order. Raises InvalidResponse when all fail."""
    errors: list[str] = []
    for strategy in strategies:
        outcome = strategy(text)
        if outcome.ok:
            return outcome.value  # type: ignore[return-value]
        logger.debug("Parse strategy %s failed: %s", strategy.__name__, outcome.error)
        errors.append(f"{strategy.__name__}: {outcome.error}")
    raise InvalidResponse("Failed to parse model response", details=errors)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, (str, int, float))]


def _number_list(value: Any) -> list[float]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, (int, float)) and not isinstance(v, bool)]


def normalize_analysis(parsed: dict[str, Any], width: int = 0, height: int = 0) -> AnalysisResult:
    """Fill the gaps a model response tends to leave.

    Missing colors → [], typography → no fonts/sizes, layout → flex,
    dimensions → the analyzed image's own size.
    """
    elements = parsed.get("elements")
    if not isinstance(elements, list):
        elements = []

    typography = parsed.get("typography")
    if not isinstance(typography, dict):
        typography = {}
    families = typography.get("fonts", typography.get("families", typography.get("fontFamilies")))

    layout = parsed.get("layout")
    if not isinstance(layout, dict) or not isinstance(layout.get("type"), str):
        layout = {"type": "flex"}
    gap = layout.get("gap")

    dims = parsed.get("dimensions")
    if not isinstance(dims, dict):
        dims = {}

    return AnalysisResult(
        elements=[e for e in elements if isinstance(e, dict)],
        colors=_string_list(parsed.get("colors", parsed.get("colorPalette"))),
        typography=Typography(
            fonts=_string_list(families),
            sizes=_number_list(typography.get("sizes", typography.get("fontSizes"))),
        ),
        layout=LayoutInfo(
            type=layout["type"],
            direction=layout.get("direction") if isinstance(layout.get("direction"), str) else None,
            gap=gap if isinstance(gap, (int, float)) and not isinstance(gap, bool) else None,
        ),
        dimensions=Dimensions(
            width=dims.get("width") if isinstance(dims.get("width"), (int, float)) else width,
            height=dims.get("height") if isinstance(dims.get("height"), (int, float)) else height,
        ),
    )
