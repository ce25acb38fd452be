"""Prompt text for the vision model."""

from __future__ import annotations

from screensight.models.elements import ElementType

UI_ANALYSIS_SYSTEM_PROMPT = """You are an expert UI/UX designer and computer vision specialist.
Your task is to analyze UI screenshots and extract detailed information about all UI components, their styles, layout, and hierarchy.

Analyze the screenshot and provide a JSON response with:
1. All UI elements with bounding boxes
2. Element types
3. Color palette extracted from the design, most dominant color first
4. Typography information (fonts, sizes)
5. Layout structure (flex, grid, absolute positioning)
6. Component hierarchy and relationships

Return ONLY valid JSON, no explanations or markdown."""

_EXAMPLE_PAYLOAD = """{
  "elements": [
    {
      "id": "unique-id",
      "type": "button",
      "boundingBox": {"x": 0, "y": 0, "width": 100, "height": 40},
      "confidence": 0.95,
      "text": "Click me",
      "color": "#3b82f6",
      "styles": {"borderRadius": "8px", "padding": "12px 24px"},
      "children": []
    }
  ],
  "colors": ["#3b82f6", "#ffffff"],
  "layout": {"type": "flex", "direction": "column", "gap": 16},
  "typography": {"fonts": ["Inter", "Roboto"], "sizes": [16, 20, 24]},
  "dimensions": {"width": 1920, "height": 1080}
}"""

COLOR_EXTRACTION_PROMPT = """List the colors used in this UI screenshot, most dominant first.

Return JSON: {"colors": ["#hex1", "#hex2"]}"""


def get_element_extraction_prompt(
    *,
    detect_text: bool = True,
    extract_colors: bool = True,
    detect_components: bool = True,
) -> str:
    types = ", ".join(t.value for t in ElementType)
    lines = [
        "Analyze this UI screenshot and extract all UI elements.",
        "",
        "For each element, provide:",
        "- Unique ID",
        f"- Element type ({types})",
        "- Bounding box (x, y, width, height) in image pixels",
        "- Confidence score (0-1)",
    ]
    if detect_text:
        lines.append("- Text content if present")
    if extract_colors:
        lines.append("- Primary color")
    lines.append("- CSS styles (background, border, padding, etc.)")
    if detect_components:
        lines.append("- Children elements if it's a container")
    lines += ["", "Return JSON with this structure:", _EXAMPLE_PAYLOAD]
    return "\n".join(lines)
