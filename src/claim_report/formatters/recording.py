"""In-memory canvas that records draw calls instead of producing a PDF."""

from __future__ import annotations

import json
from typing import Any


class RecordingCanvas:
    """Keeps every draw call as a plain dict, in call order."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def draw_text(self, content: str, x: float, y: float, *, bold: bool = False, size: int = 10) -> None:
        self.calls.append({"op": "text", "content": content, "x": x, "y": y, "bold": bold, "size": size})

    def draw_rect(self, x: float, y: float, width: float, height: float, border_width: float = 1.0) -> None:
        self.calls.append(
            {"op": "rect", "x": x, "y": y, "width": width, "height": height, "border_width": border_width}
        )

    def serialize(self) -> bytes:
        return json.dumps(self.calls).encode("utf-8")
