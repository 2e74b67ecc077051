from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Detection(BaseModel):
    """One text fragment recognised by one OCR engine."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    engine: str
    # [left, top, right, bottom] in pixels
    bounding_box: tuple[float, float, float, float] | None = Field(default=None, alias="bbox")


class TargetMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched_text: str
    score: float = Field(ge=0.0, le=100.0)   # percentage, not a 0-1 confidence
    pattern_found: str


class SubmissionResult(BaseModel):
    """Outcome of one submission, as returned by the backend or the simulator.

    Parses the backend's wire names (``ocr_results``, ``bbox``) as well as the
    Python field names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    target_match: TargetMatch | None = None
    detections: tuple[Detection, ...] = Field(default=(), alias="ocr_results")
    full_text: str = ""
    preprocessing_steps: tuple[str, ...] = ()
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict using the backend's field names."""
        data = self.model_dump(mode="json", by_alias=True)
        if data["error"] is None:
            del data["error"]
        for item in data["ocr_results"]:
            if item["bbox"] is None:
                del item["bbox"]
        return data
