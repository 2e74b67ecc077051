"""Simulated OCR results for demo mode.

Used only when the backend cannot be reached at all, so the consumer still
has a realistic shipping-label result to render.
"""
from __future__ import annotations

import math
import random

from shiplabel_ocr.schemas import Detection, SubmissionResult, TargetMatch

# <digits>_<digit>_<three-letter suffix>
SIMULATED_PATTERNS = (
    "163233702292313922_1_lWV",
    "163233702292313923_1_xYz",
    "163233702292313924_1_aBc",
)

SIMULATED_PREPROCESSING_STEPS = (
    "grayscale",
    "denoise",
    "contrast_enhance",
    "deskew",
    "adaptive_threshold",
)

SCORE_MIN = 75.0
SCORE_SPAN = 20.0
# Largest float below 95; 75 + random() * 20 can round up to 95.0 itself
SCORE_CEILING = math.nextafter(SCORE_MIN + SCORE_SPAN, 0.0)


def simulate(seed_name: str, rng: random.Random | None = None) -> SubmissionResult:
    """Build a plausible successful result.

    Without *rng* the output is a function of *seed_name* alone, so the same
    file always simulates the same label.
    """
    if rng is None:
        rng = random.Random(seed_name)

    pattern = rng.choice(SIMULATED_PATTERNS)
    score = min(SCORE_MIN + rng.random() * SCORE_SPAN, SCORE_CEILING)   # [75, 95)

    return SubmissionResult(
        success=True,
        target_match=TargetMatch(
            matched_text=f"TRACKING: {pattern} SHIP TO: 123 Main St",
            score=score,
            pattern_found=pattern,
        ),
        detections=[
            Detection(text="SHIPPING", confidence=0.95, engine="tesseract"),
            Detection(text="LABEL", confidence=0.92, engine="tesseract"),
            Detection(text=pattern, confidence=score / 100, engine="easyocr"),
            Detection(text="SHIP", confidence=0.88, engine="paddleocr"),
            Detection(text="TO:", confidence=0.91, engine="paddleocr"),
            Detection(text="123", confidence=0.85, engine="tesseract"),
            Detection(text="Main", confidence=0.87, engine="easyocr"),
            Detection(text="St", confidence=0.89, engine="easyocr"),
        ],
        full_text=(
            "SHIPPING LABEL\n"
            f"TRACKING: {pattern}\n"
            "SHIP TO: 123 Main St\n"
            "City, State 12345"
        ),
        preprocessing_steps=SIMULATED_PREPROCESSING_STEPS,
    )
