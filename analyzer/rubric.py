"""
Scoring rubric shared with the model.

The model applies the deductions; the service only uses the score bands to
label and clamp what comes back.
"""
import math
from typing import List, Tuple

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100

# (risk, points deducted)
RISK_DEDUCTIONS: List[Tuple[str, int]] = [
    ("Unusually long payment cycle (90-120 days)", 10),
    ("Termination instability", 15),
    ("IP ambiguity", 20),
    ("Broad indemnity", 20),
    ("Missing liability cap", 15),
    ("Unilateral change-of-terms clause", 15),
    ("Weak confidentiality clause", 10),
    ("Dispute resolution disadvantage", 10),
    ("Undefined scope of work", 10),
    ("Weak or missing force majeure clause", 5),
]

# (lower bound inclusive, label), highest band first
SCORE_BANDS: List[Tuple[int, str]] = [
    (75, "Safe"),
    (50, "Mostly Safe"),
    (25, "Moderately Risky"),
    (0, "High Risk"),
]

UNKNOWN_LABEL = "Unknown"
SCORE_LABELS = tuple(label for _, label in SCORE_BANDS) + (UNKNOWN_LABEL,)


def clamp_score(value) -> int:
    """
    Coerce a model-reported score into the 0-100 integer range.

    Only real numbers count; booleans, strings and NaN become 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MIN_SCORE
    if isinstance(value, float):
        if math.isnan(value):
            return MIN_SCORE
        if math.isinf(value):
            return MAX_SCORE if value > 0 else MIN_SCORE
        value = int(round(value))
    return max(MIN_SCORE, min(MAX_SCORE, value))


def label_for_score(score: int) -> str:
    """Return the risk zone label for a clamped score."""
    for lower_bound, label in SCORE_BANDS:
        if score >= lower_bound:
            return label
    return SCORE_BANDS[-1][1]


def canonical_label(value) -> str:
    """Match a model-reported label against the known labels, case-insensitively."""
    if not isinstance(value, str):
        return UNKNOWN_LABEL
    wanted = value.strip().lower()
    for label in SCORE_LABELS:
        if label.lower() == wanted:
            return label
    return UNKNOWN_LABEL
