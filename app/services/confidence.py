"""
Confidence heuristic for products that are not in the curated catalog.

Scores a free-text product name on how much it looks like a real package or
tool name. Curated catalog entries carry their own fixed scores and are not
scored here.
"""

import re

BASE_SCORE = 0.5
WELL_FORMED_BONUS = 0.2
SUSPICIOUS_PENALTY = 0.1
MIN_SCORE = 0.1
MAX_SCORE = 0.8

_WELL_FORMED_NAME = re.compile(r"[a-zA-Z][a-zA-Z0-9\-_.]*")
_LONG_DIGIT_RUN = re.compile(r"[0-9]{4,}")


def normalize_product_name(product_name: str) -> str:
    """Trim and lower-case a product name for scoring and catalog lookup."""
    return product_name.strip().lower()


def name_length(name: str) -> int:
    """Length in UTF-16 code units, so astral characters such as emoji count twice."""
    return len(name.encode("utf-16-le")) // 2


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def score_product_name(product_name: str) -> float:
    """
    Return a confidence in [0.1, 0.8] for an arbitrary product name.

    The name is normalized first, so "React", "react" and "  REACT  "
    all score the same.
    """
    name = normalize_product_name(product_name)
    length = name_length(name)
    score = BASE_SCORE

    if length >= 3 and _WELL_FORMED_NAME.fullmatch(name):
        score += WELL_FORMED_BONUS

    if length < 2 or _LONG_DIGIT_RUN.search(name):
        score -= SUSPICIOUS_PENALTY

    # round() keeps 0.5 + 0.2 - 0.1 from drifting to 0.6000000000000001
    return round(clamp(score, MIN_SCORE, MAX_SCORE), 4)
