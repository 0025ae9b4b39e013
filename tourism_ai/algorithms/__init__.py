"""
AI Algorithms Module
Heuristic scoring used to pick the best provider response
"""

from .response_scorer import (
    score_response,
    calculate_response_score,
    build_keywords,
    ResponseScoreBreakdown,
    SCORING_KEYWORDS,
)

__all__ = [
    "score_response",
    "calculate_response_score",
    "build_keywords",
    "ResponseScoreBreakdown",
    "SCORING_KEYWORDS",
]
