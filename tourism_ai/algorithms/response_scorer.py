"""
Response Score Algorithm
Calculates a heuristic quality score for one provider response

Algorithm Components:
1. Length Score (-1 to +2 points) - Based on word count
2. Keyword Score (+0.5 per topical keyword present)
3. Structure Score (0-2 points) - Line breaks and bullet markers
4. Confidence Score (0-2 points) - Provider confidence x 2

Total: unbounded sum, only comparable between candidates of one request
"""

from typing import Iterable, NamedTuple, Optional, Tuple
from loguru import logger


# ============================================
# Scoring Table
# ============================================

# Word-count band -> points
LENGTH_IDEAL_MIN = 100
LENGTH_IDEAL_MAX = 500
LENGTH_SHORT_BELOW = 50
LENGTH_IDEAL_SCORE = 2.0
LENGTH_LONG_SCORE = 1.0
LENGTH_SHORT_SCORE = -1.0
LENGTH_NEUTRAL_SCORE = 0.0

KEYWORD_WEIGHT = 0.5
NEWLINE_SCORE = 1.0
BULLET_SCORE = 1.0
BULLET_MARKERS = ("-", "•")
CONFIDENCE_WEIGHT = 2.0

DEFAULT_REGION = "jharkhand"

TOPIC_KEYWORDS = (
    "tourism", "culture", "festival", "food", "temple",
    "heritage", "tradition", "art", "history", "travel", "location",
    "cuisine", "accommodation", "transport",
)


def build_keywords(region: Optional[str] = None) -> Tuple[str, ...]:
    """
    Keyword set for a region: the region name plus the topic keywords

    Example:
        >>> build_keywords("Jharkhand")[:2]
        ('jharkhand', 'tourism')
    """
    region = (region or DEFAULT_REGION).strip().lower()
    keywords = [region] if region else []
    keywords.extend(k for k in TOPIC_KEYWORDS if k != region)
    return tuple(keywords)


SCORING_KEYWORDS = build_keywords(DEFAULT_REGION)


class ResponseScoreBreakdown(NamedTuple):
    """
    Breakdown of response score components for transparency
    """
    word_count: int
    length_score: float
    matched_keywords: Tuple[str, ...]
    keyword_score: float
    structure_score: float
    confidence_score: float
    total_score: float

    def __repr__(self) -> str:
        return (
            f"ResponseScore(total={self.total_score:.2f}, "
            f"length={self.length_score} ({self.word_count} words), "
            f"keywords={self.keyword_score} {list(self.matched_keywords)}, "
            f"structure={self.structure_score}, "
            f"confidence={self.confidence_score:.2f})"
        )


def score_response(
    text: Optional[str],
    confidence: float,
    keywords: Iterable[str] = SCORING_KEYWORDS
) -> ResponseScoreBreakdown:
    """
    Calculate the heuristic score of a single response

    Pure and deterministic: no I/O, no randomness.

    Args:
        text: Response text (None or empty counts as 0 words)
        confidence: Provider confidence in [0, 1]
        keywords: Topical keywords, matched case-insensitively as substrings

    Returns:
        ResponseScoreBreakdown: Named tuple with score breakdown

    Examples:
        >>> score_response("Hi", 0.9).total_score
        0.8
        >>> score_response("", 0.0).length_score
        -1.0
    """
    text = text or ""

    # ============================================
    # 1. Length Score
    # ============================================
    word_count = len(text.split())
    length_score = _calculate_length_score(word_count)

    # ============================================
    # 2. Keyword Score
    # ============================================
    matched_keywords = _match_keywords(text, keywords)
    keyword_score = len(matched_keywords) * KEYWORD_WEIGHT

    # ============================================
    # 3. Structure Score
    # ============================================
    structure_score = _calculate_structure_score(text)

    # ============================================
    # 4. Confidence Score
    # ============================================
    confidence_score = confidence * CONFIDENCE_WEIGHT

    total_score = length_score + keyword_score + structure_score + confidence_score

    breakdown = ResponseScoreBreakdown(
        word_count=word_count,
        length_score=length_score,
        matched_keywords=matched_keywords,
        keyword_score=keyword_score,
        structure_score=structure_score,
        confidence_score=confidence_score,
        total_score=total_score
    )

    logger.debug(f"Response score calculated: {breakdown}")

    return breakdown


def calculate_response_score(text: Optional[str], confidence: float) -> float:
    """Total score only"""
    return score_response(text, confidence).total_score


def _calculate_length_score(word_count: int) -> float:
    """
    Calculate length score

    Logic:
    - 100-500 words: +2 (detailed)
    - 500+ words: +1 (too long)
    - <50 words: -1 (too short)
    - 50-99 words: 0
    """
    if LENGTH_IDEAL_MIN <= word_count <= LENGTH_IDEAL_MAX:
        return LENGTH_IDEAL_SCORE
    elif word_count > LENGTH_IDEAL_MAX:
        return LENGTH_LONG_SCORE
    elif word_count < LENGTH_SHORT_BELOW:
        return LENGTH_SHORT_SCORE
    else:
        return LENGTH_NEUTRAL_SCORE


def _match_keywords(text: str, keywords: Iterable[str]) -> Tuple[str, ...]:
    """Keywords present in text; each counts once"""
    lowered = text.lower()
    matched = []
    for keyword in keywords:
        keyword = keyword.lower()
        if keyword and keyword not in matched and keyword in lowered:
            matched.append(keyword)
    return tuple(matched)


def _calculate_structure_score(text: str) -> float:
    """Line breaks and bullet markers, scored independently"""
    score = 0.0
    if "\n" in text:
        score += NEWLINE_SCORE
    if any(marker in text for marker in BULLET_MARKERS):
        score += BULLET_SCORE
    return score
