# orchestration/selector.py
"""
Response Selector
Turns the fan-out output into exactly one winning response:

1. Discard failed slots (None)
2. If nothing is left -> NoResponseAvailable (expected, not an error)
3. Score every survivor with the response scorer
4. Rank by score, highest first; on equal scores the first-registered
   provider wins
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from ..algorithms.response_scorer import SCORING_KEYWORDS, ResponseScoreBreakdown, score_response
from ..providers.base import Candidate
from .fan_out import FanOutInvoker


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its heuristic score"""
    text: str
    confidence: float
    provider_id: str
    score: float
    breakdown: ResponseScoreBreakdown
    position: int = 0  # registration index of the originating provider

    @classmethod
    def from_candidate(
        cls,
        candidate: Candidate,
        breakdown: ResponseScoreBreakdown,
        position: int
    ) -> "ScoredCandidate":
        return cls(
            text=candidate.text,
            confidence=candidate.confidence,
            provider_id=candidate.provider_id,
            score=breakdown.total_score,
            breakdown=breakdown,
            position=position
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "provider_id": self.provider_id,
            "confidence": self.confidence,
            "score": self.score,
            "breakdown": {
                "word_count": self.breakdown.word_count,
                "length": self.breakdown.length_score,
                "keywords": self.breakdown.keyword_score,
                "matched_keywords": list(self.breakdown.matched_keywords),
                "structure": self.breakdown.structure_score,
                "confidence": self.breakdown.confidence_score,
            }
        }


@dataclass(frozen=True)
class NoResponseAvailable:
    """Every provider failed (or none are registered)"""
    attempted: int = 0
    failures: Dict[str, str] = field(default_factory=dict)


SelectionResult = Union[ScoredCandidate, NoResponseAvailable]


class ResponseSelector:
    """
    Stateless between calls; safe to share across requests.
    """

    def __init__(self, invoker: FanOutInvoker, keywords: Sequence[str] = SCORING_KEYWORDS):
        self.invoker = invoker
        self.keywords = tuple(keywords)

    def rank(self, candidates: Sequence[Optional[Candidate]]) -> List[ScoredCandidate]:
        """
        Score and order the usable candidates.

        Args:
            candidates: Fan-out output, one slot per provider, None for failures

        Returns:
            ScoredCandidates, best first
        """
        scored = [
            ScoredCandidate.from_candidate(
                candidate,
                score_response(candidate.text, candidate.confidence, self.keywords),
                position
            )
            for position, candidate in enumerate(candidates)
            if candidate is not None
        ]
        scored.sort(key=_ranking_key)
        return scored

    def select(self, candidates: Sequence[Optional[Candidate]]) -> SelectionResult:
        """
        Pick the single best candidate.

        Returns:
            The top ScoredCandidate, or NoResponseAvailable if every slot is None
        """
        ranking = self.rank(candidates)

        if not ranking:
            logger.warning(f"No usable response from {len(candidates)} provider(s)")
            return NoResponseAvailable(attempted=len(candidates))

        logger.debug("Ranking: " + ", ".join(f"{s.provider_id}={s.score:.2f}" for s in ranking))

        winner = ranking[0]
        logger.info(
            f"Selected {winner.provider_id} response "
            f"(score={winner.score:.2f}, {len(ranking)}/{len(candidates)} candidates)"
        )
        return winner

    async def select_best_response(self, message: str, language: str) -> SelectionResult:
        """
        One fan-out to every provider, then selection.
        No retry or second fan-out when nothing comes back.
        """
        results = await self.invoker.invoke(message, language)
        outcome = self.select([result.candidate for result in results])

        if isinstance(outcome, NoResponseAvailable):
            return NoResponseAvailable(
                attempted=len(results),
                failures={r.provider_id: r.failure or "error" for r in results if not r.ok}
            )
        return outcome


def _ranking_key(scored: ScoredCandidate) -> Tuple[float, int]:
    return (-scored.score, scored.position)
