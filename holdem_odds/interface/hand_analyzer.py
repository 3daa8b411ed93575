"""Request/response facade over the analysis pipeline.

Takes card codes as strings (the way a request handler receives them),
runs classification, outs, equity and optionally the recommendation
policy, and returns a result that serializes to the JSON shape callers
expect. This module has no I/O beyond logging.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from holdem_odds.core.equity_estimator import EquityEstimate, EquityEstimator
from holdem_odds.core.hand_evaluator import HandClassifier, HandRanking
from holdem_odds.core.outs_calculator import (
    MIN_OUT_CATEGORY,
    OutsCalculator,
    OutsSet,
)
from holdem_odds.strategy.recommendation import (
    PolicyThresholds,
    Recommendation,
    RecommendationPolicy,
    pot_odds_ratio,
)
from holdem_odds.utils.card import parse_cards
from holdem_odds.utils.constants import HandCategory
from holdem_odds.utils.errors import HandAnalysisError

logger = logging.getLogger("holdem_odds.interface")

_MAX_CATEGORY = max(HandCategory)


@dataclass(frozen=True)
class HandAnalysisRequest:
    """One evaluation request, cards as 2-character codes."""

    hole_cards: list[str]
    community_cards: list[str] = field(default_factory=list)
    pot_size: float | None = None  # None skips the recommendation
    bet_to_call: float = 0.0
    min_out_category: HandCategory = MIN_OUT_CATEGORY


@dataclass(frozen=True)
class HandAnalysis:
    """Complete analysis of one hand."""

    ranking: HandRanking
    outs: OutsSet
    equity: EquityEstimate
    recommendation: Recommendation | None = None

    @property
    def hand_strength(self) -> float:
        """Category rank normalized to (0, 1]."""
        return self.ranking.rank / _MAX_CATEGORY

    def to_dict(self) -> dict:
        """Serialize to the response shape used by the request layer."""
        result = {
            "handCategory": self.ranking.category.label,
            "handRank": self.ranking.rank,
            "handStrength": self.hand_strength,
            "kickers": list(self.ranking.kickers),
            "outs": [str(c) for c in self.outs.sorted_cards()],
            "outsCount": self.outs.count,
            "outsByCategory": {
                category.label: [str(c) for c in cards]
                for category, cards in self.outs.by_category().items()
            },
            "equity": {
                "nextStreet": self.equity.p_immediate_next,
                "byRiver": self.equity.p_by_river,
            },
        }
        if self.recommendation is not None:
            result["recommendation"] = {
                "action": self.recommendation.action.value,
                "rationale": self.recommendation.rationale,
                "potOdds": self.recommendation.pot_odds,
            }
        return result


def analyze_hand(
    request: HandAnalysisRequest,
    thresholds: PolicyThresholds | None = None,
) -> HandAnalysis:
    """Run the full pipeline for one request.

    Args:
        request: Hole and community card codes plus optional pot/bet.
        thresholds: Policy cut-offs for the recommendation.

    Returns:
        HandAnalysis with ranking, outs, equity and (when pot_size is
        given) a recommendation.

    Raises:
        HandAnalysisError: Any of its subclasses for malformed cards,
            duplicates, bad board sizes or inconsistent amounts. The
            error is logged and re-raised unchanged.
    """
    t_start = time.perf_counter()
    try:
        analysis = _analyze(request, thresholds)
    except HandAnalysisError as e:
        logger.warning(
            "Rejected hand analysis %s | %s: %s",
            " ".join(map(str, request.hole_cards)),
            " ".join(map(str, request.community_cards)),
            e,
        )
        raise

    elapsed_ms = (time.perf_counter() - t_start) * 1000
    rec = analysis.recommendation
    logger.info(
        "%s %s -> %s, %d outs, by river %.1f%%, action=%s (%.1fms)",
        " ".join(request.hole_cards),
        " ".join(request.community_cards) or "-",
        analysis.ranking,
        analysis.outs.count,
        analysis.equity.p_by_river * 100,
        rec.action if rec else "none",
        elapsed_ms,
    )
    return analysis


def _analyze(
    request: HandAnalysisRequest,
    thresholds: PolicyThresholds | None,
) -> HandAnalysis:
    """Core pipeline, separated for clean error logging."""
    hole = parse_cards(request.hole_cards)
    board = parse_cards(request.community_cards)

    outs = OutsCalculator.calculate(hole, board, request.min_out_category)
    ranking = outs.current
    equity = EquityEstimator.for_outs(outs)
    logger.debug("Equity on %s: %s", outs.street, equity)

    recommendation = None
    if request.pot_size is not None:
        pot_odds = pot_odds_ratio(request.pot_size, request.bet_to_call)
        recommendation = RecommendationPolicy.recommend(
            ranking, equity, pot_odds,
            to_call=request.bet_to_call, thresholds=thresholds,
        )

    return HandAnalysis(
        ranking=ranking,
        outs=outs,
        equity=equity,
        recommendation=recommendation,
    )


def classify_codes(codes: list[str]) -> HandRanking:
    """Classify a list of card codes directly."""
    return HandClassifier.classify(parse_cards(codes))
