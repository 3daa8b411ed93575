"""Hand classification, outs and improvement equity for Texas Hold'em.

Pure, stateless functions over immutable cards: any number of evaluations
may run in parallel without locking.

Key public API:
    HandClassifier   -- Best 5-card HandRanking from 5-7 cards (partial below 5)
    OutsCalculator   -- Exact enumeration of improving unseen cards
    EquityEstimator  -- Exact next-card and by-river improvement odds
"""

from holdem_odds.core.equity_estimator import EquityEstimate, EquityEstimator
from holdem_odds.core.hand_evaluator import HandClassifier, HandRanking, classify
from holdem_odds.core.outs_calculator import (
    MIN_OUT_CATEGORY,
    OutsCalculator,
    OutsSet,
    calculate_outs,
)

__all__ = [
    "EquityEstimate",
    "EquityEstimator",
    "HandClassifier",
    "HandRanking",
    "MIN_OUT_CATEGORY",
    "OutsCalculator",
    "OutsSet",
    "calculate_outs",
    "classify",
]
