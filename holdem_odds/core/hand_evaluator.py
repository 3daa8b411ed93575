"""Texas Hold'em hand classification engine.

Finds the best 5-card hand among 5 to 7 cards by scoring every 5-card
combination, and produces a restricted partial ranking for fewer cards.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import combinations

import numpy as np

from holdem_odds.utils.card import Card, ensure_distinct
from holdem_odds.utils.constants import (
    ACE_VALUE,
    LOWEST_RANK_VALUE,
    NUM_RANKS,
    HandCategory,
)
from holdem_odds.utils.errors import InvalidInputError

HAND_SIZE = 5
MAX_CARDS = 7

_WHEEL = [ACE_VALUE, 5, 4, 3, 2]
_WHEEL_KICKERS = (5, 4, 3, 2, 1)


@dataclass(frozen=True, order=True)
class HandRanking:
    """Category plus ordered tie-break ranks.

    Ordering compares ``category`` first, then ``kickers`` element-wise.
    ``best_cards`` and ``partial`` are informational and do not take part
    in comparisons. A partial ranking (fewer than 5 cards) must not be
    compared against a full one as if they were equivalent.
    """

    category: HandCategory
    kickers: tuple[int, ...]
    best_cards: tuple[Card, ...] = field(default=(), compare=False)
    partial: bool = field(default=False, compare=False)

    @property
    def rank(self) -> int:
        """Numeric category, 1 (high card) to 9 (straight flush)."""
        return int(self.category)

    @property
    def is_royal(self) -> bool:
        return (
            self.category == HandCategory.STRAIGHT_FLUSH
            and self.kickers[0] == ACE_VALUE
        )

    def __str__(self) -> str:
        if self.is_royal:
            return "Royal Flush"
        return self.category.label


def rank_counts(values: Iterable[int]) -> np.ndarray:
    """Count rank multiplicities into a 13-slot array indexed by value - 2."""
    arr = np.fromiter(values, dtype=np.intp) - LOWEST_RANK_VALUE
    return np.bincount(arr, minlength=NUM_RANKS)


def _ranks_with_count(counts: np.ndarray, n: int) -> list[int]:
    """Rank values appearing exactly n times, highest first."""
    return (np.flatnonzero(counts == n)[::-1] + LOWEST_RANK_VALUE).tolist()


class HandClassifier:
    """Classifies 1 to 7 cards into the best HandRanking."""

    @staticmethod
    def classify(cards: Iterable[Card]) -> HandRanking:
        """Return the best hand ranking for the given cards.

        Args:
            cards: 5 to 7 distinct cards for a full evaluation, or 1 to 4
                for a partial one (pairs, trips and quads only).

        Returns:
            The maximal HandRanking under the category-then-kickers order.

        Raises:
            DuplicateCardError: If a card appears more than once.
            InvalidInputError: If no cards or more than 7 are given.
        """
        cards = list(cards)
        if not 1 <= len(cards) <= MAX_CARDS:
            raise InvalidInputError(
                f"Need between 1 and {MAX_CARDS} cards, got {len(cards)}"
            )
        ensure_distinct(cards)
        return _classify_set(frozenset(cards))

    @staticmethod
    def _evaluate_five(cards: tuple[Card, ...]) -> HandRanking:
        """Evaluate exactly 5 cards."""
        sorted_cards = tuple(sorted(cards, reverse=True))
        values = [c.value for c in sorted_cards]
        counts = rank_counts(values)
        is_flush = len({c.suit for c in sorted_cards}) == 1
        straight = HandClassifier._straight_kickers(values)

        if is_flush and straight is not None:
            return HandRanking(
                HandCategory.STRAIGHT_FLUSH, straight, sorted_cards,
            )

        grouped = HandClassifier._grouped(counts)
        if grouped.category in (
            HandCategory.FOUR_OF_A_KIND, HandCategory.FULL_HOUSE,
        ):
            return HandRanking(grouped.category, grouped.kickers, sorted_cards)

        if is_flush:
            return HandRanking(HandCategory.FLUSH, tuple(values), sorted_cards)

        if straight is not None:
            return HandRanking(HandCategory.STRAIGHT, straight, sorted_cards)

        return HandRanking(grouped.category, grouped.kickers, sorted_cards)

    @staticmethod
    def _evaluate_partial(cards: tuple[Card, ...]) -> HandRanking:
        """Evaluate fewer than 5 cards using only rank-group categories."""
        sorted_cards = tuple(sorted(cards, reverse=True))
        grouped = HandClassifier._grouped(
            rank_counts(c.value for c in sorted_cards)
        )
        return HandRanking(
            grouped.category, grouped.kickers, sorted_cards, partial=True,
        )

    @staticmethod
    def _straight_kickers(values: list[int]) -> tuple[int, ...] | None:
        """Return the straight's ranks high to low, or None.

        ``values`` must be 5 ranks sorted descending. The A-2-3-4-5 wheel
        plays the Ace low, so its kickers are (5, 4, 3, 2, 1).
        """
        if len(set(values)) != HAND_SIZE:
            return None
        if values[0] - values[4] == HAND_SIZE - 1:
            return tuple(values)
        if values == _WHEEL:
            return _WHEEL_KICKERS
        return None

    @staticmethod
    def _grouped(counts: np.ndarray) -> HandRanking:
        """Rank-group category and kickers from a 13-slot count array.

        Kickers are the rank groups ordered by size then rank, which gives
        [quad, kicker], [trips, pair], [high pair, low pair, kicker] and so
        on for any number of cards.
        """
        quads = _ranks_with_count(counts, 4)
        trips = _ranks_with_count(counts, 3)
        pairs = _ranks_with_count(counts, 2)
        singles = _ranks_with_count(counts, 1)
        kickers = tuple(quads + trips + pairs + singles)

        if quads:
            category = HandCategory.FOUR_OF_A_KIND
        elif trips and pairs:
            category = HandCategory.FULL_HOUSE
        elif trips:
            category = HandCategory.THREE_OF_A_KIND
        elif len(pairs) >= 2:
            category = HandCategory.TWO_PAIR
        elif pairs:
            category = HandCategory.ONE_PAIR
        else:
            category = HandCategory.HIGH_CARD
        return HandRanking(category, kickers)


@lru_cache(maxsize=4096)
def _classify_set(cards: frozenset[Card]) -> HandRanking:
    ordered = tuple(sorted(cards, reverse=True))
    if len(ordered) < HAND_SIZE:
        return HandClassifier._evaluate_partial(ordered)
    return max(
        HandClassifier._evaluate_five(combo)
        for combo in combinations(ordered, HAND_SIZE)
    )


def classify(cards: Iterable[Card]) -> HandRanking:
    """Module-level shortcut for HandClassifier.classify."""
    return HandClassifier.classify(cards)
