"""Exact improvement probabilities from an outs count.

Cards are drawn without replacement, so the two-card case on the flop is
hypergeometric rather than the "rule of 4" approximation.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import comb

from holdem_odds.core.outs_calculator import OutsSet
from holdem_odds.utils.constants import DECK_SIZE, HOLE_CARD_COUNT
from holdem_odds.utils.errors import InvalidBoardSizeError, InvalidInputError


@dataclass(frozen=True)
class EquityEstimate:
    """Probabilities of improving, each in [0, 1]."""

    p_immediate_next: float  # On the very next card
    p_by_river: float  # On any card up to and including the river

    def __str__(self) -> str:
        return (
            f"Next card: {self.p_immediate_next:.1%}, "
            f"by river: {self.p_by_river:.1%}"
        )


NO_FURTHER_CARDS = EquityEstimate(p_immediate_next=0.0, p_by_river=0.0)


class EquityEstimator:
    """Pure arithmetic over outs and unseen card counts."""

    @staticmethod
    def improvement_probability(
        outs_count: int,
        unseen_count: int,
        board_size: int,
    ) -> EquityEstimate:
        """Probability of hitting one of ``outs_count`` cards.

        Args:
            outs_count: Number of improving cards.
            unseen_count: Cards outside hole and board, i.e.
                52 - 2 - board_size.
            board_size: 3 (two cards to come) or 4 (one card to come).

        Returns:
            EquityEstimate for the next card and for the river.

        Raises:
            InvalidBoardSizeError: If board_size is not 3 or 4.
            InvalidInputError: If the counts are not integers, outs_count
                is outside [0, unseen_count], or unseen_count does not
                match the board size.
        """
        if board_size not in (3, 4):
            raise InvalidBoardSizeError(
                f"Equity needs a flop or turn board (3 or 4 cards), "
                f"got {board_size}"
            )
        if not isinstance(outs_count, int) or not isinstance(unseen_count, int):
            raise InvalidInputError("outs_count and unseen_count must be integers")
        expected_unseen = DECK_SIZE - HOLE_CARD_COUNT - board_size
        if unseen_count != expected_unseen:
            raise InvalidInputError(
                f"unseen_count must be {expected_unseen} with {board_size} "
                f"board cards, got {unseen_count}"
            )
        if not 0 <= outs_count <= unseen_count:
            raise InvalidInputError(
                f"outs_count must be between 0 and {unseen_count}, "
                f"got {outs_count}"
            )

        p_next = outs_count / unseen_count
        if board_size == 4:
            return EquityEstimate(p_immediate_next=p_next, p_by_river=p_next)

        # Both turn and river miss
        p_miss = comb(unseen_count - outs_count, 2) / comb(unseen_count, 2)
        return EquityEstimate(p_immediate_next=p_next, p_by_river=1.0 - p_miss)

    @staticmethod
    def for_outs(outs: OutsSet) -> EquityEstimate:
        """Estimate from an OutsSet; zero when no card is left to come."""
        if outs.board_size not in (3, 4):
            return NO_FURTHER_CARDS
        return EquityEstimator.improvement_probability(
            outs.count, outs.unseen_count, outs.board_size,
        )
