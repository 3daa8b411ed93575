"""Exact outs enumeration.

An out is an unseen card that, dealt to the board, lifts the hand into a
stronger category. Every unseen card is tried against the full classifier,
so the count reflects the actual board rather than a per-category table.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from holdem_odds.core.hand_evaluator import HandClassifier, HandRanking
from holdem_odds.utils.card import Card, ensure_distinct, unseen_cards
from holdem_odds.utils.constants import (
    DECK_SIZE,
    HOLE_CARD_COUNT,
    STREET_BY_BOARD_SIZE,
    HandCategory,
    Street,
)
from holdem_odds.utils.errors import InvalidBoardSizeError, InvalidInputError

logger = logging.getLogger("holdem_odds.core.outs")

# Lowest category a card must produce to count as an out. Pairing one
# hole card from a high-card hand is too weak to be treated as a draw.
MIN_OUT_CATEGORY = HandCategory.TWO_PAIR

VALID_BOARD_SIZES = tuple(STREET_BY_BOARD_SIZE)


@dataclass(frozen=True)
class OutsSet:
    """Cards that improve the current hand and what each would make.

    Attributes:
        current: Ranking of hole + board as dealt.
        category_if_hit: Out card -> category the hand becomes with it.
        unseen_count: Cards not in hole or board (52 - 2 - board size).
        board_size: Number of community cards dealt.
    """

    current: HandRanking
    category_if_hit: Mapping[Card, HandCategory] = field(default_factory=dict)
    unseen_count: int = 0
    board_size: int = 0

    @property
    def cards(self) -> frozenset[Card]:
        return frozenset(self.category_if_hit)

    @property
    def count(self) -> int:
        return len(self.category_if_hit)

    @property
    def street(self) -> Street:
        return STREET_BY_BOARD_SIZE[self.board_size]

    def sorted_cards(self) -> list[Card]:
        """Out cards from highest to lowest."""
        return sorted(self.category_if_hit, reverse=True)

    def by_category(self) -> dict[HandCategory, list[Card]]:
        """Group outs by the category they complete, strongest first."""
        groups: dict[HandCategory, list[Card]] = {}
        for card in self.sorted_cards():
            groups.setdefault(self.category_if_hit[card], []).append(card)
        return dict(sorted(groups.items(), reverse=True))

    def describe(self) -> list[str]:
        """Human labels such as '9 cards make a Flush'."""
        labels = []
        for category, cards in self.by_category().items():
            noun = "card makes" if len(cards) == 1 else "cards make"
            labels.append(f"{len(cards)} {noun} {_with_article(category)}")
        return labels


def _with_article(category: HandCategory) -> str:
    # Plural-sounding categories read without an article
    if category in (HandCategory.TWO_PAIR, HandCategory.THREE_OF_A_KIND,
                    HandCategory.FOUR_OF_A_KIND):
        return category.label
    return f"a {category.label}"


class OutsCalculator:
    """Enumerates the unseen cards that improve a hand."""

    @staticmethod
    def calculate(
        hole: Sequence[Card],
        board: Sequence[Card],
        min_category: HandCategory = MIN_OUT_CATEGORY,
    ) -> OutsSet:
        """Find every unseen card that raises the hand's category.

        A card is an out when the hand including it has a strictly higher
        category than the current hand and at least ``min_category``.
        Improving only the kickers within a category does not count.

        Args:
            hole: Exactly 2 hole cards.
            board: 0, 3, 4 or 5 community cards.
            min_category: Weakest category an out may produce.

        Returns:
            OutsSet, empty at preflop and on the river.

        Raises:
            InvalidInputError: If hole does not hold exactly 2 cards.
            InvalidBoardSizeError: If board size is not 0, 3, 4 or 5.
            DuplicateCardError: If a card repeats across hole and board.
        """
        hole = list(hole)
        board = list(board)
        if len(hole) != HOLE_CARD_COUNT:
            raise InvalidInputError(
                f"Need exactly {HOLE_CARD_COUNT} hole cards, got {len(hole)}"
            )
        if len(board) not in VALID_BOARD_SIZES:
            raise InvalidBoardSizeError(
                f"Board must have 0, 3, 4 or 5 cards, got {len(board)}"
            )
        known = hole + board
        ensure_distinct(known)

        current = HandClassifier.classify(known)
        unseen_count = DECK_SIZE - len(known)
        if len(board) in (0, 5):
            logger.debug(
                "No outs on %s: no card to come",
                STREET_BY_BOARD_SIZE[len(board)],
            )
            return OutsSet(current, {}, unseen_count, len(board))

        hits: dict[Card, HandCategory] = {}
        for card in unseen_cards(known):
            candidate = HandClassifier.classify(known + [card])
            if (
                candidate.category > current.category
                and candidate.category >= min_category
            ):
                hits[card] = candidate.category

        logger.debug(
            "%s: %d outs over %s (%d unseen)",
            STREET_BY_BOARD_SIZE[len(board)], len(hits), current,
            unseen_count,
        )
        return OutsSet(current, hits, unseen_count, len(board))


def calculate_outs(
    hole: Sequence[Card],
    board: Sequence[Card],
    min_category: HandCategory = MIN_OUT_CATEGORY,
) -> OutsSet:
    """Module-level shortcut for OutsCalculator.calculate."""
    return OutsCalculator.calculate(hole, board, min_category)
