"""Tests for the outs calculator."""

import logging

import pytest

from holdem_odds.core.outs_calculator import MIN_OUT_CATEGORY, OutsCalculator
from holdem_odds.utils.card import Card
from holdem_odds.utils.constants import HandCategory, Street
from holdem_odds.utils.errors import (
    DuplicateCardError,
    InvalidBoardSizeError,
    InvalidInputError,
)


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestFlushDraws:
    def test_nut_flush_draw_has_nine_outs(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S"))
        assert outs.current.category == HandCategory.HIGH_CARD
        assert outs.count == 9
        assert all(c.suit == "h" for c in outs.cards)
        assert set(outs.category_if_hit.values()) == {HandCategory.FLUSH}
        assert outs.unseen_count == 47

    def test_made_flush_has_no_outs(self) -> None:
        # Extra hearts only raise flush kickers, which is not an out
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9H"))
        assert outs.current.category == HandCategory.FLUSH
        assert outs.count == 0
        assert Card.from_str("QH") not in outs.cards

    def test_counting_pairs_with_lower_floor(self) -> None:
        outs = OutsCalculator.calculate(
            _cards("AH KH"), _cards("2H 7H 9S"),
            min_category=HandCategory.ONE_PAIR,
        )
        # 9 hearts + 14 off-suit cards pairing A, K, 2, 7 or 9
        assert outs.count == 23
        groups = outs.by_category()
        assert len(groups[HandCategory.FLUSH]) == 9
        assert len(groups[HandCategory.ONE_PAIR]) == 14

    def test_flush_draw_on_turn(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S 3C"))
        assert outs.count == 9
        assert outs.unseen_count == 46
        assert outs.street == Street.TURN


class TestStraightDraws:
    def test_open_ended_straight_draw(self) -> None:
        outs = OutsCalculator.calculate(_cards("9c 8d"), _cards("7h 6s 2c"))
        straight_outs = outs.by_category()[HandCategory.STRAIGHT]
        assert outs.count == 8
        assert sorted({c.value for c in straight_outs}) == [5, 10]

    def test_gutshot(self) -> None:
        outs = OutsCalculator.calculate(_cards("9c 8d"), _cards("6h 5s Kc"))
        assert outs.count == 4
        assert {c.value for c in outs.cards} == {7}

    def test_wheel_draw(self) -> None:
        outs = OutsCalculator.calculate(_cards("Ac 2d"), _cards("3h 4s Kc"))
        assert {c.value for c in outs.cards} == {5}
        assert outs.count == 4


class TestMadeHands:
    def test_pair_improves_to_two_pair_or_trips(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH AC"), _cards("2H 7D 9S"))
        assert outs.current.category == HandCategory.ONE_PAIR
        groups = outs.by_category()
        assert len(groups[HandCategory.THREE_OF_A_KIND]) == 2
        assert len(groups[HandCategory.TWO_PAIR]) == 9
        assert outs.count == 11

    def test_set_improves_to_boat_or_quads(self) -> None:
        outs = OutsCalculator.calculate(_cards("7s 7h"), _cards("7d Kc 2s"))
        groups = outs.by_category()
        assert len(groups[HandCategory.FOUR_OF_A_KIND]) == 1
        assert len(groups[HandCategory.FULL_HOUSE]) == 6
        assert outs.count == 7

    def test_describe_labels(self) -> None:
        outs = OutsCalculator.calculate(_cards("7s 7h"), _cards("7d Kc 2s"))
        assert outs.describe() == [
            "1 card makes Four of a Kind",
            "6 cards make a Full House",
        ]

    def test_out_cards_are_unseen(self) -> None:
        hole, board = _cards("Qs Js"), _cards("Ts 9d 2s")
        outs = OutsCalculator.calculate(hole, board)
        assert not outs.cards & set(hole + board)

    def test_every_out_strictly_raises_category(self) -> None:
        hole, board = _cards("Qs Js"), _cards("Ts 9d 2s")
        outs = OutsCalculator.calculate(hole, board)
        for category in outs.category_if_hit.values():
            assert category > outs.current.category
            assert category >= MIN_OUT_CATEGORY


class TestNoCardsToCome:
    def test_river_has_no_outs(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S 3C 4D"))
        assert outs.count == 0
        assert outs.street == Street.RIVER
        assert outs.current.category == HandCategory.HIGH_CARD

    def test_preflop_has_no_outs(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH AC"), [])
        assert outs.count == 0
        assert outs.current.category == HandCategory.ONE_PAIR
        assert outs.current.partial
        assert outs.unseen_count == 50


class TestValidation:
    @pytest.mark.parametrize("board", ["2h", "2h 3h", "2h 3h 4h 5h 6h 7d"])
    def test_bad_board_size(self, board: str) -> None:
        with pytest.raises(InvalidBoardSizeError):
            OutsCalculator.calculate(_cards("Ac Kd"), _cards(board))

    def test_wrong_hole_count(self) -> None:
        with pytest.raises(InvalidInputError):
            OutsCalculator.calculate(_cards("Ac"), _cards("2h 3h 4d"))

    def test_duplicate_across_hole_and_board(self) -> None:
        with pytest.raises(DuplicateCardError):
            OutsCalculator.calculate(_cards("Ac Kd"), _cards("Ac 3h 4d"))


class TestLogging:
    def test_logs_outs_count(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="holdem_odds.core.outs"):
            OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S"))
        assert any("9 outs" in r.message for r in caplog.records)
