"""Tests for the improvement equity estimator."""

from math import comb

import pytest

from holdem_odds.core.equity_estimator import (
    NO_FURTHER_CARDS,
    EquityEstimate,
    EquityEstimator,
)
from holdem_odds.core.outs_calculator import OutsCalculator
from holdem_odds.utils.card import Card
from holdem_odds.utils.errors import InvalidBoardSizeError, InvalidInputError


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestFlop:
    def test_flush_draw_exact(self) -> None:
        est = EquityEstimator.improvement_probability(9, 47, 3)
        assert est.p_immediate_next == pytest.approx(9 / 47)
        # 1 - C(38, 2) / C(47, 2) = 1 - 703 / 1081
        assert est.p_by_river == pytest.approx(378 / 1081)
        assert est.p_by_river == pytest.approx(0.35, abs=0.005)

    def test_hypergeometric_matches_sequential_draws(self) -> None:
        est = EquityEstimator.improvement_probability(8, 47, 3)
        miss_both = (39 / 47) * (38 / 46)
        assert est.p_by_river == pytest.approx(1 - miss_both)

    def test_zero_outs(self) -> None:
        est = EquityEstimator.improvement_probability(0, 47, 3)
        assert est.p_immediate_next == 0.0
        assert est.p_by_river == 0.0

    def test_every_card_is_an_out(self) -> None:
        est = EquityEstimator.improvement_probability(47, 47, 3)
        assert est.p_immediate_next == 1.0
        assert est.p_by_river == 1.0

    def test_one_out(self) -> None:
        est = EquityEstimator.improvement_probability(1, 47, 3)
        assert est.p_by_river == pytest.approx(1 - comb(46, 2) / comb(47, 2))
        assert est.p_by_river == pytest.approx(2 / 47)

    def test_by_river_never_below_next(self) -> None:
        for outs in range(48):
            est = EquityEstimator.improvement_probability(outs, 47, 3)
            assert 0.0 <= est.p_immediate_next <= est.p_by_river <= 1.0


class TestTurn:
    def test_one_card_to_come(self) -> None:
        est = EquityEstimator.improvement_probability(9, 46, 4)
        assert est.p_immediate_next == pytest.approx(9 / 46)
        assert est.p_by_river == est.p_immediate_next


class TestValidation:
    @pytest.mark.parametrize("board_size", [0, 1, 2, 5, 6])
    def test_invalid_board_size(self, board_size: int) -> None:
        with pytest.raises(InvalidBoardSizeError):
            EquityEstimator.improvement_probability(4, 47, board_size)

    def test_outs_above_unseen(self) -> None:
        with pytest.raises(InvalidInputError):
            EquityEstimator.improvement_probability(48, 47, 3)

    def test_negative_outs(self) -> None:
        with pytest.raises(InvalidInputError):
            EquityEstimator.improvement_probability(-1, 47, 3)

    def test_unseen_must_match_board(self) -> None:
        with pytest.raises(InvalidInputError, match="unseen_count must be 46"):
            EquityEstimator.improvement_probability(9, 47, 4)

    def test_non_integer_counts(self) -> None:
        with pytest.raises(InvalidInputError):
            EquityEstimator.improvement_probability(9.0, 47, 3)  # type: ignore[arg-type]


class TestFromOuts:
    def test_flop_flush_draw(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S"))
        est = EquityEstimator.for_outs(outs)
        assert est.p_by_river == pytest.approx(378 / 1081)

    def test_river_is_zero(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), _cards("2H 7H 9S 3C 4D"))
        est = EquityEstimator.for_outs(outs)
        assert est == NO_FURTHER_CARDS
        assert est.p_by_river == 0.0
        assert est.p_immediate_next == 0.0

    def test_preflop_is_zero(self) -> None:
        outs = OutsCalculator.calculate(_cards("AH KH"), [])
        assert EquityEstimator.for_outs(outs) == EquityEstimate(0.0, 0.0)


def test_str() -> None:
    assert str(EquityEstimate(0.25, 0.5)) == "Next card: 25.0%, by river: 50.0%"
