"""Advisory action from hand strength, improvement equity and pot odds.

A single stateless decision: it does not know how many actions came
before in the hand. All cut-offs live in PolicyThresholds so they can be
tuned without touching the decision rules.

Decision table:
  Facing a bet  -> raise strong hands, call made hands and profitable
                   draws, call a pair at a big price, otherwise fold.
  Nothing to call -> bet made hands and big draws, otherwise check.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path

from holdem_odds.core.equity_estimator import EquityEstimate
from holdem_odds.core.hand_evaluator import HandRanking
from holdem_odds.utils.constants import HandCategory
from holdem_odds.utils.errors import InvalidInputError

logger = logging.getLogger("holdem_odds.strategy")


class ActionType(StrEnum):
    """The action types the policy can recommend."""

    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


STRONG_CATEGORY_THRESHOLD = HandCategory.THREE_OF_A_KIND
MADE_HAND_THRESHOLD = HandCategory.TWO_PAIR
# Compared against equity.p_by_river - 1 / pot_odds
MIN_PROFITABLE_EQUITY_MARGIN = 0.0
SEMI_BLUFF_EQUITY = 0.30
# Pot-to-call ratio at which a lone pair is worth a call
PAIR_CALL_POT_ODDS = 4.0


@dataclass(frozen=True)
class PolicyThresholds:
    """Named cut-offs used by RecommendationPolicy."""

    strong_category: HandCategory = STRONG_CATEGORY_THRESHOLD
    made_hand_category: HandCategory = MADE_HAND_THRESHOLD
    min_profitable_equity_margin: float = MIN_PROFITABLE_EQUITY_MARGIN
    semi_bluff_equity: float = SEMI_BLUFF_EQUITY
    pair_call_pot_odds: float = PAIR_CALL_POT_ODDS


_CATEGORY_KEYS = ("strong_category", "made_hand_category")


def load_policy_config(config_path: Path | None = None) -> PolicyThresholds | None:
    """Load policy thresholds from a JSON file.

    Default path: ~/.holdem_odds/policy.json

    Returns None if the file does not exist or cannot be used, so the
    caller decides whether to fall back to PolicyThresholds().

    Expected JSON format (every key optional):
        {
            "strong_category": "THREE_OF_A_KIND",
            "made_hand_category": "TWO_PAIR",
            "min_profitable_equity_margin": 0.0,
            "semi_bluff_equity": 0.3,
            "pair_call_pot_odds": 4.0
        }
    """
    path = config_path or Path.home() / ".holdem_odds" / "policy.json"
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read policy config at %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Policy config at %s is not a JSON object", path)
        return None

    known = {f.name for f in fields(PolicyThresholds)}
    values: dict[str, object] = {}
    for key, raw in data.items():
        if key not in known:
            logger.warning("Ignoring unknown policy config key: %s", key)
            continue
        if key in _CATEGORY_KEYS:
            try:
                values[key] = (
                    HandCategory(raw) if isinstance(raw, int)
                    else HandCategory[str(raw).upper()]
                )
            except (KeyError, ValueError):
                logger.warning("Invalid hand category for %s: %r", key, raw)
                return None
        else:
            if not isinstance(raw, (int, float)) or isinstance(raw, bool):
                logger.warning("Policy config %s must be a number: %r", key, raw)
                return None
            values[key] = float(raw)

    return PolicyThresholds(**values)


# ---------------------------------------------------------------------------
# Decision
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Recommendation:
    """The policy's advisory action with its rationale."""

    action: ActionType
    rationale: str
    pot_odds: float = math.inf
    required_equity: float = 0.0  # 1 / pot_odds when facing a bet
    equity_margin: float = 0.0  # p_by_river - required_equity


def pot_odds_ratio(pot: float, to_call: float) -> float:
    """Return (pot + to_call) / to_call, the inverse of break-even equity.

    Returns math.inf when there is nothing to call.

    Raises:
        InvalidInputError: If pot or to_call is negative or NaN.
    """
    if math.isnan(pot) or math.isnan(to_call) or pot < 0 or to_call < 0:
        raise InvalidInputError(
            f"Pot and call amount must be non-negative, got pot={pot}, "
            f"to_call={to_call}"
        )
    if to_call == 0:
        return math.inf
    return (pot + to_call) / to_call


class RecommendationPolicy:
    """Stateless threshold composition over ranking, equity and pot odds."""

    @staticmethod
    def recommend(
        ranking: HandRanking,
        equity: EquityEstimate,
        pot_odds: float,
        to_call: float = 0.0,
        thresholds: PolicyThresholds | None = None,
    ) -> Recommendation:
        """Pick fold/check/call/bet/raise.

        Args:
            ranking: Current hand ranking.
            equity: Improvement probabilities for the hand.
            pot_odds: (pot + to_call) / to_call; math.inf or any
                non-negative value when there is nothing to call.
            to_call: Amount the player must put in to continue.
            thresholds: Cut-offs; defaults to PolicyThresholds().

        Raises:
            InvalidInputError: If the inputs contradict each other, e.g.
                pot odds below 1 while facing a bet, or probabilities
                outside [0, 1].
        """
        t = thresholds or PolicyThresholds()
        RecommendationPolicy._validate(equity, pot_odds, to_call)

        facing_bet = to_call > 0
        required = 1.0 / pot_odds if facing_bet else 0.0
        margin = equity.p_by_river - required
        category = ranking.category
        reasons = [str(ranking)]

        if facing_bet:
            reasons.append(
                f"{equity.p_by_river:.1%} to improve vs {required:.1%} needed"
            )
            if category >= t.strong_category:
                action = ActionType.RAISE
                reasons.append("strong made hand")
            elif category >= t.made_hand_category:
                action = ActionType.CALL
                reasons.append("made hand worth continuing")
            elif equity.p_by_river > 0 and margin >= t.min_profitable_equity_margin:
                action = ActionType.CALL
                reasons.append("draw is priced in")
            elif category >= HandCategory.ONE_PAIR and pot_odds >= t.pair_call_pot_odds:
                action = ActionType.CALL
                reasons.append("favorable pot odds for a pair")
            else:
                action = ActionType.FOLD
                reasons.append("not enough equity for the price")
        else:
            if category >= t.made_hand_category:
                action = ActionType.BET
                reasons.append("value bet")
            elif equity.p_by_river >= t.semi_bluff_equity:
                action = ActionType.BET
                reasons.append(
                    f"semi-bluff with {equity.p_by_river:.1%} to improve"
                )
            else:
                action = ActionType.CHECK
                reasons.append("nothing to call, check")

        logger.debug(
            "recommend %s: category=%s facing_bet=%s margin=%.3f",
            action, category.name, facing_bet, margin,
        )
        return Recommendation(
            action=action,
            rationale=", ".join(reasons),
            pot_odds=pot_odds,
            required_equity=required,
            equity_margin=margin,
        )

    @staticmethod
    def _validate(equity: EquityEstimate, pot_odds: float, to_call: float) -> None:
        if math.isnan(to_call) or to_call < 0:
            raise InvalidInputError(f"to_call must be non-negative, got {to_call}")
        for name in ("p_immediate_next", "p_by_river"):
            p = getattr(equity, name)
            if math.isnan(p) or not 0.0 <= p <= 1.0:
                raise InvalidInputError(f"{name} must be in [0, 1], got {p}")
        if math.isnan(pot_odds) or pot_odds < 0:
            raise InvalidInputError(f"pot_odds must be non-negative, got {pot_odds}")
        if to_call > 0 and pot_odds < 1:
            raise InvalidInputError(
                f"pot_odds must be at least 1 when facing a bet of {to_call}, "
                f"got {pot_odds}"
            )
