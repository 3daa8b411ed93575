"""Card model: parsing and formatting of 2-character card codes."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

from holdem_odds.utils.constants import RANK_VALUES, Rank, Suit
from holdem_odds.utils.errors import DuplicateCardError, InvalidCardCode

_SUIT_ORDER = {Suit.CLUBS: 0, Suit.DIAMONDS: 1, Suit.HEARTS: 2, Suit.SPADES: 3}


@total_ordering
@dataclass(frozen=True)
class Card:
    """Represents a single playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Create a Card from a 2-character code like 'Ah', 'TD' or '2s'.

        Rank and suit are both case-insensitive.

        Args:
            s: A 2-character string where the first char is the rank
               and the second is the suit.

        Returns:
            A new Card instance.

        Raises:
            InvalidCardCode: If the input is not exactly 2 characters or
                             contains invalid rank/suit characters.
        """
        if not isinstance(s, str) or len(s) != 2:
            raise InvalidCardCode(f"Card code must be 2 characters, got {s!r}")
        try:
            rank = Rank(s[0].upper())
        except ValueError:
            raise InvalidCardCode(f"Invalid rank character: '{s[0]}'") from None
        try:
            suit = Suit(s[1].lower())
        except ValueError:
            raise InvalidCardCode(f"Invalid suit character: '{s[1]}'") from None
        return cls(rank=rank, suit=suit)

    @property
    def value(self) -> int:
        """Numeric value of the card's rank (2-14)."""
        return RANK_VALUES[self.rank]

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __repr__(self) -> str:
        return f"Card('{self}')"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return (self.value, _SUIT_ORDER[self.suit]) < (
            other.value, _SUIT_ORDER[other.suit],
        )


def parse_card(code: str) -> Card:
    """Parse a single card code."""
    return Card.from_str(code)


def format_card(card: Card) -> str:
    """Format a card as its normalized code (upper rank, lower suit)."""
    return str(card)


def parse_cards(codes: Iterable[str]) -> list[Card]:
    """Parse a sequence of card codes, preserving order."""
    return [Card.from_str(code) for code in codes]


def full_deck() -> list[Card]:
    """Return all 52 cards in a fixed order."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]


_DECK: tuple[Card, ...] = tuple(full_deck())


def unseen_cards(known: Iterable[Card]) -> list[Card]:
    """Return the deck minus the known cards, in deck order."""
    known_set = set(known)
    return [c for c in _DECK if c not in known_set]


def ensure_distinct(cards: Iterable[Card]) -> None:
    """Raise DuplicateCardError if any card appears more than once."""
    counts = Counter(cards)
    repeated = sorted(c for c, n in counts.items() if n > 1)
    if repeated:
        raise DuplicateCardError(
            "Duplicate cards: " + ", ".join(str(c) for c in repeated)
        )
