"""Typed errors raised by the analysis engine.

Every component fails fast with one of these instead of substituting a
default. They all derive from ``ValueError`` so code that already guards
card parsing with ``except ValueError`` keeps working.
"""

from __future__ import annotations


class HandAnalysisError(ValueError):
    """Base class for all rejected analysis inputs."""

    pass


class InvalidCardCode(HandAnalysisError):
    """Raised when a card code is not a rank character followed by a suit."""

    pass


class DuplicateCardError(HandAnalysisError):
    """Raised when the same card appears more than once across hole and board.

    Always a caller bug: cards are never silently de-duplicated.
    """

    pass


class InvalidBoardSizeError(HandAnalysisError):
    """Raised when the board holds a number of cards no street produces."""

    pass


class InvalidInputError(HandAnalysisError):
    """Raised for inconsistent numeric inputs or wrong card counts."""

    pass
