"""Exceptions raised by the hand evaluator."""


class HandRankError(Exception):
    """Base class for all evaluator errors."""


class TableIntegrityError(HandRankError, RuntimeError):
    """
    The canonical table and the classifier disagree.

    Raised when the build produces the wrong number of classes or when a
    classified hand is missing from the table. Never recoverable.
    """


class InvalidCardError(HandRankError, ValueError):
    """Card rank, suit, index or string is out of range."""


class InvalidHandError(HandRankError, ValueError):
    """Wrong number of cards, duplicate cards or a malformed batch."""
