"""Exceptions raised by the solver."""


class SolverError(Exception):
    """Base class for every error the solver raises."""


class LengthMismatch(SolverError, ValueError):
    """A guessed word does not match its feedback vector or the puzzle in length."""

    def __init__(self, word: str, expected: int, what: str = "feedback entries"):
        self.word = word
        self.expected = expected
        super().__init__(
            f"Guessed word '{word}' has {len(word)} letters but expected {expected} ({what})"
        )


class MalformedFeedbackSymbol(SolverError, ValueError):
    """A feedback token is not one of the recognized symbols."""

    def __init__(self, symbol, index: int):
        self.symbol = symbol
        self.index = index
        super().__init__(f"Unexpected {symbol!r} in feedback at position {index}")


class MalformedPuzzleState(SolverError, ValueError):
    """A serialized puzzle state could not be decoded."""


class SessionStateError(SolverError, RuntimeError):
    """An operation was attempted in a solve-loop state that does not allow it."""


class InvariantViolation(SolverError, RuntimeError):
    """Stored facts contradict an internal invariant - a caller bug, not bad input."""


class InvalidWord(SolverError, ValueError):
    """A guessed word contains characters other than the letters A-Z."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"Guessed word '{word}' must contain only the letters A-Z")
