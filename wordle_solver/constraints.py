"""
Constraint Store
================

Accumulates everything learned from guess feedback as a set of facts, one
(letter, position, status) triple per tile, and answers whether a word is
still consistent with all of them.

Facts are append-only: the first status recorded for a (letter, position)
pair wins. A fresh store is a fresh puzzle.
"""

import numpy as np
from numba import jit
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from .config import WORD_LENGTH
from .dictionary import is_valid_word, normalize_word, word_to_chars
from .errors import InvalidWord, InvariantViolation, LengthMismatch
from .feedback import HIT, PRESENT, LetterStatus, format_feedback, to_status


class Fact(NamedTuple):
    letter: str
    position: int
    status: LetterStatus

    def __str__(self) -> str:
        return f"{self.letter}@{self.position}:{self.status.name}"


# ============================================================================
# NUMBA CONSISTENCY CHECK
# ============================================================================

@jit(nopython=True, cache=True)
def satisfies_facts(word: np.ndarray, letters: np.ndarray,
                    positions: np.ndarray, statuses: np.ndarray) -> bool:
    """Check one char-coded word against every fact, stopping at the first failure."""
    for k in range(letters.shape[0]):
        letter = letters[k]
        pos = positions[k]
        status = statuses[k]

        if status == HIT:
            if word[pos] != letter:
                return False
            continue

        contains = False
        for i in range(word.shape[0]):
            if word[i] == letter:
                contains = True
                break

        if status == PRESENT:
            if not contains or word[pos] == letter:
                return False
        elif contains:
            return False

    return True


@jit(nopython=True, cache=True)
def consistency_mask(word_chars: np.ndarray, letters: np.ndarray,
                     positions: np.ndarray, statuses: np.ndarray) -> np.ndarray:
    """Boolean mask over the rows of `word_chars` that satisfy every fact."""
    n = word_chars.shape[0]
    mask = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        mask[i] = satisfies_facts(word_chars[i], letters, positions, statuses)
    return mask


# ============================================================================
# STORE
# ============================================================================

class ConstraintStore:
    """
    Per-puzzle accumulation of letter facts.

    `history` keeps every (word, feedback) submitted, in order, for display;
    filtering only ever looks at the facts.
    """

    def __init__(self, length: int = WORD_LENGTH):
        self.length = length
        self._facts: Dict[Tuple[str, int], Fact] = {}
        self._history: List[Tuple[str, Tuple[LetterStatus, ...]]] = []

    @property
    def facts(self) -> FrozenSet[Fact]:
        return frozenset(self._facts.values())

    @property
    def history(self) -> List[Tuple[str, Tuple[LetterStatus, ...]]]:
        return list(self._history)

    def __len__(self) -> int:
        return len(self._facts)

    def __repr__(self) -> str:
        guesses = ', '.join(f"{w}={format_feedback(fb)}" for w, fb in self._history)
        return f"ConstraintStore({len(self)} facts; {guesses or 'no guesses'})"

    def record(self, word: str, feedback: Sequence) -> None:
        """
        Ingest the feedback for one guessed word, letter by letter.

        An ABSENT report is dropped when the letter is already a HIT at
        another position.

        Raises:
            LengthMismatch: word and feedback differ in length, or the word
                does not fit this puzzle
            InvalidWord: the word contains something other than A-Z
            MalformedFeedbackSymbol: a feedback entry is not a status
        """
        word = normalize_word(word)
        if len(word) != len(feedback):
            raise LengthMismatch(word, len(feedback))
        if len(word) != self.length:
            raise LengthMismatch(word, self.length, "puzzle word length")
        if not is_valid_word(word, self.length):
            raise InvalidWord(word)
        statuses = tuple(to_status(f, i) for i, f in enumerate(feedback))

        for i, (letter, status) in enumerate(zip(word, statuses)):
            fact = Fact(letter, i, status)
            key = (letter, i)
            if key in self._facts:
                continue
            if fact.status == LetterStatus.ABSENT and self._hit_elsewhere(fact):
                continue
            self._facts[key] = fact

        self._history.append((word, statuses))

    def _hit_elsewhere(self, fact: Fact) -> bool:
        return any(f.letter == fact.letter and f.status == LetterStatus.HIT
                   and f.position != fact.position
                   for f in self._facts.values())

    def fact_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Facts as (letters, positions, statuses) int arrays for the numba kernels."""
        facts = list(self._facts.values())
        letters = np.array([ord(f.letter) - ord('A') for f in facts], dtype=np.int32)
        positions = np.array([f.position for f in facts], dtype=np.int32)
        statuses = np.array([int(f.status) for f in facts], dtype=np.int32)
        return letters, positions, statuses

    def is_consistent(self, word: str) -> bool:
        """True if `word` satisfies every recorded fact."""
        word = normalize_word(word)
        if not is_valid_word(word, self.length):
            return False
        return bool(satisfies_facts(word_to_chars(word), *self.fact_arrays()))

    def consistency_mask(self, word_chars: np.ndarray) -> np.ndarray:
        """Vectorized `is_consistent` over an (n, length) char code matrix."""
        if word_chars.ndim != 2 or word_chars.shape[1] != self.length:
            raise ValueError(f"Expected an (n, {self.length}) char matrix, got {word_chars.shape}")
        return consistency_mask(word_chars, *self.fact_arrays())

    def solved_word(self) -> Optional[str]:
        """
        The solution once every position has a HIT fact, else None.

        Raises:
            InvariantViolation: more HIT facts than positions, which only
                contradictory feedback can produce.
        """
        hits = sorted((f for f in self._facts.values() if f.status == LetterStatus.HIT),
                      key=lambda f: f.position)

        if len(hits) > self.length:
            raise InvariantViolation(
                f"Found {len(hits)} HIT facts for a {self.length}-letter word: "
                f"{', '.join(str(f) for f in hits)}"
            )

        if len({f.position for f in hits}) != self.length:
            return None

        return ''.join(f.letter for f in hits)
