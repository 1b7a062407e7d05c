"""
Letter feedback: the tri-state status, its text encodings, and computing it
for a guess against a known answer.
"""

import numpy as np
from numba import jit
from enum import IntEnum
from typing import List, Sequence, Tuple

from .dictionary import normalize_word, word_to_chars
from .errors import LengthMismatch, MalformedFeedbackSymbol


# ============================================================================
# CONSTANTS
# ============================================================================

# Plain ints so the numba kernels can compare against them.
ABSENT = 0
PRESENT = 1
HIT = 2


class LetterStatus(IntEnum):
    ABSENT = 0
    PRESENT = 1
    HIT = 2


# Accepted input symbols. X/./- is the console format, G/Y/B and the emoji
# are what people paste from shared results.
SYMBOLS = {
    'X': LetterStatus.HIT,
    'G': LetterStatus.HIT,
    '🟩': LetterStatus.HIT,
    '.': LetterStatus.PRESENT,
    'Y': LetterStatus.PRESENT,
    '🟨': LetterStatus.PRESENT,
    '-': LetterStatus.ABSENT,
    'B': LetterStatus.ABSENT,
    '⬛': LetterStatus.ABSENT,
    '⬜': LetterStatus.ABSENT,
}

OUTPUT_SYMBOLS = {
    'symbols': {LetterStatus.HIT: 'X', LetterStatus.PRESENT: '.', LetterStatus.ABSENT: '-'},
    'emoji': {LetterStatus.HIT: '🟩', LetterStatus.PRESENT: '🟨', LetterStatus.ABSENT: '⬛'},
}

FORMAT_HELP = """Expected format for puzzle results:
`X` = direct hit (right letter in right position)
`.` = partial hit (right letter in wrong position)
`-` = complete miss (letter not in word)"""

_IGNORED = {"\ufe0f"}


# ============================================================================
# PARSING / FORMATTING
# ============================================================================

def to_status(value, index: int = 0) -> LetterStatus:
    """Coerce a status, its int value or a single input symbol to a LetterStatus."""
    if isinstance(value, LetterStatus):
        return value
    if isinstance(value, str):
        status = SYMBOLS.get(value.upper())
        if status is None:
            raise MalformedFeedbackSymbol(value, index)
        return status
    try:
        return LetterStatus(value)
    except ValueError:
        raise MalformedFeedbackSymbol(value, index) from None


def parse_feedback(text: str) -> List[LetterStatus]:
    """
    Decode a feedback string such as "-.X--" into statuses.

    Whitespace and emoji variation selectors are skipped.

    Raises:
        MalformedFeedbackSymbol: on any other unrecognized character.
    """
    statuses = []
    for i, ch in enumerate(text):
        if ch.isspace() or ch in _IGNORED:
            continue
        statuses.append(to_status(ch, i))
    return statuses


def format_feedback(feedback: Sequence, style: str = 'symbols') -> str:
    """Encode statuses as a string, either 'symbols' (X.-) or 'emoji'."""
    table = OUTPUT_SYMBOLS[style]
    return ''.join(table[to_status(f, i)] for i, f in enumerate(feedback))


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def feedback_codes(guess: np.ndarray, answer: np.ndarray) -> np.ndarray:
    """
    Compute per-letter feedback for a guess against an answer.

    Args:
        guess: char code array (0-25 for A-Z)
        answer: char code array of the same length

    Returns:
        int array of ABSENT/PRESENT/HIT codes
    """
    n = guess.shape[0]
    feedback = np.zeros(n, dtype=np.int32)
    answer_counts = np.zeros(26, dtype=np.int32)

    for i in range(n):
        answer_counts[answer[i]] += 1

    # First pass: hits use up their letter
    for i in range(n):
        if guess[i] == answer[i]:
            feedback[i] = HIT
            answer_counts[guess[i]] -= 1

    # Second pass: remaining occurrences are present while the answer has spares
    for i in range(n):
        if feedback[i] == ABSENT and answer_counts[guess[i]] > 0:
            feedback[i] = PRESENT
            answer_counts[guess[i]] -= 1

    return feedback


def compute_feedback(guess: str, answer: str) -> Tuple[LetterStatus, ...]:
    """Feedback the puzzle would show for `guess` when the solution is `answer`."""
    guess = normalize_word(guess)
    answer = normalize_word(answer)
    if len(guess) != len(answer):
        raise LengthMismatch(guess, len(answer), "answer length")
    codes = feedback_codes(word_to_chars(guess), word_to_chars(answer))
    return tuple(LetterStatus(int(c)) for c in codes)
