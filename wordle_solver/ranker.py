"""
Candidate Ranker
================

Filters the dictionary down to words consistent with the store and picks the
one with the best static score. The score is a lexical stand-in for
information value: repeated letters waste tiles, vowel-class letters confirm
or rule out the common letters early.

    score = 100
          - 2 * count   for every occurrence of a letter that occurs count > 1 times
          + 1           for every occurrence of A, E, I, O, U or Y

RUSTY = 102, GREEN = 94, AEIOU = 105.
"""

import numpy as np
from numba import jit
from typing import List, Optional, Tuple

from .config import BASE_SCORE, OPENING_WORD, REPEAT_PENALTY, VOWELS
from .constraints import ConstraintStore
from .dictionary import Dictionary, normalize_word, word_to_chars


# ============================================================================
# CONSTANTS
# ============================================================================

VOWEL_MASK = np.zeros(26, dtype=np.bool_)
for _c in VOWELS:
    VOWEL_MASK[ord(_c) - ord('A')] = True


# ============================================================================
# NUMBA SCORING
# ============================================================================

@jit(nopython=True, cache=True)
def score_chars(chars: np.ndarray, vowel_mask: np.ndarray) -> int:
    """Heuristic score of one char-coded word."""
    n = chars.shape[0]
    score = BASE_SCORE

    for i in range(n):
        count = 0
        for j in range(n):
            if chars[j] == chars[i]:
                count += 1
        if count > 1:
            score -= REPEAT_PENALTY * count

        if vowel_mask[chars[i]]:
            score += 1

    return score


@jit(nopython=True, cache=True)
def score_rows(word_chars: np.ndarray, rows: np.ndarray, vowel_mask: np.ndarray) -> np.ndarray:
    """Scores for the selected rows of an (n, length) char code matrix."""
    scores = np.zeros(rows.shape[0], dtype=np.int64)
    for k in range(rows.shape[0]):
        scores[k] = score_chars(word_chars[rows[k]], vowel_mask)
    return scores


def score_word(word: str) -> int:
    """Heuristic score of a word, case-insensitive."""
    return int(score_chars(word_to_chars(normalize_word(word)), VOWEL_MASK))


# ============================================================================
# RANKING
# ============================================================================

def _consistent_rows(dictionary: Dictionary, store: ConstraintStore) -> np.ndarray:
    mask = store.consistency_mask(dictionary.chars)
    return np.flatnonzero(mask).astype(np.int64)


def filter_candidates(dictionary: Dictionary, store: ConstraintStore) -> List[str]:
    """Dictionary words consistent with every fact, in dictionary order."""
    return [dictionary[i] for i in _consistent_rows(dictionary, store)]


def rank_candidates(dictionary: Dictionary, store: ConstraintStore) -> List[Tuple[str, int]]:
    """
    Consistent words with their scores, best first.

    Equal scores keep dictionary order.
    """
    rows = _consistent_rows(dictionary, store)
    scores = score_rows(dictionary.chars, rows, VOWEL_MASK)
    order = np.argsort(-scores, kind='stable')
    return [(dictionary[rows[k]], int(scores[k])) for k in order]


def rank_and_select(dictionary: Dictionary, store: ConstraintStore,
                    first_guess: str = OPENING_WORD) -> Optional[str]:
    """
    Pick the next guess.

    Args:
        dictionary: words to choose from
        store: facts learned so far
        first_guess: returned as-is while nothing has been learned

    Returns:
        The highest-scoring consistent word (first in dictionary order on a
        tie), or None when no word is consistent.
    """
    if len(store) == 0:
        return normalize_word(first_guess)

    rows = _consistent_rows(dictionary, store)
    if rows.shape[0] == 0:
        return None

    scores = score_rows(dictionary.chars, rows, VOWEL_MASK)
    return dictionary[rows[int(np.argmax(scores))]]
