"""
Word lists
==========

The dictionary is loaded once and shared by reference. Alongside the words it
keeps a read-only matrix of letter codes (A=0 .. Z=25) so candidate filtering
and scoring can run as numba kernels over the whole list at once.
"""

import numpy as np
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import WORD_LENGTH


def normalize_word(word: str) -> str:
    return word.strip().upper()


def is_valid_word(word: str, length: int = WORD_LENGTH) -> bool:
    """True if `word` is made of exactly `length` ASCII letters."""
    return len(word) == length and word.isascii() and word.isalpha()


def word_to_chars(word: str) -> np.ndarray:
    """Convert one word to a char code array (A=0 .. Z=25)."""
    word = normalize_word(word)
    if not (word.isascii() and word.isalpha()):
        raise ValueError(f"'{word}' must contain only letters A-Z")
    return words_to_chars([word], len(word))[0]


def words_to_chars(words: Sequence[str], length: int = WORD_LENGTH) -> np.ndarray:
    """Convert words to an (n, length) char code array."""
    arr = np.zeros((len(words), length), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c) - ord('A')
    return arr


def load_words(filepath: str, length: int = WORD_LENGTH) -> List[str]:
    """Load a word list, keeping only alphabetic words of `length` letters."""
    with open(filepath, 'r') as f:
        words = (normalize_word(line) for line in f)
        return [w for w in words if is_valid_word(w, length)]


class Dictionary:
    """
    Immutable, ordered list of fixed-length uppercase words.

    Entries of the wrong length or containing non-letters are dropped;
    repeated entries keep their first position.
    """

    def __init__(self, words: Iterable[str], length: int = WORD_LENGTH):
        self.length = length

        seen = set()
        kept = []
        for w in words:
            w = normalize_word(w)
            if is_valid_word(w, length) and w not in seen:
                seen.add(w)
                kept.append(w)

        self._words: Tuple[str, ...] = tuple(kept)
        self._index = {w: i for i, w in enumerate(self._words)}

        self._chars = words_to_chars(self._words, length)
        self._chars.flags.writeable = False

    @classmethod
    def from_file(cls, filepath: str, length: int = WORD_LENGTH) -> "Dictionary":
        return cls(load_words(filepath, length), length)

    @property
    def chars(self) -> np.ndarray:
        """Read-only (n, length) char code matrix, row i is `self[i]`."""
        return self._chars

    def index(self, word: str) -> Optional[int]:
        return self._index.get(normalize_word(word))

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __getitem__(self, i: int) -> str:
        return self._words[i]

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._index

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} words, length={self.length})"
