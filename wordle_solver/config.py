"""
Solver constants.

Every value here can be overridden per call (keyword arguments) or on the
command line; nothing is read from the environment.
"""

import os


# ============================================================================
# PUZZLE
# ============================================================================

WORD_LENGTH = 5
MAX_GUESSES = 6

# Five distinct letters, two of them vowel-class (U, Y).
OPENING_WORD = "RUSTY"


# ============================================================================
# SCORING
# ============================================================================

BASE_SCORE = 100
REPEAT_PENALTY = 2
VOWELS = "AEIOUY"


# ============================================================================
# WORD LISTS
# ============================================================================

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_WORDS_FILE = os.path.join(BASE_DIR, "words", "words.txt")
