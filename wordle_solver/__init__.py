"""
Word Puzzle Solver
==================

Narrows a dictionary down to the words consistent with colored-tile feedback
and suggests the next guess with a cheap lexical heuristic: distinct letters
and vowel-class letters score higher.
"""

__version__ = "1.0.0"

from .constraints import ConstraintStore, Fact
from .dictionary import Dictionary, load_words
from .errors import (
    InvalidWord,
    InvariantViolation,
    LengthMismatch,
    MalformedFeedbackSymbol,
    MalformedPuzzleState,
    SessionStateError,
    SolverError,
)
from .feedback import LetterStatus, compute_feedback, format_feedback, parse_feedback
from .ranker import filter_candidates, rank_and_select, rank_candidates, score_word
from .session import SolveSession, SolveState, benchmark, play, play_session, print_results
from .adapters import ConsoleAdapter, PuzzleState, suggest_from_state
