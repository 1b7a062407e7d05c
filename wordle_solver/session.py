"""
Solve Loop
==========

Sequences the ranker and the store around feedback supplied from outside:

    AWAITING_GUESS -> AWAITING_FEEDBACK -> AWAITING_GUESS | SOLVED | STUCK

Once a puzzle is solved the loop stops asking the ranker for guesses.

Also provides self-play against a known answer, and a benchmark over a list
of answers built on it.
"""

import time
from collections import Counter
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .config import MAX_GUESSES, OPENING_WORD
from .constraints import ConstraintStore
from .dictionary import Dictionary, is_valid_word, normalize_word
from .errors import InvalidWord, LengthMismatch, SessionStateError, SolverError
from .feedback import LetterStatus, compute_feedback, format_feedback
from .ranker import filter_candidates, rank_and_select


class SolveState(Enum):
    AWAITING_GUESS = "awaiting_guess"
    AWAITING_FEEDBACK = "awaiting_feedback"
    SOLVED = "solved"
    STUCK = "stuck"


TERMINAL_STATES = (SolveState.SOLVED, SolveState.STUCK)


class SolveSession:
    """
    One puzzle: propose a guess, accept its feedback, repeat.

    Every front-end (console loop, puzzle-state replay, self-play) drives a
    session through `propose` and `accept` only.
    """

    def __init__(self, dictionary: Dictionary, first_guess: str = OPENING_WORD):
        first_guess = normalize_word(first_guess)
        if len(first_guess) != dictionary.length:
            raise LengthMismatch(first_guess, dictionary.length, "dictionary word length")
        if not is_valid_word(first_guess, dictionary.length):
            raise InvalidWord(first_guess)

        self.dictionary = dictionary
        self.first_guess = first_guess
        self.reset()

    def reset(self):
        """Start over with no facts."""
        self.store = ConstraintStore(self.dictionary.length)
        self.state = SolveState.AWAITING_GUESS
        self.pending: Optional[str] = None
        self.solution: Optional[str] = None

    @property
    def history(self) -> List[Tuple[str, Tuple[LetterStatus, ...]]]:
        return self.store.history

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def candidates(self) -> List[str]:
        return filter_candidates(self.dictionary, self.store)

    def propose(self) -> Optional[str]:
        """
        The word to guess next, or None when solved or stuck.

        Asking again before feedback arrives returns the same word.
        """
        if self.state == SolveState.AWAITING_FEEDBACK:
            return self.pending
        if self.finished:
            return None

        guess = rank_and_select(self.dictionary, self.store, self.first_guess)
        if guess is None:
            self.state = SolveState.STUCK
            return None

        self.pending = guess
        self.state = SolveState.AWAITING_FEEDBACK
        return guess

    def accept(self, feedback: Sequence, word: Optional[str] = None) -> SolveState:
        """
        Record the feedback for the pending guess, or for `word` if the
        player guessed something else.

        Raises:
            SessionStateError: the session is finished, or there is no word
                to attach the feedback to
            LengthMismatch, InvalidWord, MalformedFeedbackSymbol: from the
                store; the session state is left unchanged
            InvariantViolation: the feedback contradicts earlier hits; the
                facts are kept but the pending guess and state are not touched
        """
        if self.finished:
            raise SessionStateError(f"Session is already {self.state.value}")

        word = word if word is not None else self.pending
        if word is None:
            raise SessionStateError("No guess is pending; call propose() or pass the word")

        self.store.record(word, feedback)
        solution = self.store.solved_word()

        self.pending = None
        self.solution = solution
        if solution is not None:
            self.state = SolveState.SOLVED
        else:
            self.state = SolveState.AWAITING_GUESS
        return self.state


# ============================================================================
# SELF-PLAY
# ============================================================================

def play_session(dictionary: Dictionary, answer: str, max_guesses: int = MAX_GUESSES,
                 first_guess: str = OPENING_WORD, verbose: bool = False) -> SolveSession:
    """
    Drive a session against a known answer until it is solved, stuck, or
    `max_guesses` guesses have been made.

    The returned session tells the three outcomes apart: SOLVED, STUCK, or
    still AWAITING_GUESS when the guesses ran out.
    """
    answer = normalize_word(answer)
    session = SolveSession(dictionary, first_guess)

    for turn in range(max_guesses):
        n_cand = len(session.candidates())
        guess = session.propose()
        if guess is None:
            if verbose:
                print(f"  Turn {turn+1}: STUCK, no word fits ({n_cand} candidates)")
            break

        feedback = compute_feedback(guess, answer)
        state = session.accept(feedback)

        if verbose:
            fb_str = format_feedback(feedback, 'emoji')
            print(f"  Turn {turn+1}: {guess} -> {fb_str} ({n_cand} -> ", end='')

        if state == SolveState.SOLVED:
            if verbose:
                print("SOLVED!)")
            break

        if verbose:
            remaining = session.candidates()
            print(f"{len(remaining)} candidates)")
            if len(remaining) <= 10:
                print(f"        remaining: {remaining}")

    return session


def play(dictionary: Dictionary, answer: str, max_guesses: int = MAX_GUESSES,
         first_guess: str = OPENING_WORD, verbose: bool = False) -> Tuple[int, List[str]]:
    """
    Play one puzzle against a known answer.

    Returns:
        (num_guesses, list_of_guesses); num_guesses is max_guesses + 1 when
        the puzzle was not solved in time or the solver got stuck.
    """
    session = play_session(dictionary, answer, max_guesses, first_guess, verbose)
    guesses = [word for word, _ in session.history]
    if session.state == SolveState.SOLVED:
        return len(guesses), guesses
    return max_guesses + 1, guesses


def benchmark(dictionary: Dictionary, answers: Optional[List[str]] = None,
              max_guesses: int = MAX_GUESSES, first_guess: str = OPENING_WORD,
              verbose: bool = True, progress_every: int = 500) -> Dict:
    """
    Self-play every answer and collect statistics.

    Unsolved puzzles are split by cause: `stuck` when no dictionary word fit
    the facts any more, `out_of_guesses` when the limit was hit first, and
    `errors` when feedback could not be recorded at all.

    Args:
        dictionary: words the solver chooses from
        answers: words to solve (default: the whole dictionary)
        verbose: print progress every `progress_every` words

    Returns:
        Dict with results
    """
    if answers is None:
        answers = list(dictionary)

    dist = Counter()
    stuck, out_of_guesses, errors = [], [], []

    start = time.time()
    for i, word in enumerate(answers):
        if verbose and i % progress_every == 0:
            elapsed = time.time() - start
            rate = i / elapsed if elapsed > 0 else 0
            unsolved = len(stuck) + len(out_of_guesses) + len(errors)
            print(f"[{i}/{len(answers)}] {rate:.1f} w/s, solved={i - unsolved}, "
                  f"stuck={len(stuck)}, out of guesses={len(out_of_guesses)}")

        word = normalize_word(word)
        try:
            session = play_session(dictionary, word, max_guesses, first_guess)
        except SolverError as e:
            print(f"Error: {word}: {e}")
            errors.append(word)
            continue

        if session.state == SolveState.SOLVED:
            dist[len(session.history)] += 1
        elif session.state == SolveState.STUCK:
            stuck.append(word)
        else:
            out_of_guesses.append(word)

    elapsed = time.time() - start
    solved = sum(dist.values())

    return {
        'total': len(answers),
        'solved': solved,
        'average': sum(n * c for n, c in dist.items()) / solved if solved else 0.0,
        'distribution': dict(sorted(dist.items())),
        'stuck': stuck,
        'out_of_guesses': out_of_guesses,
        'errors': errors,
        'time': elapsed,
        'rate': len(answers) / elapsed if elapsed > 0 else 0.0,
    }


def _word_sample(words: List[str], limit: int = 20) -> str:
    more = f" (+{len(words) - limit} more)" if len(words) > limit else ""
    return ', '.join(words[:limit]) + more


def print_results(results: Dict):
    """Pretty print benchmark results."""
    total = results['total']

    def share(n):
        return f"{n:5d} ({100 * n / total:5.2f}%)" if total else f"{n:5d}"

    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Puzzles:        {total}")
    print(f"Solved:         {share(results['solved'])}")
    print(f"Stuck:          {share(len(results['stuck']))}")
    print(f"Out of guesses: {share(len(results['out_of_guesses']))}")
    if results['errors']:
        print(f"Errors:         {share(len(results['errors']))}")
    if results['solved']:
        print(f"Average guesses when solved: {results['average']:.4f}")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")

    if results['distribution']:
        print("\nGuesses to solve:")
        for n, count in results['distribution'].items():
            bar = "█" * int(50 * count / total)
            print(f"  {n}: {share(count)} {bar}")

    for label, key in (("Stuck on", 'stuck'),
                       ("Ran out of guesses on", 'out_of_guesses'),
                       ("Errors on", 'errors')):
        if results[key]:
            print(f"\n{label}: {_word_sample(results[key])}")
    print("=" * 50)
