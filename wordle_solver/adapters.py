"""
Front-ends over SolveSession.

- PuzzleState / suggest_from_state: a host hands over the guesses made so far
  (e.g. scraped from a browser page) and gets back the next word to type.
- ConsoleAdapter: interactive read-line loop.
"""

import json
import sys
from typing import Callable, List, Mapping, NamedTuple, Optional

from .config import OPENING_WORD
from .dictionary import Dictionary, is_valid_word, normalize_word
from .errors import InvalidWord, LengthMismatch, MalformedFeedbackSymbol, MalformedPuzzleState
from .feedback import FORMAT_HELP, format_feedback, parse_feedback
from .session import SolveSession, SolveState


# ============================================================================
# PUZZLE STATE
# ============================================================================

class PuzzleGuess(NamedTuple):
    word: str
    results: str


class PuzzleState(NamedTuple):
    """
    Serialized puzzle progress:

        {"guesses": [{"word": "rusty", "results": "---.X"}, ...]}

    `results` uses the same symbols as the console (see FORMAT_HELP).
    """
    guesses: List[PuzzleGuess]

    @classmethod
    def from_dict(cls, obj) -> "PuzzleState":
        if not isinstance(obj, Mapping):
            raise MalformedPuzzleState(f"Puzzle state must be an object, got {type(obj).__name__}")

        raw = obj.get('guesses', [])
        if not isinstance(raw, list):
            raise MalformedPuzzleState("'guesses' must be a list")

        guesses = []
        for i, g in enumerate(raw):
            if not isinstance(g, Mapping):
                raise MalformedPuzzleState(f"Guess {i} must be an object")
            word, results = g.get('word'), g.get('results')
            if not isinstance(word, str) or not isinstance(results, str):
                raise MalformedPuzzleState(f"Guess {i} needs string 'word' and 'results'")
            guesses.append(PuzzleGuess(normalize_word(word), results))

        return cls(guesses)

    @classmethod
    def from_json(cls, text: str) -> "PuzzleState":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedPuzzleState(f"Invalid puzzle state JSON: {e}") from e
        return cls.from_dict(obj)

    def to_dict(self) -> dict:
        return {'guesses': [{'word': g.word.lower(), 'results': g.results} for g in self.guesses]}


def session_from_state(state: PuzzleState, dictionary: Dictionary,
                       first_guess: str = OPENING_WORD) -> SolveSession:
    """
    Replay a puzzle state into a fresh session.

    Raises:
        MalformedFeedbackSymbol, LengthMismatch, InvalidWord: for the
            offending guess
    """
    session = SolveSession(dictionary, first_guess)
    for guess in state.guesses:
        if session.finished:
            break
        session.accept(parse_feedback(guess.results), word=guess.word)
    return session


def suggest_from_state(state: PuzzleState, dictionary: Dictionary,
                       first_guess: str = OPENING_WORD) -> Optional[str]:
    """Next word to guess for `state`, or None if solved or out of candidates."""
    return session_from_state(state, dictionary, first_guess).propose()


# ============================================================================
# CONSOLE
# ============================================================================

class ConsoleAdapter:
    """
    Prompt loop: show the suggestion, read the result line, repeat.

    Input lines are feedback symbols (e.g. "-.X--"). "!WORD" on its own line
    replaces the suggestion when a different word was played; "q" quits.
    """

    def __init__(self, session: SolveSession,
                 input_fn: Optional[Callable[[str], str]] = None,
                 output=None):
        self.session = session
        self.input_fn = input_fn if input_fn is not None else input
        self.output = output if output is not None else sys.stdout

    def say(self, text: str = ""):
        print(text, file=self.output)

    def run(self) -> SolveState:
        session = self.session
        word = None

        while not session.finished:
            suggestion = session.propose()
            if suggestion is None:
                break
            if word is None:
                word = suggestion
                self.say(f"Go type <{word}> into the puzzle. What was the result?")

            try:
                line = self.input_fn("> ").strip()
            except EOFError:
                break

            if line.lower() in ('q', 'quit', 'exit'):
                break
            if line.startswith('!'):
                override = normalize_word(line[1:])
                if not is_valid_word(override, session.dictionary.length):
                    self.say(f"<{override}> is not a {session.dictionary.length}-letter word.")
                    continue
                word = override
                self.say(f"Using <{word}> instead. What was the result?")
                continue

            try:
                session.accept(parse_feedback(line), word=word)
            except MalformedFeedbackSymbol as e:
                self.say(str(e))
                self.say(FORMAT_HELP)
                continue
            except (LengthMismatch, InvalidWord) as e:
                self.say(str(e))
                continue

            self.say(f"{word} {format_feedback(session.history[-1][1], 'emoji')}")
            word = None

        if session.state == SolveState.SOLVED:
            self.say(f"Puzzle solved using {session.solution}! Share your score.")
        elif session.state == SolveState.STUCK:
            self.say("No suggestion available.")
        return session.state
