import io
import json

import pytest

from wordle_solver import (
    ConsoleAdapter,
    Dictionary,
    InvalidWord,
    MalformedFeedbackSymbol,
    MalformedPuzzleState,
    PuzzleState,
    SolveSession,
    SolveState,
    suggest_from_state,
)
from wordle_solver.adapters import session_from_state
from conftest import KNOLL_GAME


def knoll_state_json():
    return json.dumps({'guesses': [{'word': w.lower(), 'results': r} for w, r in KNOLL_GAME]})


class TestPuzzleState:
    def test_from_json(self):
        state = PuzzleState.from_json(knoll_state_json())
        assert len(state.guesses) == 4
        assert state.guesses[0].word == "SOARE"
        assert state.guesses[0].results == "-.---"

    def test_to_dict(self):
        state = PuzzleState.from_json(knoll_state_json())
        assert PuzzleState.from_dict(state.to_dict()) == state

    def test_missing_guesses_is_a_new_puzzle(self):
        assert PuzzleState.from_json("{}").guesses == []

    @pytest.mark.parametrize("text", [
        "not json",
        "[]",
        '{"guesses": {}}',
        '{"guesses": ["rusty"]}',
        '{"guesses": [{"word": "rusty"}]}',
        '{"guesses": [{"word": 5, "results": "-----"}]}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedPuzzleState):
            PuzzleState.from_json(text)


class TestSuggestFromState:
    def test_knoll(self, knoll_dictionary):
        state = PuzzleState.from_json(knoll_state_json())
        assert suggest_from_state(state, knoll_dictionary) == "KNOLL"

    def test_new_puzzle_gets_opening_word(self, knoll_dictionary):
        assert suggest_from_state(PuzzleState([]), knoll_dictionary) == "RUSTY"

    def test_solved_state_has_no_suggestion(self, knoll_dictionary):
        state = PuzzleState.from_dict({'guesses': [{'word': 'knoll', 'results': 'XXXXX'}]})
        session = session_from_state(state, knoll_dictionary)
        assert session.state == SolveState.SOLVED
        assert suggest_from_state(state, knoll_dictionary) is None

    def test_bad_symbol(self, knoll_dictionary):
        state = PuzzleState.from_dict({'guesses': [{'word': 'soare', 'results': '-?---'}]})
        with pytest.raises(MalformedFeedbackSymbol):
            suggest_from_state(state, knoll_dictionary)

    def test_non_letter_word(self, knoll_dictionary):
        state = PuzzleState.from_dict({'guesses': [{'word': 's0are', 'results': '-.---'}]})
        with pytest.raises(InvalidWord):
            suggest_from_state(state, knoll_dictionary)


def scripted(lines):
    it = iter(lines)

    def read(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return read


class TestConsoleAdapter:
    def test_solves_tangy(self, tangy_dictionary):
        out = io.StringIO()
        session = SolveSession(tangy_dictionary)
        adapter = ConsoleAdapter(session, scripted(["---.X", "X-X-X", "XXX-X", "XXXXX"]), out)

        assert adapter.run() == SolveState.SOLVED
        text = out.getvalue()
        assert "Go type <RUSTY>" in text
        assert "Go type <TANKY>" in text
        assert "Puzzle solved using TANGY!" in text

    def test_reprompts_on_malformed_feedback(self, tangy_dictionary):
        out = io.StringIO()
        session = SolveSession(tangy_dictionary)
        adapter = ConsoleAdapter(session, scripted(["oops", "---", "---.X", "q"]), out)

        assert adapter.run() == SolveState.AWAITING_FEEDBACK
        text = out.getvalue()
        assert "Unexpected 'o'" in text
        assert "Expected format" in text
        assert "expected 3" in text
        assert [w for w, _ in session.history] == ["RUSTY"]

    def test_word_override(self, tangy_dictionary):
        out = io.StringIO()
        session = SolveSession(tangy_dictionary)
        adapter = ConsoleAdapter(session, scripted(["!toney", "X-X-X", "q"]), out)

        adapter.run()
        assert [w for w, _ in session.history] == ["TONEY"]
        assert "Using <TONEY> instead" in out.getvalue()
        assert session.propose() == "TANKY"

    def test_rejects_non_letter_override(self, tangy_dictionary):
        out = io.StringIO()
        session = SolveSession(tangy_dictionary)
        adapter = ConsoleAdapter(session, scripted(["!cr4ne", "---.X", "q"]), out)

        adapter.run()
        assert "<CR4NE> is not a 5-letter word." in out.getvalue()
        assert [w for w, _ in session.history] == ["RUSTY"]
        assert all(f.letter.isalpha() for f in session.store.facts)

    def test_reports_stuck(self):
        out = io.StringIO()
        session = SolveSession(Dictionary(["CRANE"]))
        adapter = ConsoleAdapter(session, scripted(["-----"]), out)

        assert adapter.run() == SolveState.STUCK
        assert "No suggestion available." in out.getvalue()

    def test_eof_ends_loop(self, tangy_dictionary):
        session = SolveSession(tangy_dictionary)
        adapter = ConsoleAdapter(session, scripted([]), io.StringIO())
        assert adapter.run() == SolveState.AWAITING_FEEDBACK
