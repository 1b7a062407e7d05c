"""
Command-line entry point.

    wordle-solver --mode play
    wordle-solver --mode suggest --state state.json
    wordle-solver --mode solve --answer tangy
    wordle-solver --mode benchmark --sample 500
"""

import argparse
import random
import sys
from typing import List, Optional

from .adapters import ConsoleAdapter, PuzzleState, suggest_from_state
from .config import DEFAULT_WORDS_FILE, MAX_GUESSES, OPENING_WORD
from .dictionary import Dictionary, is_valid_word, normalize_word
from .errors import SolverError
from .feedback import parse_feedback
from .ranker import rank_candidates
from .session import SolveSession, SolveState, benchmark, play_session, print_results


def error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def run_play(dictionary: Dictionary, args: argparse.Namespace) -> int:
    session = SolveSession(dictionary, args.first_guess)
    print(f"Loaded {len(dictionary)} words.")
    ConsoleAdapter(session).run()
    return 0


def run_suggest(dictionary: Dictionary, args: argparse.Namespace) -> int:
    try:
        if args.state == '-':
            text = sys.stdin.read()
        else:
            with open(args.state, 'r') as f:
                text = f.read()
    except OSError as e:
        return error(f"Can't read puzzle state {args.state}: {e}")

    try:
        state = PuzzleState.from_json(text)
        suggestion = suggest_from_state(state, dictionary, args.first_guess)
    except SolverError as e:
        return error(str(e))

    print(suggestion.lower() if suggestion else "No guess available")
    return 0


def run_solve(dictionary: Dictionary, args: argparse.Namespace) -> int:
    if not args.answer:
        return error("Please provide a target word using --answer")

    answer = normalize_word(args.answer)
    if not is_valid_word(answer, dictionary.length):
        return error(f"Please provide a valid {dictionary.length}-letter target word.")
    position = dictionary.index(answer)
    if position is None:
        print(f"Warning: '{answer}' is not in the word list; it can't be suggested.")
    else:
        print(f"Solving for: {answer} (word #{position + 1} of {len(dictionary)})")

    try:
        session = play_session(dictionary, answer, args.max_guesses, args.first_guess, verbose=True)
    except SolverError as e:
        return error(str(e))

    guesses = [word for word, _ in session.history]
    trail = ' -> '.join(guesses)
    if session.state == SolveState.SOLVED:
        print(f"  -> Solved in {len(guesses)} guesses: {trail}")
    elif session.state == SolveState.STUCK:
        print(f"  -> Stuck after {len(guesses)} guesses, no word fits: {trail}")
    else:
        print(f"  -> Out of guesses after {len(guesses)}: {trail}")
    return 0


def run_benchmark(dictionary: Dictionary, args: argparse.Namespace) -> int:
    answers = list(dictionary)
    if args.sample and args.sample < len(answers):
        random.seed(args.seed)
        answers = random.sample(answers, args.sample)

    print(f"--- Benchmark ({len(answers)} words) ---")
    results = benchmark(dictionary, answers, args.max_guesses, args.first_guess, verbose=True)
    print_results(results)
    return 0


def run_rank(dictionary: Dictionary, args: argparse.Namespace) -> int:
    session = SolveSession(dictionary, args.first_guess)
    try:
        for entry in args.guess or []:
            word, _, results = entry.partition('=')
            session.accept(parse_feedback(results), word=word)
    except SolverError as e:
        return error(str(e))

    ranked = rank_candidates(dictionary, session.store)
    print(f"{len(ranked)} candidates")
    for word, score in ranked[:args.top]:
        print(f"  {word} {score}")
    return 0


MODES = {
    'play': run_play,
    'suggest': run_suggest,
    'solve': run_solve,
    'benchmark': run_benchmark,
    'rank': run_rank,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Word puzzle solver (colored tile feedback)")
    parser.add_argument(
        "--mode", type=str, choices=sorted(MODES), default="play",
        help="play: interactive; suggest: next guess for a puzzle state; "
             "solve: trace one answer; benchmark: self-play a word list; "
             "rank: list candidates for --guess results."
    )
    parser.add_argument("--words", type=str, default=DEFAULT_WORDS_FILE,
                        help="Word list, one word per line.")
    parser.add_argument("--first-guess", type=str, default=OPENING_WORD,
                        help="Opening word used before any feedback.")
    parser.add_argument("--max-guesses", type=int, default=MAX_GUESSES,
                        help="Guesses allowed per puzzle (solve/benchmark).")
    parser.add_argument("--state", type=str, default="-",
                        help="Puzzle state JSON file for 'suggest' ('-' for stdin).")
    parser.add_argument("--answer", type=str, help="Target word for 'solve'.")
    parser.add_argument("--sample", type=int, default=0,
                        help="Benchmark a random sample of this many words (0 = all).")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --sample.")
    parser.add_argument("--guess", action="append", metavar="WORD=RESULTS",
                        help="Feedback for 'rank', e.g. rusty=---.X (repeatable).")
    parser.add_argument("--top", type=int, default=10, help="Candidates shown by 'rank'.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        dictionary = Dictionary.from_file(args.words)
    except OSError as e:
        return error(f"Can't open word list {args.words}: {e}")
    if len(dictionary) == 0:
        return error(f"No {dictionary.length}-letter words in {args.words}")
    if not is_valid_word(normalize_word(args.first_guess), dictionary.length):
        return error(f"--first-guess must be a {dictionary.length}-letter word, got '{args.first_guess}'")

    return MODES[args.mode](dictionary, args)


if __name__ == "__main__":
    sys.exit(main())
