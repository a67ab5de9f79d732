"""
Command-line entry point: generate a puzzle and optionally play it.

Usage:
    python -m crossletters.main
    python -m crossletters.main config.yaml --seed 42 --solution
    python -m crossletters.main --max-length 6 --play --output puzzle.json
"""

import argparse
import logging
import sys
from pathlib import Path

from .dictionary import DictionaryError
from .engine import AppConfig, GuessTier, PuzzleEngine, PuzzleState, WordStatus, load_config


def _print_state(state: PuzzleState, solution: bool = False) -> None:
    print(f"Letters: {' '.join(sorted(state.letters))}")
    print(state.render(solution=solution))
    print(f"Score: {state.score}  Found: {len(state.found_words)}/{len(state.placed_words)} grid words")


def play(engine: PuzzleEngine, state: PuzzleState) -> None:
    """Read guesses from stdin until the grid is complete or input ends."""
    print("Type a word and press Enter (empty line to quit).")
    while not state.is_complete:
        try:
            guess = input("> ").strip()
        except EOFError:
            break
        if not guess:
            break

        outcome = engine.add_guess(guess, state)
        if outcome.tier == GuessTier.NOT_A_WORD:
            print(f"{outcome.guess}: not a word")
        elif outcome.already_found:
            print(f"{outcome.guess}: already found")
        elif not outcome.accepted:
            print(f"{outcome.guess}: a word, but not in this puzzle")
        elif outcome.status == WordStatus.SHOWN_FIRST_TIME:
            print(f"{outcome.guess}: on the grid!")
        elif outcome.status == WordStatus.ALREADY_IN_GRID:
            print(f"{outcome.guess}: on the grid (already showing)")
        else:
            print(f"{outcome.guess}: bonus word ({outcome.tier.value.lower()})")
        _print_state(state)

    if state.is_complete:
        print("Puzzle complete!")


def main():
    parser = argparse.ArgumentParser(
        description="Generate a crossword-style puzzle from the letters of one word",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  settings:
    min_word_length: 3
    max_word_length: 7
  generation:
    grid_width: 15
    grid_height: 15
    policy: full
  seed: 42
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults are used if omitted)"
    )
    parser.add_argument("--seed", type=int, help="Seed for the puzzle")
    parser.add_argument("--min-length", type=int, help="Shortest subword length")
    parser.add_argument("--max-length", type=int, help="Target word length")
    parser.add_argument(
        "--policy",
        choices=["full", "simple"],
        help="Adjacency policy for crossings"
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to save the puzzle as JSON"
    )
    parser.add_argument(
        "--solution",
        action="store_true",
        help="Print the solved grid"
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the puzzle interactively"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Log progress (-vv for placement detail)"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    try:
        config = load_config(args.config) if args.config else AppConfig()
        overrides = config.model_dump()
        if args.seed is not None:
            overrides["seed"] = args.seed
        if args.min_length is not None:
            overrides["settings"]["min_word_length"] = args.min_length
        if args.max_length is not None:
            overrides["settings"]["max_word_length"] = args.max_length
        if args.policy:
            overrides["generation"]["policy"] = args.policy
        config = AppConfig(**overrides)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        engine = PuzzleEngine.create(config=config)
    except DictionaryError as e:
        print(f"Error loading dictionary: {e}", file=sys.stderr)
        sys.exit(1)

    state = engine.generate(seed=config.seed)

    print(f"Puzzle seed: {state.seed}")
    _print_state(state, solution=args.solution)

    if args.play:
        print()
        play(engine, state)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(state.model_dump_json(indent=2))
        print(f"Puzzle saved to: {output_path}")

    # Print summary
    print()
    print("=== Puzzle Summary ===")
    summary = state.get_state()
    print(f"Target word: {summary['target_word']}")
    print(f"Candidates: {summary['num_candidates']}")
    if args.solution or state.is_complete:
        print(f"Placed words: {', '.join(summary['placed_words'])}")
    else:
        print(f"Placed words: {len(summary['placed_words'])}")
    print(f"Score: {summary['score']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
