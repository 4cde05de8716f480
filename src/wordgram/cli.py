#!/usr/bin/env python

"""Command-line interface for wordgram"""

import argparse
import sys

from wordgram.lm import DEFAULT_REPORT_EVERY, NgramModel
from wordgram.normalize import text_to_words
from wordgram.presets import get_preset, print_presets
from wordgram.report import plot_metrics_history, print_evaluation_results


def _create_parser():
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Train a word 4-gram next-word prediction model and evaluate its predictions",
        epilog="Weights are estimated only when --heldout is given",
    )
    parser.add_argument("train", nargs="?", help="training text file")
    parser.add_argument("--heldout", type=str, metavar="FILE", help="held-out text for interpolation weights")
    parser.add_argument("--test", type=str, metavar="FILE", help="evaluate predictions on test file")
    parser.add_argument(
        "--report-every",
        type=int,
        default=DEFAULT_REPORT_EVERY,
        help=f"predictions between running reports (default: {DEFAULT_REPORT_EVERY})",
    )
    parser.add_argument("--exact-keys", action="store_true", help="use collision-free context keys")
    parser.add_argument("--refine", action="store_true", help="refine weights with a grid search on held-out data")
    parser.add_argument(
        "--preset",
        type=str,
        choices=["compatible", "exact", "refined"],
        help="use preset configuration (overrides --exact-keys and --refine)",
    )
    parser.add_argument("--list-presets", action="store_true", help="list available presets and exit")
    parser.add_argument("-S", "--stats", action="store_true", help="show statistics and exit")
    parser.add_argument("--suggest", type=str, metavar="WORDS", help="suggest next words after 1-3 words")
    parser.add_argument("-k", "--top-k", type=int, default=7, help="number of suggestions (default: 7)")
    parser.add_argument("--debug", action="store_true", help="interactive debug mode")
    parser.add_argument("--plot", type=str, metavar="PNG", help="plot metric history of --test to file")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output to stderr")
    return parser


def _create_model(args) -> NgramModel:
    """Create a model from a preset or from the individual flags."""
    if args.preset:
        preset_config = get_preset(args.preset)

        if args.verbose:
            print(f"Using preset: {args.preset}", file=sys.stderr)
            print(f"  {preset_config['description']}", file=sys.stderr)

        overrides = {"verbose": args.verbose}
        if args.report_every != DEFAULT_REPORT_EVERY:
            overrides["report_every"] = args.report_every
        return NgramModel.from_preset(args.preset, **overrides)

    return NgramModel(
        exact_keys=args.exact_keys,
        refine=args.refine,
        report_every=args.report_every,
        verbose=args.verbose,
    )


def _handle_suggest(lm: NgramModel, args) -> None:
    words = text_to_words(args.suggest)
    if not words:
        print("Error: --suggest needs at least one valid word", file=sys.stderr)
        sys.exit(1)

    suggestions = lm.suggest(words, top_k=args.top_k)
    if not suggestions:
        print(f"No suggestions after '{' '.join(words)}'")
        return

    print(f"Suggestions after '{' '.join(words[-3:])}':")
    for rank, (word, score) in enumerate(suggestions, start=1):
        print(f"  {rank}. {word:<20} {score:.5f}")


def main() -> None:
    """Main entry point for the wordgram command-line tool"""
    parser = _create_parser()
    args = parser.parse_args()

    if args.list_presets:
        print_presets()
        return

    if not args.train:
        parser.error("a training file is required")
    if args.report_every < 1:
        parser.error("--report-every must be >= 1")
    if args.top_k < 1:
        parser.error("--top-k must be >= 1")
    if args.plot and not args.test:
        parser.error("--plot requires --test")

    lm = _create_model(args)
    lm.train(args.train, heldout_path=args.heldout)

    if not lm.trained:
        print(f"Error: could not train on {args.train}", file=sys.stderr)
        sys.exit(1)

    if args.stats:
        lm.print_statistics()
        return

    if args.debug:
        lm.interactive_debug()
        return

    if args.suggest:
        _handle_suggest(lm, args)

    if args.test:
        if args.verbose:
            print(f"\nEvaluating on {args.test}...", file=sys.stderr)
        metrics = lm.test(args.test)
        if metrics is None:
            sys.exit(1)
        print_evaluation_results(metrics.report(), test_file=args.test)

        if args.plot:
            plot_metrics_history(lm.history, output_file=args.plot)


if __name__ == "__main__":
    main()
