#!/usr/bin/env python
"""
Example: Compare key layouts and weight estimation on one corpus.

This demonstrates how to:
1. Train one model per preset
2. Evaluate each on test data
3. Compare the final metrics side by side
4. Ask the best model for suggestions
"""

import sys

from wordgram import NgramModel, list_presets

if len(sys.argv) < 3:
    print(f"Usage: {sys.argv[0]} TRAIN_FILE HELDOUT_FILE [TEST_FILE]")
    sys.exit(1)

TRAIN_FILE = sys.argv[1]
HELDOUT_FILE = sys.argv[2]
TEST_FILE = sys.argv[3] if len(sys.argv) > 3 else HELDOUT_FILE


def main():
    print("=" * 70)
    print("Preset Comparison Example")
    print("=" * 70)

    results = {}
    models = {}

    for name in list_presets():
        print(f"\n>>> Training with preset '{name}'...")
        lm = NgramModel.from_preset(name)
        lm.train(TRAIN_FILE, heldout_path=HELDOUT_FILE)
        if not lm.trained:
            sys.exit(1)

        metrics = lm.test(TEST_FILE)
        if metrics is None:
            sys.exit(1)

        results[name] = metrics.report()
        models[name] = lm
        print("Weights: " + " ".join(f"{lm.weights[order]:.3f}" for order in sorted(lm.weights)))

    print()
    print(f"{'Preset':<12} {'Recall':>8} {'Top-1':>8} {'Top-7':>8} {'MRR':>8}")
    print("-" * 48)
    for name, report in results.items():
        print(
            f"{name:<12} {report['recall'] * 100:>7.2f}% {report['bool_accuracy'] * 100:>7.2f}%"
            f" {report['top7_accuracy'] * 100:>7.2f}% {report['real_accuracy']:>8.4f}"
        )

    best = max(results, key=lambda name: results[name]["top7_accuracy"])
    print(f"\nBest top-7 accuracy: {best}")

    print("\n>>> Suggestions after 'one of the':")
    for word, score in models[best].suggest(["one", "of", "the"]):
        print(f"  {word:<20} {score:.5f}")

    print("\n" + "=" * 70)


if __name__ == "__main__":
    main()
