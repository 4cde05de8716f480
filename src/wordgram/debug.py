"""Debug and interactive tools for word n-gram models"""

from wordgram.interpolation import MIN_CONTEXT
from wordgram.keys import NGRAM
from wordgram.stats import table_statistics
from wordgram.vocab import INVALID_KEY

DEBUG_RESULTS = 20


def debug_context(lm, words: list[str], max_results: int = DEBUG_RESULTS) -> None:
    """Show how the model ranks the next word after some preceding words.

    For the context this prints:
    - the word key of each context word (0 for unknown words)
    - the lookup key and group size at every order
    - the top candidates, with each order's probability for them

    Args:
        lm: NgramModel instance
        words: Preceding words, oldest first (only the last three are used)
        max_results: How many candidates to show
    """
    recent = list(words)[-MIN_CONTEXT:]
    if not recent:
        print("Empty context!")
        return

    context = [INVALID_KEY] * (MIN_CONTEXT - len(recent)) + [lm.vocab.lookup(w) for w in recent]
    tables = lm.tables

    print(f"Debugging context: '{' '.join(recent)}'")
    print(f"Keys: {context}")
    print("=" * 60)

    for order in range(NGRAM, 1, -1):
        key = tables.context_key(order, context)
        group = tables[order].group(key)
        if group is None:
            print(f"  {order}-gram key {key:#x}: not found")
        else:
            print(f"  {order}-gram key {key:#x}: {len(group)} candidates")

    results = lm.predictor.predict_context(context)
    print()
    print(f"{len(results)} candidates, showing {min(len(results), max_results)}")
    print(f"{'#':>3} {'word':<16} {'score':>9} {'P1':>8} {'P2':>8} {'P3':>8} {'P4':>8}")
    print("-" * 66)

    key2 = tables.context_key(2, context)
    key3 = tables.context_key(3, context)
    key4 = tables.context_key(4, context)
    for rank, (word_key, score) in enumerate(results[:max_results], start=1):
        word = lm.vocab.key_to_word.get(word_key, f"<{word_key}>")
        print(
            f"{rank:>3} {word:<16} {score:>9.5f}"
            f" {tables.get_prob(1, word_key, word_key):>8.5f}"
            f" {tables.get_prob(2, key2, word_key):>8.5f}"
            f" {tables.get_prob(3, key3, word_key):>8.5f}"
            f" {tables.get_prob(4, key4, word_key):>8.5f}"
        )


def interactive_debug(lm) -> None:
    """Start an interactive debug session where you can type a context
    and see the ranked next-word candidates.

    Args:
        lm: NgramModel instance
    """
    print("Word N-gram Interactive Debug Mode")
    print("=" * 50)
    print("Commands:")
    print("  <words>    - Debug the prediction after these words")
    print("  /stats     - Show model statistics")
    print("  /weights   - Show interpolation weights")
    print("  /quit      - Exit debug mode")
    print()

    while True:
        try:
            command = input("debug> ").strip()

            if command.lower() in ["/quit", "/exit", "/q", "quit", "exit", "q"]:
                print("Goodbye!")
                break
            elif command.lower() in ["/stats", "stats"]:
                print_stats(lm)
            elif command.lower() in ["/weights", "weights"]:
                for order in sorted(lm.weights):
                    print(f"  w{order} = {lm.weights[order]:.4f}")
            elif command:
                debug_context(lm, command.lower().split())
            else:
                print("Please enter some words to debug or a command")

        except EOFError:
            print("\nGoodbye!")
            break
        except KeyboardInterrupt:
            print("\nGoodbye!")
            break


def print_stats(lm) -> None:
    """Print a short model summary to stdout.

    Args:
        lm: NgramModel instance
    """
    print("Model Statistics:")
    print("=" * 50)
    print(f"Vocabulary size: {len(lm.vocab)}")
    print(f"Key sequence length: {lm.sequence_length}")
    print(f"N-gram counts: {lm.tables.counts()}")

    unigram = table_statistics(lm.tables[1])
    print(f"Unigram entropy: {unigram['total_entropy']:.4f} bits")
    print(f"Unigram perplexity: {unigram['total_perplexity']:.2f}")
