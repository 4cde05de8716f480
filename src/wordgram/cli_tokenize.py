#!/usr/bin/env python

"""Command-line interface for corpus tokenization"""

import argparse
import sys

from wordgram.normalize import normalize_line, normalize_text


def _process_file(infile, outfile, args):
    """Process a single input file.

    Args:
        infile: Input file handle
        outfile: Output file handle
        args: Parsed arguments

    Returns:
        Tuple of (lines_processed, lines_skipped)
    """
    line_count = 0
    skipped_count = 0

    for line in infile:
        words = normalize_line(line)

        if not words:
            skipped_count += 1
            continue

        if args.phrases:
            print(normalize_text(line.rstrip("\r\n")), file=outfile)
        else:
            print(" ".join(words), file=outfile)
        line_count += 1

    return line_count, skipped_count


def _process_sources(input_files, outfile, args):
    total_lines = 0
    total_skipped = 0

    for input_source in input_files:
        if input_source == "-":
            if args.verbose:
                print("Processing: stdin", file=sys.stderr)
            lines, skipped = _process_file(sys.stdin, outfile, args)
        else:
            if args.verbose:
                print(f"Processing: {input_source}", file=sys.stderr)
            with open(input_source, encoding="utf-8", errors="replace") as infile:
                lines, skipped = _process_file(infile, outfile, args)

        total_lines += lines
        total_skipped += skipped

    return total_lines, total_skipped


def main() -> None:
    """Main entry point for the wordgram-tokenize tool"""
    parser = argparse.ArgumentParser(
        description="Tokenize a text corpus the way wordgram reads it",
        epilog="Output is one line of space-separated tokens per usable input line",
    )
    parser.add_argument("files", nargs="*", help="input text files (default: stdin)")
    parser.add_argument("-o", "--output", type=str, help="output file (default: stdout)")
    parser.add_argument(
        "-p", "--phrases", action="store_true", help="print delimited text with '#' phrase marks instead of tokens"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output to stderr")

    args = parser.parse_args()

    input_files = args.files if args.files else ["-"]

    try:
        if args.output:
            with open(args.output, "w") as outfile:
                total_lines, total_skipped = _process_sources(input_files, outfile, args)
        else:
            total_lines, total_skipped = _process_sources(input_files, sys.stdout, args)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(f"Processed {total_lines} lines", file=sys.stderr)
        if total_skipped > 0:
            print(f"Skipped {total_skipped} short or empty lines", file=sys.stderr)


if __name__ == "__main__":
    main()
