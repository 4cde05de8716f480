"""Text normalization and tokenization for wordgram

Raw lines go through a fixed filter pipeline before they are split into
word tokens:

    raw pass -> lowercase -> hyphens -> delimiters -> final pass -> split

Phrase delimiters are rewritten to '#', word delimiters to a single space.
Only tokens that pass is_valid_word() reach the model.
"""

import re
from typing import Iterable, Iterator, Optional

PHRASE_DELIMITERS = '".?!#;:)('
WORD_DELIMITERS = ", "
DELIMITERS = PHRASE_DELIMITERS + WORD_DELIMITERS

PHRASE_MARK = "#"
WORD_MARK = " "
# Stands in for a period that must survive phrase splitting ("mr+" -> "mr.").
PERIOD_HOLDER = "+"

# Lines this short or shorter carry no usable text.
MIN_LINE_LENGTH = 5
MAX_WORD_LEN = 27

# Fragments left over from URLs and ordinals ("8th" -> "th") after digits are dropped.
JUNK_TOKENS = {"com", "www", "http", "th"}

# Digits and /:;<=>?@, then #$%&, then [\]^_`
_INVALID_CHARS = set(map(chr, range(47, 65))) | set(map(chr, range(35, 39))) | set(map(chr, range(91, 97)))

_SPLIT_RE = re.compile("[" + re.escape(DELIMITERS) + "]+")


def raw_pass(text: str) -> str:
    """Replace control characters, characters past 'z' and commas with spaces."""
    return "".join(WORD_MARK if (ord(c) < 32 or ord(c) > 122 or c == ",") else c for c in text)


def to_lower(text: str) -> str:
    """Lowercase ASCII letters only."""
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in text)


def scrub_hyphens(text: str) -> str:
    """Turn double hyphens into a phrase break and single hyphens into a word break.

    "the park--ignoring the weather" splits into two phrases, while
    "turquoise-green" becomes two words.
    """
    chars = list(text)
    i = 0
    while i < len(chars):
        if chars[i] == "-" and i + 1 < len(chars) and chars[i + 1] == "-":
            chars[i] = chars[i + 1] = PHRASE_MARK
            i += 2
            continue
        if chars[i] == "-":
            chars[i] = WORD_MARK
        i += 1
    return "".join(chars)


def delimit_text(text: str) -> str:
    """Rewrite phrase and word delimiters to the internal marks.

    A phrase delimiter also absorbs every delimiter right after it, so
    "to the park.  Today" becomes "to the park###Today".
    """
    chars = list(text)
    n = len(chars)
    i = 0
    while i < n:
        if chars[i] in PHRASE_DELIMITERS:
            chars[i] = PHRASE_MARK
            k = i + 1
            while k < n and chars[k] in DELIMITERS:
                chars[k] = PHRASE_MARK
                k += 1
            i = k
        elif chars[i] in WORD_DELIMITERS:
            chars[i] = WORD_MARK
            k = i + 1
            while k < n and chars[k] in WORD_DELIMITERS:
                chars[k] = WORD_MARK
                k += 1
            i = k
        else:
            i += 1
    return "".join(chars)


def final_pass(text: str) -> str:
    """Restore placeholder characters to their natural form."""
    return text.replace(PERIOD_HOLDER, ".")


def normalize_text(line: str) -> str:
    """Run the whole filter pipeline over one line of raw text."""
    text = raw_pass(line)
    text = to_lower(text)
    text = scrub_hyphens(text)
    text = delimit_text(text)
    return final_pass(text)


def tokenize(text: str) -> list[str]:
    """Split delimited text on every delimiter, dropping empty pieces."""
    return [token for token in _SPLIT_RE.split(text) if token]


def is_valid_word(token: str) -> bool:
    """Basic validity checks for a candidate word token.

    Rejects empty and over-long tokens, slang fragments starting with an
    apostrophe ('ll, 'em), tokens starting with '*', known junk fragments
    and anything containing digits or most punctuation.
    """
    if not token or len(token) > MAX_WORD_LEN:
        return False
    if token[0] == "'":
        return False
    if "*" in token[:2]:
        return False
    if token in JUNK_TOKENS:
        return False
    return not any(c in _INVALID_CHARS for c in token)


def text_to_words(text: str) -> list[str]:
    """Valid word tokens of a piece of text, however short."""
    return [token for token in tokenize(normalize_text(text)) if is_valid_word(token)]


def normalize_line(line: str) -> Optional[list[str]]:
    """Normalize a line of raw text and return its valid word tokens.

    Args:
        line: Input line, with or without its trailing newline

    Returns:
        List of tokens, or None if the line is too short to process
    """
    line = line.rstrip("\r\n")
    if len(line) <= MIN_LINE_LENGTH:
        return None

    return text_to_words(line)


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    """Lazily yield valid word tokens from any iterable of raw lines."""
    for line in lines:
        tokens = normalize_line(line)
        if tokens:
            yield from tokens


class TokenStream:
    """
    Restartable token iterator over a text file.

    Every iteration reopens the file, so the same stream can be consumed
    more than once. Opening errors surface as OSError on iteration.

    Example:
        for token in TokenStream("corpus.txt"):
            ...
    """

    def __init__(self, path: str, encoding: str = "utf-8"):
        self.path = path
        self.encoding = encoding

    def __iter__(self) -> Iterator[str]:
        with open(self.path, encoding=self.encoding, errors="replace") as f:
            yield from iter_tokens(f)

    def __repr__(self) -> str:
        return f"TokenStream({self.path!r})"
