"""
Token counting utilities for the Stanford NER stream wrapper.

The engine never marks the end of a response, so completion is detected by
matching the number of tokens written against the number of tagged tokens read
back. Both sides ignore single-character tokens (mostly punctuation).
"""

from typing import List

from nltk.tokenize import TreebankWordTokenizer

# Penn Treebank escapes emitted by the engine, mapped back to literal characters
ESCAPED_TOKENS = {
    "``": "'",
    "''": "'",
    "-LRB-": "(",
    "-RRB-": ")",
    "-LSB-": "[",
    "-RSB-": "]",
    "-LCB-": "{",
    "-RCB-": "}"
}

MIN_COUNTED_TOKEN_LENGTH = 2

_tokenizer = TreebankWordTokenizer()

def tokenize(text: str) -> List[str]:
    """Treebank tokenization of plain text."""
    if not text:
        return []
    return _tokenizer.tokenize(text)

def unescape_token(word: str) -> str:
    """Recover the literal character for an escaped punctuation token."""
    return ESCAPED_TOKENS.get(word, word)

def tagged_words(line: str) -> List[str]:
    """Split a ``word/TAG`` line and return the unescaped words."""
    words = []
    for token in line.split():
        word, sep, _ = token.rpartition("/")
        if not sep:
            word = token
        words.append(unescape_token(word.strip()))
    return words

def _is_counted(token: str) -> bool:
    return len(token) >= MIN_COUNTED_TOKEN_LENGTH

def count_tokens(text: str) -> int:
    """Count the tokens of plain text, ignoring single character tokens.

    The Treebank tokenizer rewrites double quotes as two backticks or two
    apostrophes; they are unescaped here exactly like the engine's tagged
    output so both sides of the count agree.
    """
    return sum(1 for token in tokenize(text) if _is_counted(unescape_token(token)))

def count_tagged_tokens(line: str) -> int:
    """Count the tokens of a tagged engine line, ignoring single character tokens."""
    return sum(1 for word in tagged_words(line) if _is_counted(word))
