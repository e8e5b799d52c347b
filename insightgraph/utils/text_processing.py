"""
text_processing.py - Text normalization, tokenization and sentence splitting

Provides the text primitives every analysis stage builds on.
"""

import html
import re
import unicodedata
from typing import List

from ftfy import fix_text

# Anything that is not a letter, digit, whitespace, hyphen or apostrophe.
# ``\w`` admits the underscore, so it is listed explicitly.
_NON_WORD = re.compile(r"[^\w\s'\-]|_")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"[.!?。？！]+")

_HTML_TAG = re.compile(r"<[^>]+>")
_HTML_P = re.compile(r"<\s*(p|br)[^>]*>", re.I)


def tokenize(text: str) -> List[str]:
    """Split text into lowercase word tokens.

    Every character outside letters, digits, whitespace, hyphen and
    apostrophe becomes a space before splitting on whitespace.

    Args:
        text: Raw text of any length

    Returns:
        Tokens in reading order, never empty strings
    """
    if not text:
        return []
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [t for t in _WHITESPACE.split(cleaned) if t]


def split_sentences(text: str) -> List[str]:
    """Split text on runs of sentence punctuation (Latin and full-width).

    Args:
        text: Raw text

    Returns:
        Trimmed, non-empty sentence fragments
    """
    if not text:
        return []
    parts = _SENTENCE_BREAK.split(text.replace("\r", " "))
    return [s.strip() for s in parts if s.strip()]


def filter_terms(tokens: List[str], stopwords: frozenset,
                 min_len: int = 3) -> List[str]:
    """Drop short tokens and stopwords."""
    return [t for t in tokens if len(t) >= min_len and t not in stopwords]


def strip_html(raw: str) -> str:
    """Unescape entities, keep paragraph breaks, drop tags, fix mojibake."""
    s = html.unescape(raw)
    s = _HTML_P.sub("\n\n", s)
    s = _HTML_TAG.sub("", s)
    return fix_text(s)


def normalise(text: str) -> str:
    """CRLF→LF, nbsp→space, NFKC."""
    return unicodedata.normalize("NFKC",
                                 text.replace("\r\n", "\n").replace("\u00A0", " "))


def count_words(text: str) -> int:
    """Count whitespace-separated words in text."""
    return len(text.split())
