"""Line normalization for similarity comparison.

Normalization is deterministic and idempotent; the similarity scorer relies
on that for its equality shortcut.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]")


def _collapse_whitespace(text: str) -> str:
    """Collapse any run of whitespace into a single space."""
    # Examples: "Hello   world" → "Hello world", "a\t\nb" → "a b"
    return _WHITESPACE_RE.sub(" ", text)


def _drop_punctuation(text: str) -> str:
    """Remove every character that is not a word character or whitespace."""
    # Examples: "Hello, world!" → "Hello world", "don't" → "dont"
    return _NON_WORD_RE.sub("", text)


def normalize_text(text: str) -> str:
    """Canonicalize a line for comparison.

    Steps, in order:
    - Trim leading/trailing whitespace
    - Lower-case
    - Collapse whitespace runs to a single space
    - Strip everything that is not a letter, digit, underscore or whitespace

    Dropping punctuation can leave doubled or edge spaces ("a , b" → "a  b"),
    so whitespace is collapsed and trimmed once more to keep the result a
    fixed point of this function.
    """
    if not text:
        return ""
    s = text.strip().lower()
    s = _collapse_whitespace(s)
    s = _drop_punctuation(s)
    return _collapse_whitespace(s).strip()
