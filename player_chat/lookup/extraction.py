"""
Heuristic player-name extraction from free text.

Patterns are tried in order; the first match wins. Without a match the
first three words longer than two characters are used.
"""

import re

# Letters (any script) and whitespace; digits and punctuation end a name
_NAME = r"((?:[^\W\d_]|\s)+?)"

SUBJECT_PATTERNS = [
    re.compile(rf"about\s+{_NAME}(\?|$|stats|info)", re.IGNORECASE),
    re.compile(rf"who\s+is\s+{_NAME}(\?|$)", re.IGNORECASE),
    re.compile(rf"tell\s+me\s+about\s+{_NAME}(\?|$)", re.IGNORECASE),
    re.compile(rf"info\s+about\s+{_NAME}(\?|$)", re.IGNORECASE),
    re.compile(rf"{_NAME}\s+stats", re.IGNORECASE),
    re.compile(rf"{_NAME}\s+info", re.IGNORECASE),
]

FALLBACK_WORDS = 3
MIN_WORD_LENGTH = 3


def extract_subject(text: str) -> str:
    """
    Guess which player a message is about.

    Examples:
        >>> extract_subject("Tell me about Lionel Messi")
        'Lionel Messi'
        >>> extract_subject("Who is Erling Haaland?")
        'Erling Haaland'
        >>> extract_subject("kylian mbappe stats")
        'kylian mbappe'
    """
    text = text.strip().rstrip(".!")

    for pattern in SUBJECT_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return " ".join(match.group(1).split())

    words = [w for w in text.split(" ") if len(w) >= MIN_WORD_LENGTH]
    if words:
        return " ".join(words[:FALLBACK_WORDS])

    return text
