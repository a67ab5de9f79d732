"""Collapse inflected forms (plurals, tenses, comparatives) into their root."""

from typing import Collection, Iterable, List, Tuple

# (suffix, length the word must exceed for the rule to apply)
SUFFIX_RULES: Tuple[Tuple[str, int], ...] = (
    ("S", 3),     # plural
    ("ED", 4),    # past tense
    ("ING", 5),   # gerund
    ("ER", 4),    # comparative
    ("EST", 5),   # superlative
)


def reduced_roots(word: str) -> List[str]:
    """The roots `word` reduces to under each suffix rule that applies to it."""
    return [
        word[:-len(suffix)]
        for suffix, min_length in SUFFIX_RULES
        if len(word) > min_length and word.endswith(suffix)
    ]


def is_derived_form(word: str, words: Collection[str]) -> bool:
    """True if a root of `word` is among `words`."""
    return any(root in words for root in reduced_roots(word))


def filter_inflections(candidates: Iterable[str]) -> List[str]:
    """
    Drop every candidate whose root is also a candidate.

    Roots are looked up in the original set, not in the filtered result, so
    "LONGER" and "LONGEST" are each judged against "LONG" independently.
    Order is preserved.
    """
    candidates = list(candidates)
    original = set(candidates)
    return [word for word in candidates if not is_derived_form(word, original)]


def is_redundant(word: str, placed: Collection[str]) -> bool:
    """
    True if `word` and an already placed word are inflections of each other,
    in either direction.
    """
    if is_derived_form(word, placed):
        return True
    return any(word in reduced_roots(other) for other in placed)
