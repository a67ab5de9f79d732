"""In-memory word list implementing the dictionary oracle."""

import random
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from .oracle import DictionaryError


def normalize(word: str) -> str:
    """Uppercase and strip a word for lookups."""
    return word.strip().upper()


def can_form_word(word: str, letters: str) -> bool:
    """
    Returns True if every letter of `word` can be taken from `letters`
    without using any letter more often than it appears there.
    """
    available = Counter(letters)
    for letter, count in Counter(word).items():
        if available[letter] < count:
            return False
    return True


class WordList:
    """
    A case-insensitive set of words with length and prefix indexes.

    All indexes are built in the constructor; after that the object is only
    read, so it can be shared between concurrent generations.
    """

    def __init__(self, words: Iterable[str]):
        self._words: Set[str] = set()
        for word in words:
            word = normalize(word)
            if word and word.isascii() and word.isalpha():
                self._words.add(word)

        self._by_length: Dict[int, List[str]] = {}
        for word in sorted(self._words):
            self._by_length.setdefault(len(word), []).append(word)

        self._prefixes: Set[str] = set()
        for word in self._words:
            for end in range(1, len(word) + 1):
                self._prefixes.add(word[:end])

    @classmethod
    def from_file(cls, path: str | Path) -> "WordList":
        """
        Load a word list with one word per line. Blank lines and lines
        starting with '#' are ignored.

        Raises:
            DictionaryError: If the file cannot be read
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DictionaryError(f"Cannot read word list {path}: {e}") from e

        lines = (line.strip() for line in text.splitlines())
        return cls(line for line in lines if line and not line.startswith("#"))

    def __contains__(self, word: str) -> bool:
        return normalize(word) in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self):
        return iter(sorted(self._words))

    def is_word(self, word: str) -> bool:
        return normalize(word) in self._words

    def has_prefix(self, prefix: str) -> bool:
        """True if some word in the list starts with `prefix`."""
        return normalize(prefix) in self._prefixes

    def words_of_length(self, length: int) -> List[str]:
        return list(self._by_length.get(length, []))

    def random_word_of_length_hint(
        self,
        length: int,
        rng: Optional[random.Random] = None
    ) -> Optional[str]:
        """
        Pick a random word of exactly `length` letters.

        Returns None when the list holds no word of that length.
        """
        choices = self._by_length.get(length)
        if not choices:
            return None
        return (rng or random).choice(choices)

    def generate_subwords(
        self,
        word: str,
        min_length: int,
        max_candidates: int
    ) -> List[str]:
        """
        List the words that can be spelled from the letters of `word`.

        Scans the length index from the longest usable length down, so the
        result is ordered by length descending, then alphabetically, and holds
        at most `max_candidates` words.
        """
        letters = normalize(word)
        found: List[str] = []
        for length in range(len(letters), min_length - 1, -1):
            for candidate in self._by_length.get(length, []):
                if can_form_word(candidate, letters):
                    found.append(candidate)
                    if len(found) >= max_candidates:
                        return found
        return found
