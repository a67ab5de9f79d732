"""
Subword extraction: every dictionary word spellable from the target's letters.

Two paths share one output contract (deduplicated, multiset-valid,
dictionary-valid, ordered by length descending then alphabetically):

1. `SubwordExtractor.extract` enumerates letter arrangements and asks the
   dictionary about each one.
2. `SubwordExtractor.extract_from_oracle` asks the dictionary for its own
   subword list and re-validates it.
"""

import itertools
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Set

from ..dictionary import COMMON_WORDS, WordOracle, can_form_word, normalize

logger = logging.getLogger(__name__)

# Fewer surviving candidates than this triggers the common-word supplement
MIN_CANDIDATES = 5
# The supplement stops once the candidate set reaches this size
SUPPLEMENTED_CANDIDATES = 10


def iter_arrangements(
    letters: str,
    length: int,
    prefix_ok: Optional[Callable[[str], bool]] = None
) -> Iterator[str]:
    """
    Yield ordered selections of `length` letters drawn without replacement
    from `letters`.

    Uses an explicit stack instead of recursion. A letter repeated in the
    pool is branched on once per position, so identical strings reached
    through different letter indexes are mostly avoided. When `prefix_ok` is
    given, prefixes it rejects are not extended.
    """
    stack = [("", letters)]
    while stack:
        prefix, remaining = stack.pop()
        if len(prefix) == length:
            yield prefix
            continue

        seen: Set[str] = set()
        branches = []
        for i, letter in enumerate(remaining):
            if letter in seen:
                continue
            seen.add(letter)
            candidate = prefix + letter
            if prefix_ok is not None and not prefix_ok(candidate):
                continue
            branches.append((candidate, remaining[:i] + remaining[i + 1:]))
        # Reversed so arrangements come out in pool order
        stack.extend(reversed(branches))


def order_candidates(words: Iterable[str]) -> List[str]:
    """Sort by length descending, then alphabetically."""
    return sorted(words, key=lambda w: (-len(w), w))


def common_subwords(target: str, min_length: int, words: Sequence[str] = COMMON_WORDS) -> List[str]:
    """Common words spellable from `target`, checked by letter counts only."""
    target = normalize(target)
    found = [w for w in words if len(w) >= min_length and can_form_word(w, target)]
    return order_candidates(dict.fromkeys(found))


class SubwordExtractor:
    """
    Builds the candidate set for a target word.

    Attributes:
        dictionary: Oracle deciding which strings are words
        fallback_words: Common words used to pad a thin candidate set
        prune_prefixes: Skip arrangements whose prefix starts no word, when
            the dictionary can answer prefix queries
    """

    def __init__(
        self,
        dictionary: WordOracle,
        fallback_words: Sequence[str] = COMMON_WORDS,
        prune_prefixes: bool = True
    ):
        self.dictionary = dictionary
        self.fallback_words = list(fallback_words)
        self.prune_prefixes = prune_prefixes

    def extract(self, target: str, min_length: int, max_candidates: int) -> List[str]:
        """
        Enumerate arrangements of the target's letters and keep the words.

        Args:
            target: The word whose letters form the pool
            min_length: Shortest subword to consider
            max_candidates: Most arrangements to explore before giving up on
                the rest; bounds the work for long targets

        Returns:
            Ordered candidate list
        """
        target = normalize(target)
        prefix_ok = getattr(self.dictionary, "has_prefix", None) if self.prune_prefixes else None

        arrangements = itertools.chain.from_iterable(
            iter_arrangements(target, length, prefix_ok)
            for length in range(min_length, len(target) + 1)
        )
        explored = set(itertools.islice(arrangements, max_candidates))
        if next(arrangements, None) is not None:
            logger.info("Arrangement budget of %d reached for %s", max_candidates, target)

        words = self._validate(target, min_length, explored)
        return self._finish(target, min_length, words)

    def extract_from_oracle(self, target: str, min_length: int, max_candidates: int) -> List[str]:
        """
        Ask the dictionary for the subwords directly, then validate them the
        same way enumerated arrangements are validated.
        """
        target = normalize(target)
        suggested = {normalize(w) for w in self.dictionary.generate_subwords(target, min_length, max_candidates)}
        words = self._validate(target, min_length, suggested)
        return self._finish(target, min_length, words)

    def _validate(self, target: str, min_length: int, strings: Iterable[str]) -> Set[str]:
        return {
            s for s in strings
            if len(s) >= min_length
            and can_form_word(s, target)
            and self.dictionary.is_word(s)
        }

    def _finish(self, target: str, min_length: int, words: Set[str]) -> List[str]:
        if len(words) < MIN_CANDIDATES:
            logger.warning(
                "Only %d subwords for %s, adding common words", len(words), target
            )
            for word in self.fallback_words:
                if len(words) >= SUPPLEMENTED_CANDIDATES:
                    break
                if (
                    word not in words
                    and len(word) >= min_length
                    and can_form_word(word, target)
                    and self.dictionary.is_word(word)
                ):
                    words.add(word)

        candidates = order_candidates(words)
        logger.debug("Candidates for %s: %s", target, candidates)
        return candidates
