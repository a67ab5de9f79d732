"""The dictionary interface consumed by the puzzle engine."""

import random
from typing import List, Optional, Protocol


class DictionaryError(Exception):
    """A word list could not be loaded or a dictionary query failed."""


class WordOracle(Protocol):
    """
    Anything that can answer the three questions the engine asks of a dictionary.

    Implementations must be safe for concurrent read-only queries.
    """

    def is_word(self, word: str) -> bool:
        ...

    def random_word_of_length_hint(
        self,
        length: int,
        rng: Optional[random.Random] = None
    ) -> Optional[str]:
        ...

    def generate_subwords(
        self,
        word: str,
        min_length: int,
        max_candidates: int
    ) -> List[str]:
        ...
