"""Dictionary oracle for crossletters."""

from .oracle import WordOracle, DictionaryError
from .wordlist import WordList, can_form_word, normalize
from .data import load_small_words, load_large_words
from .fallback import FALLBACK_TARGETS, DEFAULT_TARGETS, DEFAULT_TARGET, COMMON_WORDS

__all__ = [
    # Interface
    "WordOracle",
    "DictionaryError",
    # Word lists
    "WordList",
    "can_form_word",
    "normalize",
    "load_small_words",
    "load_large_words",
    # Built-in fallbacks
    "FALLBACK_TARGETS",
    "DEFAULT_TARGETS",
    "DEFAULT_TARGET",
    "COMMON_WORDS",
]
