# Bundled word lists. small.txt holds common words and backs the primary
# dictionary. The secondary dictionary adds large.txt and the most frequent
# English words known to wordfreq.

import itertools
from functools import lru_cache
from pathlib import Path

from wordfreq import top_n_list

from ..wordlist import WordList

_DATA_DIR = Path(__file__).parent
SMALL_WORDS_FILE = _DATA_DIR / "small.txt"
LARGE_WORDS_FILE = _DATA_DIR / "large.txt"

# How many of wordfreq's most frequent English words join the large list
FREQUENCY_WORDS = 50_000


def _read_words(path: Path):
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            yield line


@lru_cache(maxsize=None)
def load_small_words() -> WordList:
    '''
    Returns the bundled primary word list.
    '''
    return WordList(_read_words(SMALL_WORDS_FILE))


@lru_cache(maxsize=None)
def load_large_words(frequency_words: int = FREQUENCY_WORDS) -> WordList:
    '''
    Returns the bundled secondary word list, a superset of the primary one.

    Args:
        frequency_words: Number of top wordfreq words to include; 0 leaves
            only the bundled files
    '''
    frequent = top_n_list("en", frequency_words, wordlist="best") if frequency_words else []
    return WordList(itertools.chain(
        _read_words(SMALL_WORDS_FILE),
        _read_words(LARGE_WORDS_FILE),
        frequent,
    ))
