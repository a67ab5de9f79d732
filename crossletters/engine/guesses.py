"""Classify player guesses and record the accepted ones."""

import logging
from typing import Optional

from ..dictionary import DictionaryError, WordOracle, can_form_word, normalize
from .models import FoundWord, GuessOutcome, GuessTier
from .state import PuzzleState

logger = logging.getLogger(__name__)

# Guesses shorter than this are never words, whatever the dictionary says
MIN_GUESS_LENGTH = 3


class GuessValidator:
    """
    Checks guesses against the letter pool, the grid and two dictionaries.

    Attributes:
        small: Primary dictionary
        large: Secondary, larger dictionary (optional)
    """

    def __init__(self, small: WordOracle, large: Optional[WordOracle] = None):
        self.small = small
        self.large = large

    def classify(self, guess: str, state: PuzzleState) -> GuessTier:
        """
        Classify a guess.

        Tiers are checked in order: placed on the grid, accepted by the small
        dictionary, accepted by the large dictionary. Anything empty, shorter
        than three letters, or not spellable from the target's letters is
        NOT_A_WORD.
        """
        guess = normalize(guess)
        if len(guess) < MIN_GUESS_LENGTH or not can_form_word(guess, state.target_word):
            return GuessTier.NOT_A_WORD

        if guess in state.grid.placements:
            return GuessTier.IN_GRID
        if self._lookup(self.small, guess):
            return GuessTier.IN_SMALL_DICTIONARY
        if self.large is not None and self._lookup(self.large, guess):
            return GuessTier.IN_LARGE_DICTIONARY
        return GuessTier.NOT_A_WORD

    def add_guess(self, guess: str, state: PuzzleState) -> GuessOutcome:
        """
        Classify a guess and, if it is a new candidate word, record it.

        Only words in the puzzle's candidate set are recorded, so the found
        words never outnumber the candidates. Other real words keep their
        tier in the outcome but are not accepted. Grid words also get their
        cells revealed; the outcome carries the reveal status for UI feedback.
        """
        word = normalize(guess)
        tier = self.classify(word, state)
        outcome = GuessOutcome(guess=word, tier=tier)

        if tier == GuessTier.NOT_A_WORD:
            return outcome
        if word not in state.candidate_set:
            logger.debug("%s is a word but not part of this puzzle", word)
            return outcome

        if not state.add_found_word(FoundWord(word=word, tier=tier)):
            outcome.already_found = True
            return outcome

        outcome.accepted = True
        if tier == GuessTier.IN_GRID:
            outcome.status = state.show_word(word)
        logger.info("Accepted %s (%s), score %d", word, tier.value, state.score)
        return outcome

    def try_add(self, guess: str, state: PuzzleState) -> bool:
        """Record a guess; True if it was a new word."""
        return self.add_guess(guess, state).accepted

    def _lookup(self, dictionary: WordOracle, word: str) -> bool:
        try:
            return dictionary.is_word(word)
        except DictionaryError as e:
            logger.warning("Dictionary lookup failed for %s: %s", word, e)
            return False
