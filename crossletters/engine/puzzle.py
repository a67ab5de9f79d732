import asyncio
import logging
import random
from typing import Generator, List, Optional

from ..dictionary import (
    DEFAULT_TARGET,
    DEFAULT_TARGETS,
    FALLBACK_TARGETS,
    DictionaryError,
    WordList,
    WordOracle,
    load_large_words,
    load_small_words,
    normalize,
)
from .config import AppConfig, GameSettings
from .grid import PlacementGrid
from .guesses import GuessValidator
from .models import GuessOutcome, GuessTier, WordStatus
from .morphology import filter_inflections
from .placement import GridPlacer, SimpleBlankAdjacency, make_policy
from .state import PuzzleState
from .subwords import SubwordExtractor, common_subwords, order_candidates

logger = logging.getLogger(__name__)

# Pipeline steps yield None at every point where generation may be suspended
Steps = Generator[None, None, PuzzleState]


def _run_to_completion(steps: Steps) -> PuzzleState:
    while True:
        try:
            next(steps)
        except StopIteration as stop:
            return stop.value


class PuzzleEngine:
    """
    Top-level entry point: generates puzzles and judges guesses.

    Generation runs target selection, subword extraction, inflection folding
    and grid placement in sequence. The async variant hands control back to
    the event loop between stages and between placement attempts.

    Attributes:
        small: Primary dictionary, used for extraction, placement and the
            small guess tier
        large: Secondary dictionary for the large guess tier
        config: Engine configuration
    """

    def __init__(
        self,
        small: WordOracle,
        large: Optional[WordOracle] = None,
        config: Optional[AppConfig] = None
    ):
        self.small = small
        self.large = large
        self.config = config or AppConfig()
        self.extractor = SubwordExtractor(small)
        self.validator = GuessValidator(small, large)
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(cls, config: Optional[AppConfig] = None, **config_kwargs) -> "PuzzleEngine":
        """
        Factory method loading the configured dictionaries.

        Args:
            config: Optional AppConfig instance
            **config_kwargs: Config parameters if config not provided

        Raises:
            DictionaryError: If a configured word list cannot be read
        """
        if config is None:
            config = AppConfig(**config_kwargs)

        paths = config.dictionaries
        small = WordList.from_file(paths.small) if paths.small else load_small_words()
        large = WordList.from_file(paths.large) if paths.large else load_large_words(paths.frequency_words)
        logger.info("Loaded dictionaries: %d small, %d large words", len(small), len(large))

        return cls(small=small, large=large, config=config)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, settings: Optional[GameSettings] = None, seed: Optional[int] = None) -> PuzzleState:
        """
        Generate a new puzzle.

        Args:
            settings: Word length bounds; defaults to the configured ones
            seed: Seed for this puzzle; drawn from the engine's RNG if omitted

        Returns:
            A fresh PuzzleState. A puzzle with few or no placed words is a
            valid result, not an error.
        """
        return _run_to_completion(self._pipeline(settings, seed))

    async def generate_async(self, settings: Optional[GameSettings] = None, seed: Optional[int] = None) -> PuzzleState:
        """
        Generate a new puzzle, yielding to the event loop between steps.

        Cancelling the task discards the partially built puzzle.
        """
        steps = self._pipeline(settings, seed)
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value
            await asyncio.sleep(0)

    def _pipeline(self, settings: Optional[GameSettings], seed: Optional[int]) -> Steps:
        settings = settings or self.config.settings
        generation = self.config.generation
        if seed is None:
            seed = self._rng.randrange(2**32)
        rng = random.Random(seed)

        target = self.choose_target(settings.max_word_length, rng)
        logger.info("Target word: %s (seed %d)", target, seed)
        yield

        extracted = self._extract(target, settings.min_word_length)
        candidates = filter_inflections(extracted)
        logger.info(
            "Found %d subwords of %s, %d after folding inflections",
            len(extracted), target, len(candidates)
        )
        yield

        placer_seed = rng.randrange(2**32)
        policy = make_policy(generation.policy, self.small)
        grid = PlacementGrid.empty(generation.grid_width, generation.grid_height)
        placer = GridPlacer(policy, generation.max_placed_words, generation.padding, placer_seed)
        try:
            for _ in placer.iter_place(grid, candidates):
                yield
        except DictionaryError as e:
            logger.warning("Dictionary failed during placement (%s), retrying with simple adjacency", e)
            grid = PlacementGrid.empty(generation.grid_width, generation.grid_height)
            placer = GridPlacer(SimpleBlankAdjacency(), generation.max_placed_words, generation.padding, placer_seed)
            for _ in placer.iter_place(grid, candidates):
                yield

        return PuzzleState(target_word=target, candidates=candidates, grid=grid, seed=seed)

    def choose_target(self, length: int, rng: random.Random) -> str:
        """
        Pick the target word.

        Asks the dictionary first. An answer that is missing, of the wrong
        length, not spelled with the letters A to Z or not itself a word is
        discarded in favour of the built-in list for that length.
        """
        try:
            suggested = self.small.random_word_of_length_hint(length, rng=rng)
        except DictionaryError as e:
            logger.warning("Dictionary could not suggest a %d-letter word: %s", length, e)
            suggested = None

        if suggested:
            word = normalize(suggested)
            if len(word) == length and word.isascii() and word.isalpha() and self._is_word(word, default=False):
                return word
            logger.warning("Dictionary suggested unusable target %r", suggested)

        fallback = list(FALLBACK_TARGETS.get(length, []))
        rng.shuffle(fallback)
        for word in fallback:
            if self._is_word(word, default=True):
                logger.warning("Using fallback target %s", word)
                return word

        return DEFAULT_TARGETS.get(length, DEFAULT_TARGET)

    def _extract(self, target: str, min_length: int) -> List[str]:
        generation = self.config.generation
        try:
            if generation.use_oracle_subwords:
                return self.extractor.extract_from_oracle(target, min_length, generation.max_subwords)
            return self.extractor.extract(target, min_length, generation.max_arrangements)
        except DictionaryError as e:
            logger.warning("Dictionary failed while extracting subwords of %s (%s), using common words", target, e)
            words = common_subwords(target, min_length)
            if len(target) >= min_length:
                words.append(target)
            return order_candidates(dict.fromkeys(words))

    def _is_word(self, word: str, default: bool) -> bool:
        try:
            return self.small.is_word(word)
        except DictionaryError as e:
            logger.warning("Dictionary lookup failed for %s: %s", word, e)
            return default

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------

    def classify(self, guess: str, state: PuzzleState) -> GuessTier:
        return self.validator.classify(guess, state)

    def add_guess(self, guess: str, state: PuzzleState) -> GuessOutcome:
        return self.validator.add_guess(guess, state)

    def try_add(self, guess: str, state: PuzzleState) -> bool:
        return self.validator.try_add(guess, state)

    def show_word(self, word: str, state: PuzzleState) -> WordStatus:
        return state.show_word(normalize(word))

    def reveal_temporarily(self, word: str, state: PuzzleState) -> None:
        state.reveal_temporarily(normalize(word))

    def hide(self, word: str, state: PuzzleState) -> None:
        state.hide(normalize(word))
