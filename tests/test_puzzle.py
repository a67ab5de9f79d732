"""Tests for the puzzle engine: generation, fallbacks and play forwarding."""

import asyncio
import logging
import random

import pytest

from crossletters.dictionary import FALLBACK_TARGETS, DictionaryError, WordList, can_form_word
from crossletters.engine import (
    AppConfig,
    DictionaryConfig,
    GameSettings,
    GenerationConfig,
    GuessTier,
    PuzzleEngine,
    WordStatus,
    verify_grid,
)


GARDEN_WORDS = [
    "GARDEN", "DANGER", "GANDER", "RANGE", "GRADE", "RAGED", "ANGER",
    "DEAR", "READ", "NEAR", "EARN", "RAGE", "GRAND", "END", "DEN", "RED",
    "AND", "RAN", "EAR", "ERA", "ARE", "AGE", "NAG", "RAG",
]

# Words a larger dictionary knows that the GARDEN family list leaves out
EXTRA_GARDEN_WORDS = [
    "NERD", "DARN", "NARD", "RAND", "GNAR", "DRAG", "EGAD", "AGED",
    "REDAN", "GRANDE", "DANG", "GRAN", "DREG", "ANE",
]

SIX_LETTERS = AppConfig(settings=GameSettings(min_word_length=3, max_word_length=6))


class FailingOracle:
    """A dictionary that fails every query."""

    def is_word(self, word):
        raise DictionaryError("dictionary offline")

    def random_word_of_length_hint(self, length, rng=None):
        raise DictionaryError("dictionary offline")

    def generate_subwords(self, word, min_length, max_candidates):
        raise DictionaryError("dictionary offline")


class WrongLengthOracle(WordList):
    """A word list whose target suggestions are never the requested length."""

    def random_word_of_length_hint(self, length, rng=None):
        return "GARDENS"


class AccentedOracle(WordList):
    """A word list that only ever suggests an accented target."""

    def random_word_of_length_hint(self, length, rng=None):
        return "CAFÉ"

    def is_word(self, word):
        return word == "CAFÉ" or super().is_word(word)


def garden_engine(config=SIX_LETTERS):
    return PuzzleEngine(small=WordList(GARDEN_WORDS), config=config)


def assert_well_formed(state, dictionary):
    """Checks every generated puzzle must pass."""
    assert verify_grid(state.grid) == []
    assert set(state.placed_words) <= set(state.candidates)
    for word in state.candidates:
        assert can_form_word(word, state.target_word), word
    for word in state.grid.words_on_grid():
        assert dictionary.is_word(word), word


class TestGenerate:
    """Test synchronous generation."""

    def test_garden_family(self):
        """A six-letter target from the GARDEN family yields a valid grid."""
        engine = garden_engine()
        state = engine.generate(seed=7)
        assert state.target_word in {"GARDEN", "DANGER", "GANDER"}
        assert state.seed == 7
        assert len(state.placed_words) >= 1
        assert state.grid.cropped
        assert state.found_words == {}
        assert state.revealed == set()
        assert_well_formed(state, engine.small)

    def test_candidates_are_folded(self):
        """Inflections of other candidates never reach the candidate set."""
        state = garden_engine().generate(seed=7)
        assert "RAGED" not in state.candidates or "RAG" not in state.candidates

    def test_deterministic_with_seed(self):
        """The same seed gives the same puzzle."""
        first = garden_engine().generate(seed=11)
        second = garden_engine().generate(seed=11)
        assert first.target_word == second.target_word
        assert first.candidates == second.candidates
        assert first.grid.placements == second.grid.placements

    def test_deterministic_with_config_seed(self):
        """Engines built with the same configured seed produce the same puzzles."""
        config = SIX_LETTERS.model_copy(update={"seed": 3})
        first = garden_engine(config)
        second = garden_engine(config)
        a, b = first.generate(), second.generate()
        assert a.seed == b.seed
        assert a.grid.placements == b.grid.placements

    def test_settings_override(self):
        """Per-call settings choose the target length."""
        state = garden_engine().generate(GameSettings(min_word_length=4, max_word_length=5), seed=2)
        assert len(state.target_word) == 5
        assert all(len(w) >= 4 for w in state.candidates)

    def test_simple_policy(self):
        """The simple adjacency policy also gives a consistent grid."""
        config = AppConfig(
            settings=GameSettings(max_word_length=6),
            generation=GenerationConfig(policy="simple"),
        )
        state = garden_engine(config).generate(seed=5)
        assert verify_grid(state.grid) == []

    def test_padding(self):
        """Configured padding leaves a blank border."""
        config = AppConfig(
            settings=GameSettings(max_word_length=6),
            generation=GenerationConfig(padding=1),
        )
        state = garden_engine(config).generate(seed=5)
        assert set(state.grid.letters[0]) == {"_"}
        assert set(state.grid.letters[-1]) == {"_"}

    def test_oracle_subwords_match_enumeration(self):
        """Both extraction paths produce the same puzzle."""
        enumerated = garden_engine().generate(seed=4)
        config = SIX_LETTERS.model_copy(update={
            "generation": GenerationConfig(use_oracle_subwords=True),
        })
        suggested = garden_engine(config).generate(seed=4)
        assert suggested.candidates == enumerated.candidates
        assert suggested.grid.placements == enumerated.grid.placements

    def test_no_placeable_subwords(self):
        """A dictionary with nothing usable still produces a (empty) puzzle."""
        engine = PuzzleEngine(small=WordList(["CAT"]), config=SIX_LETTERS)
        state = engine.generate(seed=1)
        assert state.target_word == "SIMPLE"
        assert state.candidates == []
        assert state.placed_words == []
        assert (state.grid.width, state.grid.height) == (0, 0)
        assert state.is_complete


class TestGenerateAsync:
    """Test cooperative generation."""

    def test_matches_sync(self):
        """Async generation gives the same puzzle as sync generation."""
        sync_state = garden_engine().generate(seed=9)
        async_state = asyncio.run(garden_engine().generate_async(seed=9))
        assert async_state.target_word == sync_state.target_word
        assert async_state.grid.placements == sync_state.grid.placements

    def test_cancellation(self):
        """Cancelling a generation in flight raises CancelledError."""
        engine = garden_engine()

        async def run():
            task = asyncio.create_task(engine.generate_async(seed=9))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())

    def test_concurrent_generations(self):
        """Several generations can share one engine."""
        engine = garden_engine()

        async def run():
            return await asyncio.gather(*(engine.generate_async(seed=s) for s in range(4)))

        states = asyncio.run(run())
        for seed, state in enumerate(states):
            assert state.seed == seed
            assert state.grid.placements == garden_engine().generate(seed=seed).grid.placements


class TestFallbacks:
    """Test recovery from dictionary problems."""

    def test_failing_dictionary(self, caplog):
        """A dead dictionary falls back to built-in targets and common words."""
        engine = PuzzleEngine(small=FailingOracle(), config=SIX_LETTERS)
        with caplog.at_level(logging.WARNING, logger="crossletters"):
            state = engine.generate(seed=3)
        assert state.target_word in FALLBACK_TARGETS[6]
        assert len(state.placed_words) >= 1
        assert verify_grid(state.grid) == []
        assert any("fallback target" in r.getMessage() for r in caplog.records)

    def test_unusable_suggestion(self):
        """A suggestion of the wrong length is replaced by a fallback the dictionary knows."""
        engine = PuzzleEngine(small=WrongLengthOracle(GARDEN_WORDS), config=SIX_LETTERS)
        state = engine.generate(seed=3)
        assert state.target_word in {"GARDEN", "DANGER"}

    def test_default_target(self):
        """When no fallback is a word, the per-length default is used."""
        engine = PuzzleEngine(small=WordList(["CAT"]))
        assert engine.choose_target(6, random.Random(0)) == "SIMPLE"
        assert engine.choose_target(4, random.Random(0)) == "WORD"

    def test_last_resort_target(self):
        """Lengths without defaults use the last-resort word."""
        engine = PuzzleEngine(small=WordList(["CAT"]))
        assert engine.choose_target(11, random.Random(0)) == "PUZZLE"

    def test_dictionary_suggestion_used(self):
        """A suggestion of the right length that is a word becomes the target."""
        engine = PuzzleEngine(small=WordList(["garden"]))
        assert engine.choose_target(6, random.Random(0)) == "GARDEN"

    def test_accented_words_skipped(self):
        """Accented words are never picked as targets or placed."""
        engine = PuzzleEngine(small=WordList(["CAFÉ", "CAFE", "ACE", "FACE"]))
        state = engine.generate(GameSettings(min_word_length=3, max_word_length=4), seed=0)
        assert state.target_word in {"CAFE", "FACE"}
        assert "CAFÉ" not in state.candidates
        assert verify_grid(state.grid) == []

    def test_accented_suggestion(self):
        """A non-ASCII suggestion is replaced by a fallback target."""
        engine = PuzzleEngine(small=AccentedOracle(["NEAR", "READ"]))
        assert engine.choose_target(4, random.Random(0)) in {"NEAR", "READ"}


class TestCreate:
    """Test the engine factory."""

    def test_bundled_dictionaries(self):
        """With no configured files the bundled lists are used."""
        engine = PuzzleEngine.create()
        assert len(engine.large) > len(engine.small) > 100
        state = engine.generate(seed=1)
        assert len(state.target_word) == 7
        assert_well_formed(state, engine.small)

    def test_config_kwargs(self):
        """Keyword arguments build the configuration."""
        engine = PuzzleEngine.create(seed=5, settings=GameSettings(max_word_length=5))
        assert engine.config.seed == 5
        assert len(engine.generate().target_word) == 5

    def test_word_list_files(self, tmp_path):
        """Configured word list files are loaded."""
        path = tmp_path / "words.txt"
        path.write_text("\n".join(GARDEN_WORDS))
        config = AppConfig(
            settings=GameSettings(max_word_length=6),
            dictionaries=DictionaryConfig(small=path, large=path),
        )
        engine = PuzzleEngine.create(config=config)
        assert len(engine.small) == len(GARDEN_WORDS)
        assert engine.generate(seed=2).target_word in {"GARDEN", "DANGER", "GANDER"}

    def test_missing_word_list(self, tmp_path):
        """A missing word list file is a DictionaryError."""
        config = AppConfig(dictionaries=DictionaryConfig(small=tmp_path / "missing.txt"))
        with pytest.raises(DictionaryError):
            PuzzleEngine.create(config=config)


class TestPlay:
    """Test the play operations exposed by the engine."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_found_words_bounded_by_candidates(self, seed):
        """Playing every formable word of the large list records only candidates."""
        large = WordList(GARDEN_WORDS + EXTRA_GARDEN_WORDS)
        engine = PuzzleEngine(small=WordList(GARDEN_WORDS), large=large, config=SIX_LETTERS)
        state = engine.generate(seed=seed)
        for word in large:
            if can_form_word(word, state.target_word):
                engine.add_guess(word, state)
        assert set(state.found_words) <= set(state.candidates)
        assert len(state.found_words) <= len(state.candidates)
        assert state.is_complete

    def test_found_words_bounded_with_bundled_lists(self):
        """The bound also holds with the bundled dictionaries."""
        engine = PuzzleEngine.create()
        state = engine.generate(GameSettings(min_word_length=3, max_word_length=6), seed=1)
        for word in engine.large:
            if can_form_word(word, state.target_word):
                engine.add_guess(word, state)
        assert set(state.found_words) <= set(state.candidates)
        assert len(state.found_words) <= len(state.candidates)

    def test_guess_flow(self):
        """Guessing every placed word completes the puzzle."""
        engine = garden_engine()
        state = engine.generate(seed=7)
        for word in state.placed_words:
            assert engine.classify(word.lower(), state) == GuessTier.IN_GRID
            assert engine.try_add(word.lower(), state)
        assert state.is_complete
        assert state.score == sum(len(w) * 10 for w in state.placed_words)

    def test_add_guess(self):
        """add_guess reports the reveal status of grid words."""
        engine = garden_engine()
        state = engine.generate(seed=7)
        word = state.placed_words[0]
        outcome = engine.add_guess(word, state)
        assert outcome.status == WordStatus.SHOWN_FIRST_TIME

    def test_show_and_hide(self):
        """Hints can be shown and hidden through the engine."""
        engine = garden_engine()
        state = engine.generate(seed=7)
        word = state.placed_words[0].lower()
        engine.reveal_temporarily(word, state)
        assert state.revealed
        engine.hide(word, state)
        assert state.revealed == set()
        assert engine.show_word(word, state) == WordStatus.SHOWN_FIRST_TIME
        assert engine.show_word("zzz", state) == WordStatus.NOT_IN_GRID
