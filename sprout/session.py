"""One learner's session: word building feeding adaptation, then sentences."""

import logging
import random
import time

from .adaptive import AdaptiveDifficultyController, Thresholds, parse_age, tier_for_age
from .building import WordBuildingTask
from .chunker import PhonemicChunker
from .interfaces import MemoryStore, SilentSpeaker
from .config import (
    SENTENCE_UNLOCK_WORD_COUNT,
    KEY_AGE, KEY_COMPLETED_WORDS, KEY_PERFORMANCE, KEY_TIER,
)
from .models import PerformanceSample
from .sentences import SentenceTemplateEngine
from .tracker import PerformanceTracker
from .utils import canonical, unique_words, announce
from .wordbank import WordBankRepository

logger = logging.getLogger(__name__)


class LearningSession:
    """Wires the engine components to a learner's key-value store.

    Everything persistent (age, theme, tier, completed words, performance
    history) goes through `store`; nothing else is touched.
    """

    def __init__(self, store=None, repository: WordBankRepository | None = None,
                 chunker: PhonemicChunker | None = None, speaker=None,
                 thresholds: Thresholds | None = None, templates: dict | None = None,
                 unlock_count: int = SENTENCE_UNLOCK_WORD_COUNT,
                 rng: random.Random | None = None, clock=time.monotonic):
        self.store = store if store is not None else MemoryStore()
        self.repository = repository or WordBankRepository()
        self.chunker = chunker or PhonemicChunker()
        self.speaker = speaker or SilentSpeaker()
        self.templates = templates
        self.unlock_count = unlock_count
        self.rng = rng or random.Random()
        self.clock = clock
        self.tracker = self._load_tracker()
        self.controller = AdaptiveDifficultyController.from_store(
            store, self.repository, tracker=self.tracker, thresholds=thresholds)
        self.completed_words = self._load_completed_words()
        self.word_index = 0
        self.current_task = None
        self._sentences = None

    def _load_tracker(self) -> PerformanceTracker:
        data = self.store.get(KEY_PERFORMANCE, [])
        if not isinstance(data, list):
            logger.warning(f"Stored performance history is not a list ({type(data).__name__}), starting fresh")
            data = []
        return PerformanceTracker.from_list(data)

    def _load_completed_words(self) -> list[str]:
        data = self.store.get(KEY_COMPLETED_WORDS, [])
        if not isinstance(data, list):
            logger.warning(f"Stored completed words are not a list ({type(data).__name__}), starting fresh")
            return []
        return unique_words(w for w in data if isinstance(w, str))

    @property
    def theme(self) -> str:
        return self.controller.theme

    @property
    def tier(self) -> str:
        return self.controller.tier.value

    @property
    def words(self) -> list[str]:
        return list(self.controller.words)

    def set_profile(self, age=None, theme: str | None = None) -> dict:
        """Update learner age and/or theme.

        A new age only re-picks the tier while nothing has been recorded yet.
        """
        if age is not None:
            parsed = parse_age(age)
            if parsed is None:
                raise ValueError(f"Invalid learner age: {age!r}")
            self.store.set(KEY_AGE, parsed)
            self.controller.age = parsed
            if len(self.tracker) == 0:
                self.controller.tier = tier_for_age(parsed)
                self.controller.words = self.repository.words_for(self.theme, self.controller.tier)
                self.store.set(KEY_TIER, self.tier)
        if theme is not None:
            self.controller.set_theme(theme)
            self.word_index = 0
            self._sentences = None
        return self.status()

    def next_word(self) -> str | None:
        """Next word from the current list, cycling. None if the list is empty."""
        words = self.controller.words
        if not words:
            return None
        word = words[self.word_index % len(words)]
        self.word_index += 1
        return word

    def chunks_for(self, word: str) -> list[str]:
        """Authored chunks from the word bank, else the chunker's split."""
        return self.repository.authored_chunks(self.theme, word) or self.chunker.chunks_for(word)

    def tts_chunks_for(self, word: str) -> list[str]:
        return self.repository.tts_chunks(self.theme, word) or self.chunks_for(word)

    def word_card(self, word: str | None = None) -> dict | None:
        """Next word with its chunks, for a client that runs the task itself."""
        word = word or self.next_word()
        if not word:
            return None
        chunks = self.chunks_for(word)
        shuffled = list(chunks)
        self.rng.shuffle(shuffled)
        return {
            'word': word.upper(),
            'chunks': chunks,
            'tts_chunks': self.tts_chunks_for(word),
            'shuffled': shuffled,
        }

    def start_word(self, word: str | None = None) -> WordBuildingTask | None:
        word = word or self.next_word()
        if not word:
            return None
        self.current_task = WordBuildingTask(word, self.chunks_for(word), rng=self.rng, clock=self.clock)
        return self.current_task

    def finish_word(self, task: WordBuildingTask | None = None, completed: bool | None = None) -> dict:
        """Record the outcome of a build-a-word task."""
        task = task or self.current_task
        if task is None:
            raise ValueError("No word task to finish")
        result = self.record_attempt(task.to_sample(completed))
        if task is self.current_task:
            self.current_task = None
        return result

    def record_attempt(self, sample: PerformanceSample) -> dict:
        result = self.controller.record(sample)
        self.store.set(KEY_PERFORMANCE, self.tracker.to_list())

        if sample.completed and sample.word:
            word = canonical(sample.word)
            if word not in self.completed_words:
                self.completed_words.append(word)
                self.store.set(KEY_COMPLETED_WORDS, list(self.completed_words))
            announce(self.speaker, f"Fantastic! You built the word: {word}")

        if result['tier_changed']:
            self.word_index = 0

        result['completed_words'] = len(self.completed_words)
        result['sentence_stage_unlocked'] = self.sentence_stage_unlocked()
        return result

    def sentence_stage_unlocked(self) -> bool:
        return len(self.completed_words) >= self.unlock_count

    def sentence_engine(self) -> SentenceTemplateEngine | None:
        """Sentence engine for the current theme, once enough words are built."""
        if not self.sentence_stage_unlocked():
            return None
        if self._sentences is None:
            self._sentences = SentenceTemplateEngine(
                self.repository, theme=self.theme, templates=self.templates,
                store=self.store, speaker=self.speaker)
        return self._sentences

    def status(self) -> dict:
        return {
            'theme': self.theme,
            'tier': self.tier,
            'age': self.controller.age,
            'words': self.words,
            'completed_words': list(self.completed_words),
            'sentence_stage_unlocked': self.sentence_stage_unlocked(),
            'adaptive': self.controller.state(),
            'performance': self.tracker.summary(),
        }
