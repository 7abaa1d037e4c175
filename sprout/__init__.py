from .models import Tier, PerformanceSample, SentenceSlot, WordEntry
from .interfaces import KeyValueStore, Speaker, MemoryStore, SilentSpeaker
from .wordbank import WordBankRepository
from .chunker import PhonemicChunker
from .tracker import PerformanceTracker, summarize
from .adaptive import AdaptiveDifficultyController, Thresholds, tier_for_age
from .sentences import SentenceTemplate, SentenceTask, SentenceTemplateEngine, BLANK_TYPES
from .building import WordBuildingTask
from .session import LearningSession
from .config import (
    ConfigError, TIERS, DEFAULT_THEME, DEFAULT_LEARNER_AGE,
    WINDOW_SIZE, MIN_SAMPLES, SENTENCE_UNLOCK_WORD_COUNT
)

__all__ = [
    'Tier', 'PerformanceSample', 'SentenceSlot', 'WordEntry',
    'KeyValueStore', 'Speaker', 'MemoryStore', 'SilentSpeaker',
    'WordBankRepository', 'PhonemicChunker',
    'PerformanceTracker', 'summarize',
    'AdaptiveDifficultyController', 'Thresholds', 'tier_for_age',
    'SentenceTemplate', 'SentenceTask', 'SentenceTemplateEngine', 'BLANK_TYPES',
    'WordBuildingTask', 'LearningSession',
    'ConfigError', 'TIERS', 'DEFAULT_THEME', 'DEFAULT_LEARNER_AGE',
    'WINDOW_SIZE', 'MIN_SAMPLES', 'SENTENCE_UNLOCK_WORD_COUNT'
]
