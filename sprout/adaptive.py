"""Adaptive difficulty: choosing the learner's tier from recent performance."""

import logging
import time
from collections import deque
from dataclasses import replace

from .config import (
    ConfigError, AGE_TIER_BANDS, DEFAULT_LEARNER_AGE, DEFAULT_THEME,
    WINDOW_SIZE, MIN_SAMPLES,
    EASE_MAX_AVG_TIME_MS, EASE_MAX_HINT_RATE, EASE_MAX_RESET_RATE, EASE_MIN_COMPLETION_RATE,
    STRUGGLE_MIN_AVG_TIME_MS, STRUGGLE_MIN_HINT_RATE, STRUGGLE_MIN_RESET_RATE,
    STRUGGLE_MAX_COMPLETION_RATE,
    KEY_AGE, KEY_THEME, KEY_TIER,
)
from .models import Tier, PerformanceSample
from .tracker import PerformanceTracker, WindowStats, summarize

logger = logging.getLogger(__name__)


class Thresholds:
    """Tunable cut-offs for tier changes. Defaults come from config."""

    def __init__(self,
                 window_size: int = WINDOW_SIZE,
                 min_samples: int = MIN_SAMPLES,
                 ease_max_avg_time_ms: float = EASE_MAX_AVG_TIME_MS,
                 ease_max_hint_rate: float = EASE_MAX_HINT_RATE,
                 ease_max_reset_rate: float = EASE_MAX_RESET_RATE,
                 ease_min_completion_rate: float = EASE_MIN_COMPLETION_RATE,
                 struggle_min_avg_time_ms: float = STRUGGLE_MIN_AVG_TIME_MS,
                 struggle_min_hint_rate: float = STRUGGLE_MIN_HINT_RATE,
                 struggle_min_reset_rate: float = STRUGGLE_MIN_RESET_RATE,
                 struggle_max_completion_rate: float = STRUGGLE_MAX_COMPLETION_RATE):
        if window_size < 1:
            raise ValueError(f"window_size must be positive, got {window_size}")
        if not 1 <= min_samples <= window_size:
            raise ValueError(f"min_samples must be between 1 and window_size ({window_size}), got {min_samples}")
        self.window_size = window_size
        self.min_samples = min_samples
        self.ease_max_avg_time_ms = ease_max_avg_time_ms
        self.ease_max_hint_rate = ease_max_hint_rate
        self.ease_max_reset_rate = ease_max_reset_rate
        self.ease_min_completion_rate = ease_min_completion_rate
        self.struggle_min_avg_time_ms = struggle_min_avg_time_ms
        self.struggle_min_hint_rate = struggle_min_hint_rate
        self.struggle_min_reset_rate = struggle_min_reset_rate
        self.struggle_max_completion_rate = struggle_max_completion_rate

    def is_at_ease(self, stats: WindowStats) -> bool:
        """Fast, unaided and finished: every ease signal must hold."""
        return (stats.avg_time_ms <= self.ease_max_avg_time_ms
                and stats.hint_rate <= self.ease_max_hint_rate
                and stats.reset_rate <= self.ease_max_reset_rate
                and stats.completion_rate >= self.ease_min_completion_rate)

    def is_struggling(self, stats: WindowStats) -> bool:
        """Any single struggle signal is enough."""
        return (stats.avg_time_ms >= self.struggle_min_avg_time_ms
                or stats.hint_rate >= self.struggle_min_hint_rate
                or stats.reset_rate >= self.struggle_min_reset_rate
                or stats.completion_rate <= self.struggle_max_completion_rate)


def check_age_bands(bands) -> list[tuple[int, Tier]]:
    """Validate and sort an age band table. Older bands may not map to easier tiers."""
    if not bands:
        raise ConfigError("Age band table is empty")
    parsed = []
    for min_age, name in sorted(bands, key=lambda band: band[0]):
        tier = Tier.parse(name)
        if tier is None:
            raise ConfigError(f"Unknown tier {name!r} in age band table")
        if parsed and tier < parsed[-1][1]:
            raise ConfigError(f"Age band {min_age} maps to an easier tier than a younger band")
        parsed.append((min_age, tier))
    return parsed


def tier_for_age(age: int, bands=AGE_TIER_BANDS) -> Tier:
    """Starting tier: the band with the highest minimum age not above age."""
    table = check_age_bands(bands)
    tier = table[0][1]
    for min_age, band_tier in table:
        if age >= min_age:
            tier = band_tier
    return tier


def parse_age(value) -> int | None:
    """Learner age from a stored value, or None when it is unusable."""
    if isinstance(value, bool):
        return None
    try:
        age = int(value)
    except (TypeError, ValueError):
        return None
    if age < 0:
        return None
    return age


class AdaptiveDifficultyController:
    """Moves a learner between tiers one step at a time.

    Every recorded sample goes to the tracker (full history) and to a
    rolling window of the last `window_size` samples. Once the window holds
    `min_samples`, it is summarized: a struggle moves down a tier, ease moves
    up a tier. A tier change refreshes the word list and starts a new window.
    """

    def __init__(self, repository, tracker: PerformanceTracker | None = None,
                 age: int = DEFAULT_LEARNER_AGE, theme: str = DEFAULT_THEME,
                 tier=None, thresholds: Thresholds | None = None,
                 store=None, age_bands=AGE_TIER_BANDS):
        self.repository = repository
        self.tracker = tracker if tracker is not None else PerformanceTracker()
        self.thresholds = thresholds or Thresholds()
        self.store = store
        self.age = age
        self.theme = repository.resolve_theme(theme)
        self.tier = Tier.parse(tier) or tier_for_age(age, age_bands)
        self.window = deque(maxlen=self.thresholds.window_size)
        self.words = repository.words_for(self.theme, self.tier)
        self.tier_changes = 0

    @classmethod
    def from_store(cls, store, repository, tracker: PerformanceTracker | None = None,
                   thresholds: Thresholds | None = None,
                   age_bands=AGE_TIER_BANDS) -> 'AdaptiveDifficultyController':
        """Restore age, theme and tier from the store, defaulting what's unreadable."""
        raw_age = store.get(KEY_AGE, DEFAULT_LEARNER_AGE)
        age = parse_age(raw_age)
        if age is None:
            logger.warning(f"Stored learner age {raw_age!r} is unreadable, using {DEFAULT_LEARNER_AGE}")
            age = DEFAULT_LEARNER_AGE

        theme = store.get(KEY_THEME, repository.default_theme)
        if not repository.has_theme(theme):
            logger.warning(f"Stored theme {theme!r} is unknown, using {repository.default_theme}")
            theme = repository.default_theme

        raw_tier = store.get(KEY_TIER)
        tier = Tier.parse(raw_tier)
        if raw_tier is not None and tier is None:
            logger.warning(f"Stored tier {raw_tier!r} is unreadable, starting from age {age}")

        return cls(repository, tracker=tracker, age=age, theme=theme, tier=tier,
                   thresholds=thresholds, store=store, age_bands=age_bands)

    def record(self, sample: PerformanceSample) -> dict:
        """Record one attempt and re-evaluate the tier."""
        if sample.tier is None or sample.recorded_at is None:
            sample = replace(
                sample,
                tier=sample.tier or self.tier.value,
                recorded_at=sample.recorded_at if sample.recorded_at is not None else time.time(),
            )
        self.tracker.record(sample)
        self.window.append(sample)
        return self.evaluate()

    def window_stats(self) -> WindowStats:
        return summarize(self.window)

    def decide(self) -> str | None:
        """'up', 'down' or None for the current window."""
        if len(self.window) < self.thresholds.min_samples:
            return None
        stats = self.window_stats()
        if self.thresholds.is_struggling(stats):
            return 'down'
        if self.thresholds.is_at_ease(stats):
            return 'up'
        return None

    def evaluate(self) -> dict:
        direction = self.decide()
        if direction is None:
            return self._result(False, None)
        new_tier = self.tier.up() if direction == 'up' else self.tier.down()
        if new_tier == self.tier:
            return self._result(False, None)
        self._change_tier(new_tier, direction)
        return self._result(True, direction)

    def _change_tier(self, new_tier: Tier, direction: str) -> None:
        old_tier = self.tier
        self.tier = new_tier
        self.window.clear()
        self.words = self.repository.words_for(self.theme, self.tier)
        self.tier_changes += 1
        if self.store is not None:
            self.store.set(KEY_TIER, self.tier.value)
        logger.info(f"Tier {direction}: {old_tier.value} -> {new_tier.value} ({len(self.words)} {self.theme} words)")

    def _result(self, changed: bool, direction: str | None) -> dict:
        return {
            'tier_changed': changed,
            'change_type': direction,
            'tier': self.tier.value,
            'words': list(self.words),
        }

    def set_theme(self, theme: str) -> list[str]:
        """Switch theme (unknown themes resolve to the default) and reload words."""
        self.theme = self.repository.resolve_theme(theme)
        self.words = self.repository.words_for(self.theme, self.tier)
        if self.store is not None:
            self.store.set(KEY_THEME, self.theme)
        return list(self.words)

    def state(self) -> dict:
        return {
            'tier': self.tier.value,
            'age': self.age,
            'theme': self.theme,
            'window': [s.to_dict() for s in self.window],
            'window_stats': self.window_stats().to_dict(),
            'total_samples': len(self.tracker),
            'tier_changes': self.tier_changes,
        }
