"""Domain models for the sprout engine."""

from dataclasses import dataclass, field, asdict
from enum import Enum

from .config import TIERS


class Tier(Enum):
    """Difficulty tier. Ordered easy < regular < challenge."""

    EASY = 'easy'
    REGULAR = 'regular'
    CHALLENGE = 'challenge'

    @property
    def rank(self) -> int:
        return TIERS.index(self.value)

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def up(self) -> 'Tier':
        """One tier harder, staying at the top."""
        return Tier(TIERS[min(self.rank + 1, len(TIERS) - 1)])

    def down(self) -> 'Tier':
        """One tier easier, staying at the bottom."""
        return Tier(TIERS[max(self.rank - 1, 0)])

    @classmethod
    def parse(cls, value) -> 'Tier | None':
        """Tier from a Tier or a case-insensitive name. None if unrecognized."""
        if isinstance(value, Tier):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class PerformanceSample:
    """Metrics for one attempted word. Immutable once created."""

    time_ms: int
    hints_used: int = 0
    resets_used: int = 0
    completed: bool = True
    word: str | None = None
    tier: str | None = None
    recorded_at: float | None = None

    def __post_init__(self):
        if self.time_ms < 0:
            raise ValueError(f"time_ms must be >= 0, got {self.time_ms}")
        if self.hints_used < 0:
            raise ValueError(f"hints_used must be >= 0, got {self.hints_used}")
        if self.resets_used < 0:
            raise ValueError(f"resets_used must be >= 0, got {self.resets_used}")

    @property
    def struggled(self) -> bool:
        """Quick per-word read used in log lines."""
        return self.hints_used > 0 or self.resets_used > 0 or not self.completed

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'PerformanceSample':
        return cls(
            time_ms=int(data['time_ms']),
            hints_used=int(data.get('hints_used', 0)),
            resets_used=int(data.get('resets_used', 0)),
            completed=bool(data.get('completed', True)),
            word=data.get('word'),
            tier=data.get('tier'),
            recorded_at=data.get('recorded_at'),
        )


@dataclass(frozen=True)
class WordEntry:
    """A word-bank word with hand-authored chunks.

    `chunks` are the game pieces and must spell the word. `tts_chunks` are
    read aloud and may be spelled for pronunciation instead.
    """

    word: str
    chunks: tuple[str, ...]
    tts_chunks: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {'word': self.word, 'chunks': list(self.chunks)}
        if self.tts_chunks:
            data['tts_chunks'] = list(self.tts_chunks)
        return data


FIXED = 'fixed'


@dataclass
class SentenceSlot:
    """One position of a parsed sentence template."""

    id: str
    type: str
    content: str = ''
    filled: bool = False
    valid_words: list[str] = field(default_factory=list)

    @property
    def is_fixed(self) -> bool:
        return self.type == FIXED

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'type': self.type,
            'content': self.content,
            'filled': self.filled,
            'valid_words': list(self.valid_words),
        }
