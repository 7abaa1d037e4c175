"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract base class for the learner's persistent key-value store."""

    @abstractmethod
    def get(self, key: str, default=None):
        """Return the stored value for key, or default if it is missing."""
        pass

    @abstractmethod
    def set(self, key: str, value) -> None:
        """Store a JSON-serializable value under key."""
        pass


class Speaker(ABC):
    """Abstract base class for the read-aloud collaborator.

    Implementations must return promptly; the engine never waits on speech
    and ignores the return value.
    """

    @abstractmethod
    def speak(self, text: str, options: dict | None = None) -> None:
        """Read text aloud. options may carry rate, pitch and voice."""
        pass


class MemoryStore(KeyValueStore):
    """Dict-backed store for a single process."""

    def __init__(self, data: dict | None = None):
        self.data = dict(data or {})

    def get(self, key: str, default=None):
        return self.data.get(key, default)

    def set(self, key: str, value) -> None:
        self.data[key] = value


class SilentSpeaker(Speaker):
    """Speaker that discards everything (no audio available)."""

    def speak(self, text: str, options: dict | None = None) -> None:
        pass
