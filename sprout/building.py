"""The build-a-word task: arranging shuffled chunks back into a word."""

import random
import time

from .models import PerformanceSample


class WordBuildingTask:
    """State of one build-a-word attempt.

    `chunks` is the correct order; the learner moves chunks from `available`
    (shuffled) into `arranged`. Hints place the next correct chunk, resets
    reshuffle everything; both are counted for the performance sample.
    """

    def __init__(self, word: str, chunks: list[str], rng: random.Random | None = None, clock=time.monotonic):
        self.word = word.upper()
        self.chunks = [c.upper() for c in chunks]
        self.rng = rng or random.Random()
        self.clock = clock
        self.started_at = clock()
        self.hints_used = 0
        self.resets_used = 0
        self.arranged = []
        self.available = self._shuffled()

    def _shuffled(self) -> list[str]:
        pool = list(self.chunks)
        self.rng.shuffle(pool)
        return pool

    @property
    def is_complete(self) -> bool:
        return self.arranged == self.chunks

    @property
    def wrong_order(self) -> bool:
        """All chunks placed and they spell the word, but not in the taught order."""
        return (len(self.arranged) == len(self.chunks)
                and ''.join(self.arranged) == self.word
                and not self.is_complete)

    def place(self, chunk: str) -> bool:
        """Move a chunk from the pool to the end of the arrangement."""
        chunk = chunk.upper()
        if self.is_complete or chunk not in self.available:
            return False
        self.available.remove(chunk)
        self.arranged.append(chunk)
        return True

    def remove(self, index: int) -> bool:
        """Send an arranged chunk back to the pool."""
        if self.is_complete or not 0 <= index < len(self.arranged):
            return False
        self.available.append(self.arranged.pop(index))
        return True

    def hint(self) -> str | None:
        """Place the next correct chunk, if the arrangement so far is right."""
        if self.is_complete:
            return None
        position = len(self.arranged)
        if self.arranged != self.chunks[:position]:
            return None
        next_chunk = self.chunks[position]
        if not self.place(next_chunk):
            return None
        self.hints_used += 1
        return next_chunk

    def reset(self) -> None:
        self.arranged = []
        self.available = self._shuffled()
        self.resets_used += 1

    def elapsed_ms(self) -> int:
        return int((self.clock() - self.started_at) * 1000)

    def to_sample(self, completed: bool | None = None, tier: str | None = None) -> PerformanceSample:
        return PerformanceSample(
            time_ms=self.elapsed_ms(),
            hints_used=self.hints_used,
            resets_used=self.resets_used,
            completed=self.is_complete if completed is None else completed,
            word=self.word,
            tier=tier,
        )

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'chunks': list(self.chunks),
            'available': list(self.available),
            'arranged': list(self.arranged),
            'hints_used': self.hints_used,
            'resets_used': self.resets_used,
            'complete': self.is_complete,
            'wrong_order': self.wrong_order,
        }
