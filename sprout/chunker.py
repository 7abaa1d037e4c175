"""Splitting words into teachable sound chunks."""

from .config import PHONETIC_UNITS
from .utils import split_evenly


class PhonemicChunker:
    """Splits a word into ordered chunks that concatenate back to the word.

    The word is scanned left to right. At each position the longest unit
    from the table that starts there becomes one chunk (earlier table
    entries win ties); otherwise a single letter does. Words of three
    letters or fewer, and words where no unit matched at all, are instead
    split by length: two pieces up to five letters, three pieces beyond.
    """

    SHORT_WORD_LENGTH = 3
    TWO_PIECE_MAX_LENGTH = 5

    def __init__(self, units=PHONETIC_UNITS):
        self.units = tuple(u.upper() for u in units if u)

    def _match_at(self, word: str, pos: int) -> str | None:
        best = None
        for unit in self.units:
            if word.startswith(unit, pos) and (best is None or len(unit) > len(best)):
                best = unit
        return best

    def scan(self, word: str) -> tuple[list[str], bool]:
        """Table-driven pass. Returns (chunks, whether any unit matched)."""
        chunks = []
        matched = False
        pos = 0
        while pos < len(word):
            unit = self._match_at(word, pos)
            if unit:
                matched = True
                chunks.append(unit)
                pos += len(unit)
            else:
                chunks.append(word[pos])
                pos += 1
        return chunks, matched

    def split_by_length(self, word: str) -> list[str]:
        if len(word) <= self.TWO_PIECE_MAX_LENGTH:
            return split_evenly(word, 2)
        return split_evenly(word, 3)

    def chunks_for(self, word: str) -> list[str]:
        if not word:
            return []
        word = word.upper()
        if len(word) <= self.SHORT_WORD_LENGTH:
            return self.split_by_length(word)
        chunks, matched = self.scan(word)
        if not matched:
            return self.split_by_length(word)
        return chunks
