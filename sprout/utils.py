"""Utility functions for the sprout engine."""

import logging
import math

from .config import SPEECH_RATE, SPEECH_PITCH, SPEECH_VOICE

logger = logging.getLogger(__name__)


def canonical(word: str) -> str:
    """Canonical comparison form of a word."""
    return word.strip().upper()


def unique_words(words) -> list[str]:
    """Upper-case words, dropping repeats but keeping first-seen order."""
    seen = set()
    result = []
    for word in words:
        key = canonical(word)
        if key and key not in seen:
            seen.add(key)
            result.append(key)
    return result


def split_evenly(text: str, pieces: int) -> list[str]:
    """Split text into consecutive pieces of size ceil(len/pieces).

    The last piece takes whatever is left. Empty pieces are dropped, so
    short inputs come back with fewer pieces than asked for.
    """
    if not text:
        return []
    size = math.ceil(len(text) / pieces)
    parts = [text[i:i + size] for i in range(0, len(text), size)]
    return [p for p in parts if p]


def announce(speaker, text: str, voice: str | None = SPEECH_VOICE) -> None:
    """Fire a read-aloud cue without letting speech problems reach the caller."""
    if speaker is None or not text:
        return
    options = {'rate': SPEECH_RATE, 'pitch': SPEECH_PITCH, 'voice': voice}
    try:
        speaker.speak(text, options)
    except Exception as e:
        logger.warning(f"Read-aloud failed for {text!r}: {type(e).__name__}: {e}")
