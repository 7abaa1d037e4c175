"""Theme and tier word lookups."""

import json
import logging

from .config import ConfigError, DEFAULT_THEME, TIERS
from .models import Tier, WordEntry
from .utils import canonical
from .vocabulary import WORD_BANK

logger = logging.getLogger(__name__)


def parse_entry(entry) -> tuple[str, WordEntry | None]:
    """A tier list item: a plain word, or {word, chunks, tts_chunks?}."""
    if isinstance(entry, str):
        return entry.strip(), None
    if not isinstance(entry, dict) or not isinstance(entry.get('word'), str):
        raise ConfigError(f"Word entry {entry!r} must be a string or an object with a 'word'")
    word = entry['word'].strip()
    chunks = entry.get('chunks')
    if not chunks:
        return word, None
    if not isinstance(chunks, list) or not all(isinstance(c, str) and c for c in chunks):
        raise ConfigError(f"Chunks for {word!r} must be a list of non-empty strings")
    if canonical(''.join(chunks)) != canonical(word):
        raise ConfigError(f"Chunks {chunks} do not spell {word!r}")
    tts_chunks = entry.get('tts_chunks') or []
    if not isinstance(tts_chunks, list) or not all(isinstance(c, str) for c in tts_chunks):
        raise ConfigError(f"TTS chunks for {word!r} must be a list of strings")
    return word, WordEntry(word, tuple(c.upper() for c in chunks), tuple(tts_chunks))


def from_enhanced(data: dict) -> dict:
    """Regroup an enhanced bank ({metadata, words: {tier: [entry]}}, each entry
    listing its themes) into theme -> tier -> entries."""
    words = data.get('words')
    if not isinstance(words, dict):
        raise ConfigError("Enhanced word bank needs a 'words' object keyed by tier")
    themes = {}
    for tier, entries in words.items():
        for entry in entries or []:
            entry_themes = entry.get('themes') if isinstance(entry, dict) else None
            if not entry_themes:
                logger.warning(f"Skipping word entry without themes: {entry!r}")
                continue
            for theme in entry_themes:
                themes.setdefault(theme, {}).setdefault(tier, []).append(entry)
    return themes


class WordBankRepository:
    """Read-only theme -> tier -> words lookup.

    Unknown themes resolve to the default theme; unknown tiers give an empty
    list. Lists keep the order of the source data with case-insensitive
    duplicates removed (first occurrence kept). Words may carry authored
    chunks, which take precedence over algorithmic chunking.
    """

    def __init__(self, data: dict | None = None, default_theme: str = DEFAULT_THEME):
        source = WORD_BANK if data is None else data
        self._themes = {}
        self._entries = {}
        for theme, tiers in source.items():
            if not isinstance(tiers, dict):
                raise ConfigError(f"Theme {theme!r} must map tiers to word lists")
            key = self._theme_key(theme)
            entries = self._entries.setdefault(key, {})
            self._themes[key] = {
                str(tier).strip().lower(): self._dedupe(words, entries)
                for tier, words in tiers.items()
            }
        self.default_theme = self._theme_key(default_theme)
        if self.default_theme not in self._themes:
            raise ConfigError(f"Default theme {default_theme!r} is not in the word bank")

    @staticmethod
    def _theme_key(theme) -> str:
        return str(theme).strip().lower()

    @staticmethod
    def _dedupe(words, entries: dict) -> list[str]:
        seen = set()
        result = []
        for item in words or []:
            word, entry = parse_entry(item)
            key = canonical(word)
            if key and key not in seen:
                seen.add(key)
                result.append(word)
                if entry is not None:
                    entries.setdefault(key, entry)
        return result

    @classmethod
    def from_file(cls, path: str, default_theme: str = DEFAULT_THEME) -> 'WordBankRepository':
        """Load a word-bank JSON file.

        Either {theme: {easy, regular, challenge}} or the enhanced
        {metadata, words: {tier: [{word, chunks, tts_chunks, themes}]}} form.
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot load word bank from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Word bank in {path} must be a JSON object")
        if 'metadata' in data and 'words' in data:
            metadata = data['metadata'] if isinstance(data['metadata'], dict) else {}
            logger.info(f"Enhanced word bank {path}: version {metadata.get('version', '?')}, "
                        f"{metadata.get('total_words', '?')} words")
            data = from_enhanced(data)
        return cls(data, default_theme=default_theme)

    def all_themes(self) -> set[str]:
        return set(self._themes)

    def has_theme(self, theme) -> bool:
        return theme is not None and self._theme_key(theme) in self._themes

    def resolve_theme(self, theme) -> str:
        """Theme id that lookups for this theme will actually use."""
        if self.has_theme(theme):
            return self._theme_key(theme)
        return self.default_theme

    def words_for(self, theme, tier) -> list[str]:
        tier = Tier.parse(tier)
        if tier is None:
            return []
        return list(self._themes[self.resolve_theme(theme)].get(tier.value, []))

    def contains(self, theme, tier, word: str) -> bool:
        key = canonical(word)
        return any(canonical(w) == key for w in self.words_for(theme, tier))

    def entry_for(self, theme, word: str) -> WordEntry | None:
        """Authored entry for a word in a theme, if the bank has one."""
        return self._entries[self.resolve_theme(theme)].get(canonical(word))

    def authored_chunks(self, theme, word: str) -> list[str] | None:
        entry = self.entry_for(theme, word)
        return list(entry.chunks) if entry else None

    def tts_chunks(self, theme, word: str) -> list[str] | None:
        """Read-aloud chunks, falling back to the authored game chunks."""
        entry = self.entry_for(theme, word)
        if entry is None:
            return None
        return list(entry.tts_chunks or entry.chunks)

    def to_dict(self) -> dict:
        result = {}
        for theme, tiers in self._themes.items():
            entries = self._entries[theme]
            result[theme] = {
                tier: [entries[canonical(w)].to_dict() if canonical(w) in entries else w
                       for w in tiers[tier]]
                for tier in TIERS if tier in tiers
            }
        return result
