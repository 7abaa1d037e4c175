"""Sentence templates: parsing into slots and validating fills."""

import logging
from datetime import datetime, timezone

from .config import ConfigError, KEY_SENTENCES_DONE
from .models import SentenceSlot, FIXED
from .utils import canonical, unique_words, announce
from .vocabulary import SENTENCE_TEMPLATES, DEFAULT_BLANK_WORDS, DEFAULT_VEHICLE_EXTRAS

logger = logging.getLogger(__name__)


# ============================================================================
# Blank types
# ============================================================================

class BlankType:
    """How one kind of blank gets its valid words.

    override_key is the plural key a template record uses to supply its own
    list for this blank (e.g. 'adjectives' for [ADJECTIVE]).
    """

    def __init__(self, name: str, override_key: str):
        self.name = name
        self.override_key = override_key

    def resolve(self, template: 'SentenceTemplate', repository) -> list[str]:
        raise NotImplementedError


class ThemeBlank(BlankType):
    """Words come from a word-bank theme (easy + regular), plus the
    template's override list, or `extras` when the template has none."""

    def __init__(self, name: str, override_key: str, theme: str, extras=None):
        super().__init__(name, override_key)
        self.theme = theme
        self.extras = list(extras or [])

    def resolve(self, template, repository) -> list[str]:
        theme_words = []
        # A theme missing from the bank contributes nothing rather than the default theme's words
        if repository.has_theme(self.theme):
            theme_words = (repository.words_for(self.theme, 'easy')
                           + repository.words_for(self.theme, 'regular'))
        local = template.overrides.get(self.name)
        if local is None:
            local = self.extras
        return unique_words(theme_words + list(local))


class ListBlank(BlankType):
    """Words come from the template's override list, else a default list."""

    def __init__(self, name: str, override_key: str, defaults):
        super().__init__(name, override_key)
        self.defaults = list(defaults)

    def resolve(self, template, repository) -> list[str]:
        local = template.overrides.get(self.name)
        return unique_words(self.defaults if local is None else local)


def build_registry(blank_types) -> dict:
    return {blank.name: blank for blank in blank_types}


BLANK_TYPES = build_registry([
    ThemeBlank('animal', 'animals', 'animals'),
    ThemeBlank('space', 'spaces', 'space'),
    ThemeBlank('food', 'foods', 'food'),
    ThemeBlank('vehicle', 'vehicles', 'vehicles', extras=DEFAULT_VEHICLE_EXTRAS),
] + [
    ListBlank(name, name + 's', words) for name, words in DEFAULT_BLANK_WORDS.items()
])


RECORD_FIELDS = ('template', 'blanks', 'hint')


def blank_tag(token: str) -> str | None:
    """Lower-cased tag of a '[TAG]' token, or None for fixed text."""
    if len(token) > 2 and token.startswith('[') and token.endswith(']'):
        return token[1:-1].strip().lower()
    return None


# ============================================================================
# Templates
# ============================================================================

class SentenceTemplate:
    """A template string with optional per-blank-type word overrides."""

    def __init__(self, template: str, blanks=None, overrides: dict | None = None,
                 hint: str = '', registry: dict = BLANK_TYPES):
        if not template or not template.split():
            raise ConfigError("Sentence template is empty")
        self.template = template
        self.tokens = template.split()
        tags = [blank_tag(t) for t in self.tokens]
        unknown = [tag for tag in tags if tag is not None and tag not in registry]
        if unknown:
            raise ConfigError(f"Unknown blank type(s) {unknown} in template {template!r}")
        self.blanks = [b.upper() for b in blanks] if blanks else [t.upper() for t in tags if t]
        self.overrides = self._normalize_overrides(overrides or {}, registry)
        self.hint = hint

    @staticmethod
    def _normalize_overrides(overrides: dict, registry: dict) -> dict:
        """Key overrides by blank name. Either 'adjective' or 'adjectives' names the same list."""
        aliases = {}
        for blank in registry.values():
            aliases[blank.name] = blank.name
            aliases[blank.override_key] = blank.name
        normalized = {}
        for key, words in overrides.items():
            name = aliases.get(str(key).strip().lower())
            if name is None:
                raise ConfigError(f"Override {key!r} does not match any blank type")
            normalized[name] = unique_words(words)
        return normalized

    @classmethod
    def from_dict(cls, record: dict, registry: dict = BLANK_TYPES) -> 'SentenceTemplate':
        overrides = {}
        override_keys = {blank.override_key for blank in registry.values()}
        for key, value in record.items():
            if key in RECORD_FIELDS:
                continue
            if key in override_keys:
                overrides[key] = value
            else:
                logger.warning(f"Ignoring unknown key {key!r} in template {record.get('template')!r}")
        return cls(record['template'], blanks=record.get('blanks'), overrides=overrides,
                   hint=record.get('hint', ''), registry=registry)

    def to_dict(self) -> dict:
        return {
            'template': self.template,
            'blanks': list(self.blanks),
            'overrides': {k: list(v) for k, v in self.overrides.items()},
            'hint': self.hint,
        }


class SentenceTask:
    """One template being filled in by the learner.

    Fixed slots are always filled. A typed slot is filled only through
    attempt_fill with a word that is valid for it and still in the pool.
    Rejected attempts change nothing.
    """

    def __init__(self, template: SentenceTemplate, theme: str, slots: list[SentenceSlot], pool: list[str]):
        self.template = template
        self.theme = theme
        self.slots = slots
        self.pool = pool
        self.selected = self._next_open(-1)

    def _is_open(self, index: int) -> bool:
        slot = self.slots[index]
        return not slot.is_fixed and not slot.filled

    def _next_open(self, after: int) -> int | None:
        """First open typed slot after `after`, wrapping to the start."""
        n = len(self.slots)
        for step in range(1, n + 1):
            index = (after + step) % n
            if self._is_open(index):
                return index
        return None

    @property
    def is_complete(self) -> bool:
        return all(slot.filled for slot in self.slots)

    def select_slot(self, index: int) -> bool:
        if not 0 <= index < len(self.slots) or not self._is_open(index):
            return False
        self.selected = index
        return True

    def attempt_fill(self, word: str) -> dict:
        word = canonical(word or '')
        if self.selected is None:
            return self._rejected(word, 'no_slot_selected')
        slot = self.slots[self.selected]
        if word not in slot.valid_words:
            return self._rejected(word, 'not_valid_for_slot')
        if word not in self.pool:
            return self._rejected(word, 'not_available')

        index = self.selected
        slot.content = word
        slot.filled = True
        self.pool.remove(word)
        self.selected = self._next_open(index)
        return {
            'accepted': True,
            'reason': None,
            'word': word,
            'slot': index,
            'slot_type': slot.type,
            'next_slot': self.selected,
            'complete': self.is_complete,
        }

    def _rejected(self, word: str, reason: str) -> dict:
        slot_type = self.slots[self.selected].type if self.selected is not None else None
        return {
            'accepted': False,
            'reason': reason,
            'word': word,
            'slot': self.selected,
            'slot_type': slot_type,
            'next_slot': self.selected,
            'complete': self.is_complete,
        }

    def clear_slot(self, index: int) -> str | None:
        """Empty a filled typed slot, return its word to the pool and select it.

        Returns the removed word, or None if the slot can't be cleared.
        """
        if not 0 <= index < len(self.slots):
            return None
        slot = self.slots[index]
        if slot.is_fixed or not slot.filled:
            return None
        word = slot.content
        slot.content = ''
        slot.filled = False
        if word not in self.pool:
            self.pool.append(word)
        self.selected = index
        return word

    def offerable_words(self) -> list[str]:
        """Pool words that fit the selected slot."""
        if self.selected is None:
            return []
        valid = set(self.slots[self.selected].valid_words)
        return [w for w in self.pool if w in valid]

    def text(self, blank: str = '____') -> str:
        return ' '.join(slot.content if slot.filled else blank for slot in self.slots)

    def to_dict(self) -> dict:
        return {
            'template': self.template.template,
            'hint': self.template.hint,
            'theme': self.theme,
            'slots': [slot.to_dict() for slot in self.slots],
            'selected': self.selected,
            'offerable_words': self.offerable_words(),
            'complete': self.is_complete,
            'text': self.text(),
        }


# ============================================================================
# Engine
# ============================================================================

class SentenceTemplateEngine:
    """Runs a theme's templates in order, one SentenceTask at a time."""

    def __init__(self, repository, theme: str | None = None, templates: dict | None = None,
                 store=None, speaker=None, registry: dict = BLANK_TYPES):
        self.repository = repository
        self.registry = registry
        self.store = store
        self.speaker = speaker
        source = SENTENCE_TEMPLATES if templates is None else templates
        self._templates = {
            str(name).strip().lower(): [
                r if isinstance(r, SentenceTemplate) else SentenceTemplate.from_dict(r, registry)
                for r in records
            ]
            for name, records in source.items()
        }
        self.theme = self.resolve_theme(theme)
        self.index = 0
        self.finished = False
        self.task = self.parse_template(self.templates[0], self.theme)

    def resolve_theme(self, theme) -> str:
        key = str(theme).strip().lower() if theme is not None else None
        if key in self._templates and self._templates[key]:
            return key
        default = self.repository.default_theme
        if self._templates.get(default):
            return default
        raise ConfigError(f"No sentence templates for theme {theme!r} or default theme {default!r}")

    @property
    def templates(self) -> list[SentenceTemplate]:
        return self._templates[self.theme]

    def parse_template(self, template, theme) -> SentenceTask:
        """Split a template into slots and work out each typed slot's valid words."""
        if not isinstance(template, SentenceTemplate):
            template = SentenceTemplate(template, registry=self.registry)
        slots = []
        for index, token in enumerate(template.tokens):
            tag = blank_tag(token)
            if tag is None:
                slots.append(SentenceSlot(id=f'fixed-{index}', type=FIXED, content=token, filled=True))
            else:
                valid = self.registry[tag].resolve(template, self.repository)
                slots.append(SentenceSlot(id=f'slot-{index}', type=tag, valid_words=valid))

        theme_words = []
        if self.repository.has_theme(theme):
            theme_words = (self.repository.words_for(theme, 'easy')
                           + self.repository.words_for(theme, 'regular'))
        pool = unique_words([w for slot in slots for w in slot.valid_words] + theme_words)
        return SentenceTask(template, self.repository.resolve_theme(theme), slots, pool)

    @property
    def is_complete(self) -> bool:
        return self.task.is_complete

    def select_slot(self, index: int) -> bool:
        if not self.task.select_slot(index):
            return False
        slot_type = self.task.slots[index].type.replace('_', ' ')
        announce(self.speaker, f"Choose a {slot_type} word")
        return True

    def attempt_fill(self, word: str) -> dict:
        result = self.task.attempt_fill(word)
        if not result['accepted']:
            if result['slot_type']:
                announce(self.speaker, f"Try a {result['slot_type']} word instead")
            return result
        if result['complete']:
            logger.info(f"Sentence complete: {self.task.text()}")
            announce(self.speaker, self.task.text())
        else:
            announce(self.speaker, f"Great! {result['word']}")
        return result

    def clear_slot(self, index: int) -> bool:
        word = self.task.clear_slot(index)
        if word is None:
            return False
        announce(self.speaker, f"{word} removed")
        return True

    def reset(self) -> SentenceTask:
        """Start the current template over."""
        self.task = self.parse_template(self.templates[self.index], self.theme)
        return self.task

    def next_template(self) -> bool:
        """Move on once the current sentence is complete.

        Returns True if a new template started. After the last template the
        engine is finished and a completion record goes to the store.
        """
        if self.finished or not self.task.is_complete:
            return False
        if self.index + 1 < len(self.templates):
            self.index += 1
            self.task = self.parse_template(self.templates[self.index], self.theme)
            return True
        self.finished = True
        record = {
            'theme': self.theme,
            'completed_at': datetime.now(timezone.utc).isoformat(),
            'sentences_built': self.index + 1,
        }
        if self.store is not None:
            self.store.set(KEY_SENTENCES_DONE, record)
        logger.info(f"All {self.index + 1} {self.theme} sentences built")
        return False

    def to_dict(self) -> dict:
        data = self.task.to_dict()
        data.update({
            'template_index': self.index,
            'template_count': len(self.templates),
            'finished': self.finished,
        })
        return data
