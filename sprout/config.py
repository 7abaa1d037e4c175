"""Configuration constants for the sprout engine."""


class ConfigError(Exception):
    """Raised when static configuration (word bank, templates) is unusable."""


TIERS = ('easy', 'regular', 'challenge')

DEFAULT_THEME = 'animals'
DEFAULT_LEARNER_AGE = 10

# Starting tier by age: (minimum age, tier), ascending
AGE_TIER_BANDS = [
    (0, 'easy'),
    (9, 'regular'),
    (12, 'challenge'),
]

# Adaptation window
WINDOW_SIZE = 3               # Number of recent samples considered
MIN_SAMPLES = 3               # No tier change before this many samples in the window

# Ease criteria (all must hold to move up)
EASE_MAX_AVG_TIME_MS = 20000
EASE_MAX_HINT_RATE = 0.0
EASE_MAX_RESET_RATE = 0.0
EASE_MIN_COMPLETION_RATE = 1.0

# Struggle criteria (any one moves down)
STRUGGLE_MIN_AVG_TIME_MS = 30000
STRUGGLE_MIN_HINT_RATE = 0.66
STRUGGLE_MIN_RESET_RATE = 0.66
STRUGGLE_MAX_COMPLETION_RATE = 0.34

# Completed words needed before sentence building opens up
SENTENCE_UNLOCK_WORD_COUNT = 5

# Key-value store keys
KEY_THEME = 'selected-theme'
KEY_TIER = 'current-tier'
KEY_AGE = 'user-age'
KEY_COMPLETED_WORDS = 'completed-words'
KEY_PERFORMANCE = 'performance-history'
KEY_SENTENCES_DONE = 'word-building-completed'

# Read-aloud defaults
SPEECH_RATE = 0.8
SPEECH_PITCH = 1.1
SPEECH_VOICE = None

# Phonetic units tried at each scan position. Longest match wins,
# earlier entries win ties.
PHONETIC_UNITS = (
    # three-letter blends and digraph blends
    'STR', 'SPL', 'SPR', 'SCR', 'SQU', 'THR', 'SHR', 'CHR',
    # affixes
    'TION', 'SION', 'NESS', 'MENT', 'ING', 'EST', 'UN', 'RE', 'ED', 'ER', 'LY',
    # consonant digraphs
    'TH', 'CH', 'SH', 'PH', 'WH', 'CK', 'NG',
    # initial blends
    'BL', 'BR', 'CL', 'CR', 'DR', 'FL', 'FR', 'GL', 'GR', 'PL', 'PR',
    'SC', 'SK', 'SL', 'SM', 'SN', 'SP', 'ST', 'SW', 'TR', 'TW',
)
