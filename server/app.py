"""FastAPI server for the sprout engine."""

import logging
import os
import re
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from sprout.chunker import PhonemicChunker
from sprout.config import ConfigError, TIERS
from sprout.interfaces import Speaker
from sprout.models import PerformanceSample
from sprout.session import LearningSession
from sprout.wordbank import WordBankRepository

from server.file_storage import FileStorage

logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


# Pydantic models for API
class ProfileRequest(BaseModel):
    user_id: str = "default"
    age: Optional[int] = Field(default=None, ge=0, le=120)
    theme: Optional[str] = None


class AttemptRequest(BaseModel):
    user_id: str = "default"
    word: str
    time_ms: int = Field(ge=0)
    hints_used: int = Field(default=0, ge=0)
    resets_used: int = Field(default=0, ge=0)
    completed: bool = True


class SlotRequest(BaseModel):
    user_id: str = "default"
    index: int


class FillRequest(BaseModel):
    user_id: str = "default"
    word: str


class UserRequest(BaseModel):
    user_id: str = "default"


class WordsResponse(BaseModel):
    theme: str
    tier: str
    words: list[str]


class NextWordResponse(BaseModel):
    word: Optional[str]
    chunks: list[str]
    tts_chunks: list[str]
    shuffled: list[str]
    theme: str
    tier: str


class AttemptResponse(BaseModel):
    tier_changed: bool
    change_type: Optional[str]
    tier: str
    words: list[str]
    completed_words: int
    sentence_stage_unlocked: bool
    cues: list[str]


class StatusResponse(BaseModel):
    theme: str
    tier: str
    age: int
    words: list[str]
    completed_words: list[str]
    sentence_stage_unlocked: bool
    unlock_count: int
    adaptive: dict
    performance: dict


class QueuedSpeaker(Speaker):
    """Collects read-aloud cues so the client can voice them."""

    def __init__(self):
        self.queue = []

    def speak(self, text: str, options: dict | None = None) -> None:
        self.queue.append(text)

    def drain(self) -> list[str]:
        cues, self.queue = self.queue, []
        return cues


# Global state (in production, use proper DI)
storage: FileStorage = None
repository: WordBankRepository = None
chunker = PhonemicChunker()
user_sessions: dict[str, LearningSession] = {}
user_speakers: dict[str, QueuedSpeaker] = {}


def init_services(state_dir: str = None, word_bank_path: str = None) -> None:
    """Set up storage and the word bank. Safe to call more than once."""
    global storage, repository
    state_dir = state_dir or os.environ.get('SPROUT_STATE_DIR')
    word_bank_path = word_bank_path or os.environ.get('SPROUT_WORD_BANK')
    storage = FileStorage(state_dir)
    if word_bank_path:
        repository = WordBankRepository.from_file(word_bank_path)
        logger.info(f"Loaded word bank from {word_bank_path}: {len(repository.all_themes())} themes")
    else:
        repository = WordBankRepository()
    user_sessions.clear()
    user_speakers.clear()


def get_repository() -> WordBankRepository:
    if repository is None:
        init_services()
    return repository


def validate_user_id(user_id: str) -> None:
    if not USER_ID_PATTERN.match(user_id):
        raise HTTPException(status_code=400, detail="Invalid user id")


def get_session(user_id: str = "default") -> LearningSession:
    """Get or create the learning session for a user."""
    validate_user_id(user_id)
    if storage is None:
        init_services()
    if user_id not in user_sessions:
        speaker = QueuedSpeaker()
        user_speakers[user_id] = speaker
        user_sessions[user_id] = LearningSession(storage.store_for(user_id), repository=get_repository(),
                                                 chunker=chunker, speaker=speaker)
        logger.info(f"Session opened for {user_id}: theme={user_sessions[user_id].theme}, tier={user_sessions[user_id].tier}")
    return user_sessions[user_id]


def drain_cues(user_id: str) -> list[str]:
    speaker = user_speakers.get(user_id)
    return speaker.drain() if speaker else []


def get_sentence_engine(session: LearningSession):
    engine = session.sentence_engine()
    if engine is None:
        raise HTTPException(
            status_code=403,
            detail=f"Build {session.unlock_count} words to unlock sentences "
                   f"({len(session.completed_words)} so far)"
        )
    return engine


app = FastAPI(title="Sprout API", description="Adaptive word and sentence building API")


@app.on_event("startup")
async def startup():
    """Initialize storage and the word bank on startup."""
    try:
        init_services()
    except ConfigError as e:
        logger.error(f"Cannot start: {e}")
        raise
    logger.info(f"Using state directory {storage.state_dir}")


@app.get("/")
async def root():
    """Health check."""
    return {"service": "sprout", "status": "ok"}


@app.get("/api/users")
async def list_users():
    """List all existing users."""
    if storage is None:
        init_services()
    return {"users": storage.list_users()}


@app.get("/api/users/{user_id}/exists")
async def check_user_exists(user_id: str):
    """Check if a user has saved progress."""
    validate_user_id(user_id)
    if storage is None:
        init_services()
    return {"exists": storage.user_exists(user_id)}


@app.delete("/api/users/{user_id}")
async def delete_user(user_id: str):
    """Forget a user's progress and drop their open session."""
    validate_user_id(user_id)
    if storage is None:
        init_services()
    user_sessions.pop(user_id, None)
    user_speakers.pop(user_id, None)
    deleted = storage.delete_user(user_id)
    if deleted:
        logger.info(f"Deleted progress for {user_id}")
    return {"deleted": deleted}


@app.get("/api/themes")
async def list_themes():
    repo = get_repository()
    return {"themes": sorted(repo.all_themes()), "default": repo.default_theme, "tiers": list(TIERS)}


@app.get("/api/words", response_model=WordsResponse)
async def get_words(theme: str, tier: str):
    """Word list for a theme and tier. Unknown themes use the default theme."""
    repo = get_repository()
    return WordsResponse(theme=repo.resolve_theme(theme), tier=tier, words=repo.words_for(theme, tier))


@app.get("/api/chunks/{word}")
async def get_chunks(word: str, theme: Optional[str] = None):
    """Chunks for a word: authored ones from the word bank when it has them."""
    repo = get_repository()
    authored = repo.authored_chunks(theme, word)
    chunks = authored or chunker.chunks_for(word)
    return {
        "word": word.upper(),
        "chunks": chunks,
        "tts_chunks": repo.tts_chunks(theme, word) or chunks,
        "authored": authored is not None,
    }


@app.get("/api/status", response_model=StatusResponse)
async def get_status(user_id: str = "default"):
    """Get learner status and progress."""
    session = get_session(user_id)
    return StatusResponse(unlock_count=session.unlock_count, **session.status())


@app.post("/api/profile", response_model=StatusResponse)
async def set_profile(request: ProfileRequest):
    """Set learner age and/or theme."""
    session = get_session(request.user_id)
    session.set_profile(age=request.age, theme=request.theme)
    return StatusResponse(unlock_count=session.unlock_count, **session.status())


@app.get("/api/word/next", response_model=NextWordResponse)
async def next_word(user_id: str = "default"):
    """Next word to build, with its chunks in order and shuffled.

    The client runs the build task and reports it to /api/word/attempt.
    """
    session = get_session(user_id)
    card = session.word_card()
    if card is None:
        return NextWordResponse(word=None, chunks=[], tts_chunks=[], shuffled=[],
                                theme=session.theme, tier=session.tier)
    return NextWordResponse(theme=session.theme, tier=session.tier, **card)


@app.post("/api/word/attempt", response_model=AttemptResponse)
async def record_attempt(request: AttemptRequest):
    """Report how a build-a-word attempt went."""
    session = get_session(request.user_id)
    sample = PerformanceSample(
        time_ms=request.time_ms,
        hints_used=request.hints_used,
        resets_used=request.resets_used,
        completed=request.completed,
        word=request.word.upper(),
    )
    result = session.record_attempt(sample)
    if result['tier_changed']:
        logger.info(f"{request.user_id} moved {result['change_type']} to {result['tier']}")
    return AttemptResponse(
        tier_changed=result['tier_changed'],
        change_type=result['change_type'],
        tier=result['tier'],
        words=result['words'],
        completed_words=result['completed_words'],
        sentence_stage_unlocked=result['sentence_stage_unlocked'],
        cues=drain_cues(request.user_id),
    )


@app.get("/api/sentence")
async def get_sentence(user_id: str = "default"):
    """Current sentence task."""
    engine = get_sentence_engine(get_session(user_id))
    return {"sentence": engine.to_dict(), "cues": drain_cues(user_id)}


@app.post("/api/sentence/select")
async def select_slot(request: SlotRequest):
    engine = get_sentence_engine(get_session(request.user_id))
    selected = engine.select_slot(request.index)
    return {"selected": selected, "sentence": engine.to_dict(), "cues": drain_cues(request.user_id)}


@app.post("/api/sentence/fill")
async def fill_slot(request: FillRequest):
    """Try a word in the selected slot. Rejections are not errors."""
    engine = get_sentence_engine(get_session(request.user_id))
    result = engine.attempt_fill(request.word)
    return {"result": result, "sentence": engine.to_dict(), "cues": drain_cues(request.user_id)}


@app.post("/api/sentence/clear")
async def clear_slot(request: SlotRequest):
    engine = get_sentence_engine(get_session(request.user_id))
    cleared = engine.clear_slot(request.index)
    return {"cleared": cleared, "sentence": engine.to_dict(), "cues": drain_cues(request.user_id)}


@app.post("/api/sentence/reset")
async def reset_sentence(request: UserRequest):
    engine = get_sentence_engine(get_session(request.user_id))
    engine.reset()
    return {"sentence": engine.to_dict(), "cues": drain_cues(request.user_id)}


@app.post("/api/sentence/next")
async def next_sentence(request: UserRequest):
    """Advance to the next template once the current sentence is complete."""
    engine = get_sentence_engine(get_session(request.user_id))
    advanced = engine.next_template()
    return {
        "advanced": advanced,
        "finished": engine.finished,
        "sentence": engine.to_dict(),
        "cues": drain_cues(request.user_id),
    }
