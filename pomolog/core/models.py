from __future__ import annotations

import random
import string
from dataclasses import dataclass, field, replace
from enum import Enum

from pomolog.core.clock import MS_PER_SECOND
from pomolog.core.config import DEFAULT_MINUTES, DEFAULT_SECONDS, MAX_INPUT_SECONDS


_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 10


class TimerPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    AWAITING_ANNOTATION = "awaiting_annotation"


def new_session_id(ended_at: int) -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LENGTH))
    return f"{ended_at}-{suffix}"


def clean_note(note: str | None) -> str:
    return (note or "").strip()


def parse_tags(text: str | None) -> tuple[str, ...]:
    """Splits comma-separated tags; order and duplicates are kept, blanks dropped."""
    parts = (part.strip() for part in (text or "").split(","))
    return tuple(part for part in parts if part)


def format_tags(tags: tuple[str, ...] | list[str]) -> str:
    return ", ".join(tags)


@dataclass(frozen=True)
class PendingSession:
    id: str
    started_at: int
    ended_at: int
    duration_seconds: int
    note: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def for_run(cls, started_at: int, ended_at: int) -> "PendingSession":
        if ended_at < started_at:
            raise ValueError("Session cannot end before it starts")
        return cls(
            id=new_session_id(ended_at),
            started_at=started_at,
            ended_at=ended_at,
            duration_seconds=max(0, round((ended_at - started_at) / MS_PER_SECOND)),
        )

    def finalize(self, note: str, tags_text: str) -> "Session":
        return Session(
            id=self.id,
            started_at=self.started_at,
            ended_at=self.ended_at,
            duration_seconds=self.duration_seconds,
            note=clean_note(note),
            tags=parse_tags(tags_text),
        )


@dataclass(frozen=True)
class Session(PendingSession):
    """A confirmed session; only `note` and `tags` change after this point."""

    def with_annotation(self, note: str, tags_text: str) -> "Session":
        return replace(self, note=clean_note(note), tags=parse_tags(tags_text))


@dataclass
class TimerState:
    planned_seconds: int = DEFAULT_MINUTES * 60 + DEFAULT_SECONDS
    remaining_seconds: int = DEFAULT_MINUTES * 60 + DEFAULT_SECONDS
    is_running: bool = False
    run_started_at: int | None = None
    pending_session: PendingSession | None = None
    input_minutes: int = DEFAULT_MINUTES
    input_seconds: int = DEFAULT_SECONDS
    note_draft: str = ""
    tags_draft: str = ""
    is_note_open: bool = False
    updated_at: int = 0

    @property
    def configured_seconds(self) -> int:
        return self.input_minutes * 60 + self.input_seconds

    @property
    def phase(self) -> TimerPhase:
        if self.is_running:
            return TimerPhase.RUNNING
        if self.pending_session is not None:
            return TimerPhase.AWAITING_ANNOTATION
        return TimerPhase.IDLE

    def set_inputs(self, minutes: int, seconds: int) -> None:
        self.input_minutes = max(0, int(minutes))
        self.input_seconds = min(MAX_INPUT_SECONDS, max(0, int(seconds)))

    def clear_drafts(self) -> None:
        self.note_draft = ""
        self.tags_draft = ""
        self.is_note_open = False


@dataclass(frozen=True)
class SessionCompleted:
    pending_session: PendingSession


@dataclass
class SessionLog:
    """Finalized sessions, newest first."""

    sessions: list[Session] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sessions)

    def __iter__(self):
        return iter(self.sessions)

    def __getitem__(self, index: int) -> Session:
        return self.sessions[index]

    def find(self, session_id: str) -> Session | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def prepend(self, session: Session) -> None:
        if self.find(session.id) is not None:
            raise ValueError(f"Duplicate session id: {session.id}")
        self.sessions.insert(0, session)

    def replace(self, session: Session) -> bool:
        for idx, existing in enumerate(self.sessions):
            if existing.id == session.id:
                self.sessions[idx] = session
                return True
        return False

    def remove(self, session_id: str) -> bool:
        before = len(self.sessions)
        self.sessions = [s for s in self.sessions if s.id != session_id]
        return len(self.sessions) != before
