"""In-memory session store for multi-turn questions about a saved project."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from google.genai import types

from .config import get_config


@dataclass
class ChatSession:
    """Conversation context for one saved project."""

    session_id: str
    user_id: str
    project_id: str
    coin_name: str = ""
    system_instruction: str = ""
    history: list[types.Content] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    last_active: datetime = field(default_factory=datetime.now)
    turn_count: int = 0

    def append_turn(self, question: types.Content, answer: types.Content, keep_turns: int) -> None:
        """Record one question/answer pair, keeping only the last *keep_turns* pairs."""
        self.history = [*self.history, question, answer][-2 * max(keep_turns, 1):]
        self.turn_count += 1
        self.last_active = datetime.now()


class ChatStore:
    """Process-wide chat session registry with TTL eviction and a size cap."""

    def __init__(self) -> None:
        self._sessions: dict[str, ChatSession] = {}

    def create(
        self,
        user_id: str,
        project_id: str,
        coin_name: str = "",
        system_instruction: str = "",
    ) -> ChatSession:
        """Create a new session, evicting expired ones first."""
        self._evict_expired()
        if len(self._sessions) >= get_config().max_chat_sessions:
            oldest_id = min(self._sessions, key=lambda k: self._sessions[k].last_active)
            del self._sessions[oldest_id]

        session = ChatSession(
            session_id=uuid.uuid4().hex[:12],
            user_id=user_id,
            project_id=project_id,
            coin_name=coin_name,
            system_instruction=system_instruction,
        )
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> ChatSession | None:
        self._evict_expired()
        return self._sessions.get(session_id)

    def add_turn(
        self,
        session_id: str,
        question: types.Content,
        answer: types.Content,
    ) -> int:
        """Append a question/answer pair to *session_id*. Returns the new turn count.

        Raises:
            KeyError: The session is unknown or already evicted.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found")
        session.append_turn(question, answer, get_config().chat_max_turns)
        return session.turn_count

    def _evict_expired(self) -> int:
        """Drop sessions idle for longer than the configured timeout. Returns count evicted."""
        timeout = timedelta(hours=get_config().chat_timeout_hours)
        now = datetime.now()
        expired = [sid for sid, s in self._sessions.items() if now - s.last_active > timeout]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()

    @property
    def count(self) -> int:
        """Number of active sessions."""
        return len(self._sessions)


chat_store = ChatStore()
