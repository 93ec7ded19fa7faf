## In-memory roadmap sessions
"""
Sessions live in a process-local dict and are lost on restart.
Each session is expected to have a single writer at a time; the store does
no locking.
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, Field

from learnpath.agents.schemas import AgentState


class SessionNotFound(Exception):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"No roadmap session found with ID: {session_id}")


class ChatMessage(BaseModel):
    text: str
    is_user: bool
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RoadmapSession(BaseModel):
    id: str
    messages: List[ChatMessage] = Field(default_factory=list)
    context: AgentState
    created_at: datetime
    updated_at: datetime


class RoadmapSessionStore:
    def __init__(self):
        self._sessions: Dict[str, RoadmapSession] = {}

    def create(self, context: AgentState) -> RoadmapSession:
        now = datetime.now(timezone.utc)
        session = RoadmapSession(
            id=f"chat_{uuid.uuid4().hex}",
            messages=[
                ChatMessage(text=context.topic, is_user=True),
                ChatMessage(text=context.roadmap, is_user=False),
            ],
            context=context,
            created_at=now,
            updated_at=now,
        )
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> RoadmapSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def save_context(self, session_id: str, context: AgentState) -> RoadmapSession:
        session = self.get(session_id)
        if context is session.context:
            return session
        updated = session.model_copy(update={"context": context, "updated_at": datetime.now(timezone.utc)})
        self._sessions[session_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._sessions)


store = RoadmapSessionStore()


def get_store() -> RoadmapSessionStore:
    return store
