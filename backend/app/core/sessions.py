"""In-memory session registry for PIN-authenticated clients."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
import logging

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    token: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """A session is still valid at exactly ``expires_at``."""
        return now > self.expires_at

    @property
    def expires_at_ms(self) -> int:
        return int(self.expires_at.timestamp() * 1000)


class SessionStore(ABC):
    """Storage contract for issued sessions."""

    clock: Clock

    @abstractmethod
    def get(self, token: str) -> Optional[Session]:
        ...

    @abstractmethod
    def put(self, session: Session) -> None:
        ...

    @abstractmethod
    def evict(self, token: str) -> bool:
        ...

    @abstractmethod
    def sweep(self) -> int:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemorySessionStore(SessionStore):
    """Dict-backed store; contents are lost on restart."""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock
        self._sessions: Dict[str, Session] = {}

    def get(self, token: str) -> Optional[Session]:
        return self._sessions.get(token)

    def put(self, session: Session) -> None:
        self._sessions[session.token] = session

    def evict(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def sweep(self) -> int:
        """Remove every expired session and return how many were dropped."""
        now = self.clock()
        expired = [token for token, s in list(self._sessions.items()) if s.is_expired(now)]
        for token in expired:
            self._sessions.pop(token, None)
        if expired:
            logger.info(f"Swept {len(expired)} expired session(s)")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
