"""Many sessions, one lock each."""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from unosession.engine import GameSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Owns independent game sessions keyed by an opaque session id.

    A session must only be touched inside ``locked(session_id)``; that is
    what makes the single-writer engine safe behind a threaded transport.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Tuple[GameSession, threading.Lock]] = {}
        self._guard = threading.Lock()

    def create(self, session_id: str, seed: Optional[int] = None) -> GameSession:
        with self._guard:
            if session_id in self._sessions:
                raise KeyError(f"Session {session_id} already exists")
            session = GameSession(seed=seed)
            self._sessions[session_id] = (session, threading.Lock())
        logger.info("Created session %s", session_id)
        return session

    def remove(self, session_id: str) -> None:
        with self._guard:
            if self._sessions.pop(session_id, None) is None:
                raise KeyError(f"Unknown session {session_id}")
        logger.info("Removed session %s", session_id)

    def session_ids(self) -> List[str]:
        with self._guard:
            return list(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._sessions

    @contextmanager
    def locked(self, session_id: str) -> Iterator[GameSession]:
        """Hold the session's lock for the duration of the block."""
        with self._guard:
            entry = self._sessions.get(session_id)
        if entry is None:
            raise KeyError(f"Unknown session {session_id}")
        session, lock = entry
        with lock:
            yield session
