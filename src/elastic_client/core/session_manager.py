"""
Thread-local ``requests.Session`` management for ``SyncSender``.

``requests.Session`` is not safe to share between threads that send
concurrently, so every thread gets its own session, created lazily from the
sender's factory.
"""
import threading
import weakref
from typing import Callable, Set

import requests

from .exceptions import ClientClosedError


class ThreadSafeSessionManager:
    """
    Manages one ``requests.Session`` per thread.

    Example:
        >>> manager = ThreadSafeSessionManager(session_factory)
        >>> session = manager.get_session()  # this thread's session
        >>> manager.close_all()  # sessions of every thread
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        """
        Args:
            session_factory: Callable that creates and configures a new Session
        """
        self._session_factory = session_factory
        self._local = threading.local()

        # Weak references so sessions of finished threads can be collected
        self._all_sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get_session(self) -> requests.Session:
        """
        This thread's session, created on first use.

        Raises:
            ClientClosedError: If the manager was closed
        """
        if self._closed:
            raise ClientClosedError()

        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session

            with self._sessions_lock:
                self._all_sessions.add(weakref.ref(session, self._discard_ref))

        return session

    def _discard_ref(self, ref: weakref.ref) -> None:
        with self._sessions_lock:
            self._all_sessions.discard(ref)

    def close_all(self) -> None:
        """
        Close the sessions of all threads. Safe to call more than once.
        """
        self._closed = True
        self._local.session = None

        with self._sessions_lock:
            refs = list(self._all_sessions)
            self._all_sessions.clear()

        for ref in refs:
            session = ref()
            if session is not None:
                session.close()

    def get_active_sessions_count(self) -> int:
        """Number of sessions that are still alive."""
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)
