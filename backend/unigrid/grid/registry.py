import logging
import threading
from typing import Any, Callable, Dict, Set

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Track connected sessions and keep every viewer's online count current."""

    def __init__(self, gateway, lock=None):
        self._gateway = gateway
        self._lock = lock or threading.RLock()
        self._active: Set[str] = set()

    @property
    def online_count(self) -> int:
        return len(self._active)

    def is_connected(self, sid: str) -> bool:
        return sid in self._active

    def _broadcast_online(self) -> None:
        self._gateway.broadcast('onlineCount', len(self._active))

    def on_connect(self, sid: str, init_payload: Callable[[], Dict[str, Any]]) -> None:
        """Register ``sid``, announce the new count, then send it ``init``.

        ``init_payload`` is called under the lock after registration so the
        snapshot and online count it reports include this session.
        """
        with self._lock:
            self._active.add(sid)
            logger.info(f"[connect] sid={sid} online={len(self._active)}")
            self._broadcast_online()
            self._gateway.send(sid, 'init', init_payload())

    def on_disconnect(self, sid: str) -> bool:
        with self._lock:
            if sid not in self._active:
                return False
            self._active.discard(sid)
            logger.info(f"[disconnect] sid={sid} online={len(self._active)}")
            self._broadcast_online()
            return True
