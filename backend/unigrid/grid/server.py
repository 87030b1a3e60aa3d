import threading
from typing import Any, Callable, Dict

from .cooldown import CooldownPolicy
from .coordinator import SubmissionCoordinator, now_ms
from .registry import ConnectionRegistry
from .store import COLS, ROWS, GridStore


class GridServer:
    """Wire the grid components together behind one lock.

    Handlers talk only to this object; each connect, disconnect and submit
    runs start to finish, broadcasts included, while holding the lock.
    """

    def __init__(
        self,
        gateway,
        cooldown_seconds: int = 0,
        clock: Callable[[], int] = now_ms,
        rows: int = ROWS,
        cols: int = COLS,
    ):
        self.lock = threading.RLock()
        self.store = GridStore(rows, cols)
        self.policy = CooldownPolicy(cooldown_seconds)
        self.registry = ConnectionRegistry(gateway, lock=self.lock)
        self.coordinator = SubmissionCoordinator(
            self.store, self.policy, gateway, clock=clock, lock=self.lock
        )

    @property
    def cooldown_seconds(self) -> int:
        return self.policy.cooldown_seconds

    def state(self) -> Dict[str, Any]:
        """Payload sent as ``init``: grid, history, online count and cooldown."""
        with self.lock:
            payload = self.store.snapshot()
            payload['onlineCount'] = self.registry.online_count
            payload['cooldownSeconds'] = self.cooldown_seconds
            return payload

    def connect(self, sid: str) -> None:
        self.registry.on_connect(sid, self.state)

    def disconnect(self, sid: str) -> bool:
        return self.registry.on_disconnect(sid)

    def submit(self, payload: Any) -> Dict[str, Any]:
        return self.coordinator.submit(payload)
