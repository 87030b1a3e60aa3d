import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import regex

from .cooldown import CooldownPolicy
from .store import GridStore, in_bounds

logger = logging.getLogger(__name__)

_GRAPHEME = regex.compile(r'\X')

INVALID_COORDINATES = 'Invalid coordinates'
CHARACTER_REQUIRED = 'Character required'
PLAYER_ID_REQUIRED = 'playerId required'
ON_COOLDOWN = 'On cooldown'
SERVER_ERROR = 'Server error'


def now_ms() -> int:
    return int(time.time() * 1000)


def first_grapheme(text: str) -> str:
    """Return the first user-perceived character of ``text`` ('' if empty).

    Combining marks, ZWJ emoji sequences and flags count as one character.
    """
    if not text:
        return ''
    match = _GRAPHEME.match(text)
    return match.group(0) if match else ''


def _as_index(value: Any) -> Optional[int]:
    # bool is an int subclass; True is not a coordinate
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class SubmissionRejected(Exception):
    """A submission failed validation or the cooldown check."""

    def __init__(self, error: str, **extra: Any):
        super().__init__(error)
        self.error = error
        self.extra = extra

    def to_ack(self) -> Dict[str, Any]:
        ack = {'ok': False, 'error': self.error}
        ack.update(self.extra)
        return ack


class SubmissionCoordinator:
    """Run one submission from raw payload to broadcast and acknowledgement.

    Validation and the cooldown check happen before anything is written, and
    the store mutation plus cooldown record are done together under the
    shared lock, so a rejected or failed submission leaves no trace.
    """

    def __init__(
        self,
        store: GridStore,
        policy: CooldownPolicy,
        gateway,
        clock: Callable[[], int] = now_ms,
        lock=None,
    ):
        self.store = store
        self.policy = policy
        self._gateway = gateway
        self.clock = clock
        self._lock = lock or threading.RLock()

    def validate(self, payload: Any) -> Dict[str, Any]:
        """Normalise a raw ``submit`` payload or raise SubmissionRejected."""
        if not isinstance(payload, dict):
            payload = {}
        row = _as_index(payload.get('row'))
        col = _as_index(payload.get('col'))
        if row is None or col is None or not in_bounds(row, col, self.store.rows, self.store.cols):
            raise SubmissionRejected(INVALID_COORDINATES)
        raw_char = payload.get('char')
        # only text is a character; lists, numbers and booleans are not
        char = first_grapheme(raw_char.strip()) if isinstance(raw_char, str) else ''
        if not char:
            raise SubmissionRejected(CHARACTER_REQUIRED)
        player_id = str(payload.get('playerId') or '').strip()
        if not player_id:
            raise SubmissionRejected(PLAYER_ID_REQUIRED)
        return {'row': row, 'col': col, 'char': char, 'player_id': player_id}

    def _timestamp(self) -> int:
        now = int(self.clock())
        last = self.store.last_at
        # history timestamps never go backwards even if the wall clock does
        if last is not None and now < last:
            return last
        return now

    def _check_cooldown(self, player_id: str, now: int) -> None:
        verdict = self.policy.evaluate(player_id, now)
        if verdict.admitted:
            return
        extra = {'permanent': verdict.permanent}
        if verdict.retry_after_ms is not None:
            extra['retryAfterMs'] = verdict.retry_after_ms
        raise SubmissionRejected(ON_COOLDOWN, **extra)

    def submit(self, payload: Any) -> Dict[str, Any]:
        """Process a ``submit`` event and return the caller's acknowledgement."""
        try:
            with self._lock:
                fields = self.validate(payload)
                now = self._timestamp()
                self._check_cooldown(fields['player_id'], now)
                move = self.store.apply_move(
                    fields['row'], fields['col'], fields['char'], fields['player_id'], now
                )
                self.policy.record(fields['player_id'], now)
                logger.info(
                    f"[submit] player={move.by} row={move.row} col={move.col} char={move.char!r} at={move.at}"
                )
                self._gateway.broadcast('update', move.to_dict())
                return {'ok': True, 'at': move.at}
        except SubmissionRejected as rejected:
            logger.debug(f"[submit-rejected] error={rejected.error} extra={rejected.extra}")
            return rejected.to_ack()
        except Exception:
            logger.exception("[submit-error] unexpected failure while handling submission")
            return {'ok': False, 'error': SERVER_ERROR}
