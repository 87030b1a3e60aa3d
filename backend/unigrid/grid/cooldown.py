from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Verdict:
    admitted: bool
    retry_after_ms: Optional[int] = None
    permanent: bool = False

    @classmethod
    def admit(cls) -> 'Verdict':
        return cls(admitted=True)

    @classmethod
    def deny(cls, retry_after_ms: Optional[int] = None, permanent: bool = False) -> 'Verdict':
        return cls(admitted=False, retry_after_ms=retry_after_ms, permanent=permanent)


class CooldownPolicy:
    """Decide whether a player may place another move.

    With ``cooldown_seconds == 0`` every player gets exactly one accepted move
    for the lifetime of the process. Otherwise a player may move once per
    ``cooldown_seconds`` window, measured from their last accepted move.

    ``evaluate`` never records anything; call ``record`` only once the move
    has actually been applied so a rejected attempt does not use up the
    player's allowance.
    """

    def __init__(self, cooldown_seconds: int = 0):
        if cooldown_seconds < 0:
            raise ValueError(f'cooldown_seconds must be >= 0, got {cooldown_seconds}')
        self.cooldown_seconds = int(cooldown_seconds)
        self._last_accepted_at: Dict[str, int] = {}

    @property
    def window_ms(self) -> int:
        return self.cooldown_seconds * 1000

    def last_accepted_at(self, player_id: str) -> Optional[int]:
        return self._last_accepted_at.get(player_id)

    def evaluate(self, player_id: str, now: int) -> Verdict:
        last = self._last_accepted_at.get(player_id)
        if self.cooldown_seconds == 0:
            if last is not None:
                return Verdict.deny(permanent=True)
            return Verdict.admit()
        if last is None:
            return Verdict.admit()
        elapsed = now - last
        if elapsed >= self.window_ms:
            return Verdict.admit()
        return Verdict.deny(retry_after_ms=self.window_ms - elapsed)

    def record(self, player_id: str, at: int) -> None:
        self._last_accepted_at[player_id] = at
