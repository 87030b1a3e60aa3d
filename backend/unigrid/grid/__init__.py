"""Shared grid domain: state, cooldown policy, sessions and submissions.

Nothing here imports Flask; the transport layer talks to ``GridServer`` and
hands it a gateway for pushing events to sessions.
"""

from .cooldown import CooldownPolicy, Verdict
from .coordinator import SubmissionCoordinator, SubmissionRejected, first_grapheme
from .gateway import SocketIOGateway
from .registry import ConnectionRegistry
from .server import GridServer
from .store import COLS, ROWS, GridStore, InvalidMove, Move, replay
