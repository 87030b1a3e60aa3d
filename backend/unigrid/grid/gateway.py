from typing import Any


class SocketIOGateway:
    """Push events to Socket.IO sessions on one namespace.

    Uses ``socketio.emit`` rather than the request-bound ``emit`` helper so
    it works from any handler and from outside a request context.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self._socketio = socketio
        self.namespace = namespace

    def broadcast(self, event: str, data: Any) -> None:
        self._socketio.emit(event, data, namespace=self.namespace)

    def send(self, sid: str, event: str, data: Any) -> None:
        self._socketio.emit(event, data, to=sid, namespace=self.namespace)
