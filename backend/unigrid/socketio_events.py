from flask import current_app, request
from unigrid import get_grid_server, socketio


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    sid = _get_sid()
    get_grid_server().connect(sid)
    current_app.logger.debug(f"[connect] sid={sid}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    if not get_grid_server().disconnect(sid):
        current_app.logger.debug(f"[disconnect-skip] sid={sid} was not registered")


def handle_submit(data=None, *args):
    """Return value is delivered to the client as the Socket.IO ack.

    Missing or extra arguments still reach validation so the caller always
    gets an acknowledgement.
    """
    ack = get_grid_server().submit(data)
    if not ack.get('ok'):
        current_app.logger.debug(f"[submit] sid={_get_sid()} rejected: {ack}")
    return ack


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('submit', handle_submit, namespace=namespace)
