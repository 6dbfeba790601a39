from __future__ import annotations

import threading
import uuid
from typing import Dict

# Simple in-memory store: client_id -> token of the latest query.
# This is fine for a single-process deployment.
_LATEST: Dict[str, str] = {}
_LOCK = threading.Lock()


def begin_query(client_id: int | str) -> str:
    """
    Register a new query for this client and return its token.
    Any query the client started earlier becomes stale.
    """
    token = uuid.uuid4().hex
    with _LOCK:
        _LATEST[str(client_id)] = token
    return token


def is_current(client_id: int | str, token: str) -> bool:
    """
    True if no newer query was started for this client since `token`.
    """
    with _LOCK:
        return _LATEST.get(str(client_id)) == token


def finish_query(client_id: int | str, token: str) -> None:
    """
    Forget the client once its latest query is done.
    """
    with _LOCK:
        if _LATEST.get(str(client_id)) == token:
            _LATEST.pop(str(client_id), None)


def clear_all() -> None:
    with _LOCK:
        _LATEST.clear()
