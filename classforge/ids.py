from __future__ import annotations

import time
from typing import Callable, Container

IdFactory = Callable[[], str]

_last_stamp = 0


def new_id() -> str:
    """Return a time-based id, strictly increasing for the life of the process.

    Ids are microsecond timestamps; when two calls land in the same tick the
    second one is bumped past the first.
    """
    global _last_stamp

    stamp = time.time_ns() // 1_000
    if stamp <= _last_stamp:
        stamp = _last_stamp + 1
    _last_stamp = stamp
    return str(stamp)


def fresh_id(taken: Container[str], id_factory: IdFactory = new_id) -> str:
    """Draw ids from `id_factory` until one is not already in `taken`."""
    candidate = id_factory()
    while candidate in taken:
        candidate = id_factory()
    return candidate
