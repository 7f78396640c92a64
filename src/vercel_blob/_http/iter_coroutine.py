"""Drive a non-suspending coroutine to completion without an event loop."""

from __future__ import annotations

import typing

_T = typing.TypeVar("_T")


def iter_coroutine(coro: typing.Coroutine[None, None, _T]) -> _T:
    """
    Run ``coro`` synchronously and return its result.

    The blocking client reuses the coroutine-based request core by pairing it
    with a transport whose ``send`` never awaits anything. Such a coroutine
    finishes on its first ``send(None)``.

    Raises:
        RuntimeError: If the coroutine suspends (e.g. it awaited real I/O).
    """
    try:
        coro.send(None)
    except StopIteration as ex:
        return ex.value  # type: ignore [no-any-return]
    else:
        raise RuntimeError(f"coroutine {coro!r} did not stop after one iteration!")
    finally:
        coro.close()


__all__ = ["iter_coroutine"]
