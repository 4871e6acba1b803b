"""Optimistic update helper.

Applies a local change before the remote write completes, and puts the local
state back if the write fails:

    snapshot -> apply -> commit -> (failure: restore snapshot) -> always resync

Usage:
    from libs.common.optimistic import run_optimistic

    updated = await run_optimistic(
        snapshot=cache.snapshot,
        apply=lambda: cache.patch(product_id, changes),
        commit=lambda: update_product(db, product_id, changes),
        restore=cache.restore,
        resync=cache.invalidate,
    )
"""

import inspect
from typing import Any, Awaitable, Callable, Optional, TypeVar

from libs.common.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S")
R = TypeVar("R")


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def run_optimistic(
    *,
    snapshot: Callable[[], S],
    apply: Callable[[], Any],
    commit: Callable[[], Awaitable[R]],
    restore: Callable[[S], Any],
    resync: Optional[Callable[[], Any]] = None,
) -> R:
    """Run ``commit`` behind an optimistic ``apply``.

    The snapshot is captured before ``apply`` runs. If ``commit`` raises, the
    snapshot is restored wholesale and the error propagates unchanged.
    ``resync`` runs whatever the outcome; a resync failure is logged and never
    replaces the commit result or the commit error.
    """
    previous = snapshot()
    await _maybe_await(apply())
    try:
        return await commit()
    except Exception:
        await _maybe_await(restore(previous))
        logger.info("Optimistic update rolled back")
        raise
    finally:
        if resync is not None:
            try:
                await _maybe_await(resync())
            except Exception as e:
                logger.warning(f"Resync after optimistic update failed: {e}")
