"""
Runs coroutines for the remote progress store from the synchronous pygame loop.
One event loop lives in a daemon thread so the asyncpg pool stays bound to it.
"""
from __future__ import annotations
import asyncio
import logging
import threading
from typing import Any, Coroutine

logger = logging.getLogger("catchgame.async")

_async_loop: asyncio.AbstractEventLoop | None = None
_async_thread: threading.Thread | None = None
_lock = threading.Lock()

DEFAULT_TIMEOUT = 30.0


def start_async_loop() -> asyncio.AbstractEventLoop:
    """Start the background loop if it is not running yet and return it."""
    global _async_loop, _async_thread
    with _lock:
        if _async_loop is not None:
            return _async_loop
        ready = threading.Event()
        loop = asyncio.new_event_loop()

        def run_loop():
            asyncio.set_event_loop(loop)
            loop.call_soon(ready.set)
            loop.run_forever()
            loop.close()

        _async_thread = threading.Thread(target=run_loop, name="progress-store", daemon=True)
        _async_thread.start()
        ready.wait()
        _async_loop = loop
        logger.debug("background event loop started")
        return loop


def run_async(coro: Coroutine, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """Run ``coro`` on the background loop and wait for its result."""
    loop = start_async_loop()
    future = asyncio.run_coroutine_threadsafe(coro, loop)
    return future.result(timeout=timeout)


def stop_async_loop() -> None:
    """Stop the background loop and wait for its thread to finish."""
    global _async_loop, _async_thread
    with _lock:
        loop, thread = _async_loop, _async_thread
        _async_loop = None
        _async_thread = None
    if loop is None:
        return
    loop.call_soon_threadsafe(loop.stop)
    if thread is not None:
        thread.join(timeout=DEFAULT_TIMEOUT)
    logger.debug("background event loop stopped")
