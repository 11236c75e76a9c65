# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Asyncio helpers for driving async steps from synchronous listeners."""

import asyncio
import concurrent.futures
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """Get the current event loop, creating a new one if there is none.

    In Python 3.12+, get_event_loop() raises RuntimeError if there's no
    current event loop in the main thread; older versions create one. Closed
    loops are replaced as well.
    """
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop


def run_to_completion(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Listener callbacks are synchronous, but may be invoked while an event loop
    is already running in the thread (e.g. when the runner is embedded in an
    async application). In that case the coroutine runs on its own loop in a
    worker thread and the caller blocks until it is done.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        loop = get_or_create_event_loop()
        return loop.run_until_complete(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()
