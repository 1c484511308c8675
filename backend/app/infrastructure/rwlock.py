"""Async Reader/Writer Lock — shared readers, exclusive writers.

Invariants:
    - Any number of readers may hold the lock together
    - A writer holds the lock alone (no readers, no other writer)
    - A waiting writer blocks new readers, so writers cannot starve

Design Decisions:
    - Built on one asyncio.Condition: the lock lives inside a single event loop,
      matching one-task-per-request uvicorn workers
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class AsyncReaderWriterLock:
    """Writer-preferring reader/writer lock for asyncio tasks."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer_active

    async def acquire_read(self) -> None:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer_active and self._writers_waiting == 0,
            )
            self._readers += 1

    async def release_read(self) -> None:
        async with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    async def acquire_write(self) -> None:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer_active and self._readers == 0,
                )
            except BaseException:
                # cancelled while queued: readers held back by us may proceed
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer_active = True

    async def release_write(self) -> None:
        async with self._cond:
            self._writer_active = False
            self._cond.notify_all()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        await self.acquire_read()
        try:
            yield
        finally:
            await self.release_read()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        await self.acquire_write()
        try:
            yield
        finally:
            await self.release_write()
