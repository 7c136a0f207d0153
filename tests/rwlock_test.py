import asyncio

import pytest

from booking.rwlock import AsyncRWLock


@pytest.mark.asyncio
class TestAsyncRWLock:
    async def test_readers_share_the_lock(self):
        lock = AsyncRWLock()
        inside = asyncio.Event()
        release = asyncio.Event()
        peak = 0

        async def reader():
            nonlocal peak
            async with lock.read():
                peak = max(peak, lock.readers)
                if lock.readers == 3:
                    inside.set()
                await release.wait()

        tasks = [asyncio.create_task(reader()) for _ in range(3)]
        await asyncio.wait_for(inside.wait(), timeout=1)
        release.set()
        await asyncio.gather(*tasks)

        assert peak == 3
        assert lock.readers == 0

    async def test_writer_excludes_readers(self):
        lock = AsyncRWLock()
        events = []

        async with lock.write():
            reader = asyncio.create_task(self._read(lock, events))
            await asyncio.sleep(0.01)
            assert events == []
            events.append("write done")

        await reader
        assert events == ["write done", "read"]

    async def test_writer_waits_for_readers(self):
        lock = AsyncRWLock()
        events = []

        async with lock.read():
            writer = asyncio.create_task(self._write(lock, events))
            await asyncio.sleep(0.01)
            assert not lock.writer_active
            events.append("read done")

        await writer
        assert events == ["read done", "write"]

    async def test_waiting_writer_blocks_new_readers(self):
        lock = AsyncRWLock()
        events = []

        await lock.acquire_read()
        writer = asyncio.create_task(self._write(lock, events))
        await asyncio.sleep(0.01)
        late_reader = asyncio.create_task(self._read(lock, events))
        await asyncio.sleep(0.01)
        assert events == []

        await lock.release_read()
        await asyncio.gather(writer, late_reader)
        assert events == ["write", "read"]

    async def test_cancelled_writer_unblocks_readers(self):
        lock = AsyncRWLock()
        events = []

        await lock.acquire_read()
        writer = asyncio.create_task(self._write(lock, events))
        await asyncio.sleep(0.01)
        late_reader = asyncio.create_task(self._read(lock, events))
        await asyncio.sleep(0.01)

        writer.cancel()
        with pytest.raises(asyncio.CancelledError):
            await writer
        await asyncio.wait_for(late_reader, timeout=1)
        await lock.release_read()

        assert events == ["read"]
        assert not lock.writer_active

    @staticmethod
    async def _read(lock, events):
        async with lock.read():
            events.append("read")

    @staticmethod
    async def _write(lock, events):
        async with lock.write():
            events.append("write")
