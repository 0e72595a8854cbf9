"""Tests for tolog.journal.session."""

import asyncio
from pathlib import Path

import pytest

from tolog.core.storage import LocalFileSystem, MemoryFileSystem
from tolog.journal.session import JournalSession

DELAY = 0.05
INTERVAL = 0.02


async def wait_for(predicate, timeout=2.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            return False
        await asyncio.sleep(INTERVAL / 2)
    return True


@pytest.fixture
def session(memory_fs, preferences, journal_dir):
    preferences.set("journal_path", str(journal_dir))
    return JournalSession(memory_fs, preferences, save_delay=DELAY, watch_interval=INTERVAL)


class TestOpen:
    async def test_loads_and_watches(self, session, memory_fs, journal_dir):
        memory_fs.put(journal_dir / "2024_03_14.md", "a")
        memory_fs.put(journal_dir / "2024_03_15.md", "b")

        entries = await session.open()

        assert session.path == journal_dir
        assert [e.date for e in entries] == ["2024_03_15.md", "2024_03_14.md"]
        assert session.watching
        await session.close()
        assert not session.watching

    async def test_directory_failure_leaves_session_empty(self, preferences, log_messages):
        fs = MemoryFileSystem()
        fs.fail_mkdir.add(Path("/locked"))
        preferences.set("journal_path", "/locked")
        session = JournalSession(fs, preferences, save_delay=DELAY, watch_interval=INTERVAL)

        entries = await session.open()

        assert entries == ()
        assert session.path is None
        assert not session.watching
        await session.close()

    async def test_context_manager(self, session, memory_fs, journal_dir):
        memory_fs.put(journal_dir / "2024_03_15.md", "b")
        async with session as s:
            assert s.get("2024_03_15.md").content == "b"
        assert not session.watching


class TestSaveAndSync:
    async def test_save_then_reload(self, session, memory_fs, journal_dir):
        async with session:
            await session.save("2024_03_15.md", "Hello World")
            await session.writer.wait()
            entries = await session.reload()

        assert [(e.date, e.content) for e in entries] == [("2024_03_15.md", "Hello World")]
        assert memory_fs.files[journal_dir / "2024_03_15.md"] == "Hello World"

    async def test_external_change_is_picked_up(self, session, memory_fs, journal_dir):
        async with session:
            memory_fs.put(journal_dir / "2024_03_16.md", "from another device")
            assert await wait_for(lambda: session.get("2024_03_16.md") is not None)
            assert session.get("2024_03_16.md").content == "from another device"

    async def test_external_delete_is_picked_up(self, session, memory_fs, journal_dir):
        memory_fs.put(journal_dir / "2024_03_15.md", "doomed")
        async with session:
            memory_fs.remove(journal_dir / "2024_03_15.md")
            assert await wait_for(lambda: len(session.entries) == 0)

    async def test_own_write_reload_keeps_content(self, session, journal_dir):
        async with session:
            await session.save("2024_03_15.md", "abc")
            await session.writer.wait()
            # Give the watcher time to see our own write and reload
            await asyncio.sleep(INTERVAL * 5)
            assert session.get("2024_03_15.md").content == "abc"
            assert len(session.entries) == 1

    async def test_reload_during_pending_save_keeps_edit(self, memory_fs, preferences, journal_dir):
        memory_fs.put(journal_dir / "2024_03_15.md", "on disk")
        preferences.set("journal_path", str(journal_dir))
        session = JournalSession(memory_fs, preferences, save_delay=10, watch_interval=INTERVAL)

        async with session:
            await session.save("2024_03_15.md", "typing...")
            memory_fs.put(journal_dir / "notes.txt", "poke the watcher")
            await session.reload()
            assert session.get("2024_03_15.md").content == "typing..."

        # Closing flushed the pending edit
        assert memory_fs.files[journal_dir / "2024_03_15.md"] == "typing..."

    async def test_close_flushes_pending(self, memory_fs, preferences, journal_dir):
        preferences.set("journal_path", str(journal_dir))
        session = JournalSession(memory_fs, preferences, save_delay=10, watch=False)
        await session.open()
        await session.save("2024_03_15.md", "last words")

        await asyncio.wait_for(session.close(), timeout=1)

        assert memory_fs.files[journal_dir / "2024_03_15.md"] == "last words"

    async def test_save_without_directory_stays_in_memory(self, preferences, log_messages):
        fs = MemoryFileSystem()
        fs.fail_mkdir.add(Path("/locked"))
        preferences.set("journal_path", "/locked")
        session = JournalSession(fs, preferences, watch=False)
        await session.open()

        await session.save("2024_03_15.md", "nowhere to go")

        assert session.get("2024_03_15.md").content == "nowhere to go"
        assert fs.write_count == 0


class TestSetJournalPath:
    async def test_switches_directory(self, session, memory_fs, preferences, journal_dir):
        memory_fs.put(journal_dir / "2024_03_15.md", "old journal")
        memory_fs.put(Path("/other/2024_01_01.md"), "other journal")

        async with session:
            assert await session.set_journal_path("/other")
            assert session.path == Path("/other")
            assert [e.content for e in session.entries] == ["other journal"]
            assert session.watching

        assert preferences.get("journal_path") == "/other"

    async def test_creates_missing_directory(self, session, memory_fs):
        async with session:
            assert await session.set_journal_path("/brand/new")
            assert session.entries == ()
        assert Path("/brand/new") in memory_fs.directories

    @pytest.mark.parametrize("choice", [None, "", "   "])
    async def test_cancelled_choice_changes_nothing(self, session, preferences, journal_dir, choice):
        async with session:
            assert not await session.set_journal_path(choice)
            assert session.path == journal_dir
        assert preferences.get("journal_path") == str(journal_dir)

    async def test_uncreatable_directory_changes_nothing(self, session, memory_fs, preferences, journal_dir):
        memory_fs.fail_mkdir.add(Path("/locked"))
        async with session:
            assert not await session.set_journal_path("/locked")
            assert session.path == journal_dir
        assert preferences.get("journal_path") == str(journal_dir)

    async def test_pending_writes_land_in_old_directory(self, memory_fs, preferences, journal_dir):
        preferences.set("journal_path", str(journal_dir))
        session = JournalSession(memory_fs, preferences, save_delay=10, watch=False)
        async with session:
            await session.save("2024_03_15.md", "belongs to the old journal")
            await session.set_journal_path("/other")

        assert memory_fs.files[journal_dir / "2024_03_15.md"] == "belongs to the old journal"
        assert Path("/other/2024_03_15.md") not in memory_fs.files

    async def test_old_watch_released(self, session, memory_fs, journal_dir):
        async with session:
            old_handle = session._handle
            await session.set_journal_path("/other")
            assert old_handle.closed
            assert session._handle is not old_handle


@pytest.mark.smoke
async def test_local_end_to_end(tmp_path, preferences):
    journal = tmp_path / "journal"
    preferences.set("journal_path", str(journal))

    async with JournalSession(LocalFileSystem(), preferences, save_delay=DELAY, watch_interval=INTERVAL) as session:
        await session.save("2024_03_15.md", "Hello World")
        await session.writer.wait()
        (journal / "2024_03_14.md").write_text("written elsewhere", encoding="utf-8")
        assert await wait_for(lambda: len(session.entries) == 2)

    assert [e.date for e in session.entries] == ["2024_03_15.md", "2024_03_14.md"]
    assert (journal / "2024_03_15.md").read_text(encoding="utf-8") == "Hello World"
