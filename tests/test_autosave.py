import asyncio

from tracker.autosave import AutosaveDocument, CLEAN, DIRTY


class Recorder:
    """Save callback that remembers what it was asked to write."""

    def __init__(self, fail=False, pause=0):
        self.saved = []
        self.fail = fail
        self.pause = pause

    async def __call__(self, value):
        if self.pause:
            await asyncio.sleep(self.pause)
        if self.fail:
            raise RuntimeError("store unavailable")
        self.saved.append(value)


def test_debounce_writes_latest_value_once():
    recorder = Recorder()
    doc = AutosaveDocument("doc", recorder, delay=0.01)

    async def scenario():
        for value in ("a", "ab", "abc"):
            doc.touch(value)
            await asyncio.sleep(0)
        assert doc.state == DIRTY
        assert doc.has_pending
        await doc.wait()

    asyncio.run(scenario())

    assert recorder.saved == ["abc"]
    assert doc.state == CLEAN
    assert doc.last_saved is not None


def test_sync_save_callback():
    saved = []
    doc = AutosaveDocument("doc", saved.append, delay=0.01)

    async def scenario():
        doc.touch("x")
        await doc.wait()

    asyncio.run(scenario())
    assert saved == ["x"]


def test_flush_saves_immediately():
    recorder = Recorder()
    doc = AutosaveDocument("doc", recorder, delay=60)

    async def scenario():
        doc.touch("draft")
        return await doc.flush()

    assert asyncio.run(scenario()) is True
    assert recorder.saved == ["draft"]
    assert not doc.has_pending


def test_flush_with_nothing_pending():
    recorder = Recorder()
    doc = AutosaveDocument("doc", recorder)

    assert asyncio.run(doc.flush()) is False
    assert recorder.saved == []


def test_cancel_drops_pending_value():
    recorder = Recorder()
    doc = AutosaveDocument("doc", recorder, delay=0.01)

    async def scenario():
        doc.touch("never")
        doc.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert recorder.saved == []
    assert doc.state == CLEAN


def test_failed_save_stays_dirty():
    doc = AutosaveDocument("doc", Recorder(fail=True), delay=0.01)

    async def scenario():
        doc.touch("x")
        await doc.wait()

    asyncio.run(scenario())

    assert doc.state == DIRTY
    assert doc.last_error == "store unavailable"
    assert doc.last_saved is None


def test_edit_during_write_stays_dirty_until_next_save():
    recorder = Recorder(pause=0.05)
    doc = AutosaveDocument("doc", recorder, delay=0.01)

    async def scenario():
        doc.touch("first")
        await asyncio.sleep(0.03)
        # First write is in flight now
        assert doc.is_saving
        doc.touch("second")
        await asyncio.sleep(0.04)
        assert recorder.saved == ["first"]
        assert doc.state != CLEAN
        await doc.wait()

    asyncio.run(scenario())

    assert recorder.saved == ["first", "second"]
    assert doc.state == CLEAN
