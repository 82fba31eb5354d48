"""Notification fan-out tests (both store backends)."""

import asyncio
import logging

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from src.domain.enums import NotificationKind
from src.infrastructure.database import Base, build_session_factory
from src.infrastructure.sql_store import SqlStoreFactory
from src.services.notifications import NotificationService
from src.workers.push_dispatcher import PushDispatcher
from tests.conftest import RecordingPushChannel


@pytest.mark.asyncio
async def test_notify_stores_unread_record(notifications, store, driver):
    note = await notifications.notify(
        driver.id, "Hello", "World", NotificationKind.SYSTEM, related_ride_id=3
    )
    stored = await store.notifications.get_by_id(note.id)
    assert stored.read is False
    assert stored.created_at is not None
    assert stored.related_ride_id == 3
    assert stored.related_booking_id is None


@pytest.mark.asyncio
async def test_notify_mirrors_to_push_channel(
    notifications, store, dispatcher, push_channel, driver
):
    note = await notifications.notify(driver.id, "Hi", "There", NotificationKind.SYSTEM)
    await store.commit()
    await dispatcher.drain()

    ((user_id, record),) = push_channel.published
    assert user_id == driver.id
    assert record["notification_id"] == note.id
    assert record["title"] == "Hi"
    assert record["created_at"] == note.created_at.isoformat()


@pytest.mark.asyncio
async def test_push_failure_does_not_reach_caller(store, driver, caplog):
    dispatcher = PushDispatcher(RecordingPushChannel(fail=True))
    service = NotificationService(store, dispatcher)

    with caplog.at_level(logging.WARNING, logger="src.workers.push_dispatcher"):
        note = await service.notify(driver.id, "t", "m", NotificationKind.SYSTEM)
        await store.commit()
        await dispatcher.drain()

    assert (await store.notifications.get_by_id(note.id)) is not None
    assert "Push publish dropped" in caplog.text
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_notify_without_dispatcher(store, driver):
    service = NotificationService(store)
    note = await service.notify(driver.id, "t", "m", NotificationKind.SYSTEM)
    assert note.id == 1


@pytest.mark.asyncio
async def test_list_is_newest_first(notifications, driver):
    for i in range(4):
        await notifications.notify(driver.id, f"n{i}", "m", NotificationKind.SYSTEM)

    listed = await notifications.list_for_user(driver.id)
    assert [n.title for n in listed] == ["n3", "n2", "n1", "n0"]
    for newer, older in zip(listed, listed[1:]):
        assert newer.created_at >= older.created_at


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(notifications, store, driver):
    note = await notifications.notify(driver.id, "t", "m", NotificationKind.SYSTEM)

    await notifications.mark_read(note.id)
    assert (await store.notifications.get_by_id(note.id)).read is True
    await notifications.mark_read(note.id)
    assert (await store.notifications.get_by_id(note.id)).read is True


@pytest.mark.asyncio
async def test_mark_read_missing_is_noop(notifications):
    await notifications.mark_read(12345)


@pytest.mark.asyncio
async def test_mark_read_leaves_push_copy_unread(
    notifications, store, dispatcher, push_channel, driver
):
    note = await notifications.notify(driver.id, "t", "m", NotificationKind.SYSTEM)
    await notifications.mark_read(note.id)
    await store.commit()
    await dispatcher.drain()
    assert push_channel.published[0][1]["read"] is False


# ── Push ordering against the durable store ───────────────────────────


class ReadBackPushChannel:
    """Records whether each pushed notification is already readable elsewhere."""

    def __init__(self, stores: SqlStoreFactory):
        self.stores = stores
        self.visible: list[bool] = []

    async def publish(self, user_id, record):
        async with self.stores.session() as fresh:
            stored = await fresh.notifications.get_by_id(record["notification_id"])
        self.visible.append(stored is not None)
        return "push"


@pytest_asyncio.fixture
async def file_stores(tmp_path):
    # A file database gives each session its own connection, so uncommitted
    # rows stay invisible to other sessions.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'push.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlStoreFactory(build_session_factory(engine))
    await engine.dispose()


class TestPushAfterCommit:
    @pytest.mark.asyncio
    async def test_push_waits_for_commit(self, file_stores):
        channel = ReadBackPushChannel(file_stores)
        dispatcher = PushDispatcher(channel)

        async with file_stores.session() as store:
            await NotificationService(store, dispatcher).notify(
                1, "t", "m", NotificationKind.SYSTEM
            )
            await asyncio.sleep(0)
            assert dispatcher.pending == 0
        await dispatcher.drain()

        assert channel.visible == [True]

    @pytest.mark.asyncio
    async def test_rolled_back_request_pushes_nothing(self, file_stores):
        channel = ReadBackPushChannel(file_stores)
        dispatcher = PushDispatcher(channel)

        with pytest.raises(RuntimeError):
            async with file_stores.session() as store:
                await NotificationService(store, dispatcher).notify(
                    1, "t", "m", NotificationKind.SYSTEM
                )
                raise RuntimeError("request failed")
        await dispatcher.drain()

        assert channel.visible == []
        async with file_stores.session() as store:
            assert await store.notifications.list_by_user(1) == []
