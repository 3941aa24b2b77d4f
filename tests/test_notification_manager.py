"""Tests for the per-user registry of notification sockets."""

import anyio
import pytest

from app.infrastructure.notifications import NotificationConnectionManager


class FakeSocket:
    def __init__(self, *, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []
        self.writers = 0
        self.max_writers = 0

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError('Cannot call "send" once a close message has been sent.')
        self.writers += 1
        self.max_writers = max(self.max_writers, self.writers)
        await anyio.sleep(0)
        self.sent.append(message)
        self.writers -= 1


@pytest.mark.anyio
async def test_connect_accepts_and_registers():
    manager = NotificationConnectionManager()
    first, second = FakeSocket(), FakeSocket()

    await manager.connect(1, first)
    await manager.connect(1, second)

    assert first.accepted and second.accepted
    assert manager.connection_count(1) == 2
    assert not manager.is_connected(2)

    manager.disconnect(1, first)
    manager.disconnect(1, first)
    assert manager.connection_count(1) == 1


@pytest.mark.anyio
async def test_send_to_user_drops_broken_sockets():
    manager = NotificationConnectionManager()
    healthy, broken = FakeSocket(), FakeSocket(fail=True)
    await manager.connect(1, healthy)
    await manager.connect(1, broken)

    delivered = await manager.send_to_user(1, {"type": "notification"})

    assert delivered == 1
    assert healthy.sent == [{"type": "notification"}]
    assert manager.connection_count(1) == 1
    assert await manager.send(1, broken, {"type": "pong"}) is False


@pytest.mark.anyio
async def test_concurrent_sends_to_one_socket_do_not_overlap():
    manager = NotificationConnectionManager()
    socket = FakeSocket()
    await manager.connect(1, socket)

    with anyio.fail_after(2):
        async with anyio.create_task_group() as task_group:
            for index in range(5):
                task_group.start_soon(manager.send, 1, socket, {"n": index})

    assert len(socket.sent) == 5
    assert socket.max_writers == 1
