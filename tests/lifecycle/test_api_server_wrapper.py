import asyncio
import socket

import pytest
import pytest_asyncio

from api.main import create_app
from lifecycle.api_server_wrapper import APIServerWrapper


def port_is_free(port: int) -> bool:
    s = socket.socket()
    try:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        s.bind(("127.0.0.1", port))
        return True
    except OSError:
        return False
    finally:
        s.close()


@pytest_asyncio.fixture
async def api_wrapper():
    wrapper = APIServerWrapper(create_app(docs_enabled=False), host="127.0.0.1", port=8010)
    yield wrapper
    await wrapper.stop()


@pytest.mark.asyncio
async def test_start_and_stop(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.2)

    assert api_wrapper.is_running

    await api_wrapper.stop()
    await asyncio.wait_for(task, timeout=3)

    assert not api_wrapper.is_running
    assert port_is_free(8010)


@pytest.mark.asyncio
async def test_stop_without_start(api_wrapper):
    await api_wrapper.stop()
    assert api_wrapper.task is None


@pytest.mark.asyncio
async def test_start_cancelled_externally():
    wrapper = APIServerWrapper(create_app(docs_enabled=False), host="127.0.0.1", port=8012)

    t = asyncio.create_task(wrapper.start())
    await asyncio.sleep(0.2)

    t.cancel()
    with pytest.raises(asyncio.CancelledError):
        await t

    assert not wrapper.is_running
    assert port_is_free(8012)


@pytest.mark.asyncio
async def test_double_start_rejected(api_wrapper):
    task = asyncio.create_task(api_wrapper.start())
    await asyncio.sleep(0.2)

    with pytest.raises(RuntimeError):
        await api_wrapper.start()

    await api_wrapper.stop()
    await asyncio.wait_for(task, timeout=3)
