import asyncio

import pytest
import pytest_asyncio

from fake_irc.config import ServerConfig
from fake_irc.irc.listener import IRCServer
from fake_irc.irc.relay import BroadcastRelay
from fake_irc.logging_config import error_aggregator


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    error_aggregator.clear()
    yield
    error_aggregator.clear()


@pytest.fixture
def server_config() -> ServerConfig:
    """Loopback config on an ephemeral port."""
    return ServerConfig(host="127.0.0.1", port=0)


@pytest_asyncio.fixture
async def irc_server(server_config):
    server = IRCServer(server_config)
    await server.start()
    try:
        yield server
    finally:
        await server.close()


@pytest_asyncio.fixture
async def relay_input(irc_server):
    """Queue feeding a running BroadcastRelay; put None to end the input."""
    lines: asyncio.Queue[str | None] = asyncio.Queue()

    async def source():
        while True:
            line = await lines.get()
            if line is None:
                return
            yield line

    relay = BroadcastRelay(irc_server.registrations)
    task = asyncio.create_task(relay.run(source()))
    yield lines
    if not task.done():
        await lines.put(None)
    await asyncio.wait_for(task, timeout=2.0)
