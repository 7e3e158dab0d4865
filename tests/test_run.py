import asyncio
import os
import signal

import pytest

from peers import roundtrip, unused_port
from udpecho.config import EchoConfig
from udpecho.context import EchoContext
from udpecho.errors import TransportError
from udpecho.run import main, parse_args
from udpecho.server import EchoListener, listen_once


def test_parse_defaults():
    config = parse_args([])
    assert config == EchoConfig()


def test_parse_server_flags():
    config = parse_args(["--server", "--host", "0.0.0.0", "--port", "9000", "--log-level", "debug"])
    assert config.server is True
    assert config.address == "0.0.0.0:9000"
    assert config.log_level == "DEBUG"


def test_invalid_port_is_a_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--port", "70000"])
    assert exc_info.value.code == 2


@pytest.mark.asyncio
async def test_main_sender_completes_one_exchange(log_messages):
    async with EchoListener(("127.0.0.1", 0)) as listener:
        host, port = listener.sockname
        served, _ = await asyncio.gather(
            listener.exchange(), main(EchoConfig(host=host, port=port))
        )
    assert served.nbytes == 21
    assert f"sending to 127.0.0.1:{port}" in log_messages


@pytest.mark.asyncio
async def test_main_server_stops_cleanly_on_sigterm(log_messages):
    serving = asyncio.create_task(main(EchoConfig(server=True, port=0)))
    await asyncio.sleep(0.1)
    os.kill(os.getpid(), signal.SIGTERM)

    assert await asyncio.wait_for(serving, 5) is None
    assert "running as a server on 127.0.0.1:0" in log_messages
    assert "cancelled" in log_messages


@pytest.mark.asyncio
async def test_main_propagates_transport_errors():
    with pytest.raises(TransportError):
        await asyncio.wait_for(main(EchoConfig(port=unused_port())), 5)


@pytest.mark.asyncio
async def test_listen_once_answers_one_sender():
    port = unused_port()
    ctx = EchoContext(EchoConfig(server=True, port=port))
    listening = asyncio.create_task(listen_once(ctx))
    await asyncio.sleep(0.05)

    reply, local = await roundtrip(("127.0.0.1", port), b"once")
    result = await asyncio.wait_for(listening, 5)

    assert reply == b"once"
    assert result.peer == local
    assert result.nbytes == 4
