"""
Listener role: echo each datagram back to its sender
"""

import asyncio

from loguru import logger

from udpecho.context import EchoContext
from udpecho.errors import BindError, CancellationError
from udpecho.transport import DatagramEndpointProtocol
from udpecho.types import ExchangeResult, NetAddress, format_address


class EchoListener(object):
    """
    A bound endpoint answering one sender at a time.

    Usage:
        async with EchoListener(("127.0.0.1", 1337)) as listener:
            result = await listener.exchange()
    """

    bind: NetAddress
    protocol: DatagramEndpointProtocol | None = None

    def __init__(self, bind: NetAddress):
        self.bind = bind

    async def open(self):
        "bind the endpoint"
        loop = asyncio.get_running_loop()
        try:
            _transport, protocol = await loop.create_datagram_endpoint(
                DatagramEndpointProtocol, local_addr=self.bind
            )
        except OSError as err:
            raise BindError(f"cannot bind {format_address(self.bind)}: {err}") from err
        self.protocol = protocol

    def close(self):
        if self.protocol:
            self.protocol.close()
            self.protocol = None

    async def __aenter__(self) -> "EchoListener":
        await self.open()
        return self

    async def __aexit__(self, *exc_info):
        self.close()

    @property
    def sockname(self) -> NetAddress:
        return self.protocol.sockname

    async def exchange(self) -> ExchangeResult:
        "receive one datagram and write it back to its sender"

        data, addr = await self.protocol.recvfrom()
        peer = format_address(addr)
        logger.info(
            f"packet-received: bytes={len(data)} from={peer} "
            f"msg={data.decode('utf-8', errors='replace')}"
        )

        n = self.protocol.sendto(data, addr)
        logger.info(f"packet-written: bytes={n} to={peer}")
        return ExchangeResult(nbytes=n, peer=addr, payload=data)


async def listen_once(ctx: EchoContext) -> ExchangeResult:
    "Answer a single exchange on the configured endpoint, then release it"
    async with EchoListener(ctx.config.endpoint) as listener:
        return await ctx.race(listener.exchange())


async def serve(ctx: EchoContext, listener: EchoListener | None = None) -> int:
    """
    Answer exchanges until the context is cancelled.

    Returns the number of completed exchanges. Errors other than cancellation
    propagate.
    """

    if listener is None:
        async with EchoListener(ctx.config.endpoint) as listener:
            return await serve(ctx, listener)

    count = 0
    while True:
        try:
            await ctx.race(listener.exchange())
        except CancellationError:
            logger.debug(f"listener stopped after {count} exchanges")
            return count
        count += 1
