"""
Datagram endpoint shared by the listener and the sender
"""

import asyncio
import typing as t

from loguru import logger

from udpecho.errors import TransportError
from udpecho.types import MAX_BUFFER_SIZE, NetAddress, format_address


class DatagramEndpointProtocol(asyncio.DatagramProtocol):
    """
    Queue inbound datagrams until a receive asks for them.

    Errors reported by the event loop are queued in order with the datagrams
    and raised by the receive that reaches them.
    """

    transport: asyncio.DatagramTransport | None = None

    _queue: asyncio.Queue

    def __init__(self):
        self._queue = asyncio.Queue()

    def connection_made(self, transport: asyncio.DatagramTransport):
        self.transport = transport
        logger.debug(f"endpoint open on {format_address(self.sockname)}")

    def datagram_received(self, data: bytes, addr: NetAddress):
        self._queue.put_nowait((data, addr))

    def error_received(self, exc: Exception):
        logger.debug(f"endpoint error: {exc!r}")
        self._queue.put_nowait(exc)

    def connection_lost(self, exc):
        logger.debug("endpoint closed")
        self._queue.put_nowait(TransportError("endpoint closed"))

    @property
    def sockname(self) -> NetAddress:
        return self.transport.get_extra_info("sockname")

    async def recvfrom(
        self, bufsize: int = MAX_BUFFER_SIZE
    ) -> t.Tuple[bytes, NetAddress]:
        "Wait for the next datagram, truncated to bufsize"

        item = await self._queue.get()
        if isinstance(item, TransportError):
            raise item
        if isinstance(item, Exception):
            raise TransportError(str(item)) from item

        data, addr = item
        if len(data) > bufsize:
            logger.debug(f"datagram of {len(data)} bytes truncated to {bufsize}")
        return data[:bufsize], addr

    def sendto(self, data: bytes, addr: NetAddress | None = None) -> int:
        "Write one datagram, to addr or to the associated peer"

        if self.transport is None or self.transport.is_closing():
            raise TransportError("endpoint closed")

        try:
            self.transport.sendto(data, addr)
        except (OSError, ValueError) as err:
            raise TransportError(str(err)) from err
        return len(data)

    def close(self):
        if self.transport:
            self.transport.close()
