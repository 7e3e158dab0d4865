"""
Sender role: send one datagram and wait for the reply
"""

import asyncio
import socket

from loguru import logger

from udpecho.context import EchoContext
from udpecho.errors import BindError, CancellationError, ResolutionError
from udpecho.transport import DatagramEndpointProtocol
from udpecho.types import GREETING, ExchangeResult, NetAddress, format_address


async def resolve(host: str, port: int) -> NetAddress:
    "Resolve host and port to a UDP socket address"
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as err:
        raise ResolutionError(f"cannot resolve {host}:{port}: {err}") from err

    if not infos:
        raise ResolutionError(f"no address for {host}:{port}")

    _family, _type, _proto, _canonname, sockaddr = infos[0]
    return sockaddr[:2]


async def _receive(protocol: DatagramEndpointProtocol) -> ExchangeResult:
    data, addr = await protocol.recvfrom()
    logger.info(
        f"packet-received: bytes={len(data)} from={format_address(addr)} "
        f"msg={data.decode('utf-8', errors='replace')}"
    )
    return ExchangeResult(nbytes=len(data), peer=addr, payload=data)


async def send(ctx: EchoContext, payload: bytes = GREETING) -> ExchangeResult:
    """
    Send payload to the configured address and wait for one reply.

    The receive has no timeout; it ends with a reply, a transport error or
    cancellation.
    """

    raddr = await resolve(ctx.config.host, ctx.config.port)

    loop = asyncio.get_running_loop()
    try:
        _transport, protocol = await loop.create_datagram_endpoint(
            DatagramEndpointProtocol, remote_addr=raddr
        )
    except OSError as err:
        raise BindError(f"cannot associate with {format_address(raddr)}: {err}") from err

    try:
        if ctx.is_cancelled:
            raise CancellationError("cancelled before the payload was sent")
        n = protocol.sendto(payload)
        logger.info(f"packet-written: bytes={n}")
        return await ctx.race(_receive(protocol))
    finally:
        protocol.close()
