"Datagram constants and exchange outcome"

import typing as t
from dataclasses import dataclass

MAX_BUFFER_SIZE = 1024

GREETING = b"hello from the client"

NetAddress = t.Tuple[str, int]


@dataclass(frozen=True)
class ExchangeResult:
    "Outcome of one receive/send pair"
    nbytes: int  # sent bytes for the listener, received bytes for the sender
    peer: NetAddress
    payload: bytes


def format_address(addr) -> str:
    "Render a socket address as host:port"
    host, port = addr[0], addr[1]
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
