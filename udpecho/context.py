"Context for an echo exchange"

import asyncio
import signal
import typing as t

from loguru import logger

from udpecho.config import EchoConfig
from udpecho.errors import CancellationError

SIGNALS = (signal.SIGINT, signal.SIGTERM)

T = t.TypeVar("T")


class EchoContext(object):
    """
    Configuration plus the cancellation token observed by the active exchange.
    """

    config: EchoConfig
    cancelled: asyncio.Event

    _signal_loop: asyncio.AbstractEventLoop | None = None

    def __init__(self, config: EchoConfig):
        self.config = config
        self.cancelled = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled.is_set()

    def cancel(self):
        "trigger the cancellation token"
        self.cancelled.set()

    def _on_signal(self, signum: int):
        logger.debug(f"received {signal.Signals(signum).name}")
        self.cancel()

    def install_signal_handlers(self):
        "cancel on SIGINT and SIGTERM"
        loop = asyncio.get_running_loop()
        for signum in SIGNALS:
            loop.add_signal_handler(signum, self._on_signal, signum)
        self._signal_loop = loop

    def remove_signal_handlers(self):
        if self._signal_loop is None:
            return
        for signum in SIGNALS:
            self._signal_loop.remove_signal_handler(signum)
        self._signal_loop = None

    async def race(self, coro: t.Coroutine[t.Any, t.Any, T]) -> T:
        """
        Run an exchange against the cancellation token.

        Only one outcome is observed: the exchange result (or its error) when
        the exchange finishes first, CancellationError otherwise.
        """

        if self.is_cancelled:
            coro.close()
            raise CancellationError("cancelled before the exchange started")

        task = asyncio.ensure_future(coro)
        waiter = asyncio.ensure_future(self.cancelled.wait())
        try:
            done, _pending = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("cancelled")
        raise CancellationError("cancelled")
