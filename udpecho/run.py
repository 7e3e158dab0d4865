import asyncio
from argparse import ArgumentParser

from loguru import logger

from udpecho.client import send
from udpecho.config import EchoConfig, load_config
from udpecho.context import EchoContext
from udpecho.errors import CancellationError
from udpecho.log import configure_logging
from udpecho.server import serve


def parse_args(argv=None) -> EchoConfig:
    "Parse the command line into a configuration"

    parser = ArgumentParser(prog="udpecho")
    parser.add_argument(
        "--server", action="store_true", help="whether it should be run as a server"
    )
    parser.add_argument(
        "--port", type=int, help="port to send to or receive from", default=1337
    )
    parser.add_argument(
        "--host", type=str, help="address to send to or receive from", default="127.0.0.1"
    )
    parser.add_argument("--log-level", type=str.upper, help="log level", default="INFO")
    args = parser.parse_args(argv)

    try:
        return load_config(**vars(args))
    except ValueError as err:
        parser.error(str(err))


async def main(config: EchoConfig) -> None:
    "Run the configured role until it completes or is cancelled"

    ctx = EchoContext(config)
    ctx.install_signal_handlers()
    try:
        if config.server:
            logger.info(f"running as a server on {config.address}")
            await serve(ctx)
            return

        logger.info(f"sending to {config.address}")
        try:
            await send(ctx)
        except CancellationError:
            logger.debug("sender cancelled")
    finally:
        ctx.remove_signal_handlers()


def run(argv=None):
    """
    Run command

    Usage:
        udpecho [--server] [--host <host>] [--port <port>] [--log-level <level>]
    """

    config = parse_args(argv)
    configure_logging(config.log_level)
    asyncio.run(main(config))


if __name__ == "__main__":
    run()
