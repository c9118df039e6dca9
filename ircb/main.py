#!/usr/bin/env python3
"""
Command-line entry point for the ircb IRC client
"""

import argparse
import asyncio
import logging
import sys

from .config import load_config
from .errors.handling import log_error
from .errors.internal import ConfigError
from .irc import IRCClient, RegistrationState
from .logging_config import LoggerConfigurator, error_aggregator
from .logs.logger import logger
from .utils.retry import RetryExhaustedError, connect_with_retry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ircb", description="Minimal asyncio IRC client")
    parser.add_argument("--config", help="JSON file with connection options")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--nick")
    parser.add_argument("--username")
    parser.add_argument("--real-name", dest="real_name")
    parser.add_argument("--password")
    parser.add_argument(
        "--channel",
        dest="channels",
        action="append",
        help="Channel to join after the MOTD (repeatable)",
    )
    secure = parser.add_mutually_exclusive_group()
    secure.add_argument("--secure", dest="secure", action="store_true", default=None)
    secure.add_argument("--insecure", dest="secure", action="store_false")
    parser.add_argument("--verify-cert", dest="reject_unauthorized", action="store_true", default=None)
    parser.add_argument("--debug", action="store_true", help="Log every protocol event")
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    return {
        "host": args.host,
        "port": args.port,
        "nick": args.nick,
        "username": args.username,
        "real_name": args.real_name,
        "password": args.password,
        "channels": args.channels,
        "secure": args.secure,
        "reject_unauthorized": args.reject_unauthorized,
    }


def _attach_printers(client: IRCClient) -> None:
    def on_data(event: str, *payload) -> None:
        logger.log_event(
            "irc", "event", level=logging.DEBUG, nick=client.nick, event=event, payload=payload
        )

    def on_motd(motd: str | None) -> None:
        if motd:
            print(motd.rstrip("\n"))

    def on_message(sender: str, target: str, text: str) -> None:
        print(f"{target} <{sender}> {text}")

    def on_error(error: BaseException) -> None:
        log_error("Connection error", error, context={"nick": client.nick})

    client.events.on("data", on_data)
    client.events.once("motd", on_motd)
    client.events.on("message", on_message)
    client.events.on("error", on_error)


def _report_errors() -> None:
    """Log one line per error category seen during the run."""
    for category, info in error_aggregator.summary().items():
        logger.log_event(
            "app",
            "error_summary",
            level=logging.WARNING,
            category=category,
            count=info["count"],
            last=info["last"]["message"],
        )


async def _pump_stdin(client: IRCClient) -> None:
    """Send each stdin line to the first configured channel."""
    channels = client.config.channels or ()
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    while client.connected:
        line = await reader.readline()
        if not line:
            return
        text = line.decode("utf-8", errors="replace").rstrip("\r\n")
        if text and channels:
            await client.say(channels[0], text)


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator({"debug": args.debug}).configure()
    try:
        config = load_config(args.config, _overrides(args))
    except ConfigError as e:
        log_error("Configuration error", e)
        return 2

    logger.log_event("app", "start", host=config.host, port=config.port)

    def factory() -> IRCClient:
        client = IRCClient(config)
        _attach_printers(client)
        return client

    try:
        client = await connect_with_retry(factory, lambda c: c.connect())
    except RetryExhaustedError as e:
        log_error("Unable to connect", e)
        _report_errors()
        return 1

    closed = asyncio.ensure_future(client.wait_closed())
    ready = client.wait_for_event("ready")
    if client.registration_state is RegistrationState.READY:
        ready.set_result(())
    try:
        await asyncio.wait({ready, closed}, return_when=asyncio.FIRST_COMPLETED)
        if ready.done():
            stdin_task = asyncio.ensure_future(_pump_stdin(client))
            # EOF on stdin ends the session, a server close ends the pump.
            await asyncio.wait({stdin_task, closed}, return_when=asyncio.FIRST_COMPLETED)
            stdin_task.cancel()
    finally:
        ready.cancel()
        if client.connected:
            await client.end()
        _report_errors()
        logger.log_event("app", "shutdown")
    return 0


def run() -> None:
    """Synchronous entry point for the console script."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)


if __name__ == "__main__":
    run()
