"""CLI entry point: ``embedhook-send``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import yaml

from embedhook.colour import NAMED_COLOURS, Decimal, Hex
from embedhook.config import EmbedhookConfig, dispatcher_from_config, message_from_config
from embedhook.embed import Embed, Field
from embedhook.errors import ConfigError, DeliveryError, WebhookError
from embedhook.message import Message

logger = logging.getLogger(__name__)


def _parse_colour(value: str) -> Hex | Decimal:
    if value.startswith("#"):
        return Hex(value)
    if value.lower() in NAMED_COLOURS:
        return NAMED_COLOURS[value.lower()]
    try:
        return Decimal(int(value))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"colour must be '#RRGGBB', a decimal integer or a name, got {value!r}"
        ) from None


def _parse_field(value: str) -> tuple[str, str]:
    name, sep, text = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"field must look like NAME=VALUE, got {value!r}")
    return name, text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embedhook-send",
        description="Send one webhook message, optionally with a single embed.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="embedhook.yml",
        help="Path to configuration YAML (default: embedhook.yml).",
    )
    parser.add_argument("--url", type=str, default=None, help="Webhook URL (overrides config).")
    parser.add_argument("--content", type=str, default=None, help="Plain message text.")
    parser.add_argument("--username", type=str, default=None, help="Override display name.")
    parser.add_argument("--avatar-url", type=str, default=None, help="Override avatar image.")
    parser.add_argument("--title", type=str, default=None, help="Embed title.")
    parser.add_argument("--description", type=str, default=None, help="Embed description.")
    parser.add_argument(
        "--colour",
        "--color",
        dest="colour",
        type=_parse_colour,
        default=None,
        help=(
            "Embed colour as '#RRGGBB', a decimal integer or a name "
            f"({', '.join(NAMED_COLOURS)})."
        ),
    )
    parser.add_argument(
        "--field",
        dest="fields",
        type=_parse_field,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Add an embed field (repeatable).",
    )
    parser.add_argument(
        "--inline-fields",
        action="store_true",
        help="Render the embed fields inline.",
    )
    parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Stamp the embed with the current time.",
    )
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Ask the endpoint to return the created message.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging.",
    )
    return parser


def build_message(args: argparse.Namespace, config) -> Message:
    """Assemble the message described by parsed CLI *args*."""
    message = message_from_config(config, url=args.url)
    if args.username is not None:
        message.set_username(args.username)
    if args.avatar_url is not None:
        message.set_avatar_url(args.avatar_url)
    if args.content is not None:
        message.set_content(args.content)

    wants_embed = (
        args.title is not None
        or args.description is not None
        or args.colour is not None
        or args.fields
        or args.timestamp
    )
    if wants_embed:
        embed = Embed()
        if args.title is not None:
            embed.set_title(args.title)
        if args.description is not None:
            embed.set_description(args.description)
        if args.colour is not None:
            embed.set_colour(args.colour)
        if args.timestamp:
            embed.set_timestamp()
        embed.add_fields(Field(name, value, args.inline_fields) for name, value in args.fields)
        message.add_embed(embed)
    return message


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = EmbedhookConfig(args.config)
    try:
        config.init_config()
    except (ConfigError, yaml.YAMLError) as exc:
        logger.error("Cannot read %s: %s", config.config_path, exc)
        return 1
    if args.url is not None:
        config.set("webhook.url", args.url)

    errors = config.validate()
    for err in errors:
        logger.error("Config validation: %s", err)
    if errors:
        return 1

    wait = args.wait or bool(config.get("http.wait", False))

    async def _run() -> int:
        try:
            message = build_message(args, config)
        except WebhookError as exc:
            logger.error("%s", exc)
            return 1

        async with dispatcher_from_config(config) as dispatcher:
            try:
                resp = await message.send(dispatcher, wait=wait)
            except DeliveryError as exc:
                logger.error("Endpoint rejected message (HTTP %s): %s", exc.status_code, exc.body)
                return 1
            except WebhookError as exc:
                logger.error("%s", exc)
                return 1

        print(f"[OK] delivered (HTTP {resp.status_code})")
        if wait and resp.content:
            print(resp.text)
        return 0

    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
