"""YAML settings for embedhook and the builders that read them."""

from __future__ import annotations

import logging
import os
import re
from copy import deepcopy
from pathlib import Path

import yaml

from embedhook.dispatcher import DEFAULT_TIMEOUT, WebhookDispatcher
from embedhook.errors import ConfigError, InvalidEndpointError
from embedhook.message import Message, validate_endpoint
from embedhook.queue import DEFAULT_BATCH_SIZE, DEFAULT_INTERVAL, WebhookQueue

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "webhook": {
        "url": "",
        "username": "",
        "avatar_url": "",
    },
    "http": {
        # null leaves the timeout to httpx
        "timeout": DEFAULT_TIMEOUT,
        "wait": False,
    },
    "queue": {
        "batch_size": DEFAULT_BATCH_SIZE,
        "interval": DEFAULT_INTERVAL,
    },
}

_ENV_REF = re.compile(r"\$\{([^}]+)\}")


def _expand_env(node: object) -> object:
    """Substitute ``${NAME}`` in every string of *node* from ``os.environ``.

    Unknown names are left as written. Substituted values stay strings.
    """
    if isinstance(node, dict):
        return {key: _expand_env(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_expand_env(item) for item in node]
    if isinstance(node, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), node)
    return node


def _deep_merge(defaults: dict, overrides: dict) -> dict:
    """Return a copy of *defaults* with *overrides* laid over it, section by section."""
    result = deepcopy(defaults)
    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _deep_merge(current, value)
        else:
            result[key] = deepcopy(value)
    return result


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class EmbedhookConfig:
    """Settings read from a YAML file, layered over :data:`DEFAULT_CONFIG`."""

    def __init__(self, config_path: str = "embedhook.yml") -> None:
        self.config_path = Path(config_path)
        self.data: dict = deepcopy(DEFAULT_CONFIG)

    # ── file ─────────────────────────────────────────────────────────

    def load(self) -> None:
        """Read the file, merge it over the defaults and expand ``${ENV}`` references."""
        raw = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{self.config_path} must hold a mapping, not {type(raw).__name__}")
        self.data = _expand_env(_deep_merge(DEFAULT_CONFIG, raw))

    def save(self) -> None:
        with self.config_path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(self.data, fh, allow_unicode=True, sort_keys=False)

    def init_config(self) -> None:
        """Load the file, writing a default one first if none exists yet."""
        if not self.config_path.exists():
            logger.info("Writing default config to %s", self.config_path)
            self.data = deepcopy(DEFAULT_CONFIG)
            self.save()
        self.load()

    # ── access ───────────────────────────────────────────────────────

    def get(self, key: str, default: object = None) -> object:
        """Dotted lookup, e.g. ``config.get("http.timeout")``."""
        node: object = self.data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: object) -> None:
        """Dotted assignment; missing sections are created."""
        *sections, leaf = key.split(".")
        node = self.data
        for part in sections:
            node = node.setdefault(part, {})
        node[leaf] = value

    # ── validation ───────────────────────────────────────────────────

    def validate(self) -> list[str]:
        """Return one message per invalid setting (empty when usable)."""
        errors: list[str] = []

        url = self.get("webhook.url")
        if not url:
            errors.append("webhook.url is required to send messages")
        else:
            try:
                validate_endpoint(url)
            except InvalidEndpointError as exc:
                errors.append(f"webhook.url: {exc}")

        timeout = self.get("http.timeout")
        if timeout is not None and (not _is_number(timeout) or timeout <= 0):
            errors.append(f"http.timeout must be a positive number or null, got {timeout!r}")

        if not isinstance(self.get("http.wait"), bool):
            errors.append("http.wait must be true or false")

        batch_size = self.get("queue.batch_size")
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            errors.append("queue.batch_size must be a positive integer")

        interval = self.get("queue.interval")
        if not _is_number(interval) or interval < 0:
            errors.append("queue.interval must be a non-negative number")

        return errors


# ── factories ────────────────────────────────────────────────────────


def _timeout_from(config) -> float | None:
    timeout = config.get("http.timeout", DEFAULT_TIMEOUT)
    if timeout is not None and (not _is_number(timeout) or timeout <= 0):
        raise ConfigError(f"http.timeout must be a positive number or null, got {timeout!r}")
    return timeout


def message_from_config(config, url: str | None = None) -> Message:
    """Start a :class:`Message` from the ``webhook`` section of *config*.

    *config* is an ``EmbedhookConfig`` (or any object with a ``.get()``
    method). *url* overrides ``webhook.url``. Empty username/avatar
    defaults are treated as unset.
    """
    endpoint = url or config.get("webhook.url")
    if not endpoint:
        raise ConfigError("No webhook URL configured (set webhook.url)")
    try:
        message = Message(endpoint)
    except InvalidEndpointError as exc:
        raise ConfigError(f"Configured webhook URL is invalid: {exc}") from exc

    username = config.get("webhook.username")
    if username:
        message.set_username(username)
    avatar_url = config.get("webhook.avatar_url")
    if avatar_url:
        message.set_avatar_url(avatar_url)
    return message


def dispatcher_from_config(config) -> WebhookDispatcher:
    return WebhookDispatcher(timeout=_timeout_from(config))


def queue_from_config(config, dispatcher: WebhookDispatcher | None = None) -> WebhookQueue:
    return WebhookQueue(
        dispatcher=dispatcher,
        batch_size=config.get("queue.batch_size", DEFAULT_BATCH_SIZE),
        interval=config.get("queue.interval", DEFAULT_INTERVAL),
        timeout=_timeout_from(config),
    )
