"""Notification helpers for delivering diff results to external channels."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Protocol

import requests

from .errors import NotificationError
from .models import Diff

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org/bot"


class Notifier(Protocol):
    """Protocol defining the notifier contract."""

    def send(self, message: str) -> None:
        ...


@dataclass
class TelegramNotifier:
    """Send messages to a chat through the Telegram Bot API."""

    bot_token: str
    chat_id: str
    timeout: int = 10

    def send(self, message: str) -> None:
        response = requests.post(
            f"{TELEGRAM_API_BASE}{self.bot_token}/sendMessage",
            json={
                "chat_id": self.chat_id,
                "text": message,
                "disable_web_page_preview": True,
            },
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except ValueError:
            payload = None
        # Rejections arrive as HTTP 4xx with the reason in the JSON body.
        if isinstance(payload, dict) and not payload.get("ok"):
            raise NotificationError(
                f"Telegram rejected message: {payload.get('description') or payload!r}"
            )
        response.raise_for_status()
        if not isinstance(payload, dict):
            raise NotificationError(
                f"Actual server response: {response.text!r}")


@dataclass
class SlackNotifier:
    """Send messages to Slack via Incoming Webhook."""

    webhook_url: str
    timeout: int = 10

    def send(self, message: str) -> None:
        payload = {"text": message}
        response = requests.post(
            self.webhook_url,
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()


@dataclass
class CompositeNotifier:
    """Fan-out notifier that forwards messages to multiple channels.

    Every channel is attempted; if any of them failed a
    :class:`NotificationError` is raised afterwards.
    """

    notifiers: List[Notifier]

    def send(self, message: str) -> None:
        failures = []
        for notifier in self.notifiers:
            try:
                notifier.send(message)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Failed to deliver notification via %s",
                                 type(notifier).__name__)
                failures.append(f"{type(notifier).__name__}: {exc}")
        if failures:
            raise NotificationError("; ".join(failures))


def build_notifier_from_env() -> CompositeNotifier | None:
    """Construct a notifier from environment configuration."""
    notifiers: list[Notifier] = []

    telegram_token = (os.getenv("TELEGRAM_BOT_TOKEN") or "").strip()
    telegram_chat = (os.getenv("TELEGRAM_CHAT_ID") or "").strip()
    if telegram_token and telegram_chat:
        notifiers.append(
            TelegramNotifier(bot_token=telegram_token, chat_id=telegram_chat))
    elif telegram_token or telegram_chat:
        logger.warning(
            "Telegram needs both TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID; skipping"
        )

    slack_webhook = (os.getenv("SLACK_WEBHOOK") or "").strip()
    if slack_webhook:
        notifiers.append(SlackNotifier(webhook_url=slack_webhook))

    if not notifiers:
        return None
    return CompositeNotifier(notifiers=notifiers)


def format_notifications(diff: Diff, label: str) -> List[str]:
    """Render one message per added or changed record."""
    messages = [f"New {label}:\n{item}" for item in diff.added]
    messages.extend(f"Modified {label}:\n{item}" for item in diff.changed)
    return messages


def deliver_notifications(notifier: Notifier, diff: Diff, label: str) -> int:
    """Send every message for ``diff``; stop at the first failure."""
    messages = format_notifications(diff, label)
    logger.info("Delivering %d notification(s)", len(messages))
    for message in messages:
        try:
            notifier.send(message)
        except requests.RequestException as exc:
            raise NotificationError(f"Notification delivery failed: {exc}") from exc
    return len(messages)


__all__ = [
    "CompositeNotifier",
    "Notifier",
    "SlackNotifier",
    "TelegramNotifier",
    "build_notifier_from_env",
    "deliver_notifications",
    "format_notifications",
]
