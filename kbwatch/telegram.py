"""Minimal Telegram bot client used for notifications."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

API_URL = "https://api.telegram.org/bot{token}/{method}"
TIMEOUT = 30


class TelegramError(Exception):
    """A request to the Telegram API failed or returned something unusable."""


def _url(token: str, method: str) -> str:
    return API_URL.format(token=token, method=method)


def send_message(token: str, chat_id: str, message: str, silent: bool = False) -> None:
    """Send a text message to a chat."""
    if not message:
        raise TelegramError("Empty message to send")
    logger.info("send message: %s", message)
    payload = {"chat_id": chat_id, "text": message, "disable_notification": silent}
    try:
        requests.post(_url(token, "sendMessage"), json=payload, timeout=TIMEOUT)
    except requests.RequestException as exc:
        raise TelegramError(str(exc)) from exc


def check_token(token: str) -> bool:
    """Whether the bot token is accepted by the API."""
    try:
        response = requests.get(_url(token, "getUpdates"), timeout=TIMEOUT)
    except requests.RequestException as exc:
        logger.error("%s", exc)
        return False
    if response.status_code != 200:
        logger.error("Invalid token")
        return False
    return True


def get_updates(token: str) -> list[Any]:
    """Fetch pending updates for the bot."""
    try:
        response = requests.get(_url(token, "getUpdates"), timeout=TIMEOUT)
    except requests.RequestException as exc:
        raise TelegramError(str(exc)) from exc

    text = response.text
    if response.status_code != 200:
        raise TelegramError(f"Code {response.status_code} : {text}")
    try:
        data = response.json()
    except ValueError as exc:
        raise TelegramError(text) from exc
    if not isinstance(data, dict) or data.get("ok") is not True:
        raise TelegramError(text)
    result = data.get("result")
    if not isinstance(result, list):
        raise TelegramError(f"No result in the response : {text}")
    return result


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def find_chat_id(updates: list[Any]) -> tuple[str, str] | None:
    """Return the chat id and sender name of the first usable message, if any."""
    for update in updates:
        message = _as_dict(update).get("message")
        if not isinstance(message, dict):
            continue
        chat_id = _as_dict(message.get("chat")).get("id")
        if not isinstance(chat_id, int) or isinstance(chat_id, bool):
            continue
        sender = _as_dict(message.get("from"))
        first_name = _as_str(sender.get("first_name"))
        last_name = _as_str(sender.get("last_name"))
        return str(chat_id), f"{first_name} {last_name}"
    return None