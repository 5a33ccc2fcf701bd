"""Loading, completing and saving the notifier configuration."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from kbwatch.telegram import TelegramError, check_token, find_chat_id, get_updates
from kbwatch.utils import load_key_value_file

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.txt"
POLL_INTERVAL = 1.0

_TOKEN_PROMPT = (
    "No bot token found. What token do you want to use ? "
    "Ask the Telegram BotFather to create a new one.\n"
)
_CHAT_ID_NOTICE = "No chat id found. Send a message to the bot to initialize the chat id."


@dataclass
class KBConfig:
    """Settings read from ``config.txt`` and the time the file was last changed."""

    last_modified: float | None = None
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    ignored_devices: list[str] = field(default_factory=list)


def write_config(path: str | Path, token: str, chat_id: str) -> None:
    """Save the bot token and chat id to the configuration file."""
    path = Path(path)
    path.write_text(
        f"TELEGRAM_BOT_TOKEN {token}\nTELEGRAM_CHAT_ID {chat_id}\n", encoding="utf-8"
    )
    print(f"Config saved in {path}", file=sys.stderr)


def _ask_token(ask: Callable[[str], str]) -> str:
    while True:
        line = ask(_TOKEN_PROMPT).strip()
        if line and check_token(line):
            return line


def _wait_for_chat_id(token: str) -> str:
    first = True
    while True:
        if not first:
            time.sleep(POLL_INTERVAL)
        first = False
        try:
            updates = get_updates(token)
        except TelegramError as exc:
            logger.error("%s", exc)
            continue
        found = find_chat_id(updates)
        if found is not None:
            chat_id, sender = found
            print(f"Received message from {chat_id} : {sender}", file=sys.stderr)
            return chat_id


def update_config(
    app_dir: str | Path,
    config: KBConfig,
    ask: Callable[[str], str] | None = None,
) -> bool:
    """Reload the configuration into ``config`` if the file changed.

    Missing settings are asked for interactively (the token through ``ask``,
    the chat id by waiting for a message to the bot) and then saved.
    Returns whether the configuration was reloaded.
    """
    ask = input if ask is None else ask
    path = Path(app_dir) / CONFIG_FILE

    try:
        modified: float | None = path.stat().st_mtime
    except OSError:
        modified = None
    if modified is not None and config.last_modified == modified:
        return False

    logger.info("Loading config from: %s", path)
    values = load_key_value_file(path)
    token = (values.get("TELEGRAM_BOT_TOKEN") or [""])[0]
    chat_id = (values.get("TELEGRAM_CHAT_ID") or [""])[0]
    ignored = [item.upper() for item in values.get("IGNORE", [])]

    changed = False
    if not token:
        changed = True
        token = _ask_token(ask)
    if not chat_id:
        changed = True
        print(_CHAT_ID_NOTICE)
        chat_id = _wait_for_chat_id(token)

    if changed:
        write_config(path, token, chat_id)

    config.last_modified = modified
    config.telegram_bot_token = token
    config.telegram_chat_id = chat_id
    config.ignored_devices = ignored

    logger.info("Ignore %d devices:", len(ignored))
    for device in ignored:
        logger.info("Ignore device: %s", device)
    return True