"""Watching for USB devices being plugged in or removed."""

from __future__ import annotations

import argparse
import logging
import socket
import time
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from kbwatch.config import KBConfig, update_config
from kbwatch.device import DeviceInfo, read_devices
from kbwatch.telegram import TelegramError, send_message
from kbwatch.utils import get_app_dir

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0
RUNNING_LOG_SECONDS = 60.0


class Watcher:
    """Keeps track of connected devices and reports changes through ``notify``."""

    def __init__(
        self,
        config: KBConfig,
        computer_name: str,
        notify: Callable[[str], None],
    ) -> None:
        self.config = config
        self.computer_name = computer_name
        self.notify = notify
        self._known: list[DeviceInfo] = []

    @property
    def devices(self) -> list[DeviceInfo]:
        """Devices currently known to be connected."""
        return list(self._known)

    def _send(self, message: str) -> None:
        try:
            self.notify(message)
        except TelegramError as exc:
            logger.error("%r", exc)

    def _is_ignored(self, info: DeviceInfo) -> bool:
        ignored = self.config.ignored_devices
        return info.name().upper() in ignored or info.device.usb_id.upper() in ignored

    def check(
        self, devices: Iterable[DeviceInfo]
    ) -> tuple[list[DeviceInfo], list[DeviceInfo]]:
        """Compare a fresh device listing with the known one.

        Returns the devices added and the devices removed, after notifying
        about each of them.
        """
        devices = list(devices)
        present = {info.device for info in devices}
        known = {info.device for info in self._known}

        added = [
            info
            for info in devices
            if info.device not in known and not self._is_ignored(info)
        ]
        removed = [info for info in reversed(self._known) if info.device not in present]

        for info in removed:
            logger.info("Removed device: %s", info.describe())
            self._send(f"{info.name()} unplugged from {self.computer_name}")
        if removed:
            self._known = [info for info in self._known if info.device in present]

        for info in added:
            logger.info("New device: %s", info.describe())
            self._send(f"{info.name()} plugged in {self.computer_name}")
        self._known.extend(added)

        return added, removed


def init_logging(app_dir: str | Path) -> Path:
    """Log at INFO level to ``kbwatch.log`` in the application directory and to the console."""
    path = Path(app_dir) / "kbwatch.log"
    print(f"Logging in {path}")
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    root = logging.getLogger()
    for handler in (logging.FileHandler(path, encoding="utf-8"), logging.StreamHandler()):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(logging.INFO)
    return path


def main(argv: list[str] | None = None) -> int:
    """Watch USB devices and send a Telegram message when one comes or goes."""
    parser = argparse.ArgumentParser(
        prog="kbwatch",
        description="Notify through Telegram when USB devices are plugged or unplugged.",
    )
    parser.parse_args(argv)

    app_dir = get_app_dir()
    app_dir.mkdir(parents=True, exist_ok=True)
    init_logging(app_dir)

    computer_name = socket.gethostname()
    config = KBConfig()
    update_config(app_dir, config)

    def notify(message: str) -> None:
        send_message(config.telegram_bot_token, config.telegram_chat_id, message)

    def announce(message: str) -> None:
        try:
            notify(message)
        except TelegramError as exc:
            logger.error("%r", exc)

    announce(f"starting on {computer_name}")

    watcher = Watcher(config, computer_name, notify)
    with open(app_dir / "running.log", "a", encoding="utf-8") as running:
        watcher.check(read_devices())
        last_report = time.monotonic()
        try:
            while True:
                time.sleep(TICK_SECONDS)
                update_config(app_dir, config)
                if config.last_modified is not None:
                    watcher.check(read_devices())
                now = time.monotonic()
                if now - last_report >= RUNNING_LOG_SECONDS:
                    last_report = now
                    running.write(f"{datetime.now():%Y-%m-%d %H:%M:%S} : still running\n")
                    running.flush()
        except KeyboardInterrupt:
            announce(f"stopping on {computer_name}")
            return 1


if __name__ == "__main__":
    raise SystemExit(main())