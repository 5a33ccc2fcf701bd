import logging

from kbwatch.config import KBConfig
from kbwatch.device import Device, DeviceInfo
from kbwatch.telegram import TelegramError
from kbwatch.watcher import Watcher, init_logging

KEYBOARD = DeviceInfo(
    Device(bus=1, address=2, vendor_id=0x1234, product_id=0xABCD),
    manufacturer="Acme",
    product="Keyboard",
    serial="placeholder",
)
MOUSE = DeviceInfo(
    Device(bus=1, address=3, vendor_id=0x1111, product_id=0x2222),
    manufacturer="Acme",
)


def _watcher(ignored=()):
    messages = []
    config = KBConfig(ignored_devices=list(ignored))
    return Watcher(config, "host", messages.append), messages


def test_first_check_reports_all_devices():
    watcher, messages = _watcher()
    added, removed = watcher.check([KEYBOARD, MOUSE])
    assert added == [KEYBOARD, MOUSE]
    assert removed == []
    assert messages == ["Keyboard plugged in host", "Acme plugged in host"]
    assert watcher.devices == [KEYBOARD, MOUSE]


def test_repeated_check_reports_nothing():
    watcher, messages = _watcher()
    watcher.check([KEYBOARD])
    messages.clear()
    assert watcher.check([KEYBOARD]) == ([], [])
    assert messages == []


def test_removed_device_is_reported_and_forgotten():
    watcher, messages = _watcher()
    watcher.check([KEYBOARD, MOUSE])
    messages.clear()
    added, removed = watcher.check([MOUSE])
    assert added == []
    assert removed == [KEYBOARD]
    assert messages == ["Keyboard unplugged from host"]
    assert watcher.devices == [MOUSE]


def test_replugged_device_is_reported_again():
    watcher, messages = _watcher()
    watcher.check([KEYBOARD])
    watcher.check([])
    watcher.check([KEYBOARD])
    assert messages == [
        "Keyboard plugged in host",
        "Keyboard unplugged from host",
        "Keyboard plugged in host",
    ]


def test_removals_reported_before_additions_in_reverse_order():
    watcher, messages = _watcher()
    watcher.check([KEYBOARD, MOUSE])
    other = DeviceInfo(Device(bus=2, address=1, vendor_id=0x3333, product_id=0x4444))
    messages.clear()
    added, removed = watcher.check([other])
    assert removed == [MOUSE, KEYBOARD]
    assert added == [other]
    assert messages[-1] == "3333:4444 plugged in host"


def test_ignored_by_name():
    watcher, messages = _watcher(["KEYBOARD"])
    added, _ = watcher.check([KEYBOARD, MOUSE])
    assert added == [MOUSE]
    assert watcher.devices == [MOUSE]


def test_ignored_by_usb_id():
    watcher, messages = _watcher(["1234:ABCD"])
    watcher.check([KEYBOARD])
    assert messages == []
    assert watcher.devices == []


def test_notification_failure_still_tracks_device():
    def failing(message):
        raise TelegramError("offline")

    watcher = Watcher(KBConfig(), "host", failing)
    added, _ = watcher.check([KEYBOARD])
    assert added == [KEYBOARD]
    assert watcher.devices == [KEYBOARD]


def test_config_changes_are_seen_by_watcher():
    watcher, messages = _watcher()
    watcher.config.ignored_devices = ["ACME"]
    watcher.check([MOUSE])
    assert messages == []


def test_init_logging_writes_log_file(tmp_path, capsys):
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        path = init_logging(tmp_path)
        logging.getLogger("kbwatch.test").info("hello from the watcher")
        for handler in root.handlers:
            handler.flush()
        assert path == tmp_path / "kbwatch.log"
        assert "hello from the watcher" in path.read_text(encoding="utf-8")
        assert f"Logging in {path}" in capsys.readouterr().out
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)