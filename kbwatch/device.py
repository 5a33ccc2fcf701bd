"""USB device descriptions and discovery through the sysfs device tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_USB_ROOT = Path("/sys/bus/usb/devices")


@dataclass(frozen=True)
class Device:
    """Identity of a USB device: where it sits on the bus and what it is."""

    bus: int = 0
    address: int = 0
    vendor_id: int = 0
    product_id: int = 0
    class_code: int = 0

    @property
    def usb_id(self) -> str:
        """The ``vvvv:pppp`` identifier in lower-case hexadecimal."""
        return f"{self.vendor_id:04x}:{self.product_id:04x}"


@dataclass(frozen=True)
class DeviceInfo:
    """A device together with the strings it reports about itself."""

    device: Device
    manufacturer: str = ""
    product: str = ""
    serial: str = ""

    def name(self) -> str:
        """Best human-readable name: product, then manufacturer, then the USB id."""
        if self.product:
            return self.product
        if self.manufacturer:
            return self.manufacturer
        return f"{self.device.vendor_id:04X}:{self.device.product_id:04X}"

    def describe(self) -> str:
        """One-line summary of the device."""
        dev = self.device
        return (
            f"Bus {dev.bus:03} | Address {dev.address:03} | ID {dev.usb_id} | "
            f"{self.manufacturer} | {self.product} | {self.serial}"
        )


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="ascii", errors="replace").strip()
    except OSError:
        return None


def _read_device(entry: Path) -> DeviceInfo | None:
    fields = {
        "busnum": 10,
        "devnum": 10,
        "idVendor": 16,
        "idProduct": 16,
        "bDeviceClass": 16,
    }
    values: dict[str, int] = {}
    for field, base in fields.items():
        text = _read_text(entry / field)
        if text is None:
            return None
        try:
            values[field] = int(text, base)
        except ValueError:
            return None

    device = Device(
        bus=values["busnum"],
        address=values["devnum"],
        vendor_id=values["idVendor"],
        product_id=values["idProduct"],
        class_code=values["bDeviceClass"],
    )
    return DeviceInfo(
        device=device,
        manufacturer=_read_text(entry / "manufacturer") or "",
        product=_read_text(entry / "product") or "",
        serial=_read_text(entry / "serial") or "",
    )


def read_devices(root: str | Path = DEFAULT_USB_ROOT) -> list[DeviceInfo]:
    """List the USB devices found under a sysfs-style device directory.

    Entries without a complete device descriptor are skipped. A missing or
    unreadable root yields an empty list.
    """
    root = Path(root)
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        logger.error("%s", exc)
        return []

    devices = []
    for entry in entries:
        info = _read_device(entry)
        if info is not None:
            devices.append(info)
    return devices