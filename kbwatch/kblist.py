"""List the connected USB devices, one per line."""

from __future__ import annotations

import argparse

from kbwatch.device import DEFAULT_USB_ROOT, read_devices


def main(argv: list[str] | None = None) -> int:
    """Print a summary line for every USB device found."""
    parser = argparse.ArgumentParser(prog="kblist", description="List USB devices.")
    parser.add_argument(
        "--root",
        default=str(DEFAULT_USB_ROOT),
        help="directory holding the USB device entries",
    )
    args = parser.parse_args(argv)
    for info in read_devices(args.root):
        print(info.describe())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())