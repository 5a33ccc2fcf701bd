# kbwatch

kbwatch watches the USB devices attached to a machine. When a keyboard or any
other USB device is plugged in or unplugged, it sends a message to a Telegram
chat. It also sends a message when the watcher starts and when it stops.

## Installation

```
pip install .
```

Device discovery reads the kernel's USB device tree under `/sys/bus/usb/devices`,
so kbwatch runs on Linux only.

## Commands

### `kbwatch`

```
kbwatch
```

kbwatch keeps its files in a `kbwatch` directory inside your user cache directory.
It creates that directory the first time it starts. The directory holds these files:

- `config.txt` holds the settings.
- `kbwatch.log` holds the event log. The same lines also go to the console.
- `running.log` gets a "still running" line about once a minute.

When no bot token is configured, kbwatch asks for one on the terminal. It checks the
token against Telegram and asks again until Telegram accepts it. When no chat id is
configured, kbwatch polls the bot every second until someone sends it a message, and
takes the chat id from that message. It then saves both values to `config.txt`.

Every second, kbwatch checks whether `config.txt` has changed and reloads it if it
has. While the configuration file exists, kbwatch also scans the USB devices every
second and reports each device that was added or removed since the previous scan.
Stop it with Ctrl+C. It sends a "stopping" message and exits with status 1.

### `kblist`

```
kblist [--root DIR]
```

This lists every USB device that can be read, one per line:

```
Bus 001 | Address 004 | ID 046d:c31c | Logitech | USB Keyboard | 
```

`--root` sets the directory that holds the device entries. It defaults to
`/sys/bus/usb/devices`.

## Configuration

`config.txt` has one setting per line. Each line is a key, a single space, and a
value:

```
TELEGRAM_BOT_TOKEN token
TELEGRAM_CHAT_ID 123456
IGNORE 1D6B:0002
IGNORE USB RECEIVER
```

You may repeat `IGNORE`. A newly seen device is ignored when its name matches an
entry, or when its `VID:PID` matches one. Case does not matter in either match.

A device's name is its product string. When there is no product string, kbwatch uses
the manufacturer string. When there is neither, it uses `VID:PID` in upper-case
hexadecimal.

## Library use

```python
from kbwatch.device import read_devices
from kbwatch.utils import get_app_dir, load_aliases, get_alias

for info in read_devices("/sys/bus/usb/devices"):
    print(info.describe(), "->", info.name())

aliases = load_aliases(get_app_dir())
print(get_alias("INTERNAL", aliases))
```

- `load_aliases(app_dir)` reads `alias.txt`, which uses the same `KEY value` format
  as `config.txt`.
- `get_alias(name, aliases)` resolves a name to its alias. It reduces HID device
  paths to their `VID_xxxx&PID_xxxx` part before the lookup. Any other name that has
  no alias resolves as `INTERNAL`.
- `kbwatch.telegram.send_message(token, chat_id, message, silent)` posts a message.
  It raises `TelegramError` if the message is empty or the request fails.
- `kbwatch.watcher.Watcher(config, computer_name, notify).check(devices)` compares a
  device listing with the devices it already knows about. It calls `notify` once for
  each change and returns the added devices and the removed devices.

## Limitations

- Aliases can only be used through the library. The `kbwatch` command does not read
  `alias.txt`, and its messages always use the device names.
- Devices are found only through the Linux sysfs tree. No other platform is supported.