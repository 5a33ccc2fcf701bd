"""Key/value files, device aliases and the application directory."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_cache_dir

KeyValues = dict[str, list[str]]

_WIN_PREFIX = "\\\\?\\"
_HID_PREFIX = "HID#VID_"


def load_key_value_file(path: str | Path) -> KeyValues:
    """Read ``KEY value`` lines; a key may appear several times.

    A missing or unreadable file gives an empty mapping.
    """
    try:
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return {}

    values: KeyValues = {}
    for line in content.split("\n"):
        line = line.removesuffix("\r")
        key, sep, value = line.partition(" ")
        if not sep or not key or not value:
            continue
        values.setdefault(key.strip(), []).append(value.strip())
    return values


def load_aliases(app_dir: str | Path) -> KeyValues:
    """Load ``alias.txt`` from the application directory."""
    return load_key_value_file(Path(app_dir) / "alias.txt")


def _alias_or_none(name: str, aliases: KeyValues) -> str | None:
    found = aliases.get(name)
    return found[0] if found else None


def _alias_or_name(name: str, aliases: KeyValues) -> str:
    alias = _alias_or_none(name, aliases)
    return name if alias is None else alias


def get_alias(name: str, aliases: KeyValues) -> str:
    """Resolve a device name to its alias.

    HID device paths are reduced to their ``VID_xxxx&PID_xxxx`` part before
    lookup; any other unknown name resolves as ``INTERNAL``.
    """
    alias = _alias_or_none(name, aliases)
    if alias is not None:
        return alias

    while name.startswith(_WIN_PREFIX):
        name = name[len(_WIN_PREFIX):]
    if not name.startswith(_HID_PREFIX):
        return _alias_or_name("INTERNAL", aliases)

    name = name[4:]
    head, sep, _ = name.rpartition("#")
    if sep:
        name = head
    parts = name.split("&")
    vid = parts[0]
    pid = parts[1] if len(parts) > 1 else ""
    if vid and pid:
        name = name[: len(vid) + 1 + len(pid)]
    return _alias_or_name(name, aliases)


def get_app_dir() -> Path:
    """Directory holding the configuration and logs."""
    return Path(user_cache_dir()) / "kbwatch"