"""Report USB device plug and unplug events to a Telegram chat."""

__version__ = "0.2.0"
__all__ = ["__version__"]