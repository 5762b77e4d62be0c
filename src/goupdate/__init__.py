"""goupdate: keep the system Go toolchain current with the official releases."""

__version__ = "0.1.0"
