"""Bit-banged I2C host: bus configuration (config) and the host itself (host)."""

__version__ = "0.1.0"
__all__ = ["config", "host"]