"""Bus settings, line operations and validation for a bit-banged I2C host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

ACK = 0
NACK = 1
READ_STATE = 2
"""Passing this to a line operation samples the line without driving it."""

SPEED_MIN = 100
SPEED_MAX = 400_000
REGISTER_ADDRESS_SIZE_MIN = 1
REGISTER_ADDRESS_SIZE_MAX = 32
DATA_SIZE_MIN = 1
DATA_SIZE_MAX = 32


class BitOrder(IntEnum):
    """Order in which the bits of a byte are put on the wire."""

    MSB = 0
    LSB = 1


class Endian(IntEnum):
    """Byte order of multi-byte values."""

    LITTLE = 0
    BIG = 1

    @property
    def byteorder(self) -> str:
        return "little" if self is Endian.LITTLE else "big"


class DeviceAddressSize(IntEnum):
    """Width of the device address in bits."""

    SEVEN = 7
    TEN = 10


class ConfigError(ValueError):
    """Raised for an invalid bus setting; ``code`` tells which setting."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class PinOps:
    """Adapts two callables to the SDA/SCL line interface.

    Each callable drives its line when given 0 or 1, only samples it for any
    other value, and returns the line level it sees.
    """

    sda_line: Callable[[int], int]
    scl_line: Callable[[int], int]

    def sda(self, state: int) -> int:
        return int(self.sda_line(state))

    def scl(self, state: int) -> int:
        return int(self.scl_line(state))


def _coerce(enum_type, value, code: int, what: str):
    try:
        return enum_type(value)
    except ValueError:
        raise ConfigError(f"invalid {what}: {value!r}", code) from None


def _byte_count(bits: int) -> int:
    return bits // 8 + (1 if bits % 8 else 0)


@dataclass
class BusConfig:
    """Everything that describes how a host talks to one device."""

    speed: int
    device_address: int
    bit_order: BitOrder = BitOrder.MSB
    master_endian: Endian = Endian.LITTLE
    register_endian: Endian = Endian.LITTLE
    data_endian: Endian = Endian.LITTLE
    dummy_write: bool = True
    device_address_size: DeviceAddressSize = DeviceAddressSize.SEVEN
    register_address_size: int = 8
    data_size: int = 8

    def __post_init__(self) -> None:
        if not SPEED_MIN <= self.speed <= SPEED_MAX:
            raise ConfigError(
                f"speed must be within {SPEED_MIN}..{SPEED_MAX} Hz, got {self.speed}", -2
            )
        self.bit_order = _coerce(BitOrder, self.bit_order, -3, "bit order")
        self.master_endian = _coerce(Endian, self.master_endian, -4, "master endianness")
        self.register_endian = _coerce(Endian, self.register_endian, -4, "register endianness")
        self.data_endian = _coerce(Endian, self.data_endian, -4, "data endianness")
        if self.dummy_write not in (0, 1):
            raise ConfigError(f"dummy_write must be a boolean, got {self.dummy_write!r}", -5)
        self.dummy_write = bool(self.dummy_write)
        self.device_address_size = _coerce(
            DeviceAddressSize, self.device_address_size, -6, "device address size"
        )
        if not REGISTER_ADDRESS_SIZE_MIN <= self.register_address_size <= REGISTER_ADDRESS_SIZE_MAX:
            raise ConfigError(
                f"register address size must be within {REGISTER_ADDRESS_SIZE_MIN}.."
                f"{REGISTER_ADDRESS_SIZE_MAX} bits, got {self.register_address_size}",
                -7,
            )
        if not DATA_SIZE_MIN <= self.data_size <= DATA_SIZE_MAX:
            raise ConfigError(
                f"data size must be within {DATA_SIZE_MIN}..{DATA_SIZE_MAX} bits, "
                f"got {self.data_size}",
                -8,
            )

    def register_address_bytes(self) -> int:
        """Number of bytes sent for a register address."""
        return _byte_count(self.register_address_size)

    def data_bytes(self) -> int:
        """Number of bytes on the wire for one data value."""
        return _byte_count(self.data_size)

    def masked_device_address(self) -> int:
        """The device address cut to its configured width."""
        mask = 0x7F if self.device_address_size is DeviceAddressSize.SEVEN else 0x3FF
        return self.device_address & mask