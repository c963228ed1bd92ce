"""An I2C host that drives the SDA and SCL lines by hand."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

from .config import ACK, NACK, READ_STATE, BitOrder, BusConfig, ConfigError, DeviceAddressSize, Endian

_WRITE = 0x0
_READ = 0x1

Delay = Callable[[int], None]


class _NotAcknowledged(Exception):
    """The device did not acknowledge a byte; the frame ends here."""


def _select_delay(
    speed: int,
    delay_ns: Optional[Delay],
    delay_us: Optional[Delay],
    delay_ms: Optional[Delay],
) -> tuple[int, Delay]:
    period_ns = 1_000_000_000 // speed
    if period_ns < 1000:
        if delay_ns is not None:
            return period_ns, delay_ns
    elif period_ns < 1_000_000:
        if delay_us is not None:
            return period_ns // 1000, delay_us
    elif delay_ms is not None:
        return period_ns // 1_000_000, delay_ms

    if delay_ns is not None:
        return period_ns, delay_ns
    if delay_us is not None:
        return period_ns // 1000, delay_us
    return period_ns // 1_000_000, delay_ms  # type: ignore[return-value]


def _storage_width(data_len: int) -> int:
    return 1 if data_len == 1 else 2 if data_len == 2 else 4


class SoftI2C:
    """Bit-banged I2C host for one device.

    ``pins`` is any object with ``sda(state)`` and ``scl(state)`` methods.
    Of the three delay functions at least one is needed; the one whose unit
    suits the bus period is chosen, with the others as fallback.
    """

    def __init__(
        self,
        pins,
        config: BusConfig,
        delay_ns: Optional[Delay] = None,
        delay_us: Optional[Delay] = None,
        delay_ms: Optional[Delay] = None,
    ) -> None:
        if pins is None or not callable(getattr(pins, "sda", None)) or not callable(
            getattr(pins, "scl", None)
        ):
            raise ConfigError("pins must provide callable sda and scl operations", -1)
        if delay_ns is None and delay_us is None and delay_ms is None:
            raise ConfigError("at least one delay function is required", -9)
        self.pins = pins
        self.config = config
        self.period, self.delay = _select_delay(config.speed, delay_ns, delay_us, delay_ms)

    @classmethod
    def with_defaults(
        cls,
        pins,
        speed: int,
        device_address: int,
        delay_ns: Optional[Delay] = None,
        delay_us: Optional[Delay] = None,
        delay_ms: Optional[Delay] = None,
    ) -> "SoftI2C":
        """A host with MSB-first bits, little-endian bytes, 7-bit device,
        8-bit register and data, and a dummy write before reads."""
        return cls(
            pins, BusConfig(speed=speed, device_address=device_address), delay_ns, delay_us, delay_ms
        )

    def write(self, address: int, data: Optional[Sequence[int]] = None, offset: int = 0) -> int:
        """Write ``data[offset:]`` starting at register ``address``.

        With ``data`` of None only the register address is sent. Returns the
        number of values the device acknowledged in full.
        """
        values = self._values_from(data, offset)
        count = 0
        with self._frame():
            self._address_device(_WRITE)
            self._send_register(address)
            for value in values:
                for byte in self._encode(value):
                    self._send(byte)
                count += 1
        return count

    def read(self, address: int, size: int) -> list[int]:
        """Read ``size`` values starting at register ``address``.

        Returns an empty list when the device does not acknowledge.
        """
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        values: list[int] = []
        with self._frame():
            if self.config.dummy_write:
                self._address_device(_WRITE)
                self._send_register(address)
                self._restart()
            self._address_device(_READ)
            for n in range(size):
                values.append(self._receive_value(last=n == size - 1))
        return values

    # --- frame level -------------------------------------------------------

    @staticmethod
    def _values_from(data: Optional[Sequence[int]], offset: int) -> Sequence[int]:
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")
        if data is None:
            return ()
        return data[offset:]

    @contextmanager
    def _frame(self) -> Iterator[None]:
        self._start()
        try:
            yield
        except _NotAcknowledged:
            pass
        finally:
            self._stop()

    def _address_device(self, direction: int) -> None:
        addr = self.config.masked_device_address()
        if self.config.device_address_size is DeviceAddressSize.SEVEN:
            self._send(((addr << 1) | direction) & 0xFF)
        else:
            self._send(0xF0 | ((addr >> 8) << 1) | direction)
            self._send(addr & 0xFF)

    def _send_register(self, address: int) -> None:
        length = self.config.register_address_bytes()
        value = address & ((1 << (8 * length)) - 1)
        for byte in value.to_bytes(length, self.config.register_endian.byteorder):
            self._send(byte)

    def _write_slots(self, data_len: int) -> list[int]:
        cfg = self.config
        adj = 1 if data_len == 3 else 0
        slots = []
        for i in range(data_len):
            if cfg.master_endian is Endian.LITTLE:
                slots.append(i if cfg.data_endian is Endian.LITTLE else data_len - 1 - i)
            else:
                slots.append(data_len - 1 + adj - i if cfg.data_endian is Endian.LITTLE else i + adj)
        return slots

    def _read_slots(self, data_len: int) -> list[int]:
        cfg = self.config
        adj = 1 if data_len == 3 else 0
        same = cfg.master_endian is cfg.data_endian
        slots = []
        for i in range(data_len):
            if same:
                slots.append(i if cfg.master_endian is Endian.LITTLE else adj + i)
            else:
                slots.append(data_len - 1 + adj - i)
        return slots

    def _encode(self, value: int) -> list[int]:
        data_len = self.config.data_bytes()
        width = _storage_width(data_len)
        storage = (value & ((1 << (8 * width)) - 1)).to_bytes(
            width, self.config.master_endian.byteorder
        )
        return [storage[slot] for slot in self._write_slots(data_len)]

    def _receive_value(self, last: bool) -> int:
        data_len = self.config.data_bytes()
        storage = bytearray(_storage_width(data_len))
        for i, slot in enumerate(self._read_slots(data_len)):
            ack = NACK if last and i == data_len - 1 else ACK
            storage[slot] = self._read_byte(ack)
        return int.from_bytes(storage, self.config.master_endian.byteorder)

    def _send(self, byte: int) -> None:
        if self._write_byte(byte) != ACK:
            raise _NotAcknowledged

    # --- line level --------------------------------------------------------

    def _start(self) -> None:
        self.pins.sda(1)
        self.pins.scl(1)
        self.pins.sda(0)
        self.pins.scl(0)

    _restart = _start

    def _stop(self) -> None:
        self.pins.scl(0)
        self.pins.sda(0)
        self.pins.scl(1)
        self.pins.sda(1)

    def _bit_positions(self) -> range:
        return range(7, -1, -1) if self.config.bit_order is BitOrder.MSB else range(8)

    def _write_byte(self, byte: int) -> int:
        pins, third = self.pins, self.period // 3
        for position in self._bit_positions():
            self.delay(third)
            pins.sda((byte >> position) & 0x1)
            self.delay(third)
            pins.scl(1)
            self.delay(third)
            pins.scl(0)

        pins.sda(1)
        self.delay(third)
        pins.scl(1)
        self.delay(third)
        ack = pins.sda(READ_STATE)
        pins.scl(0)
        self.delay(third)
        return ACK if ack == ACK else NACK

    def _read_byte(self, ack: int) -> int:
        pins, half, third = self.pins, self.period // 2, self.period // 3
        msb_first = self.config.bit_order is BitOrder.MSB
        data = 0
        pins.sda(1)
        for _ in range(8):
            pins.scl(1)
            self.delay(half)
            if msb_first:
                data = ((data << 1) | pins.sda(READ_STATE)) & 0xFF
            else:
                data = ((data >> 1) | (pins.sda(READ_STATE) << 7)) & 0xFF
            pins.scl(0)
            self.delay(half)

        pins.sda(ACK if ack == ACK else NACK)
        self.delay(third)
        pins.scl(1)
        self.delay(third)
        pins.scl(0)
        self.delay(third)
        return data