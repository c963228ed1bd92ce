# bitbang_i2c

A software I2C host. You supply two line operations, one for SDA and one for
SCL, and at least one delay function. The host generates the start, restart
and stop conditions, clocks bytes out and in, and checks each ACK/NACK. It
has no hardware dependencies, so it works with any GPIO library or with a
simulated bus.

## Installation

```
pip install .
```

## Line operations

`SoftI2C` accepts any object that has callable `sda(state)` and `scl(state)`
methods. Each method takes one `state` argument:

- `0` or `1` drives the line low or high.
- Any other value reads the line without driving it. The host passes `2`.

The method returns the level it sees on the line. The host expects `0` or `1`.

`bitbang_i2c.config.PinOps` builds such an object from two plain callables:

```python
from bitbang_i2c.config import PinOps

pins = PinOps(sda_line=my_sda, scl_line=my_scl)
```

## Quick start

```python
from bitbang_i2c.host import SoftI2C

bus = SoftI2C.with_defaults(pins, speed=100_000, device_address=0x38,
                            delay_us=sleep_us, delay_ms=sleep_ms)

written = bus.write(0xAC, [0x33, 0x00])   # number of values fully acknowledged
values = bus.read(0xAC, 7)                # list of values read
```

`SoftI2C.with_defaults` uses these settings:

- bits sent MSB first
- little-endian byte order for the host, the register address and the data
- a dummy write of the register address before each read
- a 7-bit device address
- an 8-bit register address
- 8-bit data values

## Full configuration

`bitbang_i2c.config.BusConfig` exposes every setting:

```python
from bitbang_i2c.config import BusConfig, BitOrder, Endian, DeviceAddressSize
from bitbang_i2c.host import SoftI2C

config = BusConfig(
    speed=400_000,
    device_address=0x50,
    bit_order=BitOrder.MSB,
    master_endian=Endian.LITTLE,
    register_endian=Endian.BIG,
    data_endian=Endian.BIG,
    dummy_write=True,
    device_address_size=DeviceAddressSize.SEVEN,
    register_address_size=16,
    data_size=16,
)
bus = SoftI2C(pins, config, delay_us=sleep_us)
```

Enum fields also accept their plain integer values, for example
`bit_order=1`. Limits:

- `speed` must be from 100 to 400000 Hz.
- `register_address_size` and `data_size` must each be from 1 to 32 bits.
  Both are rounded up to whole bytes on the wire (`register_address_bytes()`
  and `data_bytes()`).
- `device_address` is masked to 7 or 10 bits (`masked_device_address()`).
  A 10-bit address is sent as two bytes, `0xF0 | (high bits << 1) | R/W` and
  then the low byte.

An invalid setting raises `ConfigError`, a subclass of `ValueError`. Its
`code` attribute identifies the setting: `-1` pins, `-2` speed, `-3` bit order,
`-4` endianness, `-5` dummy write, `-6` device address size, `-7` register
address size, `-8` data size, `-9` missing delay function.

## Transfers

- `write(address, data=None, offset=0)` sends the register address and then
  each value in `data[offset:]`. If `data` is `None`, only the register
  address is sent. It returns the number of values the device fully
  acknowledged.
- `read(address, size)` returns a list of `size` values. The last byte is
  answered with a NACK. When `dummy_write` is set, the device is addressed for
  writing, the register address is sent, and a restart follows before the
  read.

A NACK while addressing the device, or while writing, ends the frame with a
stop condition. In that case `read` returns an empty list and `write` returns
the count reached so far. A negative `offset` or `size` raises `ValueError`.

## How the delay function is chosen

The bus period in nanoseconds, `1_000_000_000 // speed`, determines which
delay function is used:

- period under 1 µs: the nanosecond delay
- period under 1 ms: the microsecond delay
- otherwise: the millisecond delay

If the preferred function was not supplied, the first available one is used,
in the order ns, µs, ms. The period is converted to that function's unit and
stored in `bus.period`. Each delay call receives a third or a half of it.

## What this package does not do

It does not access hardware. Driving and sampling the lines is entirely up to
the `sda`/`scl` operations you supply. It also has no command-line tool, no
bus locking, and no device-specific drivers.