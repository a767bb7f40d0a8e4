"""
OSC time tags.

A time tag is a 64-bit NTP timestamp: the upper 32 bits count seconds since
1900-01-01 00:00 UTC, the lower 32 bits are fractions of a second. The value
1 (all zeros except the last bit) is reserved to mean "immediately".
"""

import datetime
import struct
import time
from typing import NamedTuple

NTP_EPOCH = datetime.datetime(1900, 1, 1, tzinfo=datetime.timezone.utc)
UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
NTP_DELTA = int((UNIX_EPOCH - NTP_EPOCH).total_seconds())  # 2208988800
FRACTION_SCALE = 2 ** 32


def _check_range(seconds, fraction):
    if not 0 <= seconds < FRACTION_SCALE:
        raise ValueError(f"time tag seconds {seconds} do not fit in 32 bits")
    if not 0 <= fraction < FRACTION_SCALE:
        raise ValueError(f"time tag fraction {fraction} does not fit in 32 bits")


class TimeTag(NamedTuple):
    """
    64-bit OSC/NTP time tag split into its two 32-bit halves.

    Attributes:
        seconds: Whole seconds since 1900-01-01 UTC
        fraction: Fractional second in units of 1/2**32 s
    """

    seconds: int
    fraction: int = 0

    @classmethod
    def immediately(cls):
        """The special time tag meaning "process immediately"."""
        return cls(0, 1)

    @classmethod
    def now(cls):
        """Time tag for the current wall-clock time."""
        return cls.from_unix(time.time())

    @classmethod
    def from_int(cls, value: int):
        """Split a raw 64-bit integer into seconds and fraction."""
        if not 0 <= value < 2 ** 64:
            raise ValueError(f"time tag {value} does not fit in 64 bits")
        return cls(value >> 32, value & 0xFFFFFFFF)

    @classmethod
    def from_unix(cls, seconds: float):
        """Convert Unix seconds (as returned by time.time()) to a time tag."""
        ntp = seconds + NTP_DELTA
        if ntp < 0:
            raise ValueError(f"Unix time {seconds} is before the NTP epoch (1900)")
        whole = int(ntp)
        fraction = int(round((ntp - whole) * FRACTION_SCALE))
        if fraction >= FRACTION_SCALE:
            whole += 1
            fraction -= FRACTION_SCALE
        return cls(whole % FRACTION_SCALE, fraction)

    @classmethod
    def from_datetime(cls, dt: datetime.datetime):
        """Convert a datetime; naive datetimes are taken as local time."""
        return cls.from_unix(dt.timestamp())

    @classmethod
    def from_bytes(cls, data):
        """Decode 8 big-endian bytes."""
        return cls.from_int(struct.unpack(">Q", bytes(data))[0])

    def to_bytes(self):
        """Encode as 8 big-endian bytes."""
        return struct.pack(">Q", int(self))

    def to_unix(self):
        """Seconds since the Unix epoch as a float."""
        return self.seconds - NTP_DELTA + self.fraction / FRACTION_SCALE

    def to_datetime(self):
        """Timezone-aware UTC datetime."""
        return UNIX_EPOCH + datetime.timedelta(seconds=self.to_unix())

    def is_immediately(self):
        return self == (0, 1)

    def __int__(self):
        _check_range(self.seconds, self.fraction)
        return (self.seconds << 32) | self.fraction


def coerce_time_tag(value):
    """
    Accept the ways callers spell a time tag and return a TimeTag.

    Args:
        value: TimeTag or (seconds, fraction) tuple, raw 64-bit int,
            datetime, or None for "now"

    Returns:
        TimeTag

    Raises:
        ValueError: If seconds or fraction do not fit in 32 bits
    """
    if value is None:
        return TimeTag.now()
    if isinstance(value, tuple):
        value = TimeTag(*value)
        _check_range(value.seconds, value.fraction)
        return value
    if isinstance(value, datetime.datetime):
        return TimeTag.from_datetime(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return TimeTag.from_int(value)
    raise TypeError(f"cannot interpret {value!r} as an OSC time tag")
