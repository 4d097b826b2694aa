"""
Line and number readers for /proc and /sys files
"""
import logging
import re
from typing import Optional, Tuple, Union

from .model import INT64_MAX, INT64_MIN, SIZE_MAX, PathLike

_log = logging.getLogger(__name__)

# strtoull(.., 0) number syntax: hex, octal or decimal
_UINT_RX = re.compile(r"\s*\+?(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_KIB = 1024


def read_first_line(fname: PathLike) -> Optional[str]:
    """Return first line of a text file, ``None`` if the file is empty."""
    with open(fname, "rt") as f:
        line = f.readline()
    if line == "":
        return None
    return line


def split_and_check(
    s: str, separator: str, n: Union[int, Tuple[int, ...]], maxsplit: int = -1
) -> Tuple[str, ...]:
    """Turn string into tuple, checking that there are exactly as many parts as expected.
    :param s: String to parse
    :param separator: Separator character
    :param n: Expected number of parts, can be a single integer value or several,
              example `(2, 3)` accepts 2 or 3 parts.
    :param maxsplit: Passed on to ``str.split``
    """
    if isinstance(n, int):
        n = (n,)

    parts = s.split(separator, maxsplit)
    if len(parts) not in n:
        raise ValueError('Failed to parse "{}"'.format(s))
    return tuple(parts)


def parse_uint(s: str) -> Tuple[int, str]:
    """Parse leading unsigned integer, return ``(value, unparsed_tail)``.

    Accepts the same syntax as ``strtoull(s, &end, 0)``: ``0x`` prefix for
    hex, leading ``0`` for octal, decimal otherwise.
    """
    m = _UINT_RX.match(s)
    if m is None:
        raise ValueError(f"Expect unsigned integer, got {s!r}")

    digits = m.group(1)
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits[0] == "0":
        value = int(digits[1:], 8)
    else:
        value = int(digits, 10)

    if value > SIZE_MAX:
        raise ValueError(f"Value out of range: {digits}")
    return value, s[m.end() :]


def parse_mem_value(s: str) -> int:
    """Parse byte count with an optional k/m/g unit suffix.

    "1" -> 1, "1k" -> 1024, "2M" -> 2*1024**2, "1g" -> 1024**3

    Raises ``ValueError`` when the text doesn't start with a number or the
    scaled value doesn't fit into 64 bits.
    """
    num, tail = parse_uint(s)

    # g falls through to m, m falls through to k
    unit = tail[:1].lower()
    multiplier = 1
    if unit == "g":
        multiplier = _KIB
    if unit in ("g", "m"):
        multiplier = multiplier * _KIB
    if unit in ("g", "m", "k"):
        multiplier = multiplier * _KIB

    value = num * multiplier
    if value > SIZE_MAX:
        raise ValueError(f"Overflow: {s.strip()!r}")
    return value


def read_mem_value(fname: PathLike) -> Optional[int]:
    """
    Read byte count from the first line of a file.

    :returns: ``None`` if file is missing, empty or doesn't parse
    """
    try:
        line = read_first_line(fname)
        if line is None:
            _log.debug("Empty file: %s", fname)
            return None
        return parse_mem_value(line)
    except (OSError, ValueError) as e:
        _log.debug("Failed to read memory value from %s: %s", fname, e)
        return None


def read_int(fname: PathLike, default=None, base=10) -> Optional[int]:
    """
    Read single signed integer from the first line of a text file.

    Useful for things like parsing content of /sys/ or /proc.
    """
    try:
        line = read_first_line(fname)
        if line is None:
            _log.debug("Empty file: %s", fname)
            return default
        value = int(line, base)
    except (OSError, ValueError) as e:
        _log.debug("Failed to read integer from %s: %s", fname, e)
        return default

    if not INT64_MIN <= value <= INT64_MAX:
        _log.debug("Value out of range in %s: %d", fname, value)
        return default
    return value
