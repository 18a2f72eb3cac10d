"""Unpacking of fixed-width unsigned integers from a byte stream.

Integers are packed most-significant-bit first with no padding between
values, so a 12-bit stream stores two values in every three bytes.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from alpinereplay.errors import UnsupportedBitwidth


class TwelveBitUnpacker:
    """
    Single-pass iterator yielding 12-bit unsigned integers from bytes.

    State is an accumulator of pending bits and the count of valid bits in it.
    After every byte the count is one of 8, 16, 4, 12 (cycling); a value is
    emitted at 16 (top 12 bits, low 4 kept) and at 12 (all of it). Bits left
    over at the end of input that do not complete a value are discarded.
    """

    def __init__(self, data: Iterable[int]):
        self._bytes = iter(data)
        self._part = 0
        self._bits = 0

    def __iter__(self) -> TwelveBitUnpacker:
        return self

    def __next__(self) -> int:
        while True:
            byte = next(self._bytes)  # StopIteration ends the stream
            self._part = ((self._part << 8) | byte) & 0xFFFF
            self._bits += 8
            if self._bits == 16:
                value = (self._part & 0xFFF0) >> 4
                self._part &= 0x000F
                self._bits -= 12
                return value
            if self._bits == 12:
                value = self._part
                self._part = 0
                self._bits -= 12
                return value
            # 4 or 8 bits held: need another byte


def unpack(data: Iterable[int], bitwidth: int) -> Iterator[int]:
    """Lazily unpack unsigned ``bitwidth``-bit integers from ``data``.

    Parameters
    ----------
    data : bytes or iterable of int
        Byte values (0..255).
    bitwidth : int
        8 or 12.

    Returns
    -------
    iterator of int
        ``len(data)`` values for 8 bits, ``floor(8 * len(data) / 12)`` for 12 bits.

    Raises
    ------
    UnsupportedBitwidth
        For any other bitwidth; data is never reinterpreted at a guessed width.
    """
    if bitwidth == 8:
        return iter(data)
    if bitwidth == 12:
        return TwelveBitUnpacker(data)
    raise UnsupportedBitwidth(bitwidth)


def unpacked_count(n_bytes: int, bitwidth: int) -> int:
    """Number of integers :func:`unpack` yields for ``n_bytes`` bytes."""
    if bitwidth not in (8, 12):
        raise UnsupportedBitwidth(bitwidth)
    return (8 * int(n_bytes)) // bitwidth
