"""Decoding of packed integers and channel segments into float samples."""

from .bitunpack import TwelveBitUnpacker, unpack, unpacked_count
from .channel import decode_channel, decode_channel_checked, decode_segment, sign_extend

__all__ = [
    "TwelveBitUnpacker",
    "unpack",
    "unpacked_count",
    "decode_channel",
    "decode_channel_checked",
    "decode_segment",
    "sign_extend",
]
