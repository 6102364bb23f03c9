"""Blocks packed into 16-bit values."""

from __future__ import annotations

from dataclasses import dataclass

from .binaryio import ByteOrder

__all__ = ["Block"]


@dataclass(frozen=True)
class Block:
    """A block id, its data value and whether it is waterlogged."""

    id: int
    data: int = 0
    waterlogged: bool = False

    @classmethod
    def from_packed(cls, packed: int, endian: ByteOrder = ByteOrder.LITTLE) -> Block:
        """Unpack a 16-bit block value.

        Little-endian: bit 15 waterlogged, bits 4-14 id, bits 0-3 data.
        """
        packed &= 0xFFFF
        if endian is ByteOrder.BIG:
            low = (packed & 0xF0) >> 4
            high = (packed >> 8) & 0x7F
            return cls((high << 4) | low, (packed & 0xF0) >> 4, bool((packed >> 8) & 0x1))
        return cls((packed >> 4) & 0x7FF, packed & 0xF, bool((packed >> 15) & 0x1))

    def packed(self) -> int:
        """Pack this block into the little-endian 16-bit layout."""
        return (int(self.waterlogged) << 15) | ((self.id & 0x7FF) << 4) | (self.data & 0xF)