"""64-bit square sets: one bit per square, a1 is bit 0."""

from __future__ import annotations

from collections.abc import Iterator

MASK_64 = (1 << 64) - 1

# a1 is dark, so light squares are those where file + rank is odd.
LIGHT_SQUARES = sum(1 << sq for sq in range(64) if ((sq % 8) + (sq // 8)) % 2 == 1)
DARK_SQUARES = ~LIGHT_SQUARES & MASK_64


def square_bb(square: int) -> int:
    return 1 << square


def set_bit(bitboard: int, square: int) -> int:
    return bitboard | (1 << square)


def clear_bit(bitboard: int, square: int) -> int:
    return bitboard & ~(1 << square) & MASK_64


def get_bit(bitboard: int, square: int) -> int:
    return (bitboard >> square) & 1


def popcount(bitboard: int) -> int:
    return bin(bitboard).count("1")


def lsb(bitboard: int) -> int:
    """Index of the lowest set square, or -1 for an empty set."""
    if bitboard == 0:
        return -1
    return (bitboard & -bitboard).bit_length() - 1


def pop_lsb(bitboard: int) -> tuple[int, int]:
    if bitboard == 0:
        raise ValueError("Cannot pop from empty bitboard")
    low = bitboard & -bitboard
    return low.bit_length() - 1, bitboard ^ low


def iter_bits(bitboard: int) -> Iterator[int]:
    while bitboard:
        square, bitboard = pop_lsb(bitboard)
        yield square
