"""
XTEA block cipher over ByteCursor buffers.

64-bit blocks, 128-bit key, 32 rounds by default. Blocks are processed
independently (no chaining) and no padding is applied: callers hand in
whole 8-byte blocks. Words are read and written big-endian.
"""
from __future__ import annotations
import logging
from typing import Callable, Sequence, Tuple, Union

from xteabuf.binary.codecs.bytecursor import ByteCursor
from xteabuf.models.key import XteaKey

logger = logging.getLogger(__name__)

DELTA = 0x9E3779B9
DEFAULT_ROUNDS = 32
BLOCK_SIZE = 8
_MASK32 = 0xFFFFFFFF

KeyLike = Union[XteaKey, Sequence[int], bytes, bytearray]
Block = Tuple[int, int]


class UnalignedInput(ValueError):
    """Source length is not a multiple of the block size."""

    def __init__(self, remainder: int):
        super().__init__(f"{remainder} trailing byte(s) do not form a {BLOCK_SIZE}-byte block")
        self.remainder = remainder


def _coerce_key(key: KeyLike) -> XteaKey:
    if isinstance(key, XteaKey):
        return key
    if isinstance(key, (bytes, bytearray)):
        return XteaKey.from_bytes(bytes(key))
    return XteaKey(words=tuple(key))


class Xtea:
    __slots__ = ("_key", "_rounds")

    def __init__(self, key: KeyLike, rounds: int = DEFAULT_ROUNDS):
        if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds < 0:
            raise ValueError(f"rounds must be a non-negative integer, got {rounds!r}")
        self._key = _coerce_key(key)
        self._rounds = rounds

    @property
    def key(self) -> XteaKey: return self._key
    @property
    def rounds(self) -> int: return self._rounds

    def __repr__(self) -> str:
        return f"Xtea(rounds={self._rounds})"

    # -----------------------------
    # Block transform
    # -----------------------------

    def encipher_block(self, v0: int, v1: int) -> Block:
        k = self._key.words
        s = 0
        for _ in range(self._rounds):
            v0 = (v0 + ((((v1 << 4) ^ (v1 >> 5)) + v1) ^ (s + k[s & 3]))) & _MASK32
            s = (s + DELTA) & _MASK32
            v1 = (v1 + ((((v0 << 4) ^ (v0 >> 5)) + v0) ^ (s + k[(s >> 11) & 3]))) & _MASK32
        return v0, v1

    def decipher_block(self, v0: int, v1: int) -> Block:
        k = self._key.words
        s = (DELTA * self._rounds) & _MASK32
        for _ in range(self._rounds):
            v1 = (v1 - ((((v0 << 4) ^ (v0 >> 5)) + v0) ^ (s + k[(s >> 11) & 3]))) & _MASK32
            s = (s - DELTA) & _MASK32
            v0 = (v0 - ((((v1 << 4) ^ (v1 >> 5)) + v1) ^ (s + k[s & 3]))) & _MASK32
        return v0, v1

    # -----------------------------
    # Cursor-level passes
    # -----------------------------

    def encipher(self, source: ByteCursor, destination: ByteCursor, *, strict: bool = False) -> int:
        """
        Encipher every whole block readable from `source` into `destination`.
        Returns the number of blocks processed. Trailing bytes (1..7) stay
        unread in `source`; with strict=True they raise UnalignedInput
        before anything is consumed.
        """
        return self._run(source, destination, self.encipher_block, strict)

    def decipher(self, source: ByteCursor, destination: ByteCursor, *, strict: bool = False) -> int:
        """Inverse of encipher; same block and remainder handling."""
        return self._run(source, destination, self.decipher_block, strict)

    def encipher_bytes(self, data: bytes, *, strict: bool = False) -> bytes:
        out = ByteCursor.with_capacity(len(data))
        self.encipher(ByteCursor(data), out, strict=strict)
        return out.getvalue()

    def decipher_bytes(self, data: bytes, *, strict: bool = False) -> bytes:
        out = ByteCursor.with_capacity(len(data))
        self.decipher(ByteCursor(data), out, strict=strict)
        return out.getvalue()

    def _run(
        self,
        source: ByteCursor,
        destination: ByteCursor,
        transform: Callable[[int, int], Block],
        strict: bool,
    ) -> int:
        iterations, remainder = divmod(source.readable(), BLOCK_SIZE)
        if remainder:
            if strict:
                raise UnalignedInput(remainder)
            logger.warning("Ignoring %d trailing byte(s) after %d whole block(s)", remainder, iterations)

        for _ in range(iterations):
            v0 = source.get_u32()
            v1 = source.get_u32()
            v0, v1 = transform(v0, v1)
            destination.put_u32(v0)
            destination.put_u32(v1)

        logger.debug("%s processed %d block(s) with %d rounds", transform.__name__, iterations, self._rounds)
        return iterations
