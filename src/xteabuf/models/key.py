from __future__ import annotations
import struct
from typing import Annotated, Tuple
from pydantic import BaseModel, ConfigDict, Field

Word32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

_KEY_FMT = struct.Struct(">4I")


class XteaKey(BaseModel):
    """128-bit XTEA key as four unsigned 32-bit words (k[0] first)."""
    model_config = ConfigDict(frozen=True, strict=True)

    words: Tuple[Word32, Word32, Word32, Word32]

    def __getitem__(self, i: int) -> int:
        return self.words[i]

    @classmethod
    def from_bytes(cls, raw: bytes) -> "XteaKey":
        """16 bytes, each word big-endian."""
        if len(raw) != _KEY_FMT.size:
            raise ValueError(f"XTEA key must be {_KEY_FMT.size} bytes, got {len(raw)}")
        return cls(words=_KEY_FMT.unpack(raw))

    @classmethod
    def from_hex(cls, text: str) -> "XteaKey":
        text = text.strip()
        if len(text) != 2 * _KEY_FMT.size:
            raise ValueError(f"XTEA key must be {2 * _KEY_FMT.size} hex characters")
        return cls.from_bytes(bytes.fromhex(text))

    def to_bytes(self) -> bytes:
        return _KEY_FMT.pack(*self.words)

    def hex(self) -> str:
        return self.to_bytes().hex()
