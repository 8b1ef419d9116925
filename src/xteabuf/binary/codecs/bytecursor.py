from __future__ import annotations
import struct


class BufferUnderrun(ValueError):
    """Unexpected end of input: a read needed more bytes than remain."""


_CODECS: dict[str, struct.Struct] = {
    fmt: struct.Struct(">" + fmt) for fmt in ("B", "b", "H", "h", "I", "i", "Q", "q", "f", "d")
}


class ByteCursor:
    """Growable byte buffer with independent read and write positions.

    All multi-byte values are big-endian. Reads stop at the logical length
    (initial contents or furthest write, whichever is larger); writes grow
    the storage before storing.
    """
    __slots__ = ("_data", "_size", "_rpos", "_wpos")

    def __init__(self, contents: bytes | bytearray | memoryview = b""):
        self._data = bytearray(contents)
        self._size = len(self._data)
        self._rpos = 0
        self._wpos = 0

    @classmethod
    def with_capacity(cls, capacity: int) -> ByteCursor:
        if capacity < 0: raise ValueError("capacity must be >= 0")
        cur = cls()
        cur._data = bytearray(capacity)
        return cur

    @classmethod
    def sized(cls, size: int) -> ByteCursor:
        if size < 0: raise ValueError("size must be >= 0")
        return cls(bytes(size))

    @property
    def read_pos(self) -> int: return self._rpos
    @property
    def write_pos(self) -> int: return self._wpos
    @property
    def capacity(self) -> int: return len(self._data)

    def __len__(self) -> int: return self._size
    def len(self) -> int: return self._size
    def readable(self) -> int: return self._size - self._rpos
    def writable(self) -> int: return self._size - self._wpos

    def advance_read_pos(self, n: int) -> None:
        if n < 0: raise ValueError("cannot move read position backwards")
        self._rpos += min(n, self.readable())

    def advance_write_pos(self, n: int) -> None:
        if n < 0: raise ValueError("cannot move write position backwards")
        self._wpos += min(n, self.writable())

    # read-only views of the logical contents; cursors stay put
    def getvalue(self) -> bytes: return bytes(self._data[:self._size])
    def __bytes__(self) -> bytes: return self.getvalue()

    def __getitem__(self, key):
        if isinstance(key, slice):
            return bytes(self._data[:self._size][key])
        if key < 0: key += self._size
        if not (0 <= key < self._size): raise IndexError("cursor index out of range")
        return self._data[key]

    def __repr__(self) -> str:
        return (f"ByteCursor(len={self._size}, capacity={len(self._data)}, "
                f"read_pos={self._rpos}, write_pos={self._wpos})")

    # raw runs
    def peek_bytes(self, n: int) -> bytes:
        if n < 0: raise ValueError("byte count must be >= 0")
        end = self._rpos + n
        if end > self._size: raise BufferUnderrun(f"underrun: need {n} at {self._rpos}")
        return bytes(self._data[self._rpos:end])

    def get_bytes(self, n: int) -> bytes:
        out = self.peek_bytes(n)
        self._rpos += n
        return out

    def put_bytes(self, data: bytes | bytearray | memoryview) -> None:
        n = len(data)
        end = self._wpos + n
        if end >= len(self._data):
            self._data.extend(bytes(max(len(self._data) * 2, end) - len(self._data)))
        self._data[self._wpos:end] = data
        self._wpos = end
        if end > self._size: self._size = end

    # typed big-endian access, one table entry per width
    def get(self, fmt: str):
        codec = _CODECS[fmt]
        end = self._rpos + codec.size
        if end > self._size: raise BufferUnderrun(f"underrun: need {codec.size} at {self._rpos}")
        value = codec.unpack_from(self._data, self._rpos)[0]
        self._rpos = end
        return value

    def put(self, fmt: str, value) -> None:
        try:
            raw = _CODECS[fmt].pack(value)
        except (struct.error, OverflowError) as exc:
            raise ValueError(f"{value!r} does not fit format {fmt!r}") from exc
        self.put_bytes(raw)

    def get_u8(self) -> int:  return self.get("B")
    def get_i8(self) -> int:  return self.get("b")
    def get_u16(self) -> int: return self.get("H")
    def get_i16(self) -> int: return self.get("h")
    def get_u32(self) -> int: return self.get("I")
    def get_i32(self) -> int: return self.get("i")
    def get_u64(self) -> int: return self.get("Q")
    def get_i64(self) -> int: return self.get("q")
    def get_f32(self) -> float: return self.get("f")
    def get_f64(self) -> float: return self.get("d")

    def put_u8(self, v: int) -> None:  self.put("B", v)
    def put_i8(self, v: int) -> None:  self.put("b", v)
    def put_u16(self, v: int) -> None: self.put("H", v)
    def put_i16(self, v: int) -> None: self.put("h", v)
    def put_u32(self, v: int) -> None: self.put("I", v)
    def put_i32(self, v: int) -> None: self.put("i", v)
    def put_u64(self, v: int) -> None: self.put("Q", v)
    def put_i64(self, v: int) -> None: self.put("q", v)
    def put_f32(self, v: float) -> None: self.put("f", v)
    def put_f64(self, v: float) -> None: self.put("d", v)
