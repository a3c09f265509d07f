from typing import Iterable

import numpy as np

class BitField:
    """
    Growable bit sequence with an explicit bit length.

    Packing is MSB-first: bit i lives in byte i // 8 at position 7 - i % 8.
    Unused low bits of the last byte are written as zero and ignored on read.
    """

    def __init__(self, data: bytes = b"", nbits: int = 0):
        if nbits < 0:
            raise ValueError("bit length must be non-negative")
        if len(data) != (nbits + 7) // 8:
            raise ValueError(f"{len(data)} bytes cannot hold exactly {nbits} bits")
        self._buf = bytearray(data)
        self._nbits = nbits

    def append(self, bit: int):
        pos = self._nbits & 7
        if pos == 0:
            self._buf.append(0)
        if bit:
            self._buf[-1] |= 0x80 >> pos
        self._nbits += 1

    def extend_code(self, code: str):
        """Append one bit per character: '1' -> 1, anything else -> 0."""
        for ch in code:
            self.append(1 if ch == "1" else 0)

    def __getitem__(self, i: int) -> int:
        if not (0 <= i < self._nbits):
            raise IndexError(f"bit index {i} out of range (nbits={self._nbits})")
        return (self._buf[i >> 3] >> (7 - (i & 7))) & 1

    def __len__(self):
        return self._nbits

    def __eq__(self, other):
        if not isinstance(other, BitField):
            return NotImplemented
        return self._nbits == other._nbits and self._buf == other._buf

    def __repr__(self):
        return f"BitField(nbits={self._nbits}, nbytes={self.nbytes})"

    @property
    def nbytes(self) -> int:
        return len(self._buf)

    def tobytes(self) -> bytes:
        return bytes(self._buf)

    def unpack(self) -> np.ndarray:
        """Return the valid bits as a flat uint8 0/1 array."""
        if self._nbits == 0:
            return np.zeros(0, dtype=np.uint8)
        raw = np.frombuffer(bytes(self._buf), dtype=np.uint8)
        return np.unpackbits(raw, count=self._nbits)

    @classmethod
    def from_bits(cls, bits01) -> "BitField":
        b = np.asarray(bits01, dtype=np.uint8).ravel()
        if b.size and b.max() > 1:
            raise ValueError("bits must be 0/1")
        return cls(np.packbits(b).tobytes(), int(b.size))

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> "BitField":
        """Concatenate code strings of '0'/'1' and pack them in one pass."""
        s = "".join(codes).encode("ascii")
        if not s:
            return cls()
        bits = np.frombuffer(s, dtype=np.uint8) == ord("1")
        return cls.from_bits(bits)
