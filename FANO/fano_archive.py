import struct
from typing import List

from fano_bitfield import BitField
from fano_errors import ValidationError, TruncatedStreamError
from fano_freq import SymbolEntry

MAGIC = 3247928473

# Stream layout (little-endian):
# magic(u32)
# table_len(u32) then table_len entries:
#   code_len(u32) code(code_len ascii '0'/'1') symbol(i32) count(u32)
# nbits(u32) nbytes(u32) payload(nbytes), MSB-first, nbytes == ceil(nbits/8)
MAGIC_FMT = "<I"
LEN_FMT = "<I"
ENTRY_FMT = "<iI"
LEN_SIZE = struct.calcsize(LEN_FMT)
ENTRY_SIZE = struct.calcsize(ENTRY_FMT)

U32_MAX = 0xFFFFFFFF

def _read_exact(f, n: int, what: str) -> bytes:
    data = f.read(n)
    if len(data) != n:
        raise TruncatedStreamError(f"Malformed stream: {what} truncated "
                                   f"(need {n} bytes, got {len(data)})")
    return data

def _read_len(f, what: str) -> int:
    return struct.unpack(LEN_FMT, _read_exact(f, LEN_SIZE, what))[0]

def write_magic(f):
    f.write(struct.pack(MAGIC_FMT, MAGIC))

def read_magic(f):
    data = f.read(struct.calcsize(MAGIC_FMT))
    if len(data) != struct.calcsize(MAGIC_FMT):
        raise ValidationError("Malformed stream: header too short")
    (magic,) = struct.unpack(MAGIC_FMT, data)
    if magic != MAGIC:
        raise ValidationError(f"Bad magic number (not a fano stream): {magic:#010x}")

def write_table(f, entries: List[SymbolEntry]):
    f.write(struct.pack(LEN_FMT, len(entries)))
    for e in entries:
        if not (-2**31 <= e.symbol < 2**31):
            raise ValidationError(f"symbol out of i32 range: {e.symbol}")
        if not (0 <= e.count <= U32_MAX):
            raise ValidationError(f"count out of u32 range: {e.count}")
        code = e.code.encode("ascii")
        f.write(struct.pack(LEN_FMT, len(code)))
        f.write(code)
        f.write(struct.pack(ENTRY_FMT, e.symbol, e.count))

def read_table(f) -> List[SymbolEntry]:
    table_len = _read_len(f, "table length")
    out = []
    for i in range(table_len):
        code_len = _read_len(f, f"table entry {i}")
        raw = _read_exact(f, code_len, f"table entry {i} code")
        if raw.translate(None, b"01"):
            raise ValidationError(f"table entry {i}: code is not a bit string")
        symbol, count = struct.unpack(ENTRY_FMT, _read_exact(f, ENTRY_SIZE, f"table entry {i}"))
        out.append(SymbolEntry(raw.decode("ascii"), symbol, count))
    return out

def table_nbytes(entries: List[SymbolEntry]) -> int:
    return LEN_SIZE + sum(LEN_SIZE + len(e.code) + ENTRY_SIZE for e in entries)

def write_bitfield(f, bits: BitField):
    f.write(struct.pack(LEN_FMT, len(bits)))
    f.write(struct.pack(LEN_FMT, bits.nbytes))
    f.write(bits.tobytes())

def read_bitfield(f) -> BitField:
    nbits = _read_len(f, "bit length")
    nbytes = _read_len(f, "payload length")
    if nbytes != (nbits + 7) // 8:
        raise ValidationError(f"payload of {nbytes} bytes does not match {nbits} bits")
    payload = _read_exact(f, nbytes, "payload")
    return BitField(payload, nbits)
