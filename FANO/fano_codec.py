from __future__ import annotations
from io import BytesIO
from typing import Dict, List, Tuple

from fano_archive import (write_magic, read_magic, write_table, read_table,
                     write_bitfield, read_bitfield)
from fano_bitfield import BitField
from fano_errors import ValidationError, UnknownSymbolError, TruncatedStreamError
from fano_codes import assign_codes, is_prefix_free
from fano_freq import SymbolEntry, SENTINEL, MAX_SYMBOL, BY_SYMBOL, BY_CODE, ordered, profile, symbol_label

def build_table(text: str) -> List[SymbolEntry]:
    """Profile the text and assign codes. Returned in ascending symbol order."""
    table = profile(text)
    assign_codes(table)
    return ordered(table, BY_SYMBOL)

def pack_symbols(text: str, table: List[SymbolEntry]) -> BitField:
    """
    Concatenate the code of every symbol, then the EOS code once.
    Packed in one numpy pass, same bits as BitField.extend_code per symbol.
    """
    by_symbol: Dict[int, str] = {e.symbol: e.code for e in ordered(table, BY_SYMBOL)}
    codes = []
    for ch in text:
        code = by_symbol.get(ord(ch))
        if code is None:
            raise UnknownSymbolError(f"unknown symbol {symbol_label(ord(ch))}")
        codes.append(code)
    codes.append(by_symbol[SENTINEL])
    return BitField.from_codes(codes)

def encode_parts(text: str) -> Tuple[List[SymbolEntry], BitField]:
    table = build_table(text)
    return table, pack_symbols(text, table)

def encode_to(f, text: str):
    table, bits = encode_parts(text)
    write_magic(f)
    write_table(f, table)
    write_bitfield(f, bits)
    return table, bits

def encode(text: str) -> bytes:
    buf = BytesIO()
    encode_to(buf, text)
    return buf.getvalue()

def validate_table(table: List[SymbolEntry]):
    n_eos = sum(1 for e in table if e.symbol == SENTINEL)
    if n_eos != 1:
        raise ValidationError(f"code table must hold exactly one EOS entry, found {n_eos}")
    for e in table:
        if e.symbol != SENTINEL and not (0 <= e.symbol <= MAX_SYMBOL):
            raise ValidationError(f"symbol {e.symbol} is not a code point")
    if len({e.symbol for e in table}) != len(table):
        raise ValidationError("duplicate symbol in code table")
    if len(table) < 2:
        return
    codes = [e.code for e in table]
    if not all(codes):
        raise ValidationError("empty code in a table of two or more entries")
    if not is_prefix_free(codes):
        raise ValidationError("code table is not prefix-free")

def unpack_symbols(table: List[SymbolEntry], bits: BitField) -> str:
    """
    Scan bits one at a time, growing a candidate code until it matches an
    entry. A match emits the symbol and restarts the candidate; the EOS match
    ends decoding and any remaining bits are ignored.
    Running out of bits before EOS, or a candidate reaching the longest code
    length without a match, raises TruncatedStreamError.
    """
    by_code: Dict[str, SymbolEntry] = {e.code: e for e in ordered(table, BY_CODE)}
    out = []
    cand = ""
    # single-entry table: EOS has the empty code and matches immediately
    hit = by_code.get(cand)
    if hit is not None and hit.symbol == SENTINEL:
        return ""

    max_len = max((len(e.code) for e in table), default=0)
    for i in range(len(bits)):
        cand += "1" if bits[i] else "0"
        hit = by_code.get(cand)
        if hit is None:
            if len(cand) >= max_len:
                raise TruncatedStreamError(
                    f"no code matches {len(cand)} bits at bit {i - len(cand) + 1} "
                    f"(longest code is {max_len} bits)")
            continue
        if hit.symbol == SENTINEL:
            return "".join(out)
        out.append(chr(hit.symbol))
        cand = ""

    raise TruncatedStreamError(
        f"bit stream ended after {len(bits)} bits without EOS "
        f"({len(out)} symbols decoded, pending code {cand!r})")

def read_keys(f) -> List[SymbolEntry]:
    read_magic(f)
    table = read_table(f)
    validate_table(table)
    return table

def decode_from(f) -> str:
    table = read_keys(f)
    bits = read_bitfield(f)
    return unpack_symbols(table, bits)

def decode(blob: bytes) -> str:
    return decode_from(BytesIO(blob))
