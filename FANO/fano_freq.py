from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, List, NamedTuple

# Reserved end-of-stream symbol. Outside the code point range, so it never
# collides with a real character (NUL included).
SENTINEL = -1
MAX_SYMBOL = 0x10FFFF

@dataclass
class SymbolEntry:
    code: str
    symbol: int
    count: int

    @property
    def is_sentinel(self) -> bool:
        return self.symbol == SENTINEL

class Ordering(NamedTuple):
    name: str
    key: Callable[[SymbolEntry], object]
    descending: bool = False

# sorted() is stable, so equal keys keep their incoming order in every view.
BY_FREQUENCY = Ordering("frequency", lambda e: e.count, descending=True)
BY_SYMBOL = Ordering("symbol", lambda e: e.symbol)
BY_CODE = Ordering("code", lambda e: e.code)

def ordered(entries: Iterable[SymbolEntry], ordering: Ordering) -> List[SymbolEntry]:
    """Return a new list of the same entries in the given order."""
    return sorted(entries, key=ordering.key, reverse=ordering.descending)

def profile(symbols: Iterable[str]) -> List[SymbolEntry]:
    """
    Count every symbol of the input (read to exhaustion).
    Entries come out in first-occurrence order, followed by one EOS entry
    with count 1.
    """
    counts = Counter(symbols)
    table = [SymbolEntry("", ord(ch), n) for ch, n in counts.items()]
    table.append(SymbolEntry("", SENTINEL, 1))
    return table

def symbol_label(symbol: int) -> str:
    if symbol == SENTINEL:
        return "EOS"
    return f"U+{symbol:04X} {chr(symbol)!r}"
