from __future__ import annotations
from typing import Iterable, List

from fano_freq import SymbolEntry, BY_FREQUENCY, ordered

def assign_codes(entries: List[SymbolEntry]) -> List[SymbolEntry]:
    """
    Greedy Fano-style code assignment, in place.

    Entries are taken by descending count. The first two get "0" and "1";
    every later entry e is attached to the already coded entry p with the
    smallest cost p.count + len(p.code) * e.count (first minimum wins):
    e gets p.code + "1" and p.code grows by "0".
    Returns the entries in assignment order. Tables with fewer than two
    entries are left with empty codes.
    """
    if len(entries) < 2:
        return list(entries)

    order = ordered(entries, BY_FREQUENCY)
    order[0].code = "0"
    order[1].code = "1"

    for i in range(2, len(order)):
        e = order[i]
        best = order[0]
        best_cost = best.count + len(best.code) * e.count
        for p in order[1:i]:
            cost = p.count + len(p.code) * e.count
            if cost < best_cost:
                best, best_cost = p, cost
        e.code = best.code + "1"
        best.code += "0"

    return order

def is_prefix_free(codes: Iterable[str]) -> bool:
    # After sorting, a code that prefixes any other code also prefixes
    # its immediate successor.
    srt = sorted(codes)
    for a, b in zip(srt, srt[1:]):
        if b.startswith(a):
            return False
    return True
