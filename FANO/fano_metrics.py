import numpy as np

def entropy(counts) -> float:
    """Shannon entropy in bits/symbol."""
    c = np.asarray(counts, dtype=np.float64)
    c = c[c > 0]
    if c.size == 0:
        return 0.0
    p = c / c.sum()
    return float(-(p * np.log2(p)).sum())

def mean_code_length(table) -> float:
    counts = np.array([e.count for e in table], dtype=np.float64)
    lengths = np.array([len(e.code) for e in table], dtype=np.float64)
    total = counts.sum()
    if total == 0:
        return 0.0
    return float((counts * lengths).sum() / total)

def efficiency(table) -> float:
    L = mean_code_length(table)
    if L == 0.0:
        return float("nan")
    return entropy([e.count for e in table]) / L

def code_stats(table, original_nbytes: int, encoded_nbytes: int) -> dict:
    return dict(
        symbols=len(table),
        entropy=entropy([e.count for e in table]),
        mean_code_length=mean_code_length(table),
        efficiency=efficiency(table),
        ratio=(original_nbytes / encoded_nbytes) if encoded_nbytes else float("nan"),
    )
