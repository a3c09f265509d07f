import argparse
import os
import numpy as np
import matplotlib.pyplot as plt
from fano_codes import assign_codes
from fano_freq import profile, symbol_label
from fano_metrics import entropy, mean_code_length

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to a text file")
    ap.add_argument("--output", default="results/fig_codes.png", help="path to output .png")
    ap.add_argument("--encoding", default="utf-8")
    ap.add_argument("--top", type=int, default=40, help="plot only the N most frequent symbols")
    args = ap.parse_args()

    with open(args.input, "rb") as f:
        text = f.read().decode(args.encoding)

    # assignment order is descending frequency
    full = assign_codes(profile(text))
    table = full[:args.top]
    counts = np.array([e.count for e in table])
    lengths = np.array([len(e.code) for e in table])
    labels = [symbol_label(e.symbol) for e in table]
    x = np.arange(len(table))

    plt.figure(figsize=(10, 5))
    plt.subplot(2, 1, 1)
    plt.bar(x, counts)
    plt.yscale("log")
    plt.ylabel("count")
    plt.title(f"entropy {entropy([e.count for e in full]):.3f} bits/sym, "
              f"mean code {mean_code_length(full):.3f} bits/sym", fontsize=9)
    plt.xticks([])

    plt.subplot(2, 1, 2)
    plt.bar(x, lengths)
    plt.ylabel("code length (bits)")
    plt.xticks(x, labels, rotation=90, fontsize=6)

    plt.tight_layout()
    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    plt.savefig(args.output, dpi=300)
    print(f"[plot_codes] wrote {args.output}")

if __name__ == "__main__":
    main()
