import argparse
import sys
from io import BytesIO

from fano_codec import encode_to, decode_from, read_keys
from fano_errors import FanoError, error_kind
from fano_freq import BY_CODE, ordered, symbol_label
from fano_metrics import code_stats

__version__ = "1.0.0"

USAGE_HINT = "Type -e to encode file, -d to decode, -k to print keys"

def _read_input(path):
    if path:
        with open(path, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()

def _write_output(path, data: bytes):
    if path:
        with open(path, "wb") as f:
            f.write(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()

def _print_stats(table, original_nbytes, encoded_nbytes):
    s = code_stats(table, original_nbytes, encoded_nbytes)
    print(f"[fano] symbols={s['symbols']} entropy={s['entropy']:.4f} bits/sym "
          f"mean_code={s['mean_code_length']:.4f} bits/sym "
          f"efficiency={s['efficiency']:.4f}", file=sys.stderr)
    print(f"[fano] {original_nbytes} B -> {encoded_nbytes} B (ratio {s['ratio']:.3f})",
          file=sys.stderr)

def format_keys(table) -> str:
    lines = [f"{e.code}\t{symbol_label(e.symbol)}\t{e.count}" for e in ordered(table, BY_CODE)]
    return "".join(line + "\n" for line in lines)

def build_parser():
    ap = argparse.ArgumentParser(
        prog="fano",
        description="Greedy Fano-style prefix-code compressor for text.")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("-e", "--encode", action="store_const", dest="mode", const="e",
                      help="encode text into a fano stream")
    mode.add_argument("-d", "--decode", action="store_const", dest="mode", const="d",
                      help="decode a fano stream back into text")
    mode.add_argument("-k", "--keys", action="store_const", dest="mode", const="k",
                      help="print the code table of a fano stream")
    ap.add_argument("-i", "--input", help="input file (default stdin)")
    ap.add_argument("-o", "--output", help="output file (default stdout)")
    ap.add_argument("--encoding", default="utf-8", help="text encoding (default utf-8)")
    ap.add_argument("-s", "--stats", action="store_true",
                    help="print code statistics to stderr")
    ap.add_argument("--version", action="version", version=f"fano {__version__}")
    return ap

def run(args):
    raw = _read_input(args.input)

    if args.mode == "e":
        text = raw.decode(args.encoding)
        buf = BytesIO()
        table, _ = encode_to(buf, text)
        out = buf.getvalue()
        _write_output(args.output, out)
        if args.stats:
            _print_stats(table, len(raw), len(out))

    elif args.mode == "d":
        src = BytesIO(raw)
        text = decode_from(src)
        out = text.encode(args.encoding)
        _write_output(args.output, out)
        if args.stats:
            src.seek(0)
            _print_stats(read_keys(src), len(out), len(raw))

    else:
        table = read_keys(BytesIO(raw))
        _write_output(args.output, format_keys(table).encode(args.encoding))

def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)
    if args.mode is None:
        print(USAGE_HINT)
        return 0

    try:
        run(args)
    except (FanoError, OSError) as exc:
        print(f"[fano] error ({error_kind(exc).value}): {exc}", file=sys.stderr)
        return 1
    except UnicodeError as exc:
        print(f"[fano] error (encoding): {exc}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
