import io
import struct
import sys

import fano_archive
from fano_codec import encode
from fano_errors import ErrorKind, ValidationError, TruncatedStreamError, error_kind
from fano import main, USAGE_HINT

def _encode_file(tmp_path, text):
    src = tmp_path / "in.txt"
    enc = tmp_path / "in.fano"
    src.write_bytes(text.encode("utf-8"))
    assert main(["-e", "-i", str(src), "-o", str(enc)]) == 0
    return enc

def test_no_arguments_prints_hint(capsys):
    assert main([]) == 0
    assert USAGE_HINT in capsys.readouterr().out

def test_encode_decode_files(tmp_path):
    text = "Съешь же ещё этих мягких французских булок\nда выпей чаю\n"
    enc = _encode_file(tmp_path, text)
    out = tmp_path / "out.txt"
    assert main(["-d", "-i", str(enc), "-o", str(out)]) == 0
    assert out.read_bytes() == text.encode("utf-8")

def test_other_encoding(tmp_path):
    src = tmp_path / "in.txt"
    src.write_bytes("café".encode("latin-1"))
    enc = tmp_path / "in.fano"
    out = tmp_path / "out.txt"
    assert main(["-e", "--encoding", "latin-1", "-i", str(src), "-o", str(enc)]) == 0
    assert main(["-d", "--encoding", "latin-1", "-i", str(enc), "-o", str(out)]) == 0
    assert out.read_bytes() == "café".encode("latin-1")

def test_decode_bad_magic(tmp_path, capsys):
    bad = tmp_path / "bad.fano"
    bad.write_bytes(struct.pack("<I", 12345) + b"junk")
    out = tmp_path / "out.txt"
    assert main(["-d", "-i", str(bad), "-o", str(out)]) == 1
    assert "validation" in capsys.readouterr().err
    assert not out.exists()

def test_decode_truncated(tmp_path, capsys):
    enc = _encode_file(tmp_path, "AAAABBC")
    enc.write_bytes(enc.read_bytes()[:-1])
    assert main(["-d", "-i", str(enc), "-o", str(tmp_path / "out.txt")]) == 1
    assert "truncated_stream" in capsys.readouterr().err

def test_missing_input_is_io_error(tmp_path, capsys):
    assert main(["-d", "-i", str(tmp_path / "nope.fano")]) == 1
    assert "(io)" in capsys.readouterr().err

def test_keys(tmp_path):
    enc = _encode_file(tmp_path, "AAAABBC")
    keys = tmp_path / "keys.txt"
    assert main(["-k", "-i", str(enc), "-o", str(keys)]) == 0
    assert keys.read_text(encoding="utf-8").splitlines() == [
        "0\tU+0041 'A'\t4",
        "10\tU+0042 'B'\t2",
        "110\tU+0043 'C'\t1",
        "111\tEOS\t1",
    ]

def test_stats(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_text("abracadabra", encoding="utf-8")
    assert main(["-e", "-s", "-i", str(src), "-o", str(tmp_path / "x.fano")]) == 0
    err = capsys.readouterr().err
    assert "[fano] symbols=6" in err
    assert "11 B ->" in err

def test_error_kind():
    assert error_kind(ValidationError("x")) is ErrorKind.VALIDATION
    assert error_kind(TruncatedStreamError("x")) is ErrorKind.TRUNCATED_STREAM
    assert error_kind(FileNotFoundError("x")) is ErrorKind.IO

def _run_std(monkeypatch, argv, data: bytes):
    stdin = io.TextIOWrapper(io.BytesIO(data))
    stdout = io.TextIOWrapper(io.BytesIO())
    stderr = io.StringIO()
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)
    monkeypatch.setattr(sys, "stderr", stderr)
    rc = main(argv)
    return rc, stdout.buffer.getvalue(), stderr.getvalue()

def test_stdin_stdout_round_trip(monkeypatch):
    raw = "héllo\r\nworld\x00\n".encode("utf-8")
    rc, blob, _ = _run_std(monkeypatch, ["-e"], raw)
    assert rc == 0
    assert blob == encode(raw.decode("utf-8"))
    rc, back, _ = _run_std(monkeypatch, ["-d"], blob)
    assert rc == 0
    assert back == raw

def test_stdin_bad_magic_writes_nothing(monkeypatch):
    rc, out, err = _run_std(monkeypatch, ["-d"], struct.pack("<I", 12345) + b"junk")
    assert rc == 1
    assert out == b""
    assert "[fano] error (validation): Bad magic" in err

def test_stdin_truncated_writes_nothing(monkeypatch):
    rc, out, err = _run_std(monkeypatch, ["-d"], encode("AAAABBC")[:-1])
    assert rc == 1
    assert out == b""
    assert "truncated_stream" in err

def test_count_overflow_is_reported(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(fano_archive, "U32_MAX", 3)
    src = tmp_path / "in.txt"
    src.write_text("aaaa", encoding="utf-8")
    out = tmp_path / "in.fano"
    assert main(["-e", "-i", str(src), "-o", str(out)]) == 1
    assert "[fano] error (validation): count out of u32 range" in capsys.readouterr().err
    assert not out.exists()
