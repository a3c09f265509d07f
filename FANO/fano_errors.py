from enum import Enum

class ErrorKind(Enum):
    VALIDATION = "validation"
    UNKNOWN_SYMBOL = "unknown_symbol"
    TRUNCATED_STREAM = "truncated_stream"
    IO = "io"

class FanoError(ValueError):
    kind = ErrorKind.VALIDATION

class ValidationError(FanoError):
    """Stream is not a fano stream, its header/table is inconsistent, or a
    table value does not fit the wire format."""
    kind = ErrorKind.VALIDATION

class UnknownSymbolError(FanoError):
    """Encoder met a symbol that has no code table entry."""
    kind = ErrorKind.UNKNOWN_SYMBOL

class TruncatedStreamError(FanoError):
    """Input ended before a declared length, or bits ran out before EOS."""
    kind = ErrorKind.TRUNCATED_STREAM

def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, FanoError):
        return exc.kind
    if isinstance(exc, OSError):
        return ErrorKind.IO
    raise TypeError(f"not a fano error: {exc!r}")
