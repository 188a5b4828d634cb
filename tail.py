import argparse
import io
import os
import re
import sys
from collections import namedtuple

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

LINES = "lines"
BYTES = "bytes"
UNIT_NAMES = {LINES: "line", BYTES: "byte"}
COUNT_FLAGS = {'-n': '--lines', '--lines': '--lines', '-c': '--bytes', '--bytes': '--bytes'}

DEFAULT_LINES = "10"
INVALID_UTF8 = "stream did not contain valid UTF-8"

PLUS_ZERO_RE = re.compile(r"\+0")
SIGNED_RE = re.compile(r"[+-][0-9]+")
UNSIGNED_RE = re.compile(r"[0-9]+")


class TailError(Exception):
    pass


class InvalidOffset(TailError, ValueError):
    def __init__(self, text):
        super().__init__(text)
        self.text = text


class ExtractionError(TailError):
    pass


class ResourceUnavailable(ExtractionError):
    def __init__(self, reason, name=None):
        super().__init__(reason)
        self.reason = reason
        self.name = name


class DecodingError(ExtractionError):
    pass


class FromStartZero:
    __slots__ = ()

    def __repr__(self):
        return "FROM_START_ZERO"


FROM_START_ZERO = FromStartZero()
Signed = namedtuple("Signed", ["value"])


def parse_offset(text):
    """Convert an offset specification into FROM_START_ZERO or Signed(n).

    "+N" counts from the start, "-N" and bare "N" count back from the end.
    Raises InvalidOffset carrying the original text.
    """
    if PLUS_ZERO_RE.fullmatch(text):
        return FROM_START_ZERO
    try:
        if SIGNED_RE.fullmatch(text):
            value = int(text)
            if INT64_MIN <= value <= INT64_MAX:
                return Signed(value)
        elif UNSIGNED_RE.fullmatch(text):
            value = int(text)
            if value <= INT64_MAX:
                return Signed(-value)
            # 2**63 has no positive int64 counterpart, map it directly
            if value == -INT64_MIN:
                return Signed(INT64_MIN)
    except ValueError:
        pass
    raise InvalidOffset(text)


def resolve_window(offset, total):
    """Return the 0-based index of the first unit to emit, or None."""
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")
    if total == 0:
        return None
    if offset is FROM_START_ZERO:
        return 0
    value = offset.value
    if value < 0:
        magnitude = -value
        return total - magnitude if magnitude < total else 0
    if 0 < value <= total:
        return value - 1
    return None


def check_text(data):
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodingError(INVALID_UTF8) from e


def count_units(resource, unit):
    if unit not in (LINES, BYTES):
        raise ValueError(f"unknown unit: {unit!r}")
    if not resource.seekable():
        raise ResourceUnavailable("cannot count a non-seekable stream", resource_name(resource))
    try:
        resource.seek(0)
        if unit == BYTES:
            total = resource.seek(0, os.SEEK_END)
        else:
            total = 0
            for line in resource:
                check_text(line)
                total += 1
        resource.seek(0)
    except OSError as e:
        raise ResourceUnavailable(e.strerror or str(e), resource_name(resource)) from e
    return total


def read_lines_from(resource, start_index):
    # Forward scan only, the resource may be a pipe
    for _ in range(start_index):
        line = resource.readline()
        if not line:
            break
        check_text(line)
    data = resource.read()
    check_text(data)
    return data


def read_bytes_from(resource, start_index):
    if not resource.seekable():
        raise ResourceUnavailable("illegal seek", resource_name(resource))
    resource.seek(start_index)
    return resource.read()


STRATEGIES = {LINES: read_lines_from, BYTES: read_bytes_from}


def resource_name(resource):
    name = getattr(resource, "name", None)
    return name if isinstance(name, str) else None


def extract_from(resource, start_index, unit, out):
    """Write everything from start_index to the end of resource to out.

    A start_index of None writes nothing. Read failures raise
    ResourceUnavailable; write failures propagate unchanged.
    """
    if unit not in STRATEGIES:
        raise ValueError(f"unknown unit: {unit!r}")
    if start_index is None:
        return
    try:
        data = STRATEGIES[unit](resource, start_index)
    except OSError as e:
        raise ResourceUnavailable(e.strerror or str(e), resource_name(resource)) from e
    if data:
        out.write(data)


def open_resource(name):
    if name == "-":
        # stdin is buffered whole so its total is known before resolving
        return io.BytesIO(sys.stdin.buffer.read())
    return open(name, "rb")


def tail_resources(names, offset, unit=LINES, quiet=False, out=None, err=None):
    out = out if out is not None else sys.stdout.buffer
    err = err if err is not None else sys.stderr
    show_headers = not quiet and len(names) > 1
    status = 0

    for i, name in enumerate(names):
        try:
            resource = open_resource(name)
        except OSError as e:
            print(f"{name}: {e.strerror or e}", file=err)
            status = 1
            continue

        # Errors writing to out are not about this resource, let them propagate
        with resource:
            if show_headers:
                separator = b"\n" if i > 0 else b""
                out.write(separator + b"==> " + os.fsencode(name) + b" <==\n")
            try:
                total = count_units(resource, unit)
                extract_from(resource, resolve_window(offset, total), unit, out)
            except ExtractionError as e:
                print(f"{name}: {e}", file=err)
                status = 1

    return status


def build_parser():
    parser = argparse.ArgumentParser(prog='tail', description='Print the trailing part of each file.')
    parser.add_argument('files', nargs='+', metavar='FILE', help='Input file(s), "-" for standard input')
    counts = parser.add_mutually_exclusive_group()
    counts.add_argument('-n', '--lines', metavar='LINES', help='Number of lines, "+N" to start at line N (default: 10)')
    counts.add_argument('-c', '--bytes', metavar='BYTES', help='Number of bytes, "+N" to start at byte N')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress headers')
    return parser


def join_count_values(argv):
    # "-n -foo" must reach parse_offset, argparse would take -foo for an option
    args = []
    rest = iter(argv)
    for arg in rest:
        if arg == '--':
            args.append(arg)
            args.extend(rest)
            break
        if arg in COUNT_FLAGS:
            value = next(rest, None)
            if value is None:
                args.append(arg)
                break
            args.append(f"{COUNT_FLAGS[arg]}={value}")
        else:
            args.append(arg)
    return args


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(join_count_values(sys.argv[1:] if argv is None else argv))

    if args.bytes is not None:
        unit, text = BYTES, args.bytes
    else:
        unit, text = LINES, args.lines if args.lines is not None else DEFAULT_LINES

    try:
        offset = parse_offset(text)
    except InvalidOffset as e:
        print(f"illegal {UNIT_NAMES[unit]} count -- {e.text}", file=sys.stderr)
        return 1

    try:
        status = tail_resources(args.files, offset, unit, args.quiet)
        sys.stdout.flush()
    except BrokenPipeError:
        # The reader went away, keep the interpreter from flushing to it again
        os.dup2(os.open(os.devnull, os.O_WRONLY), sys.stdout.fileno())
        return 1
    except OSError as e:
        print(f"stdout: {e.strerror or e}", file=sys.stderr)
        return 1
    return status


if __name__ == '__main__':
    sys.exit(main())
