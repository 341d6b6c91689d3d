"""Command-line interface: print k random lines from a file or stdin."""

import argparse
import io
import logging
import os
import re
import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

from tqdm.auto import tqdm

from .config import SamplerConfig
from .errors import ConfigError
from .sampler import reservoir_sample

logger = logging.getLogger(__name__)

USAGE = "Usage: randline [k]"

_CHUNK_SIZE = 64 * 1024

_COUNT_RE = re.compile(r"\+?[0-9]+")


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="randline",
        description="Print k lines chosen uniformly at random from the input.",
    )
    parser.add_argument(
        "k", nargs="?", default="1", help="Number of lines to print (default: 1)."
    )
    parser.add_argument(
        "file", nargs="?", default="-", help="Input file; '-' or omitted for stdin."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the random generator."
    )
    parser.add_argument(
        "-z",
        "--zero-terminated",
        action="store_true",
        help="Line delimiter is NUL, not newline.",
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show a progress bar on stderr."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr."
    )
    return parser


def parse_count(text: str) -> int:
    """Parse the k argument; only positive integers are accepted."""
    # int() would also take surrounding whitespace and underscores
    if not _COUNT_RE.fullmatch(text):
        raise _UsageError(f"invalid count: {text!r}")
    k = int(text)
    if k <= 0:
        raise _UsageError(f"count must be positive: {k}")
    return k


def read_records(stream: TextIO, delimiter: str, strip: bool = True) -> Iterator[str]:
    """Lazily split a text stream into records.

    Args:
        stream: Text stream to read from.
        delimiter: Record separator.
        strip: Drop the separator from each record. With a newline
            separator, one carriage return before it is dropped too.

    Yields:
        One record at a time. A trailing record without separator is kept.
    """
    strip_cr = strip and delimiter == "\n"
    buffer = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            if buffer:
                yield buffer
            return
        buffer += chunk
        parts = buffer.split(delimiter)
        buffer = parts.pop()
        for part in parts:
            if strip_cr and part.endswith("\r"):
                part = part[:-1]
            yield part if strip else part + delimiter


@contextmanager
def _stdin_text() -> Iterator[TextIO]:
    """Standard input as text with newline translation turned off."""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        yield sys.stdin
        return
    stream = io.TextIOWrapper(
        buffer, encoding=sys.stdin.encoding, errors=sys.stdin.errors, newline=""
    )
    try:
        yield stream
    finally:
        # Leave sys.stdin's buffer open
        stream.detach()


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger(__package__).setLevel(level)


def _sample_stream(stream: TextIO, cfg: SamplerConfig) -> List[str]:
    records = read_records(stream, cfg.delimiter, cfg.strip_delimiter)
    records = tqdm(
        records, desc="Reading", unit="line", file=sys.stderr, disable=not cfg.progress
    )
    try:
        return reservoir_sample(records, cfg.k, seed=cfg.seed)
    finally:
        records.close()


def _write_sample(sample: List[str], cfg: SamplerConfig) -> None:
    terminator = cfg.delimiter if cfg.strip_delimiter else ""
    out = sys.stdout
    for record in sample:
        out.write(record + terminator)
    out.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Run randline.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:]).

    Returns:
        Process exit code.
    """
    try:
        args = build_parser().parse_args(argv)
        k = parse_count(args.k)
        cfg = SamplerConfig.from_dict(
            {
                "k": k,
                "seed": args.seed,
                "delimiter": "\0" if args.zero_terminated else "\n",
                "progress": args.progress,
            }
        )
    except (_UsageError, ConfigError):
        sys.stderr.write(USAGE + "\n")
        return 1

    _configure_logging(args.verbose)
    logger.debug("Config: %s", cfg.to_dict())

    if args.file == "-":
        try:
            with _stdin_text() as stream:
                sample = _sample_stream(stream, cfg)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"Unable to read from stdin: {e}\n")
            return 1
    else:
        try:
            with open(args.file, encoding="utf-8", newline="") as f:
                sample = _sample_stream(f, cfg)
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"Unable to read {args.file}: {e}\n")
            return 1

    try:
        _write_sample(sample, cfg)
    except BrokenPipeError:
        # Downstream closed early (e.g. `| head`); silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    return 0


def run() -> None:
    sys.exit(main())
