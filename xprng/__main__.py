"""Entry point: ``python -m xprng``.

Modes:
  - ``python -m xprng``                  → Launch the FastAPI stream service
  - ``python -m xprng draw --seed 123``  → Print integers for a seed
  - ``python -m xprng bytes --seed 123`` → Print a byte sequence
  - ``python -m xprng record --out f``   → Write a golden file
  - ``python -m xprng verify f``         → Replay a golden file
"""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING"]

# Commands whose stdout is data; their logs go to stderr.
_OUTPUT_COMMANDS = {"draw", "bytes"}


def parse_seed(text: str | None) -> int | str | None:
    """CLI seeds that parse as integers are integer seeds; anything else is text."""
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Portable seedable pseudo-random number generator")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI stream service (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=str, default=None, help="Default seed for new streams")
    srv.add_argument("--max-streams", type=int, default=64)
    srv.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    # --- Integer draws ---
    draw = sub.add_parser("draw", help="Print pseudo-random integers")
    draw.add_argument("--seed", type=str, default=None)
    draw.add_argument("--count", type=int, default=10)
    draw.add_argument("--min", dest="low", type=int, default=0)
    draw.add_argument("--max", dest="high", type=int, default=255)
    draw.add_argument("--log-level", type=str, default="WARNING", choices=_LOG_LEVELS)

    # --- Byte sequence ---
    byt = sub.add_parser("bytes", help="Print a pseudo-random byte sequence")
    byt.add_argument("--seed", type=str, default=None)
    byt.add_argument("--length", type=int, default=16)
    byt.add_argument("--readable", action="store_true", help="Restrict to printable ASCII")
    byt.add_argument("--decimal", action="store_true", help="Print values instead of hex")
    byt.add_argument("--log-level", type=str, default="WARNING", choices=_LOG_LEVELS)

    # --- Golden files ---
    rec = sub.add_parser("record", help="Record draws to a golden file")
    rec.add_argument("--seed", type=str, default=None)
    rec.add_argument("--count", type=int, default=100)
    rec.add_argument("--min", dest="low", type=int, default=0)
    rec.add_argument("--max", dest="high", type=int, default=1000)
    rec.add_argument("--save-at", type=int, default=None, help="save_status before this draw")
    rec.add_argument("--reseed-at", type=int, default=None, help="reseed before this draw")
    rec.add_argument("--reseed-seed", type=str, default=None)
    rec.add_argument("--restore-at", type=int, default=None, help="restore_status before this draw")
    rec.add_argument("--out", type=str, default=None, help="Defaults to GeneratorConfig.replay_file")
    rec.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    ver = sub.add_parser("verify", help="Replay a golden file and report divergences")
    ver.add_argument("path", type=str)
    ver.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    return parser


def _run_server(args: argparse.Namespace) -> int:
    import uvicorn

    from xprng.api.app import create_app
    from xprng.config import GeneratorConfig

    config = GeneratorConfig(
        default_seed=parse_seed(args.seed),
        max_streams=args.max_streams,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def _run_draw(args: argparse.Namespace) -> int:
    from xprng.core.generator import PseudoRandom

    rng = PseudoRandom(parse_seed(args.seed))
    for _ in range(args.count):
        print(rng.rand_int(args.low, args.high))
    return 0


def _run_bytes(args: argparse.Namespace) -> int:
    from xprng.core.generator import PseudoRandom

    rng = PseudoRandom(parse_seed(args.seed))
    values = rng.rand_bytes(args.length, decimal=True, readable=args.readable)
    if args.decimal:
        print(" ".join(str(v) for v in values))
    elif args.readable:
        print("".join(map(chr, values)))
    else:
        print(bytes(values).hex())
    return 0


def _run_record(args: argparse.Namespace) -> int:
    from xprng.config import GeneratorConfig
    from xprng.utils.replay import DrawRecorder

    out = args.out or GeneratorConfig().replay_file
    recorder = DrawRecorder(out, parse_seed(args.seed))
    for i in range(args.count):
        if i == args.save_at:
            recorder.save_status()
        if i == args.reseed_at:
            recorder.reseed(parse_seed(args.reseed_seed))
        if i == args.restore_at:
            recorder.restore_status()
        recorder.rand_int(args.low, args.high)
    recorder.flush()
    return 0


def _run_verify(args: argparse.Namespace) -> int:
    from xprng.utils.replay import verify_replay

    mismatches = verify_replay(args.path)

    for m in mismatches:
        logger.error("op %d (%s): expected %r, got %r", m.index, m.op, m.expected, m.actual)
    return 1 if mismatches else 0


_COMMANDS = {
    "serve": _run_server,
    "draw": _run_draw,
    "bytes": _run_bytes,
    "record": _run_record,
    "verify": _run_verify,
}


def main(argv: list[str] | None = None) -> int:
    from xprng.utils.logging import setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        args = parser.parse_args(["serve"])

    setup_logging(args.log_level, stream=sys.stderr if args.command in _OUTPUT_COMMANDS else None)

    from xprng.core.errors import PRNGError

    try:
        return _COMMANDS[args.command](args)
    except (PRNGError, OSError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
