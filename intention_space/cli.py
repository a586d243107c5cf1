"""
CA vs Intention-Space comparison CLI.

    intention-space ascii                 # print every class preset
    intention-space pgm --out-dir out     # write out_<key>_ca.pgm / out_<key>_is.pgm
    intention-space pgm --preset classIV --seed 7 --ledger

Each preset is run twice from the same seed: once as the classical CA and
once with pattern injection, reflection and novelty injection enabled.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import CLASS_PRESETS, PRESETS, SimulationConfig, get_preset
from .errors import ConfigurationError
from .render import to_ascii, write_ledger_jsonl, write_pgm
from .simulation import run_pair

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intention-space",
        description="Render elementary CA runs next to their Intention-Space variants",
    )
    parser.add_argument("mode", nargs="?", default="ascii", choices=["ascii", "pgm"],
                        type=str.lower, help="Output format (default: ascii)")
    parser.add_argument("--preset", action="append", dest="presets", metavar="KEY",
                        help=f"Preset to run, repeatable (default: class presets; available: "
                             f"{', '.join(sorted(PRESETS))})")
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Directory for PGM/JSONL output")
    parser.add_argument("--seed", type=int, default=None, help="Seed for all random streams")
    parser.add_argument("--steps", type=int, default=None, help="Override rows per run")
    parser.add_argument("--size", type=int, default=None, help="Override row width")
    parser.add_argument("--ledger", action="store_true", help="Also write the IS proposal ledger as JSONL")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def resolve_configs(args: argparse.Namespace) -> List[SimulationConfig]:
    """Presets selected on the command line with overrides applied."""
    keys = args.presets or CLASS_PRESETS
    overrides = {name: getattr(args, name) for name in ("seed", "steps", "size")
                 if getattr(args, name) is not None}
    return [get_preset(key).replace(**overrides) for key in keys]


def render_ascii(config: SimulationConfig, out=None) -> None:
    out = out or sys.stdout
    ca, intention = run_pair(config)
    print(f"\n=== {config.title} ===", file=out)
    print("CA:", file=out)
    print(to_ascii(ca.grid), file=out)
    print("\nIS:", file=out)
    print(to_ascii(intention.grid), file=out)


def render_pgm(config: SimulationConfig, out_dir: Path, ledger: bool = False) -> List[Path]:
    ca, intention = run_pair(config)
    written = [
        write_pgm(out_dir / f"out_{config.key}_ca.pgm", ca.grid),
        write_pgm(out_dir / f"out_{config.key}_is.pgm", intention.grid),
    ]
    if ledger:
        path = out_dir / f"out_{config.key}_is_ledger.jsonl"
        write_ledger_jsonl(path, intention.ledger)
        written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        configs = resolve_configs(args)
        for config in configs:
            if args.mode == "ascii":
                render_ascii(config)
            else:
                paths = render_pgm(config, args.out_dir, ledger=args.ledger)
                print(f"wrote {' and '.join(str(p) for p in paths)}")
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
