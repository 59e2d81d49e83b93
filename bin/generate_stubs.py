#!/usr/bin/env python3
"""
OCaml Stub Generator

Generates the OCaml declarations for the Kimchi stubs, one file per pass:
  1. Kimchi_types
  2. Pasta_bindings
  3. Kimchi_bindings
  4. Snarky_bindings

A pass without a destination (or with "-") is written to stdout.

Usage:
    python generate_stubs.py kimchi_types.ml pasta_bindings.ml kimchi_bindings.ml snarky_bindings.ml
    python generate_stubs.py                  # everything to stdout
"""

import argparse
import sys
import time
from pathlib import Path

# Add parent directory to path so camlgen package can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from camlgen import PASSES, CamlgenError, placeholder_names, run_campaign


def main(argv=None):
    start_time = time.perf_counter()

    parser = argparse.ArgumentParser(description="Generate OCaml declarations for the Kimchi stubs")
    parser.add_argument(
        "destinations", nargs="*",
        help=f"Output files in pass order ({', '.join(p.root for p in PASSES)}); '-' for stdout",
    )
    parser.add_argument("--placeholders", type=int, default=3,
                        help="Number of generic placeholder slots per pass")
    args = parser.parse_args(argv)

    if len(args.destinations) > len(PASSES):
        parser.error(f"at most {len(PASSES)} destinations may be given")
    if args.placeholders < 0:
        parser.error("--placeholders must not be negative")

    try:
        run_campaign(args.destinations, placeholders=placeholder_names(args.placeholders))
    except CamlgenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    elapsed = time.perf_counter() - start_time
    print(f"Generation completed in {elapsed*1000:.2f} ms", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
