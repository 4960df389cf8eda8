from __future__ import annotations

import argparse
import os
import random
import sys
from typing import Optional

from fcrypto.container import _body_offset


def _body_range(path: str) -> tuple[int, int]:
    with open(path, "rb") as f:
        data = f.read()
    start = _body_offset(data)
    if start is None:
        raise ValueError(f"{path} is not an encrypted fcrypto file")
    if start >= len(data):
        raise ValueError("Container has an empty body")
    return start, len(data)


def _flip_bit(path: str, offset: int, bit: int) -> None:
    if not 0 <= bit <= 7:
        raise ValueError("Bit must be in 0..7")
    with open(path, "r+b") as f:
        f.seek(offset)
        b = f.read(1)
        if not b:
            raise ValueError("Offset beyond end of file")
        f.seek(offset)
        f.write(bytes([b[0] ^ (1 << bit)]))
        f.flush()
        os.fsync(f.fileno())


def cmd_by_offset(args: argparse.Namespace) -> None:
    start, end = _body_range(args.path)
    off = start + args.within
    if off >= end:
        raise ValueError(f"--within must be within body length (0..{end - start - 1})")
    _flip_bit(args.path, off, args.bit)
    print(f"Flipped bit {args.bit} at body offset {args.within} (file offset {off})")


def cmd_random(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    start, end = _body_range(args.path)
    for _ in range(args.count):
        _flip_bit(args.path, rng.randrange(start, end), rng.randrange(0, 8))
    print(f"Flipped {args.count} bit(s) at random body offsets")


def main(argv: Optional[list[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="fcrypto.corrupt", description="Flip bits in an encrypted file body for testing")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_off = sub.add_parser("by-offset", help="Flip one bit at an offset inside the base64 body")
    p_off.add_argument("path", help="Encrypted file")
    p_off.add_argument("--within", type=int, default=0, help="Byte offset from the start of the body (default 0)")
    p_off.add_argument("--bit", type=int, default=0, help="Bit to flip, 0..7 (default 0)")
    p_off.set_defaults(func=cmd_by_offset)

    p_rand = sub.add_parser("random", help="Flip N random bits in the body")
    p_rand.add_argument("path", help="Encrypted file")
    p_rand.add_argument("--count", type=int, default=1, help="Number of bit flips (default 1)")
    p_rand.add_argument("--seed", type=int, default=None, help="PRNG seed for reproducibility")
    p_rand.set_defaults(func=cmd_random)

    args = ap.parse_args(argv)
    try:
        args.func(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
