from __future__ import annotations

import os
import sys
import argparse

from typing import List, Optional

from fcrypto.constants import ENV_PASSWORD
from fcrypto.container import create_file, save_file, load_file, is_container
from fcrypto.errors import FcryptoError, DecryptionFailed
from fcrypto.prompt import PasswordPrompter


def _resolve_password(password: Optional[str], *, confirm: bool) -> str:
    """Pick the password from the flag, then the environment, then a prompt.

    Args:
        password: Value of ``--password`` (may be None).
        confirm: Ask twice when prompting (used when writing a file).
    """
    if password:
        return password
    env_pw = os.environ.get(ENV_PASSWORD)
    if env_pw:
        return env_pw
    prompter = PasswordPrompter()
    if confirm:
        return prompter.change_password("file")
    return prompter.get_password("Enter file password:")


def cmd_create(path: str, *, password: Optional[str] = None) -> bool:
    """Write an empty encrypted file at ``path``."""
    pw = _resolve_password(password, confirm=True)
    create_file(path, pw)
    print(f"Created encrypted file: {path}")
    return True


def cmd_save(path: str, *, input_path: Optional[str] = None, password: Optional[str] = None) -> bool:
    """Encrypt ``input_path`` (or stdin) into ``path``."""
    if input_path is None or input_path == "-":
        data = sys.stdin.buffer.read()
    else:
        with open(input_path, "rb") as fh:
            data = fh.read()
    pw = _resolve_password(password, confirm=True)
    save_file(data, path, pw)
    print(f"Saved {len(data)} byte(s) to {path}", file=sys.stderr)
    return True


def cmd_load(path: str, *, output_path: Optional[str] = None, password: Optional[str] = None) -> bool:
    """Decrypt ``path`` to ``output_path`` (or stdout)."""
    with open(path, "rb") as fh:
        encrypted = is_container(fh.read())
    if not encrypted:
        print(f"Note: {path} is not encrypted; emitting it unchanged", file=sys.stderr)
        pw = password or os.environ.get(ENV_PASSWORD) or ""
    else:
        pw = _resolve_password(password, confirm=False)
    data = load_file(path, pw)
    if output_path is None or output_path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        with open(output_path, "wb") as fh:
            fh.write(data)
    return True


def cmd_check(path: str, *, password: Optional[str] = None) -> bool:
    """Report whether ``path`` is a container and whether the password opens it."""
    with open(path, "rb") as fh:
        raw = fh.read()
    if not is_container(raw):
        print(f"{path}: plaintext")
        return True
    print(f"{path}: encrypted")
    pw = _resolve_password(password, confirm=False)
    try:
        load_file(path, pw)
    except DecryptionFailed:
        print("FAIL")
        return False
    print("OK")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="fcrypto",
        description="Password-encrypted configuration files",
        epilog=(
            f"The password is taken from --password, then ${ENV_PASSWORD}, "
            "and is otherwise prompted for."
        ),
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_create = sub.add_parser("create", help="Create an empty encrypted file")
    ap_create.add_argument("path", help="File to create")
    ap_create.add_argument("--password", help="Encryption password")

    ap_save = sub.add_parser("save", help="Encrypt data into a file")
    ap_save.add_argument("path", help="Destination file")
    ap_save.add_argument("--input", "-i", help="Plaintext input file (default: stdin)")
    ap_save.add_argument("--password", help="Encryption password")

    ap_load = sub.add_parser("load", help="Decrypt a file")
    ap_load.add_argument("path", help="Encrypted file")
    ap_load.add_argument("--output", "-o", help="Write plaintext here (default: stdout)")
    ap_load.add_argument("--password", help="File password")

    ap_check = sub.add_parser("check", help="Check whether a file is encrypted and the password opens it")
    ap_check.add_argument("path", help="File to check")
    ap_check.add_argument("--password", help="File password")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "create":
            cmd_create(args.path, password=args.password)
        elif args.cmd == "save":
            cmd_save(args.path, input_path=args.input, password=args.password)
        elif args.cmd == "load":
            cmd_load(args.path, output_path=args.output, password=args.password)
        elif args.cmd == "check":
            ok = cmd_check(args.path, password=args.password)
            sys.exit(0 if ok else 1)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (FcryptoError, OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
