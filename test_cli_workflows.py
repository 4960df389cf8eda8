from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

from fcrypto.container import load_file, save_file, is_container


class CLIIntegrationTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)

    def run_cli(self, args, *, expect: int | None = 0, stdin: bytes | None = None, env_password: str | None = None):
        cmd = [sys.executable, "-m", "fcrypto.cli"] + list(args)
        env = os.environ.copy()
        env.pop("FCRYPTO_PASSWORD", None)
        if env_password is not None:
            env["FCRYPTO_PASSWORD"] = env_password
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            input=stdin if stdin is not None else b"",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\n"
                f"STDOUT:\n{proc.stdout!r}\nSTDERR:\n{proc.stderr!r}"
            )
        return proc

    def test_save_then_load(self):
        src = self.root / "plain.conf"
        src.write_bytes(b"user = admin\npass = hunter2\n")
        target = self.root / "secret.conf"
        self.run_cli(["save", str(target), "--input", str(src), "--password", "pw"])
        self.assertTrue(is_container(target.read_bytes()))
        self.assertEqual(load_file(target, "pw"), src.read_bytes())

        proc = self.run_cli(["load", str(target), "--password", "pw"])
        self.assertEqual(proc.stdout, src.read_bytes())

        out = self.root / "out.conf"
        self.run_cli(["load", str(target), "--password", "pw", "--output", str(out)])
        self.assertEqual(out.read_bytes(), src.read_bytes())

    def test_save_from_stdin_with_env_password(self):
        target = self.root / "secret.conf"
        self.run_cli(["save", str(target)], stdin=b"from stdin", env_password="envpw")
        self.assertEqual(load_file(target, "envpw"), b"from stdin")

    def test_wrong_password(self):
        target = self.root / "secret.conf"
        save_file(b"foobar", target, "bar")
        proc = self.run_cli(["load", str(target), "--password", "baz"], expect=2)
        self.assertIn("Error:", proc.stderr.decode())
        self.assertEqual(proc.stdout, b"")

    def test_load_prompts_when_no_password_given(self):
        target = self.root / "secret.conf"
        save_file(b"foobar", target, "bar")
        proc = self.run_cli(["load", str(target)], stdin=b"bar\n")
        self.assertEqual(proc.stdout, b"foobar")
        self.assertIn("password:", proc.stderr.decode())

    def test_create_with_confirmed_prompt(self):
        target = self.root / "new.conf"
        proc = self.run_cli(["create", str(target)], stdin=b"one\ntwo\nnew\nnew\n")
        self.assertIn("Passwords do not match!", proc.stderr.decode())
        self.assertEqual(load_file(target, "new"), b"")

    def test_prompt_end_of_input(self):
        target = self.root / "new.conf"
        proc = self.run_cli(["create", str(target)], expect=2)
        self.assertIn("end of input", proc.stderr.decode())
        self.assertFalse(target.exists())

    def test_load_plaintext_passthrough(self):
        plain = self.root / "plain.conf"
        plain.write_bytes(b"hello world")
        proc = self.run_cli(["load", str(plain)])
        self.assertEqual(proc.stdout, b"hello world")
        self.assertIn("not encrypted", proc.stderr.decode())

    def test_check(self):
        target = self.root / "secret.conf"
        save_file(b"foobar", target, "bar")
        ok = self.run_cli(["check", str(target), "--password", "bar"])
        self.assertIn("encrypted", ok.stdout.decode())
        self.assertIn("OK", ok.stdout.decode())
        fail = self.run_cli(["check", str(target), "--password", "baz"], expect=1)
        self.assertIn("FAIL", fail.stdout.decode())

        plain = self.root / "plain.conf"
        plain.write_bytes(b"hello world")
        proc = self.run_cli(["check", str(plain)])
        self.assertIn("plaintext", proc.stdout.decode())

    def test_missing_file(self):
        proc = self.run_cli(["load", str(self.root / "missing.conf"), "--password", "pw"], expect=2)
        self.assertIn("Error:", proc.stderr.decode())

    def test_corrupted_body(self):
        target = self.root / "secret.conf"
        save_file(b"foobar", target, "bar")
        corrupt = [sys.executable, str(Path(__file__).resolve().parent / "scripts" / "corrupt.py"), "by-offset", str(target), "--within", "40", "--bit", "0"]
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        subprocess.run(corrupt, check=True, stdout=subprocess.PIPE, env=env)
        proc = self.run_cli(["load", str(target), "--password", "bar"], expect=2)
        self.assertIn("Error:", proc.stderr.decode())


if __name__ == "__main__":
    unittest.main()
