"""Integration tests — E2E via subprocess against python -m logpretty.main."""

import os
import signal
import subprocess
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..")

YELLOW = "\033[33m"
RESET = "\033[0m"


def _env(**extra: str) -> dict:
    env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "LOGPRETTY_CONFIG")}
    env["PYTHONPATH"] = os.path.abspath(PROJECT_ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    env.update(extra)
    return env


def _run(stdin: str, *args: str, **env: str) -> subprocess.CompletedProcess:
    """Run the CLI with given stdin and args, return CompletedProcess."""
    return subprocess.run(
        [sys.executable, "-m", "logpretty.main", *args],
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=_env(**env),
        timeout=30,
    )


class TestPassthrough(unittest.TestCase):
    def test_plain_text(self):
        result = _run("  hello world  \n")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, "hello world\n\n")

    def test_non_object_json(self):
        result = _run("[1,2,3]\n42\n")
        self.assertEqual(result.stdout, "[1,2,3]\n\n42\n\n")


class TestJsonLines(unittest.TestCase):
    LINE = '{"time":"12:00","level":"warn","message":"disk full","code":42}\n'

    def test_end_to_end_colored(self):
        result = _run(self.LINE)
        self.assertEqual(result.returncode, 0)
        self.assertEqual(
            result.stdout,
            f"{YELLOW}time: {RESET}12:00\n"
            f"{YELLOW}code: {RESET}42\n"
            f"{YELLOW}message: {RESET}disk full\n\n",
        )

    def test_no_color_flag(self):
        result = _run(self.LINE, "--no-color")
        self.assertEqual(result.stdout, "time: 12:00\ncode: 42\nmessage: disk full\n\n")

    def test_no_color_env(self):
        result = _run(self.LINE, NO_COLOR="1")
        self.assertNotIn("\033[", result.stdout)

    def test_empty_object(self):
        result = _run("{}\n")
        self.assertEqual(result.stdout, "\n")

    def test_mixed_stream(self):
        result = _run('starting\n{"message":"ok"}\n', "--no-color")
        self.assertEqual(result.stdout, "starting\n\nmessage: ok\n\n")

    def test_unencodable_line_passes_through(self):
        bad = '{"message":"\\ud800"}'
        result = _run(bad + "\nafter\n")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, bad + "\n\nafter\n\n")

    def test_deeply_nested_line_passes_through(self):
        depth = 100000
        bad = '{"a":' + "[" * depth + "]" * depth + "}"
        result = _run(bad + '\n{"message":"ok"}\n', "--no-color")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, bad + "\n\nmessage: ok\n\n")

    def test_empty_input(self):
        result = _run("")
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, "")


class TestFieldFlags(unittest.TestCase):
    LINE = '{"time":"t","host":"db1","pid":7,"message":"m"}\n'

    def test_blacklist(self):
        result = _run(self.LINE, "--no-color", "-b", "host,pid")
        self.assertEqual(result.stdout, "time: t\nmessage: m\n\n")

    def test_whitelist(self):
        result = _run(self.LINE, "--no-color", "-w", "message,pid")
        self.assertEqual(result.stdout, "pid: 7\nmessage: m\n\n")

    def test_both_flags_fail(self):
        result = _run(self.LINE, "-b", "a", "-w", "b")
        self.assertEqual(result.returncode, 1)
        self.assertIn("not both", result.stderr)
        self.assertEqual(result.stdout, "")

    def test_config_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".yml", delete=False) as f:
            f.write("blacklist:\n  - host\ncolor: false\n")
            path = f.name
        try:
            result = _run(self.LINE, "--config", path)
        finally:
            os.unlink(path)
        self.assertEqual(result.stdout, "time: t\npid: 7\nmessage: m\n\n")


class TestInputErrors(unittest.TestCase):
    def test_invalid_utf8_fails(self):
        result = subprocess.run(
            [sys.executable, "-m", "logpretty.main"],
            input=b"ok\n\xff\xfe\n",
            capture_output=True,
            env=_env(),
            timeout=30,
        )
        self.assertEqual(result.returncode, 1)
        self.assertIn(b"Failed to read line", result.stderr)


@unittest.skipIf(sys.platform == "win32", "POSIX pipes only")
class TestClosedOutput(unittest.TestCase):
    def test_closed_downstream_exits_cleanly(self):
        proc = subprocess.Popen(
            [sys.executable, "-m", "logpretty.main", "--no-color"],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=_env(),
        )
        head = subprocess.Popen(["head", "-n", "1"], stdin=proc.stdout, stdout=subprocess.PIPE)
        proc.stdout.close()
        try:
            try:
                proc.stdin.write(b'{"message":"line"}\n' * 2000)
                proc.stdin.close()
            except BrokenPipeError:
                pass
            self.assertEqual(head.communicate(timeout=10)[0], b"message: line\n")
            self.assertEqual(proc.wait(timeout=10), 0)
            self.assertEqual(proc.stderr.read(), b"")
        finally:
            for p in (proc, head):
                if p.poll() is None:
                    p.kill()
            proc.stderr.close()


@unittest.skipIf(sys.platform == "win32", "POSIX signals only")
class TestSignals(unittest.TestCase):
    def test_sigint_and_sigterm_ignored(self):
        proc = subprocess.Popen(
            [sys.executable, "-m", "logpretty.main", "--no-color"],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=_env(),
        )
        try:
            proc.stdin.write('{"message":"first"}\n')
            proc.stdin.flush()
            # Output for the first line proves the handlers are installed.
            self.assertEqual(proc.stdout.readline(), "message: first\n")

            proc.send_signal(signal.SIGINT)
            proc.send_signal(signal.SIGTERM)

            proc.stdin.write('{"message":"second"}\n')
            proc.stdin.close()
            rest = proc.stdout.read()
            self.assertEqual(proc.wait(timeout=10), 0)
            self.assertEqual(rest, "\nmessage: second\n\n")
        finally:
            if proc.poll() is None:
                proc.kill()
            proc.stdout.close()
            proc.stderr.close()


if __name__ == "__main__":
    unittest.main()
