from __future__ import annotations

from pathlib import Path
import subprocess
import unittest
from unittest.mock import MagicMock

from core.command_runner import CommandResult, CommandRunner
from texpdf.src.errors import ProbeError, ProbeExitError, ProbeLaunchError, ProbeTimeoutError
from texpdf.src.toolchain import ToolchainVariant, classify_variant, probe


TEXINFO_OUTPUT = """texi2dvi (GNU Texinfo 6.8) 7299

Copyright (C) 2021 Free Software Foundation, Inc.
"""

MIKTEX_OUTPUT = """texify.exe (MiKTeX 23.10)
Copyright (C) 2001-2023 Christian Schenk
"""


class ClassifyVariantTests(unittest.TestCase):
    def test_miktex_is_alternate(self) -> None:
        self.assertIs(classify_variant(MIKTEX_OUTPUT), ToolchainVariant.ALTERNATE)

    def test_everything_else_is_default(self) -> None:
        for output in (TEXINFO_OUTPUT, "", "\n", "miktex lowercase", "TeX Live 2024"):
            with self.subTest(output=output):
                self.assertIs(classify_variant(output), ToolchainVariant.DEFAULT)

    def test_variant_values(self) -> None:
        self.assertEqual(ToolchainVariant.ALTERNATE.value, "alternate")
        self.assertEqual(ToolchainVariant.DEFAULT.value, "default")


class ProbeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = MagicMock(spec=CommandRunner)
        self.executable = Path("/usr/bin/texi2dvi")

    def _result(self, returncode: int, stdout: str = "", stderr: str = "") -> CommandResult:
        return CommandResult(
            command=[str(self.executable), "--version"],
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )

    def test_successful_probe(self) -> None:
        self.runner.run.return_value = self._result(0, stdout=MIKTEX_OUTPUT)

        info = probe(self.runner, self.executable, timeout=5)

        self.runner.run.assert_called_once_with(["/usr/bin/texi2dvi", "--version"], timeout=5)
        self.assertEqual(info.raw_output, MIKTEX_OUTPUT)
        self.assertIs(info.variant, ToolchainVariant.ALTERNATE)

    def test_empty_output_is_default(self) -> None:
        self.runner.run.return_value = self._result(0)
        self.assertIs(probe(self.runner, self.executable).variant, ToolchainVariant.DEFAULT)

    def test_custom_flag(self) -> None:
        self.runner.run.return_value = self._result(0, stdout=TEXINFO_OUTPUT)
        probe(self.runner, self.executable, flag="--help", timeout=1)
        self.assertEqual(self.runner.run.call_args[0][0], ["/usr/bin/texi2dvi", "--help"])

    def test_non_zero_exit_carries_stderr(self) -> None:
        self.runner.run.return_value = self._result(2, stderr="texi2dvi: unrecognized option\n")

        with self.assertRaises(ProbeExitError) as caught:
            probe(self.runner, self.executable)

        self.assertEqual(caught.exception.returncode, 2)
        self.assertEqual(caught.exception.stderr, "texi2dvi: unrecognized option\n")
        self.assertEqual(caught.exception.summary(), "texi2dvi: unrecognized option")

    def test_non_zero_exit_without_stderr_has_summary(self) -> None:
        self.runner.run.return_value = self._result(1)

        with self.assertRaises(ProbeExitError) as caught:
            probe(self.runner, self.executable)

        self.assertIn("exited with code 1", caught.exception.summary())

    def test_spawn_failure(self) -> None:
        self.runner.run.side_effect = PermissionError(13, "Permission denied")

        with self.assertRaises(ProbeLaunchError) as caught:
            probe(self.runner, self.executable)

        self.assertIn("Permission denied", caught.exception.summary())
        self.assertIsInstance(caught.exception, ProbeError)

    def test_timeout(self) -> None:
        self.runner.run.side_effect = subprocess.TimeoutExpired(["texi2dvi"], 3)

        with self.assertRaises(ProbeTimeoutError):
            probe(self.runner, self.executable, timeout=3)


if __name__ == "__main__":
    unittest.main()
