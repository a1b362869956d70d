from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from texpdf.src.config import CONFIG_ENV_VAR, Settings, load_settings, resolve_config_path


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings.from_mapping({})

        self.assertEqual(settings.program, "texi2dvi")
        self.assertEqual(settings.probe_flag, "--version")
        self.assertEqual(settings.probe_timeout, 30.0)
        self.assertIsNone(settings.share_dir)
        self.assertIsNone(settings.scripts_dir)
        self.assertIsNone(settings.log)

    def test_values_are_parsed(self) -> None:
        settings = Settings.from_mapping(
            {
                "texpdf": {
                    "program": " texify ",
                    "probe_timeout": "5",
                    "share_dir": "/opt/R/share",
                    "scripts_dir": "/opt/scripts",
                    "log": "debug",
                }
            }
        )

        self.assertEqual(settings.program, "texify")
        self.assertEqual(settings.probe_timeout, 5.0)
        self.assertEqual(settings.share_dir, "/opt/R/share")
        self.assertEqual(settings.scripts_dir, Path("/opt/scripts"))
        self.assertEqual(settings.log, "debug")

    def test_unknown_keys_are_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "unknown keys: colour"):
            Settings.from_mapping({"texpdf": {"colour": "blue"}})

    def test_invalid_timeout(self) -> None:
        for value in ("soon", 0, -1):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    Settings.from_mapping({"texpdf": {"probe_timeout": value}})

    def test_empty_program(self) -> None:
        with self.assertRaises(ValueError):
            Settings.from_mapping({"texpdf": {"program": "  "}})

    def test_section_must_be_mapping(self) -> None:
        with self.assertRaises(TypeError):
            Settings.from_mapping({"texpdf": ["texi2dvi"]})


class LoadSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_toml_file(self) -> None:
        path = self.root / "config.toml"
        path.write_text(
            textwrap.dedent(
                """
                [texpdf]
                program = "texi2dvi"
                probe_timeout = 12
                share_dir = "/usr/share/R/share"
                """
            )
        )

        settings = load_settings(path)

        self.assertEqual(settings.probe_timeout, 12.0)
        self.assertEqual(settings.share_dir, "/usr/share/R/share")

    def test_yaml_file(self) -> None:
        path = self.root / "config.yaml"
        path.write_text("texpdf:\n  log: info\n")

        self.assertEqual(load_settings(path).log, "info")

    def test_empty_yaml_section_means_defaults(self) -> None:
        path = self.root / "config.yaml"
        path.write_text("texpdf:\n")

        self.assertEqual(load_settings(path), Settings())

    def test_no_file_means_defaults(self) -> None:
        self.assertEqual(load_settings(None), Settings())

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_settings(self.root / "absent.toml")


class ResolveConfigPathTests(unittest.TestCase):
    def test_cli_value_wins(self) -> None:
        path = resolve_config_path(Path("cli.toml"), {CONFIG_ENV_VAR: "env.toml"})
        self.assertEqual(path, Path("cli.toml"))

    def test_environment_variable(self) -> None:
        self.assertEqual(resolve_config_path(None, {CONFIG_ENV_VAR: "/etc/texpdf.yaml"}), Path("/etc/texpdf.yaml"))

    def test_default_only_when_present(self) -> None:
        with tempfile.TemporaryDirectory() as temp:
            default = Path(temp) / "config.toml"
            with patch("texpdf.src.config.DEFAULT_CONFIG_PATH", default):
                self.assertIsNone(resolve_config_path(None, {}))
                default.write_text("[texpdf]\n")
                self.assertEqual(resolve_config_path(None, {}), default)


if __name__ == "__main__":
    unittest.main()
