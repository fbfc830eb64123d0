"""CLI argument, logging and startup-failure tests."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazycwlogs import cli


def reset_logging() -> None:
    logger = logging.getLogger("lazycwlogs")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        self.aws_config = self.root / "aws-config"
        self.aws_config.write_text("[profile dev]\n[profile prd]\n", encoding="utf-8")
        patcher = mock.patch("lazycwlogs.config.CONFIG_PATH", self.root / "missing.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(reset_logging)

    def test_main_loads_profiles_and_runs(self) -> None:
        with mock.patch("lazycwlogs.cli.run_app") as run_app:
            cli.main(["--config", str(self.aws_config), "--region", "eu-west-1", "--tick-ms", "250", "--no-color"])

        run_app.assert_called_once()
        options, profiles, presets = run_app.call_args.args
        self.assertEqual(list(profiles), ["dev", "prd"])
        self.assertEqual(options.config.region, "eu-west-1")
        self.assertEqual(options.config.tick_rate, 0.25)
        self.assertEqual(options.config.quit_key, "q")
        self.assertTrue(options.no_color)
        self.assertFalse(options.debug)
        self.assertEqual(len(presets), 5)

    def test_missing_aws_config_exits_before_running(self) -> None:
        with mock.patch("lazycwlogs.cli.run_app") as run_app:
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--config", str(self.root / "nope")])

        run_app.assert_not_called()
        self.assertIn("could not read AWS config", str(ctx.exception.code))

    def test_rejects_non_positive_tick(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            cli.main(["--tick-ms", "0"])

    def test_log_file_receives_records(self) -> None:
        log_path = self.root / "logs" / "run.log"

        with mock.patch("lazycwlogs.cli.run_app"):
            cli.main(["--config", str(self.aws_config), "--log-file", str(log_path), "--debug"])

        logging.getLogger("lazycwlogs.test").debug("hello from test")
        for handler in logging.getLogger("lazycwlogs").handlers:
            handler.flush()

        self.assertIn("hello from test", log_path.read_text(encoding="utf-8"))


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        reset_logging()

    def test_without_file_or_debug_uses_null_handler(self) -> None:
        self.assertIsNone(cli.configure_logging(None, debug=False))

        handlers = logging.getLogger("lazycwlogs").handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.NullHandler)

    def test_debug_defaults_to_user_log_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = Path(tmp) / "lazycwlogs.log"
            with mock.patch("lazycwlogs.cli.default_log_path", return_value=default_path):
                path = cli.configure_logging(None, debug=True)
            level = logging.getLogger("lazycwlogs").level
            reset_logging()

        self.assertEqual(path, default_path)
        self.assertEqual(level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
