import io
import logging
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import AsyncMock, patch

import discord

from gptrelay import main as entrypoint
from gptrelay.config.loader import Settings, load_settings
from gptrelay.config.validator import ConfigValidationError, validate_environment
from gptrelay.llm.client import DEFAULT_ENDPOINT, DEFAULT_MODEL, RESPONSE_TIMEOUT_SECONDS


class TestLoadSettings(unittest.TestCase):
    def load_expecting_exit(self, env):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as cm:
            load_settings(env)
        self.assertEqual(cm.exception.code, 1)
        return out.getvalue()

    def test_defaults(self):
        settings = load_settings({"DISCORD_TOKEN": "discord-secret", "OPENAI_TOKEN": "sk-secret"})

        self.assertEqual(settings.discord_token, "discord-secret")
        self.assertEqual(settings.openai_token, "sk-secret")
        self.assertEqual(settings.endpoint, DEFAULT_ENDPOINT)
        self.assertEqual(settings.model, DEFAULT_MODEL)
        self.assertEqual(settings.timeout, RESPONSE_TIMEOUT_SECONDS)
        self.assertFalse(settings.debug)

    def test_overrides(self):
        settings = load_settings(
            {
                "DISCORD_TOKEN": "d",
                "OPENAI_TOKEN": "o",
                "OPENAI_ENDPOINT": "http://localhost:11434/v1/chat/completions",
                "OPENAI_MODEL": "llama3",
                "OPENAI_TIMEOUT": "12.5",
                "DEBUG": "1",
            }
        )

        self.assertEqual(settings.endpoint, "http://localhost:11434/v1/chat/completions")
        self.assertEqual(settings.model, "llama3")
        self.assertEqual(settings.timeout, 12.5)
        self.assertTrue(settings.debug)

    def test_missing_openai_token(self):
        out = self.load_expecting_exit({"DISCORD_TOKEN": "d"})

        self.assertIn("OPENAI_TOKEN", out)
        self.assertNotIn("DISCORD_TOKEN", out)

    def test_missing_discord_token(self):
        out = self.load_expecting_exit({"OPENAI_TOKEN": "o"})

        self.assertIn("DISCORD_TOKEN", out)
        self.assertNotIn("OPENAI_TOKEN", out)

    def test_empty_value_counts_as_missing(self):
        out = self.load_expecting_exit({"DISCORD_TOKEN": "", "OPENAI_TOKEN": "o"})

        self.assertIn("DISCORD_TOKEN", out)

    def test_bad_timeout(self):
        for raw in ("soon", "0", "-3", "nan", "inf", "-inf"):
            with self.subTest(raw=raw):
                out = self.load_expecting_exit({"DISCORD_TOKEN": "d", "OPENAI_TOKEN": "o", "OPENAI_TIMEOUT": raw})
                self.assertIn("OPENAI_TIMEOUT", out)

    def test_explicit_mapping_skips_dotenv(self):
        with patch("gptrelay.config.loader.load_dotenv") as load_dotenv:
            load_settings({"DISCORD_TOKEN": "d", "OPENAI_TOKEN": "o"})
        load_dotenv.assert_not_called()

    def test_repr_hides_tokens(self):
        settings = Settings(discord_token="discord-secret", openai_token="sk-secret")

        self.assertNotIn("discord-secret", repr(settings))
        self.assertNotIn("sk-secret", repr(settings))


class TestValidateEnvironment(unittest.TestCase):
    def test_collects_every_error(self):
        with self.assertRaises(ConfigValidationError) as cm:
            validate_environment({"OPENAI_TIMEOUT": "never"})

        self.assertEqual(len(cm.exception.errors), 3)


class TestStartup(unittest.TestCase):
    def run_main(self, env, run_bot):
        out = io.StringIO()
        with patch.dict(os.environ, env, clear=True), \
                patch("gptrelay.config.loader.load_dotenv"), \
                patch.object(entrypoint, "setup_logging"), \
                patch.object(entrypoint, "run_bot", run_bot), \
                redirect_stdout(out), \
                self.assertRaises(SystemExit) as cm:
            entrypoint.main()
        return cm.exception.code, out.getvalue()

    def test_exits_before_connecting_when_token_missing(self):
        for env in ({"DISCORD_TOKEN": "d"}, {"OPENAI_TOKEN": "o"}):
            with self.subTest(env=env):
                run_bot = AsyncMock()
                code, _ = self.run_main(env, run_bot)

                self.assertEqual(code, 1)
                run_bot.assert_not_called()

    def test_client_error_exits_nonzero(self):
        run_bot = AsyncMock(side_effect=discord.LoginFailure("Improper token has been passed."))
        code, out = self.run_main({"DISCORD_TOKEN": "d", "OPENAI_TOKEN": "o"}, run_bot)

        self.assertEqual(code, 1)
        self.assertIn("Client error: Improper token has been passed.", out)
        run_bot.assert_awaited_once()

    def test_connection_error_exits_nonzero(self):
        run_bot = AsyncMock(side_effect=ConnectionRefusedError("Cannot connect to host discord.com:443"))
        code, out = self.run_main({"DISCORD_TOKEN": "d", "OPENAI_TOKEN": "o"}, run_bot)

        self.assertEqual(code, 1)
        self.assertIn("Client error: Cannot connect to host discord.com:443", out)


class TestSetupLogging(unittest.TestCase):
    def test_debug_keeps_format(self):
        httpx_logger = logging.getLogger("httpx")
        self.addCleanup(httpx_logger.setLevel, httpx_logger.level)

        with patch("logging.basicConfig") as basic_config:
            entrypoint.setup_logging(debug=True)

        basic_config.assert_called_once_with(level=logging.DEBUG, format="%(asctime)s %(levelname)s: %(message)s")

    def test_default_level_is_info(self):
        with patch("logging.basicConfig") as basic_config:
            entrypoint.setup_logging()

        basic_config.assert_called_once_with(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")


if __name__ == "__main__":
    unittest.main()
