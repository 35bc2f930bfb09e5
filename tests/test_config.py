import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from culture_api.infra.config import DEFAULT_GEOCODE_URL, AppConfig, get_config


class AppConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        get_config.cache_clear()

    def tearDown(self) -> None:
        get_config.cache_clear()

    def test_missing_api_key_fails(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                AppConfig(_env_file=None)

    def test_blank_api_key_fails(self) -> None:
        with patch.dict(os.environ, {"OPENAI_API_KEY": "   "}, clear=True):
            with self.assertRaises(ValidationError):
                AppConfig(_env_file=None)

    def test_defaults(self) -> None:
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}, clear=True):
            cfg = AppConfig(_env_file=None)
        self.assertEqual(cfg.port, 80)
        self.assertEqual(cfg.openai_model, "gpt-4o-mini")
        self.assertEqual(cfg.crop_max_tokens, 400)
        self.assertEqual(cfg.climate_max_tokens, 600)
        self.assertEqual(cfg.geocode_url, DEFAULT_GEOCODE_URL)
        self.assertIsNone(cfg.log_path)

    def test_environment_overrides(self) -> None:
        env = {"OPENAI_API_KEY": "sk-test", "PORT": "8080", "OPENAI_MODEL": "gpt-4.1-mini"}
        with patch.dict(os.environ, env, clear=True):
            cfg = AppConfig(_env_file=None)
        self.assertEqual(cfg.port, 8080)
        self.assertEqual(cfg.openai_model, "gpt-4.1-mini")


if __name__ == "__main__":
    unittest.main()
