"""Unit tests for fleetops.core.config.Settings validation."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from fleetops.core.config import Settings
from tests._support import TEST_SECRET, make_settings


class TestJwtSecretRequired(unittest.TestCase):
    """There is no built-in signing secret: it must come from the environment or arguments."""

    def test_missing_secret_fails(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_SECRET="   ")

    def test_secret_from_environment(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": TEST_SECRET}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.JWT_SECRET.get_secret_value(), TEST_SECRET)
        self.assertNotIn(TEST_SECRET, repr(settings))


class TestDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {"JWT_SECRET": TEST_SECRET}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.JWT_ALGORITHM, "HS256")
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(settings.DEFAULT_USER_ROLE, "user")
        self.assertEqual(settings.LOG_LEVEL, "INFO")


class TestFieldValidation(unittest.TestCase):
    def test_rejects_non_sql_database_url(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mongodb://localhost:27017/fleet")

    def test_accepts_postgres_url(self) -> None:
        settings = make_settings(DATABASE_URL=" postgresql://u:p@db:5432/fleetops ")
        self.assertEqual(settings.DATABASE_URL, "postgresql://u:p@db:5432/fleetops")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            make_settings(JWT_EXPIRE_MINUTES=10081)
        self.assertEqual(make_settings(JWT_EXPIRE_MINUTES=10080).JWT_EXPIRE_MINUTES, 10080)

    def test_api_prefix_normalized(self) -> None:
        self.assertEqual(make_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        self.assertEqual(make_settings(API_PREFIX="").API_PREFIX, "")
        with self.assertRaises(ValidationError):
            make_settings(API_PREFIX="api")

    def test_log_level_normalized(self) -> None:
        self.assertEqual(make_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            make_settings(LOG_LEVEL="verbose")

    def test_default_role_restricted(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DEFAULT_USER_ROLE="superuser")


if __name__ == "__main__":
    unittest.main()
