"""Tests for environment configuration."""

import json
import os
from unittest.mock import patch

from core.config import (
    check_required_env_vars,
    get_data_dir,
    get_drive_credentials_info,
    get_file_view_ttl_seconds,
    get_refresh_interval_minutes,
)


def _env_without_google(**extra):
    env = {k: v for k, v in os.environ.items() if not k.startswith("GOOGLE_")}
    env.update(extra)
    return env


class TestDriveCredentials:
    def test_none_configured(self):
        with patch.dict(os.environ, _env_without_google(), clear=True):
            assert get_drive_credentials_info() is None

    def test_json_env_var(self):
        info = {"type": "service_account", "client_email": "svc@example.com"}
        env = _env_without_google(GOOGLE_DRIVE_CREDENTIALS_JSON=json.dumps(info))
        with patch.dict(os.environ, env, clear=True):
            assert get_drive_credentials_info() == info

    def test_credentials_file(self, tmp_path):
        path = tmp_path / "creds.json"
        path.write_text(json.dumps({"client_email": "file@example.com"}))
        env = _env_without_google(GOOGLE_DRIVE_CREDENTIALS_FILE=str(path))
        with patch.dict(os.environ, env, clear=True):
            assert get_drive_credentials_info() == {"client_email": "file@example.com"}

    def test_email_and_key_pair_unescapes_newlines(self):
        env = _env_without_google(
            GOOGLE_CLIENT_EMAIL="svc@example.com",
            GOOGLE_PRIVATE_KEY="-----BEGIN-----\\nabc\\n-----END-----",
        )
        with patch.dict(os.environ, env, clear=True):
            info = get_drive_credentials_info()

        assert info["client_email"] == "svc@example.com"
        assert info["private_key"] == "-----BEGIN-----\nabc\n-----END-----"


class TestDefaults:
    def test_intervals(self):
        with patch.dict(os.environ, {}, clear=True):
            assert get_refresh_interval_minutes() == 60
            assert get_file_view_ttl_seconds() == 1800

    def test_data_dir_override(self, tmp_path):
        with patch.dict(os.environ, {"DATA_DIR": str(tmp_path)}):
            assert get_data_dir() == tmp_path


class TestRequiredEnvVars:
    def test_missing_folder_and_credentials_fail(self):
        with patch.dict(os.environ, {"DEV_MODE": "true"}, clear=True):
            ok, _ = check_required_env_vars()
        assert ok is False

    def test_complete_configuration(self):
        env = {
            "GOOGLE_FOLDER_ID": "root",
            "SESSION_SECRET": "s",
            "GOOGLE_DRIVE_CREDENTIALS_JSON": "{}",
            "SENTRY_DSN": "https://key@sentry.example.com/1",
        }
        with patch.dict(os.environ, env, clear=True):
            ok, warnings = check_required_env_vars()
        assert ok is True
        assert warnings == []
