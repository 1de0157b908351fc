"""Unit tests for the vaultkit command line."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from vaultkit import cli
from vaultkit.vault.errors import AuthError, BatchLoadError


@pytest.fixture
def mapping_file(tmp_path):
    path = tmp_path / "mapping.json"
    path.write_text(json.dumps({"DB_PASSWORD": "/secret/data/db:password"}), encoding="utf-8")
    return path


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("VAULT_ADDR=http://127.0.0.1:9\nVAULT_TOKEN=s.static\n", encoding="utf-8")
    return path


@pytest.mark.unit
class TestCliUnit:

    def test_read_mapping_rejects_non_string_values(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"A": 1}), encoding="utf-8")

        with pytest.raises(ValueError):
            cli.read_mapping(str(path))

    @patch("vaultkit.cli.setup_logging")
    def test_check_success(self, _setup_logging, mapping_file, env_file, capsys):
        with patch("vaultkit.cli.VaultClient.load_secrets",
                   AsyncMock(return_value={"DB_PASSWORD": "supersecretvalue"})):
            code = cli.main(["check", str(mapping_file), "--env-file", str(env_file)])

        out = capsys.readouterr().out
        assert code == cli.EXIT_OK
        assert "DB_PASSWORD = supe********alue" in out
        assert "supersecretvalue" not in out

    @patch("vaultkit.cli.setup_logging")
    def test_check_batch_failure(self, _setup_logging, mapping_file, env_file, capsys):
        error = BatchLoadError(["Failed to load DB_PASSWORD from /secret/data/db:password: Vault error 404: {}"])
        with patch("vaultkit.cli.VaultClient.load_secrets", AsyncMock(side_effect=error)):
            code = cli.main(["check", str(mapping_file), "--env-file", str(env_file)])

        assert code == cli.EXIT_BATCH_FAILED
        assert "Failed to load DB_PASSWORD" in capsys.readouterr().out

    @patch("vaultkit.cli.setup_logging")
    def test_check_auth_failure(self, _setup_logging, mapping_file, env_file):
        with patch("vaultkit.cli.VaultClient.load_secrets", AsyncMock(side_effect=AuthError("denied"))):
            code = cli.main(["check", str(mapping_file), "--env-file", str(env_file)])

        assert code == cli.EXIT_ERROR

    @patch("vaultkit.cli.setup_logging")
    def test_check_without_address(self, _setup_logging, mapping_file, tmp_path, capsys):
        empty_env = tmp_path / "empty.env"
        empty_env.write_text("", encoding="utf-8")

        code = cli.main(["check", str(mapping_file), "--env-file", str(empty_env)])

        assert code == cli.EXIT_ERROR
        assert "VAULT_ADDR must be set" in capsys.readouterr().out
