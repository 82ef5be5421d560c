import os

import pytest

from usergraph.contrib import config


def test_settings_defaults(mocker, tmp_path):
    mocker.patch.dict(os.environ, {}, clear=True)

    settings = config.load_settings(str(tmp_path / "missing.env"))

    assert settings.api_key == "your-api-key-here"
    assert settings.db_password == "your-db-password-here"
    assert settings.jwt_secret == "your-jwt-secret-here"
    assert settings.debug is False
    assert settings.seed is True
    assert settings.strict_ids is False


def test_settings_from_environment(mocker, tmp_path):
    mocker.patch.dict(
        os.environ,
        {
            "API_KEY": "real-key",
            "USERGRAPH_STRICT_IDS": "yes",
            "USERGRAPH_SEED": "false",
        },
    )

    settings = config.load_settings(str(tmp_path / "missing.env"))

    assert settings.api_key == "real-key"
    assert settings.strict_ids is True
    assert settings.seed is False


def test_environment_overrides_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("JWT_SECRET=from-file\nUSERGRAPH_DEBUG=on\nAPI_KEY=file-key\n")

    settings = config.Settings.from_env(str(env_file), environ={"API_KEY": "env-key"})

    assert settings.jwt_secret == "from-file"
    assert settings.debug is True
    assert settings.api_key == "env-key"


@pytest.mark.parametrize("raw, expected", [("1", True), (" TRUE ", True), ("no", False)])
def test_boolean_values(raw, expected, tmp_path):
    settings = config.Settings.from_env(
        str(tmp_path / "missing.env"), environ={"USERGRAPH_DEBUG": raw}
    )
    assert settings.debug is expected


def test_secrets_stay_out_of_repr(tmp_path):
    settings = config.Settings.from_env(
        str(tmp_path / "missing.env"),
        environ={"DB_PASSWORD": "hunter2", "JWT_SECRET": "s3cret"},
    )
    assert "hunter2" not in repr(settings)
    assert "s3cret" not in repr(settings)
    assert "strict_ids=False" in repr(settings)
