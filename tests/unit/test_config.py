"""
Unit tests for configuration settings and the multi-source loader.

Every test runs in an empty working directory with HOME pointed at a
temporary path and no IRON_* variables set (see conftest).
"""

import json
from pathlib import Path

import pytest

from ironmq.core.config import (
    IronMQConfig,
    get_config,
    load_config,
    load_config_data,
    load_config_file,
    load_env_file,
    reload_config,
    set_config,
)
from ironmq.core.errors import ConfigurationError


@pytest.mark.unit
class TestIronMQConfig:
    """Test the settings model."""

    def test_defaults(self) -> None:
        config = IronMQConfig()

        assert config.token is None
        assert config.project_id is None
        assert config.protocol == "https"
        assert config.host == "mq-aws-us-east-1.iron.io"
        assert config.port == 443
        assert config.api_version == "1"
        assert config.base_url == "https://mq-aws-us-east-1.iron.io:443/1/"

    def test_environment_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("IRON_TOKEN", "env-token")
        monkeypatch.setenv("IRON_PORT", "8080")

        config = IronMQConfig()

        assert config.token == "env-token"
        assert config.port == 8080

    def test_blank_credentials_are_unset(self) -> None:
        assert IronMQConfig(token="  ", project_id="").token is None

    def test_invalid_protocol(self) -> None:
        with pytest.raises(ValueError, match="Protocol"):
            IronMQConfig(protocol="ftp")

    def test_non_ascii_token(self) -> None:
        with pytest.raises(ValueError, match="ASCII"):
            IronMQConfig(token="t\u00f6k\u00e9n")

    def test_invalid_port(self) -> None:
        with pytest.raises(ValueError, match="Port"):
            IronMQConfig(port=70000)

    def test_api_version_slashes_stripped(self) -> None:
        assert IronMQConfig(api_version="/1/").base_url.endswith(":443/1/")


@pytest.mark.unit
class TestConfigFiles:
    """Test reading config files."""

    def test_load_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "test.env"
        env_file.write_text('# comment\nIRON_TOKEN="abc"\n\nIRON_HOST=\'h\'\n')

        assert load_env_file(env_file) == {"IRON_TOKEN": "abc", "IRON_HOST": "h"}

    def test_load_env_file_missing(self, tmp_path: Path) -> None:
        assert load_env_file(tmp_path / "missing.env") == {}

    def test_ini_file_with_product_section(self, tmp_path: Path) -> None:
        ini_file = tmp_path / "config.ini"
        ini_file.write_text(
            "token = top-token\n"
            "project_id = top-project\n"
            "\n"
            "[iron_mq]\n"
            "project_id = \"mq-project\"\n"
            "host = mq.example.com\n"
        )

        values = load_config_file(ini_file)

        assert values == {
            "token": "top-token",
            "project_id": "mq-project",
            "host": "mq.example.com",
        }

    def test_json_file(self, tmp_path: Path) -> None:
        json_file = tmp_path / "iron.json"
        json_file.write_text(
            json.dumps({"token": "t", "project_id": "p", "iron_mq": {"port": 8080}})
        )

        assert load_config_file(json_file) == {
            "token": "t",
            "project_id": "p",
            "port": 8080,
        }

    def test_dotenv_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("IRON_TOKEN=t\nIRON_MQ_PROJECT_ID=p\n")

        assert load_config_file(env_file) == {"token": "t", "project_id": "p"}

    def test_invalid_json_file(self, tmp_path: Path) -> None:
        json_file = tmp_path / "bad.json"
        json_file.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_config_file(json_file)

    def test_explicit_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nope.ini")


@pytest.mark.unit
class TestSourcePrecedence:
    """Test that the first source defining a key wins."""

    def test_options_beat_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("IRON_TOKEN", "env-token")
        monkeypatch.setenv("IRON_PROJECT_ID", "env-project")

        config = load_config({"token": "option-token"})

        assert config.token == "option-token"
        assert config.project_id == "env-project"

    def test_product_environment_beats_generic(self, monkeypatch) -> None:
        monkeypatch.setenv("IRON_MQ_TOKEN", "mq-token")
        monkeypatch.setenv("IRON_TOKEN", "iron-token")

        assert load_config_data()["token"] == "mq-token"

    def test_working_directory_file(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "iron.json").write_text(json.dumps({"token": "cwd-token"}))
        monkeypatch.setenv("IRON_TOKEN", "env-token")

        assert load_config_data(search_dirs=[tmp_path])["token"] == "cwd-token"

    def test_home_file_is_last(self, tmp_path: Path, monkeypatch) -> None:
        home = tmp_path / "home"
        home.mkdir()
        (home / ".iron.json").write_text(
            json.dumps({"token": "home-token", "project_id": "home-project"})
        )
        monkeypatch.setenv("IRON_TOKEN", "env-token")

        data = load_config_data(home_dir=home)

        assert data["token"] == "env-token"
        assert data["project_id"] == "home-project"

    def test_explicit_file(self, tmp_path: Path) -> None:
        ini_file = tmp_path / "config.ini"
        ini_file.write_text("[iron_mq]\ntoken = t\nproject_id = p\nport = 8443\n")

        config = load_config(str(ini_file))

        assert config.token == "t"
        assert config.port == 8443

    def test_non_ascii_token_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"token": "t\u00f6k\u00e9n", "project_id": "p"})

        assert exc_info.value.error_context["fields"] == ["token"]

    def test_invalid_value(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"token": "t", "port": "not-a-port"})

        assert exc_info.value.error_context["fields"] == ["port"]


@pytest.mark.unit
class TestGlobalConfig:
    """Test the process-wide configuration instance."""

    def test_set_and_get(self) -> None:
        config = IronMQConfig(token="global")
        set_config(config)
        try:
            assert get_config() is config
        finally:
            set_config(None)  # type: ignore[arg-type]

    def test_reload(self, monkeypatch) -> None:
        monkeypatch.setenv("IRON_TOKEN", "reloaded")
        try:
            assert reload_config().token == "reloaded"
        finally:
            set_config(None)  # type: ignore[arg-type]
