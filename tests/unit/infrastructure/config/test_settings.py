import pytest

from delicli.domain.models.settings import ClientSettings, redact_secret
from delicli.infrastructure.config import settings


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "delicious:\n"
        "  user: yaml-user\n"
        "  password: yaml-pass\n"
        "  timeout: 30\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def no_env_file(tmp_path):
    """An .env path that does not exist, so nothing is picked up from the working tree."""
    return tmp_path / "missing.env"


def test_yaml_keys_are_flattened(config_file, no_env_file):
    settings.load_configuration(config_file=config_file, env_file=no_env_file, force=True)
    assert settings.get_config("delicious.user") == "yaml-user"
    assert settings.get_config("delicious.timeout") == 30
    assert settings.get_config("logging.level") == "DEBUG"


def test_missing_key_returns_default():
    assert settings.get_config("delicious.nothing", "fallback") == "fallback"


def test_environment_overrides_yaml(config_file, no_env_file, monkeypatch):
    settings.load_configuration(config_file=config_file, env_file=no_env_file, force=True)
    monkeypatch.setenv("DELICIOUS_USER", "env-user")
    assert settings.get_config("delicious.user") == "env-user"


def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("DELICIOUS_TIMEOUT", "2.5")
    monkeypatch.setenv("LOGGING_FILE", "false")
    assert settings.get_config("delicious.timeout") == 2.5
    assert settings.get_config("logging.file") is False


def test_credentials_are_never_coerced(monkeypatch):
    monkeypatch.setenv("DELICIOUS_PASSWORD", "12345")
    assert settings.get_delicious_password() == "12345"


def test_dotenv_file_is_loaded_without_overriding_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("DELICIOUS_USER=dotenv-user\nDELICIOUS_PASSWORD=dotenv-pass\n", encoding="utf-8")
    monkeypatch.setenv("DELICIOUS_PASSWORD", "real-pass")
    # load_dotenv writes into os.environ; register the key so monkeypatch removes it afterwards.
    monkeypatch.setenv("DELICIOUS_USER", "placeholder")
    monkeypatch.delenv("DELICIOUS_USER")
    settings.load_configuration(config_file=tmp_path / "none.yaml", env_file=env_file, force=True)
    assert settings.get_delicious_user() == "dotenv-user"
    assert settings.get_delicious_password() == "real-pass"


def test_test_overrides_win_over_everything(monkeypatch):
    monkeypatch.setenv("DELICIOUS_USER", "env-user")
    settings.set_config_for_testing({"delicious.user": "test-user"})
    assert settings.get_config("delicious.user") == "test-user"
    settings.clear_test_config()
    assert settings.get_config("delicious.user") == "env-user"


def test_configuration_is_loaded_once(config_file, no_env_file, monkeypatch):
    monkeypatch.setattr(settings, "_loaded", False)
    settings.load_configuration(config_file=config_file, env_file=no_env_file)
    config_file.write_text("delicious:\n  user: changed\n", encoding="utf-8")
    settings.load_configuration(config_file=config_file, env_file=no_env_file)
    assert settings.get_config("delicious.user") == "yaml-user"


def test_non_mapping_yaml_is_ignored(tmp_path, no_env_file):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    settings.load_configuration(config_file=path, env_file=no_env_file, force=True)
    assert settings.get_config("delicious.user") is None


def test_load_client_settings_defaults():
    assert settings.load_client_settings() == ClientSettings()


def test_load_client_settings_from_configuration():
    settings.set_config_for_testing({
        "delicious.user": "alice",
        "delicious.password": "abcdef",
        "delicious.protocol": "http",
        "delicious.base_host": "localhost:8080/v1/",
        "delicious.timeout": 5,
    })
    client_settings = settings.load_client_settings()
    assert client_settings.user == "alice"
    assert client_settings.password == "abcdef"
    assert client_settings.timeout == 5.0
    assert client_settings.api_url("posts/update") == "http://localhost:8080/v1/posts/update"


def test_client_settings_repr_hides_password():
    text = repr(ClientSettings(user="alice", password="abcdef"))
    assert "abcdef" not in text
    assert "a...f" in text


@pytest.mark.parametrize("secret, expected", [
    ("abcdef", "a...f"),
    ("abc", "a...c"),
    ("ab", "..."),
    ("a", "..."),
    ("", "..."),
])
def test_redact_secret(secret, expected):
    assert redact_secret(secret) == expected
