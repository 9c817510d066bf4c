import pytest

from sessionhub import ConfigurationError, SessionSettings, StaticConfigProvider, YamlConfigProvider


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SESSIONHUB_HOST", "SESSIONHUB_IMPLICIT_WAIT_TIME", "SESSIONHUB_GRID_MARKER",
                 "SESSIONHUB_REMOTE_PATH", "SESSIONHUB_BROWSER", "SESSIONHUB_HEADLESS"):
        monkeypatch.delenv(name, raising=False)


def test_static_provider_stringifies_values():
    provider = StaticConfigProvider({"implicitWaitTime": 12, "host": None})
    assert provider.get_property("implicitWaitTime") == "12"
    assert provider.get_property("host") is None
    assert provider.get_property("missing") is None


def test_defaults_when_nothing_configured():
    settings = SessionSettings.from_provider(StaticConfigProvider())

    assert settings.host is None
    assert settings.implicit_wait == 30.0
    assert settings.remote_url is None
    assert not settings.grid_enabled
    assert settings.browser_name == "chromium"
    assert settings.headless is True


def test_grid_settings():
    settings = SessionSettings.from_provider(StaticConfigProvider({
        "host": "supergrid-east.example.com",
        "implicitWaitTime": "7.5",
        "headless": "false",
    }))

    assert settings.grid_enabled
    assert settings.implicit_wait == 7.5
    assert settings.remote_url == "https://supergrid-east.example.com/wd/hub"
    assert settings.headless is False


def test_custom_remote_path():
    settings = SessionSettings(host="hub.example.com", remote_path="selenium")
    assert settings.remote_url == "https://hub.example.com/selenium"


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_invalid_implicit_wait(value):
    with pytest.raises(ConfigurationError):
        SessionSettings.from_provider(StaticConfigProvider({"implicitWaitTime": value}))


class TestYamlConfigProvider:
    def test_missing_file_uses_defaults(self, tmp_path):
        provider = YamlConfigProvider(str(tmp_path / "absent.yml"), use_env=False)
        assert provider.get_property("host") is None

    def test_reads_session_section(self, tmp_path):
        path = tmp_path / "sessionhub.yml"
        path.write_text("session:\n  host: supergrid-east.example.com\n  implicitWaitTime: 10\n")

        provider = YamlConfigProvider(str(path), use_env=False)

        assert provider.get_property("host") == "supergrid-east.example.com"
        assert provider.get_property("implicitWaitTime") == "10"

    def test_reads_flat_mapping(self, tmp_path):
        path = tmp_path / "sessionhub.yml"
        path.write_text("host: local-hub.example.com\n")

        assert YamlConfigProvider(str(path), use_env=False).get_property("host") == "local-hub.example.com"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "sessionhub.yml"
        path.write_text("host: local-hub.example.com\n")
        monkeypatch.setenv("SESSIONHUB_HOST", "supergrid-west.example.com")
        monkeypatch.chdir(tmp_path)

        provider = YamlConfigProvider(str(path))

        assert provider.get_property("host") == "supergrid-west.example.com"

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "sessionhub.yml"
        path.write_text("host: [unclosed\n")

        with pytest.raises(ConfigurationError):
            YamlConfigProvider(str(path), use_env=False)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "sessionhub.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            YamlConfigProvider(str(path), use_env=False)
