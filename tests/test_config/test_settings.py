"""配置模块测试"""

import pytest
import yaml
from pydantic import ValidationError

from talentflow.config import (
    AppSettings,
    ConfigLoader,
    MockApiSettings,
    load_yaml_config,
)


@pytest.fixture(autouse=True)
def clear_config_cache():
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


class TestSettings:
    """Settings 默认值与环境变量"""

    def test_defaults(self):
        settings = AppSettings()

        assert settings.app_name == "TalentFlow"
        assert settings.mock_api.reorder_failure_rate == 0.0
        assert settings.mock_api.page_size == 10
        assert settings.database.url.startswith("sqlite")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TALENTFLOW_MOCK_REORDER_FAILURE_RATE", "0.25")
        monkeypatch.setenv("TALENTFLOW_DB_URL", "sqlite:///:memory:")
        monkeypatch.setenv("TALENTFLOW_DEBUG", "true")

        settings = AppSettings()

        assert settings.mock_api.reorder_failure_rate == 0.25
        assert settings.database.url == "sqlite:///:memory:"
        assert settings.debug is True

    def test_failure_rate_bounds(self):
        with pytest.raises(ValidationError):
            MockApiSettings(reorder_failure_rate=1.5)

    def test_latency_range_checked(self):
        with pytest.raises(ValidationError):
            MockApiSettings(latency_min_ms=500, latency_max_ms=100)


class TestYamlLoading:
    """YAML 配置加载"""

    def test_load_yaml_config(self, temp_file):
        path = temp_file("config/settings.yaml", yaml.safe_dump({
            "app_name": "Recruiting",
            "database": {"url": "sqlite:///:memory:"},
            "mock_api": {"reorder_failure_rate": 0.25, "page_size": 5},
        }))

        settings = load_yaml_config(path, AppSettings)

        assert settings.app_name == "Recruiting"
        assert settings.mock_api.page_size == 5
        assert settings.mock_api.reorder_failure_rate == 0.25
        assert settings.logging.level == "INFO"

    def test_overrides_win(self, temp_file):
        path = temp_file("override.yaml", "debug: false\n")
        assert load_yaml_config(path, AppSettings, debug=True).debug is True

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load("/nonexistent/settings.yaml")

    def test_cache_returns_copy(self, temp_file):
        path = temp_file("cached.yaml", "app_name: A\n")

        first = ConfigLoader.load(path)
        first["app_name"] = "changed"

        assert ConfigLoader.load(path)["app_name"] == "A"

    def test_reload(self, temp_file):
        path = temp_file("reload.yaml", "app_name: A\n")
        ConfigLoader.load(path)

        with open(path, "w", encoding="utf-8") as f:
            f.write("app_name: B\n")

        assert ConfigLoader.load(path)["app_name"] == "A"
        assert ConfigLoader.reload(path)["app_name"] == "B"

    def test_non_mapping_rejected(self, temp_file):
        path = temp_file("list.yaml", "- a\n- b\n")
        with pytest.raises(ValueError):
            ConfigLoader.load(path)

    def test_empty_file(self, temp_file):
        path = temp_file("empty.yaml", "")
        assert ConfigLoader.load(path) == {}
