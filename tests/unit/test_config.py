import pytest

from switchboard.core.config import Config, ConfigError, ConfigSchema, load_env_var, validate_all
from switchboard.core.models.cache import StalePolicy
from switchboard.core.provider.provider_config_loader import ProviderConfigLoader
from switchboard.core.provider_config import ProviderConfig


@pytest.mark.unit
class TestLoadEnvVar:
    def test_default_when_unset(self):
        assert load_env_var(ConfigSchema.PORT) == 8000

    def test_default_when_empty(self, monkeypatch):
        monkeypatch.setenv("PORT", "")
        assert load_env_var(ConfigSchema.PORT) == 8000

    def test_coerces_int(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        assert load_env_var(ConfigSchema.PORT) == 9090

    def test_rejects_unparseable_value(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ConfigError) as exc_info:
            load_env_var(ConfigSchema.PORT)
        assert exc_info.value.env_var == "PORT"
        assert "Cannot convert to int" in exc_info.value.message

    def test_runs_validator(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "0")
        with pytest.raises(ConfigError, match="Validation failed"):
            load_env_var(ConfigSchema.CACHE_TTL_SECONDS)

    def test_provider_list_is_normalized(self, monkeypatch):
        monkeypatch.setenv("SWITCHBOARD_PROVIDERS", " Anthropic, openai ,,GOOGLE ")
        assert load_env_var(ConfigSchema.SWITCHBOARD_PROVIDERS) == (
            "anthropic",
            "openai",
            "google",
        )

    def test_stale_policy_coercion(self, monkeypatch):
        monkeypatch.setenv("CATALOG_STALE_POLICY", "Refresh")
        assert load_env_var(ConfigSchema.CATALOG_STALE_POLICY) is StalePolicy.REFRESH

        monkeypatch.setenv("CATALOG_STALE_POLICY", "sometimes")
        with pytest.raises(ConfigError):
            load_env_var(ConfigSchema.CATALOG_STALE_POLICY)


@pytest.mark.unit
class TestConfigSchema:
    def test_get_spec(self):
        assert ConfigSchema.get_spec("REQUEST_TIMEOUT") is ConfigSchema.REQUEST_TIMEOUT
        assert ConfigSchema.get_spec("NOT_A_SETTING") is None

    def test_markdown_docs_list_every_variable(self):
        docs = ConfigSchema.generate_markdown_docs()
        for spec in ConfigSchema.all_specs().values():
            assert f"### `{spec.name}`" in docs
        assert "`serve`" in docs

    def test_validate_all_collects_every_error(self, monkeypatch):
        monkeypatch.setenv("PORT", "0")
        monkeypatch.setenv("REQUEST_TIMEOUT", "soon")
        errors = validate_all()
        assert sorted(e.env_var for e in errors) == ["PORT", "REQUEST_TIMEOUT"]

    def test_validate_all_clean_environment(self):
        assert validate_all() == []


@pytest.mark.unit
class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.log_level == "INFO"
        assert config.cache_ttl_seconds == 3600.0
        assert config.stale_policy is StalePolicy.SERVE
        assert config.refresh_interval_seconds == 0.0
        assert config.provider_names == ("openai", "anthropic", "google", "alibaba")
        assert config.default_provider is None
        assert config.request_timeout == 30.0
        assert config.health_check_timeout == 5.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "120")
        monkeypatch.setenv("CATALOG_REFRESH_INTERVAL_SECONDS", "600")
        monkeypatch.setenv("DEFAULT_PROVIDER", " Anthropic ")
        config = Config()
        assert config.cache_ttl_seconds == 120.0
        assert config.refresh_interval_seconds == 600.0
        assert config.default_provider == "anthropic"

    def test_invalid_value_fails_construction(self, monkeypatch):
        monkeypatch.setenv("HEALTH_CHECK_TIMEOUT", "-1")
        with pytest.raises(ConfigError):
            Config()

    def test_load_provider_configs_in_registration_order(self, monkeypatch):
        monkeypatch.setenv("SWITCHBOARD_PROVIDERS", "google,openai,anthropic")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
        monkeypatch.setenv("REQUEST_TIMEOUT", "12")

        config = Config()
        configs = config.load_provider_configs()

        assert [c.name for c in configs] == ["google", "openai"]
        assert all(c.timeout == 12.0 for c in configs)
        statuses = {r.name: r.status for r in config.provider_load_results}
        assert statuses == {"google": "success", "openai": "success", "anthropic": "missing"}


@pytest.mark.unit
class TestProviderConfigLoader:
    def test_missing_key_is_reported_not_raised(self):
        loader = ProviderConfigLoader()
        assert loader.load_provider("openai") is None
        result = loader.results[0]
        assert result.status == "missing"
        assert result.message == "OPENAI_API_KEY not set"

    def test_default_base_url(self, mock_openai_api_key):
        config = ProviderConfigLoader().load_provider("openai")
        assert config.base_url == "https://api.openai.com/v1"
        assert config.api_key == "test-openai-key"

    def test_base_url_override(self, monkeypatch, mock_openai_api_key):
        monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:4000/v1")
        config = ProviderConfigLoader().load_provider("openai")
        assert config.base_url == "http://localhost:4000/v1"

    def test_unknown_provider_without_base_url_is_partial(self, monkeypatch):
        monkeypatch.setenv("MISTRAL_API_KEY", "m-key")
        loader = ProviderConfigLoader()
        assert loader.load_provider("mistral") is None
        assert loader.results[0].status == "partial"
        assert loader.results[0].api_key_hash is not None

    def test_custom_headers(self, monkeypatch, mock_anthropic_api_key):
        monkeypatch.setenv("ANTHROPIC_CUSTOM_HEADER_X_PROJECT_ID", "search")
        config = ProviderConfigLoader().load_provider("anthropic")
        assert config.custom_headers == {"X-PROJECT-ID": "search"}

    def test_api_key_hash_hides_key(self, mock_openai_api_key):
        loader = ProviderConfigLoader()
        loader.load_provider("openai")
        key_hash = loader.results[0].api_key_hash
        assert len(key_hash) == 8
        assert "test" not in key_hash

    def test_load_all_skips_duplicates(self, mock_openai_api_key):
        configs = ProviderConfigLoader().load_all(["openai", "OpenAI", "", "anthropic"])
        assert [c.name for c in configs] == ["openai"]

    def test_timeouts_are_passed_through(self, mock_openai_api_key):
        config = ProviderConfigLoader(timeout=9.0, health_timeout=2.0).load_provider("openai")
        assert config.timeout == 9.0
        assert config.health_timeout == 2.0


@pytest.mark.unit
class TestProviderConfig:
    def test_name_is_lowercased(self):
        assert ProviderConfig(name="OpenAI", api_key="k", base_url="https://x").name == "openai"

    def test_has_credential(self):
        assert not ProviderConfig(name="openai", api_key=None, base_url="https://x").has_credential

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "", "api_key": "k", "base_url": "https://x"},
            {"name": "openai", "api_key": "k", "base_url": ""},
            {"name": "openai", "api_key": "k", "base_url": "https://x", "timeout": 0},
            {"name": "openai", "api_key": "k", "base_url": "https://x", "health_timeout": -1},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ProviderConfig(**kwargs)
