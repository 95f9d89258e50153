from config.settings import Settings, settings


class TestSettings:
    def test_defaults(self) -> None:
        assert settings.MARKET_SEED == "market_v2"
        assert settings.POOL_SEED == "liquidity"
        assert settings.PROJECT_NAME_MAX_BYTES == 256

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("PROJECT_NAME_MAX_BYTES", "32")
        monkeypatch.setenv("VERIFY_INVARIANTS", "false")
        s = Settings()
        assert s.PROJECT_NAME_MAX_BYTES == 32
        assert s.VERIFY_INVARIANTS is False
