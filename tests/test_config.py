"""
Testy ustawień ze zmiennych środowiskowych.
"""
import pytest

from eddy._config import load_settings
from policy_compiler import NS


class TestSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.log_level == "WARNING"
        assert (settings.block_size, settings.threads) == (1000, 3)
        assert settings.batch_timeout is None
        assert settings.namespace == NS

    def test_overrides(self, clean_env):
        clean_env.setenv("EDDY_LOG_LEVEL", "debug")
        clean_env.setenv("EDDY_BLOCK_SIZE", "50")
        clean_env.setenv("EDDY_THREADS", "8")
        clean_env.setenv("EDDY_BATCH_TIMEOUT", "2.5")
        clean_env.setenv("EDDY_NAMESPACE", "urn:eddy")
        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert (settings.block_size, settings.threads) == (50, 8)
        assert settings.batch_timeout == 2.5
        assert settings.namespace == "urn:eddy"

    @pytest.mark.parametrize("raw", ["", "none", "0"])
    def test_timeout_disabled(self, clean_env, raw):
        clean_env.setenv("EDDY_BATCH_TIMEOUT", raw)
        assert load_settings().batch_timeout is None

    @pytest.mark.parametrize("name", ["EDDY_BLOCK_SIZE", "EDDY_THREADS", "EDDY_BATCH_TIMEOUT"])
    def test_invalid_number(self, clean_env, name):
        clean_env.setenv(name, "dużo")
        with pytest.raises(ValueError):
            load_settings()
