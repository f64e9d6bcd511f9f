"""Tests for batching settings."""

# Add project root to path for imports BEFORE other imports
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import asyncio

import pytest
from pydantic import ValidationError

from callbatch import InvalidArgument, Settings, batch, batched, get_settings
from callbatch import config


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        """Test built-in defaults."""
        monkeypatch.delenv("CALLBATCH_DEFAULT_INTERVAL", raising=False)
        monkeypatch.delenv("CALLBATCH_DEFAULT_LIMIT", raising=False)

        settings = Settings()
        assert settings.default_interval == 0.0
        assert settings.default_limit is None

    def test_env_prefix(self, monkeypatch):
        """Test settings are read from CALLBATCH_ variables."""
        monkeypatch.setenv("CALLBATCH_DEFAULT_INTERVAL", "0.25")
        monkeypatch.setenv("CALLBATCH_DEFAULT_LIMIT", "50")

        settings = Settings()
        assert settings.default_interval == 0.25
        assert settings.default_limit == 50

    def test_negative_interval_rejected(self):
        """Test a negative default interval fails validation."""
        with pytest.raises(ValidationError):
            Settings(default_interval=-1)

    def test_infinite_limit_rejected(self):
        """Test an infinite default limit fails validation."""
        with pytest.raises(ValidationError):
            Settings(default_limit=float("inf"))

    def test_get_settings_returns_module_settings(self):
        """Test get_settings returns the shared instance."""
        assert get_settings() is config.settings


class TestSettingsApplied:
    """Tests that batchers pick up configured defaults."""

    @pytest.fixture
    def configured(self, monkeypatch):
        """Install non-default settings."""
        monkeypatch.setattr(
            config, "settings", Settings(default_interval=0.5, default_limit=3)
        )

    def test_omitted_options_use_settings(self, configured):
        """Test interval and limit fall back to settings."""
        batched_fn = batch(print)

        assert batched_fn.interval == 0.5
        assert batched_fn.limit == 3

    def test_explicit_options_win(self, configured):
        """Test explicit arguments override settings."""
        batched_fn = batch(print, 0.1, limit=0)

        assert batched_fn.interval == 0.1
        assert batched_fn.limit == 0

    @pytest.mark.parametrize("limit", [None, float("inf")])
    def test_explicit_unbounded_limit_wins(self, configured, limit):
        """Test an explicit unbounded limit overrides a configured one."""
        batched_fn = batch(print, 0.1, limit=limit)

        assert batched_fn.limit is None
        assert batched_fn.interval == 0.1

    @pytest.mark.asyncio
    async def test_explicit_unbounded_limit_never_forces_flush(self, configured):
        """Test calls beyond the configured limit wait for the timer."""
        received = []
        batched_fn = batch(received.append, 0.02, limit=None)

        for i in range(5):
            batched_fn(i)
        assert received == []

        await asyncio.sleep(0.1)
        assert received == [[(0,), (1,), (2,), (3,), (4,)]]

    def test_decorator_uses_settings(self, configured):
        """Test the decorator form falls back to settings too."""
        batched_fn = batched()(print)

        assert batched_fn.interval == 0.5
        assert batched_fn.limit == 3

    @pytest.mark.asyncio
    async def test_configured_limit_applies(self, configured):
        """Test a configured limit forces flushes."""
        received = []
        batched_fn = batch(received.append)

        for i in range(4):
            batched_fn(i)

        assert received == [[(0,), (1,), (2,), (3,)]]
        assert batched_fn.is_armed is False

    def test_explicit_bad_values_still_rejected(self, configured):
        """Test validation runs on explicit arguments."""
        with pytest.raises(InvalidArgument):
            batch(print, -0.1)
