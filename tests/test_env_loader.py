"""Tests for the environment loader."""

import logging
import threading
import time

import pytest

from site_env.config import (
    EnvLoader,
    FeatureFlag,
    PublicSiteEnv,
    SchemaValidationError,
    SiteEnv,
    StartupAbortedError,
    get_env,
    is_feature_enabled,
    public_env,
    reset_env,
)

MINIMAL_ENV = {
    "NEXT_PUBLIC_SITE_NAME": "My Site",
    "NEXT_PUBLIC_SITE_URL": "https://example.com",
}


@pytest.fixture
def default_loader():
    """Reset the process-wide loader around a test."""
    reset_env()
    yield
    reset_env()


def test_load_returns_cached_instance():
    """Test that load validates once and returns the same object."""
    loader = EnvLoader(MINIMAL_ENV)

    first = loader.load()
    second = loader.load()

    assert first is second
    assert loader.is_loaded()


def test_load_ignores_environment_after_first_call():
    """Test that a later mapping does not replace the cached config."""
    loader = EnvLoader()

    first = loader.load(MINIMAL_ENV)
    second = loader.load({**MINIMAL_ENV, "NEXT_PUBLIC_SITE_NAME": "Other"})

    assert second is first
    assert second.site_name == "My Site"


def test_reset_drops_cache():
    """Test that reset forces a fresh validation."""
    loader = EnvLoader(MINIMAL_ENV)
    first = loader.load()

    loader.reset()

    assert not loader.is_loaded()
    assert loader.load() is not first


def test_production_missing_variables_aborts_startup(caplog):
    """Test the fatal branch for production with missing variables."""
    loader = EnvLoader({"NODE_ENV": "production"})

    with caplog.at_level(logging.ERROR):
        with pytest.raises(StartupAbortedError) as exc_info:
            loader.load()

    error = exc_info.value
    assert str(error) == "Environment validation failed. Check logs above."
    assert error.missing_fields == ("NEXT_PUBLIC_SITE_NAME", "NEXT_PUBLIC_SITE_URL")
    assert isinstance(error.__cause__, SchemaValidationError)
    assert not loader.is_loaded()


def test_non_production_failure_still_raises():
    """Test that validation errors propagate outside production too.

    The loader re-raises after logging whatever the mode; this pins the
    current behaviour so a change to a lenient mode is a visible decision.
    """
    for environ in ({"NODE_ENV": "development"}, {"NODE_ENV": "test"}, {}):
        loader = EnvLoader(environ)

        with pytest.raises(SchemaValidationError) as exc_info:
            loader.load()

        assert not isinstance(exc_info.value, StartupAbortedError)
        assert exc_info.value.missing_fields == ("NEXT_PUBLIC_SITE_NAME", "NEXT_PUBLIC_SITE_URL")


def test_production_format_error_is_not_fatal_branch():
    """Test that format-only failures in production raise the plain error."""
    loader = EnvLoader({**MINIMAL_ENV, "NODE_ENV": "production", "EMAIL_PROVIDER": "mailgun"})

    with pytest.raises(SchemaValidationError) as exc_info:
        loader.load()

    assert not isinstance(exc_info.value, StartupAbortedError)
    assert exc_info.value.missing_fields == ()
    assert exc_info.value.fields == ("EMAIL_PROVIDER",)


def test_failure_diagnostics_logged(caplog):
    """Test that every missing variable is logged in one batch."""
    loader = EnvLoader({"NODE_ENV": "development", "EMAIL_PROVIDER": "secret-provider"})

    with caplog.at_level(logging.ERROR, logger="site_env.config.env_loader"):
        with pytest.raises(SchemaValidationError):
            loader.load()

    messages = [record.getMessage() for record in caplog.records]
    assert "✗ Environment validation failed" in messages
    assert "Missing or invalid variables: ['NEXT_PUBLIC_SITE_NAME', 'NEXT_PUBLIC_SITE_URL']" in messages
    assert "Add these to your .env.local file:" in messages
    assert "  NEXT_PUBLIC_SITE_NAME=" in messages
    assert "  NEXT_PUBLIC_SITE_URL=" in messages
    assert "  EMAIL_PROVIDER=" not in messages
    assert '"reason": "invalid_choice"' in caplog.text
    assert "secret-provider" not in caplog.text


def test_failure_is_not_cached():
    """Test that a failed load does not poison later attempts."""
    environ = {}
    loader = EnvLoader(environ)

    with pytest.raises(SchemaValidationError):
        loader.load()

    environ.update(MINIMAL_ENV)
    assert loader.load().site_name == "My Site"


def test_validate_does_not_cache():
    """Test that validate leaves the loader untouched."""
    loader = EnvLoader()

    env = loader.validate(MINIMAL_ENV)

    assert env.site_name == "My Site"
    assert not loader.is_loaded()


def test_public_view_is_precomputed():
    """Test that the public view is built once with the config."""
    loader = EnvLoader({**MINIMAL_ENV, "SMTP_PASS": "hunter2"})

    view = loader.public_view()

    assert isinstance(view, PublicSiteEnv)
    assert view is loader.public_view()
    assert view.site_name == "My Site"
    assert "SMTP_PASS" not in view.as_dict()


def test_loader_feature_flags():
    """Test feature checks through the loader."""
    loader = EnvLoader(
        {**MINIMAL_ENV, "NEXT_PUBLIC_HASHNODE_PUBLICATION_ID": "abc123", "HASHNODE_API_KEY": "key"}
    )

    assert loader.is_feature_enabled("blog") is True
    assert loader.is_feature_enabled(FeatureFlag.CONTACT) is False
    assert loader.enabled_features() == [FeatureFlag.BLOG]


def test_concurrent_first_load_validates_once(monkeypatch):
    """Test that racing first accesses share a single validation."""
    calls = []
    original = EnvLoader.validate

    def slow_validate(environ):
        calls.append(environ)
        time.sleep(0.05)
        return original(environ)

    monkeypatch.setattr(EnvLoader, "validate", staticmethod(slow_validate))

    loader = EnvLoader(MINIMAL_ENV)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(loader.load())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_default_loader_reads_os_environ(monkeypatch, default_loader):
    """Test the module-level accessors against the process environment."""
    for name in SiteEnv.env_var_names():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NEXT_PUBLIC_SITE_NAME", "Env Site")
    monkeypatch.setenv("NEXT_PUBLIC_SITE_URL", "https://env.example.com")
    monkeypatch.setenv("NEXT_PUBLIC_GTM_ID", "GTM-123")

    env = get_env()

    assert env.site_name == "Env Site"
    assert get_env() is env
    assert public_env().gtm_id == "GTM-123"
    assert is_feature_enabled("analytics") is True
    assert is_feature_enabled("unknown") is False
