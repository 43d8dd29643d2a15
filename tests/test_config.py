"""Tests for configuration."""

import pytest

from slack_interactive_messages import Environment, StreamBodyReader, VerifierConfig
from slack_interactive_messages.config import build_config


def dispatch(event):
    return {"status": 200}


class TestEnvironment:
    """Tests for Environment.from_env."""

    def test_default_production(self):
        assert Environment.from_env({}) is Environment.PRODUCTION

    def test_development(self):
        assert Environment.from_env({"SLACK_INTERACTIONS_ENV": "Development"}) is Environment.DEVELOPMENT

    def test_unknown_is_production(self):
        assert Environment.from_env({"SLACK_INTERACTIONS_ENV": "staging"}) is Environment.PRODUCTION

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("SLACK_INTERACTIONS_ENV", "development")
        assert Environment.from_env() is Environment.DEVELOPMENT


class TestVerifierConfig:
    """Tests for VerifierConfig."""

    def test_defaults(self):
        config = VerifierConfig(signing_secret="s3cr3t", dispatch=dispatch)
        assert config.environment is Environment.PRODUCTION
        assert config.tolerance_seconds == 300
        assert isinstance(config.body_reader, StreamBodyReader)
        assert config.development is False

    def test_repr_hides_secret(self):
        config = VerifierConfig(signing_secret="s3cr3t", dispatch=dispatch)
        assert "s3cr3t" not in repr(config)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            VerifierConfig(signing_secret="", dispatch=dispatch)

    def test_dispatch_must_be_callable(self):
        with pytest.raises(TypeError):
            VerifierConfig(signing_secret="s3cr3t", dispatch="not callable")

    def test_immutable(self):
        config = VerifierConfig(signing_secret="s3cr3t", dispatch=dispatch)
        with pytest.raises(AttributeError):
            config.signing_secret = "other"

    def test_from_env(self):
        config = VerifierConfig.from_env(dispatch, environ={
            "SLACK_SIGNING_SECRET": "s3cr3t",
            "SLACK_INTERACTIONS_ENV": "development",
        })
        assert config.signing_secret == "s3cr3t"
        assert config.development is True

    def test_from_env_missing_secret(self):
        with pytest.raises(ValueError):
            VerifierConfig.from_env(dispatch, environ={})


class TestBuildConfig:
    """Tests for build_config."""

    def test_passthrough(self):
        config = VerifierConfig(signing_secret="s3cr3t", dispatch=dispatch)
        assert build_config(config, None, None) is config

    def test_from_arguments(self):
        config = build_config(None, "s3cr3t", dispatch, Environment.DEVELOPMENT)
        assert config.environment is Environment.DEVELOPMENT

    def test_missing_arguments(self):
        with pytest.raises(ValueError):
            build_config(None, "s3cr3t", None)
