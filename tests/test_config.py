"""
Tests for settings validation
"""

import pytest
from pydantic import ValidationError

from docupicks.config import PipelineConfig, Settings
from docupicks.core.exceptions import ConfigurationError


def test_unknown_fallback_mode_rejected():
    with pytest.raises(ValidationError):
        Settings(fallback_mode="emtpy")


def test_fallback_mode_reaches_pipeline_config(settings):
    settings = settings.model_copy(update={"fallback_mode": "empty"})

    assert settings.pipeline_config().fallback_mode == "empty"


def test_pipeline_config_rejects_unknown_fallback_mode():
    with pytest.raises(ValidationError):
        PipelineConfig(catalog_api_key="k", validation_api_key="k", fallback_mode="never")


def test_missing_keys_are_named(settings):
    settings = settings.model_copy(update={"tmdb_api_key": None, "topic_keywords": ""})

    with pytest.raises(ConfigurationError) as exc:
        settings.pipeline_config()

    assert "TMDB_API_KEY" in exc.value.message
    assert "TOPIC_KEYWORDS" in exc.value.message
