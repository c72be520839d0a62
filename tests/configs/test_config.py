"""
Tests for environment configuration and tool settings.
"""

from dataclasses import replace

import pytest

from hello_infra.configs.base import default_config
from hello_infra.configs.settings import ToolSettings
from hello_infra.exceptions import ConfigurationError


class TestEnvironmentConfig:

    def test_default_config_values(self):
        config = default_config()

        assert config.secret_name == "my_secret"
        assert config.secret_string == "password123!"
        assert config.function_name == "my_lambda_function"
        assert config.handler == "index.handler"
        assert config.region == "us-east-1"

    def test_default_config_is_valid(self):
        config = default_config()

        assert config.validate() is config

    def test_derived_values(self):
        config = default_config()

        assert config.stage_name == "dev"
        assert config.resource_path == "/hello"

    def test_frozen(self):
        config = default_config()

        with pytest.raises(AttributeError):
            config.environment = "prod"

    @pytest.mark.parametrize("field,value", [
        ("authorization", "IAM"),
        ("http_method", "FETCH"),
        ("integration_type", "LAMBDA"),
        ("runtime", "python2.7"),
    ])
    def test_values_outside_provider_domain(self, field, value):
        config = replace(default_config(), **{field: value})

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.details["field"] == field
        assert "accepted" in exc_info.value.details

    def test_empty_name_rejected(self):
        config = replace(default_config(), function_name="  ")

        with pytest.raises(ConfigurationError, match="function_name cannot be empty"):
            config.validate()

    def test_path_part_single_segment(self):
        config = replace(default_config(), path_part="hello/world")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.details["field"] == "path_part"

    def test_handler_needs_module(self):
        config = replace(default_config(), handler="handler")

        with pytest.raises(ConfigurationError) as exc_info:
            config.validate()

        assert exc_info.value.details["field"] == "handler"


class TestToolSettings:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        settings = ToolSettings()

        assert settings.log_level == "INFO"
        assert settings.outputs_file == "infrastructure.env"
        assert settings.diagram_filename == "hello_infra_architecture"

    def test_environment_override(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HELLO_INFRA_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HELLO_INFRA_OUTPUTS_FILE", "stack.env")

        settings = ToolSettings()

        assert settings.log_level == "DEBUG"
        assert settings.outputs_file == "stack.env"
