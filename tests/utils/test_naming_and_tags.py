"""
Tests for naming conventions and tag factories.
"""

import pytest

from hello_infra.exceptions import ConfigurationError
from hello_infra.utils.naming import ResourceNamer
from hello_infra.utils.tags import create_tags, validate_tags


class TestResourceNamer:

    def test_name(self):
        namer = ResourceNamer(project="hello-infra", environment="dev")

        assert namer.name("lambda-role") == "hello-infra-dev-lambda-role"

    def test_policy_name(self):
        namer = ResourceNamer(project="hello-infra", environment="dev")

        assert namer.policy_name("secret-read") == "hello-infra-secret-read"

    def test_log_group_name_has_no_prefix(self):
        namer = ResourceNamer(project="hello-infra", environment="dev")

        assert namer.log_group_name("my_lambda_function") == "/aws/lambda/my_lambda_function"


class TestTags:

    def test_create_tags(self):
        tags = create_tags("dev", "my_secret", Owner="platform")

        assert tags == {
            "Project": "hello-infra",
            "ManagedBy": "pulumi",
            "Environment": "dev",
            "Name": "my_secret",
            "Owner": "platform",
        }

    def test_extra_tags_override_defaults(self):
        assert create_tags("dev", "x", ManagedBy="hand")["ManagedBy"] == "hand"

    def test_reserved_prefix_rejected(self):
        with pytest.raises(ConfigurationError, match="reserved prefix"):
            create_tags("dev", "x", **{"aws:owner": "me"})

    def test_value_length_limit(self):
        with pytest.raises(ConfigurationError):
            validate_tags({"Name": "x" * 257})

    def test_tag_count_limit(self):
        tags = {f"k{i}": "v" for i in range(51)}

        with pytest.raises(ConfigurationError, match="Too many tags"):
            validate_tags(tags)

    def test_valid_tags_returned(self):
        tags = {"Name": "my_secret"}

        assert validate_tags(tags) is tags


def test_overlong_role_name_rejected():
    namer = ResourceNamer(project="hello-infra", environment="dev")

    with pytest.raises(ConfigurationError, match="exceeds 64 characters"):
        namer.name("r" * 60)
