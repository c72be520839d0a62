"""
Utility functions for Pulumi infrastructure.

Provides naming conventions, tag factories, artifact hashing and output utilities.
"""

from hello_infra.utils.hashing import source_code_hash
from hello_infra.utils.naming import ResourceNamer
from hello_infra.utils.tags import create_tags, validate_tags

__all__ = [
    "ResourceNamer",
    "create_tags",
    "validate_tags",
    "source_code_hash",
]
