"""
Test suite for the Pulumi program's syntax and structure.

Validates:
1. All Python modules have valid syntax
2. All component modules import cleanly
3. Component classes inherit from pulumi.ComponentResource
4. Output dataclasses are properly defined
5. The entry point is documented
"""

import ast
from dataclasses import is_dataclass
from pathlib import Path

import pulumi

PACKAGE_DIR = Path(__file__).parent.parent.parent / "hello_infra"


class TestIacSyntaxValidation:
    """Validate Python syntax in all package modules."""

    def test_all_files_have_valid_syntax(self):
        """All Python files in the package should parse without syntax errors."""
        errors = []

        for py_file in PACKAGE_DIR.rglob("*.py"):
            if "__pycache__" in str(py_file):
                continue

            try:
                with open(py_file, "r") as f:
                    ast.parse(f.read())
            except SyntaxError as e:
                errors.append(f"{py_file}: {e.msg} (line {e.lineno})")

        assert not errors, "Syntax errors found:\n" + "\n".join(errors)

    def test_lambda_handler_has_valid_syntax(self):
        handler = PACKAGE_DIR.parent / "lambda" / "index.py"

        tree = ast.parse(handler.read_text())

        names = {node.name for node in tree.body if isinstance(node, ast.FunctionDef)}
        assert "handler" in names

    def test_main_module_documented(self):
        """Entry point should have a docstring."""
        tree = ast.parse((PACKAGE_DIR / "__main__.py").read_text())

        main = next(
            node for node in tree.body
            if isinstance(node, ast.FunctionDef) and node.name == "main"
        )
        assert ast.get_docstring(main)


class TestIacImports:
    """Validate that component modules are correctly structured."""

    def test_all_components_importable(self):
        from hello_infra.components.compute.lambda_function import LambdaFunctionComponent
        from hello_infra.components.edge.rest_api import RestApiComponent
        from hello_infra.components.security.iam_roles import LambdaRoleComponent
        from hello_infra.components.security.secrets_manager import SecretComponent

        for cls in (
            SecretComponent,
            LambdaRoleComponent,
            LambdaFunctionComponent,
            RestApiComponent,
        ):
            assert issubclass(cls, pulumi.ComponentResource)
            assert hasattr(cls, "get_outputs")

    def test_outputs_are_dataclasses(self):
        from hello_infra.components.compute.lambda_function import LambdaOutputs
        from hello_infra.components.edge.rest_api import RestApiOutputs
        from hello_infra.components.security.iam_roles import IamRoleOutputs
        from hello_infra.components.security.secrets_manager import SecretOutputs

        for outputs in (SecretOutputs, IamRoleOutputs, LambdaOutputs, RestApiOutputs):
            assert is_dataclass(outputs)

    def test_rest_api_outputs_fields(self):
        from hello_infra.components.edge.rest_api import RestApiOutputs

        fields = {f.name for f in RestApiOutputs.__dataclass_fields__.values()}
        assert {"api_id", "stage_name", "invoke_url"} <= fields


class TestArchitectureDiagram:
    """Diagram styles stay in step with the declared resource kinds."""

    def test_styles_reference_declared_kinds(self, graph):
        from hello_infra.architecture_diagram import NODE_STYLES

        declared_kinds = {resource.kind for resource in graph}
        assert set(NODE_STYLES) <= declared_kinds

    def test_every_node_has_a_cluster(self, graph):
        from hello_infra.architecture_diagram import NODE_STYLES

        unstyled = {r.kind for r in graph if r.kind not in NODE_STYLES}
        assert all(kind.startswith("aws:apigateway/") for kind in unstyled)
