"""
Architecture diagram of the declared graph.

Draws one node per declared resource and one edge per dependency, grouped by
concern, plus the caller's request path.

Dependencies:
    pip install diagrams  (requires Graphviz)

Usage:
    python -m hello_infra.architecture_diagram
    # Outputs: hello_infra_architecture.png
"""

from pathlib import Path

from diagrams import Cluster, Diagram, Edge
from diagrams.aws.compute import Lambda
from diagrams.aws.general import General, Users
from diagrams.aws.management import Cloudwatch
from diagrams.aws.network import APIGateway
from diagrams.aws.security import IAMPermissions, IAMRole, SecretsManager

from hello_infra.configs.base import default_config
from hello_infra.configs.settings import get_settings
from hello_infra.graph.declaration import INVOKE_URL_OUTPUT, REST_API, build_graph
from hello_infra.graph.graph import ResourceGraph
from hello_infra.graph.references import symbolic

graph_attr = {
    "fontsize": "14",
    "bgcolor": "white",
    "pad": "0.5",
    "nodesep": "0.8",
    "ranksep": "1.0",
}

# Diagram icon and cluster per resource kind
NODE_STYLES = {
    "aws:secretsmanager/secret:Secret": (SecretsManager, "Secrets"),
    "aws:secretsmanager/secretVersion:SecretVersion": (SecretsManager, "Secrets"),
    "aws:iam/role:Role": (IAMRole, "IAM"),
    "aws:iam/rolePolicyAttachment:RolePolicyAttachment": (IAMPermissions, "IAM"),
    "aws:iam/rolePolicy:RolePolicy": (IAMPermissions, "IAM"),
    "aws:cloudwatch/logGroup:LogGroup": (Cloudwatch, "Compute"),
    "aws:lambda/function:Function": (Lambda, "Compute"),
    "aws:lambda/permission:Permission": (IAMPermissions, "API Gateway"),
}


def render_diagram(graph: ResourceGraph, filename: str, show: bool = False) -> None:
    """
    Render ``graph`` to ``filename``.png.

    Args:
        graph: Validated resource graph
        filename: Output path without extension
        show: Open the image after rendering
    """
    with Diagram(
        "hello-infra\n(declared resource graph)",
        filename=filename,
        show=show,
        direction="LR",
        graph_attr=graph_attr,
    ):
        users = Users("Callers\n(SigV4 signed)")

        nodes = {}
        clusters: dict[str, list] = {}
        for resource in graph:
            icon, cluster = NODE_STYLES.get(resource.kind, (APIGateway, "API Gateway"))
            clusters.setdefault(cluster, []).append((resource, icon))

        for cluster_name, members in clusters.items():
            with Cluster(cluster_name):
                for resource, icon in members:
                    nodes[resource.name] = icon(f"{resource.name}\n{type(resource).__name__}")

        for dependent, dependency in graph.edges():
            nodes[dependency] >> Edge(color="gray") >> nodes[dependent]

        url = General(str(symbolic(graph.outputs[INVOKE_URL_OUTPUT])))
        users >> Edge(label="GET", color="orange", style="bold") >> url
        url >> Edge(style="dashed") >> nodes[REST_API]


if __name__ == "__main__":
    project_root = Path(__file__).resolve().parent.parent
    render_diagram(
        build_graph(default_config(), project_root=project_root),
        get_settings().diagram_filename,
    )
