"""
Stack output writer.

Writes resolved stack outputs to a dotenv-style file for local development
and downstream consumers.
"""

from pathlib import Path
from typing import Any, Mapping

import pulumi

from hello_infra.observability.logger import get_logger

logger = get_logger(__name__)


def format_env(values: Mapping[str, Any]) -> str:
    """
    Render outputs as KEY=value lines, keys upper-cased and sorted.

    Args:
        values: Output name to resolved value

    Returns:
        File contents ending with a newline
    """
    lines = [f"{key.upper()}={value}" for key, value in sorted(values.items())]
    return "\n".join(lines) + "\n"


def write_env_file(values: Mapping[str, Any], filename: str | Path) -> Path:
    """Write already-resolved outputs to ``filename``."""
    path = Path(filename)
    path.write_text(format_env(values))
    logger.info("Wrote %d outputs to %s", len(values), path)
    return path


def write_outputs_to_env(
    outputs: Mapping[str, Any],
    filename: str,
) -> pulumi.Output:
    """
    Write Pulumi outputs to ``filename`` once they resolve.

    Skipped during preview, where output values are not yet known.

    Args:
        outputs: Output name to pulumi.Output or plain value
        filename: Target env file

    Returns:
        pulumi.Output resolving to the written path (or None in preview)
    """
    def _write(values: dict[str, Any]) -> str | None:
        if pulumi.runtime.is_dry_run():
            return None
        return str(write_env_file(values, filename))

    return pulumi.Output.all(**outputs).apply(_write)
