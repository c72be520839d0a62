"""
Content hashing for the Lambda code artifact.

The hash is stored on the function so any change to the code forces a
redeploy, and an unchanged tree produces the same hash on every run.
"""

import base64
import hashlib
from pathlib import Path


def source_code_hash(path: str | Path) -> str:
    """
    Base64-encoded SHA-256 of a file or directory tree.

    Directories are hashed over sorted relative paths and file contents,
    skipping __pycache__, so the digest does not depend on walk order.

    Args:
        path: Zip file or source directory

    Returns:
        Base64 digest in the format Lambda reports as CodeSha256

    Raises:
        FileNotFoundError: If ``path`` does not exist
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Code artifact not found: {root}")

    digest = hashlib.sha256()
    if root.is_file():
        digest.update(root.read_bytes())
    else:
        for file in sorted(p for p in root.rglob("*") if p.is_file()):
            if "__pycache__" in file.parts:
                continue
            digest.update(file.relative_to(root).as_posix().encode())
            digest.update(b"\0")
            digest.update(file.read_bytes())

    return base64.b64encode(digest.digest()).decode()
