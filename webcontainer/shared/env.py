"""Environment utilities for resolving Docker-style secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_FILE_SUFFIX = "_FILE"


def resolve_secret_files(
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Expose the contents of ``KEY_FILE`` entries as ``KEY``.

    Keys that already carry a value are left alone. Unreadable files are
    logged and skipped.

    Returns:
        The names of the variables that were populated.
    """
    env = os.environ if environ is None else environ
    resolved: List[str] = []

    for key, file_path in list(env.items()):
        if not key.endswith(SECRET_FILE_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_FILE_SUFFIX)]
        if env.get(target_key):
            continue
        try:
            env[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        resolved.append(target_key)

    return resolved
