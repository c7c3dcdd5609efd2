"""Environment utilities for resolving secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

SECRET_PREFIXES = ("CONSUL_",)


def load_secret_file_variables(prefixes: Iterable[str] = SECRET_PREFIXES) -> None:
    """
    Resolve ``*_FILE`` variables such as ``CONSUL_HTTP_TOKEN_FILE``.

    For every matching KEY_FILE entry whose KEY is unset, read the referenced
    file and expose its stripped contents via KEY. A missing or unreadable
    file is logged and skipped, leaving KEY unset.
    """

    prefixes = tuple(prefixes)
    for key, file_path in list(os.environ.items()):
        if not key.endswith("_FILE") or not key.startswith(prefixes):
            continue
        target_key = key[:-5]
        if os.environ.get(target_key) or not file_path:
            continue
        try:
            os.environ[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )


# Resolve secrets before any settings class reads the environment.
load_secret_file_variables()
