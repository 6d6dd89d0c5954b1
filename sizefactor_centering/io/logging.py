"""Structured log records for sizefactor-centering.

Centering summaries are appended to a log file as YAML documents, one per
call, separated by ``---``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]


def log_yaml(log_path: PathLike, record: dict[str, Any]) -> Path:
    """Append a YAML document to log_path.

    Parameters
    ----------
    log_path : PathLike
        Path to log file. Parent directories are created as needed.
    record : dict
        Dictionary to serialize as YAML.

    Returns
    -------
    Path
        The file written to.
    """
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    yaml_text = yaml.safe_dump(record, sort_keys=False).rstrip("\n")
    with path.open("a", encoding="utf-8") as handle:
        handle.write(f"{yaml_text}\n---\n")
    return path
