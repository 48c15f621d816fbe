"""Keyspace Loader — loads and validates YAML keyspace files."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from streamkeys.core.config import settings
from streamkeys.core.keyspace import Keyspace

logger = logging.getLogger(__name__)


def _keyspaces_dir(keyspaces_dir: Optional[str] = None) -> Path:
    path = Path(keyspaces_dir or settings.keyspaces_dir)
    if not path.is_absolute():
        path = settings.project_root / path
    return path


def load_keyspace(name: str, keyspaces_dir: Optional[str] = None) -> Keyspace:
    """Load a keyspace from the keyspaces directory.

    Looks for {keyspaces_dir}/{name}.yaml. The file's name field defaults
    to the file stem.
    """
    path = _keyspaces_dir(keyspaces_dir) / f"{name}.yaml"

    if not path.exists():
        raise FileNotFoundError(f"Keyspace not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Invalid keyspace format in {path}: expected a YAML mapping")

    data.setdefault("name", name)
    keyspace = Keyspace(**data)
    logger.info(f"Loaded keyspace '{keyspace.name}' from {path}")
    return keyspace


def list_keyspaces(keyspaces_dir: Optional[str] = None) -> list[str]:
    """List available keyspace names (without .yaml extension)."""
    path = _keyspaces_dir(keyspaces_dir)
    if not path.exists():
        return []
    return sorted(p.stem for p in path.glob("*.yaml") if not p.stem.startswith("_"))
