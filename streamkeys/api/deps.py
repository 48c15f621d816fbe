"""FastAPI dependencies for keyspace extraction and validation."""

from fastapi import HTTPException, Path

from streamkeys.core.keyspace import Keyspace
from streamkeys.core.keyspace_loader import load_keyspace


async def get_keyspace_name(
    name: str = Path(..., description="Keyspace name", min_length=1, max_length=64)
) -> str:
    """Extract and validate the keyspace name from the URL path.

    Raises 400 if the format is invalid.
    """
    if not name.replace("_", "").replace("-", "").isalnum():
        raise HTTPException(
            status_code=400,
            detail=f"Invalid keyspace name format: '{name}'. "
                   f"Must be alphanumeric with underscores or dashes."
        )
    return name


async def get_keyspace(
    name: str = Path(..., description="Keyspace name", min_length=1, max_length=64)
) -> Keyspace:
    """Resolve the keyspace named in the path. Raises 404 if unknown."""
    name = await get_keyspace_name(name)
    try:
        return load_keyspace(name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Keyspace '{name}' not found")
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Keyspace '{name}' is misconfigured: {e}")
