"""Keyspace listing endpoints (not keyspace-scoped)."""

from fastapi import APIRouter, Depends

from streamkeys.api.deps import get_keyspace
from streamkeys.core.keyspace import Keyspace
from streamkeys.core.keyspace_loader import list_keyspaces
from streamkeys.core.models import KeyspaceResponse

router = APIRouter()


@router.get("/keyspaces")
async def get_keyspaces():
    """List all configured keyspaces."""
    return {"keyspaces": list_keyspaces()}


@router.get("/k/{name}", response_model=KeyspaceResponse)
async def get_keyspace_detail(keyspace: Keyspace = Depends(get_keyspace)):
    """Get a keyspace's prefix, width and key format."""
    return KeyspaceResponse(**keyspace.model_dump())
