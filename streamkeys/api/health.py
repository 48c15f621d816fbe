"""Health check endpoint — verifies the backend and its keyspace directory."""

from fastapi import APIRouter

from streamkeys.core.keyspace_loader import list_keyspaces

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check backend status and how many keyspaces are configured."""
    keyspaces = list_keyspaces()
    return {
        "status": "ok" if keyspaces else "degraded",
        "keyspaces": len(keyspaces),
    }
