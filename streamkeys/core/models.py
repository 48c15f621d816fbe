"""Pydantic models for key formats and API request/response schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class KeyFormat(str, Enum):
    PLAIN = "plain"              # segment | prefix:segment
    TIMESTAMPED = "timestamped"  # timestamp:segment | prefix:timestamp:segment


# --- API request/response models ---


class KeyspaceResponse(BaseModel):
    name: str
    prefix: Optional[str] = None
    width: int
    key_format: KeyFormat
    description: Optional[str] = None


class DecodedKeyResponse(BaseModel):
    key: str
    valid: bool
    prefix: Optional[str] = None
    timestamp: Optional[int] = None
    segment: str
    numeric: int


class DistanceResponse(BaseModel):
    a: str
    b: str
    distance: int


class RangeRequest(BaseModel):
    start: Optional[str] = None
    end: Optional[str] = None
    limit: int = Field(default=100, gt=0)
    reverse: bool = False


class RangeResponse(BaseModel):
    keyspace: str
    keys: list[str]
    exhausted: bool
