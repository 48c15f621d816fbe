"""Keyspace-scoped key endpoints — decode, distance and range under /api/k/{name}."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from streamkeys.api.deps import get_keyspace
from streamkeys.core.clock import FixedClock, epoch_secs
from streamkeys.core.codec import SegmentDecodeError
from streamkeys.core.config import settings
from streamkeys.core.counter import FixedWidthCounter
from streamkeys.core.keyspace import Keyspace
from streamkeys.core.models import (
    DecodedKeyResponse,
    DistanceResponse,
    RangeRequest,
    RangeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_or_422(keyspace: Keyspace, key: str) -> FixedWidthCounter:
    try:
        return keyspace.decode(key)
    except SegmentDecodeError as e:
        logger.warning(f"Rejected key for keyspace '{keyspace.name}': {e}")
        raise HTTPException(status_code=422, detail=str(e))


def _decode_valid_or_422(keyspace: Keyspace, key: str) -> FixedWidthCounter:
    counter = _decode_or_422(keyspace, key)
    if not counter.valid:
        raise HTTPException(status_code=422, detail=f"Malformed key: '{key}'")
    return counter


@router.get("/decode", response_model=DecodedKeyResponse)
async def decode_key(
    key: str = Query(..., min_length=1),
    keyspace: Keyspace = Depends(get_keyspace),
):
    """Decode a key into its prefix, timestamp and value.

    Keys with the wrong number of fields come back with valid=false.
    """
    counter = _decode_or_422(keyspace, key)
    return DecodedKeyResponse(
        key=key,
        valid=counter.valid,
        prefix=counter.prefix,
        timestamp=counter.timestamp,
        segment=counter.segment,
        numeric=counter.to_numeric(),
    )


@router.get("/distance", response_model=DistanceResponse)
async def key_distance(
    a: str = Query(..., min_length=1),
    b: str = Query(..., min_length=1),
    keyspace: Keyspace = Depends(get_keyspace),
):
    """Absolute numeric distance between two keys."""
    lhs = _decode_valid_or_422(keyspace, a)
    rhs = _decode_valid_or_422(keyspace, b)
    return DistanceResponse(a=a, b=b, distance=lhs.distance(rhs))


@router.post("/range", response_model=RangeResponse)
async def key_range(body: RangeRequest, keyspace: Keyspace = Depends(get_keyspace)):
    """Enumerate up to `limit` keys of [start, end) from the front or the back."""
    if body.limit > settings.max_range_limit:
        raise HTTPException(
            status_code=400,
            detail=f"limit {body.limit} exceeds the maximum of {settings.max_range_limit}",
        )

    # Bounds are re-anchored on one request-time stamp so the run orders numerically.
    clock = FixedClock(epoch_secs())
    start = end = None
    if body.start:
        start = keyspace.from_int(_decode_valid_or_422(keyspace, body.start).to_numeric(), clock)
    if body.end:
        end = keyspace.from_int(_decode_valid_or_422(keyspace, body.end).to_numeric(), clock)
    generator = keyspace.range(start, end, clock)

    source = reversed(generator) if body.reverse else generator
    keys = []
    for counter in source:
        keys.append(counter.encode())
        if len(keys) >= body.limit:
            break

    return RangeResponse(
        keyspace=keyspace.name,
        keys=keys,
        exhausted=generator.is_exhausted(),
    )
