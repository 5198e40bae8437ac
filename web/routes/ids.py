"""Identifier routes: generate, parse, validate."""

from fastapi import APIRouter, HTTPException

from core.errors import InvalidIdentifier
from identifier import generate_many, parse
from internal.logging import get_logger
from utils.timestamp import datetime_from_millis

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

# Set by app.py
_max_batch = 1000


def init(generator_config):
    """Initialize with generator settings."""
    global _max_batch
    _max_batch = generator_config.max_batch


@router.post("")
async def create_ids(count: int = 1):
    """Mint `count` new identifiers."""
    if count < 1 or count > _max_batch:
        raise HTTPException(status_code=400, detail=f"count must be between 1 and {_max_batch}")
    ids = generate_many(count)
    get_logger().debug("Generated ids", count=count)
    return {"ids": ids, "count": len(ids)}


@router.get("/{identifier}")
async def parse_id(identifier: str):
    """Structured parse result, including the failure status."""
    return {"id": identifier, **parse(identifier).to_dict()}


@router.get("/{identifier}/valid")
async def validate_id(identifier: str):
    return {"id": identifier, "valid": parse(identifier).valid}


@router.get("/{identifier}/timestamp")
async def id_timestamp(identifier: str):
    """Creation time of a valid identifier (422 when invalid).

    timestamp is null when the instant lies past year 9999.
    """
    result = parse(identifier)
    if not result.valid:
        raise InvalidIdentifier("Invalid SOLID ID", status=result.status)
    try:
        moment = datetime_from_millis(result.timestamp_ms)
    except OverflowError:
        timestamp = None
    else:
        timestamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"id": identifier, "timestamp_ms": result.timestamp_ms, "timestamp": timestamp}
