"""/api/v1/streams: create, inspect and draw from generator streams."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from xprng.api.dependencies import get_stream_manager
from xprng.api.schemas import (
    BytesDrawRequest,
    BytesDrawResponse,
    CreateStreamRequest,
    IntDrawRequest,
    IntDrawResponse,
    SeedRequest,
    StatusResponse,
    StreamListResponse,
    StreamSchema,
)
from xprng.api.stream_manager import StreamManager
from xprng.core.errors import (
    InvalidRangeError,
    InvalidSeedError,
    StreamExistsError,
    StreamLimitError,
    StreamNotFoundError,
)

router = APIRouter()


def _not_found(exc: StreamNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post("/streams", response_model=StreamSchema, status_code=status.HTTP_201_CREATED)
def create_stream(
    body: CreateStreamRequest,
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamSchema:
    try:
        stream_id, snap = manager.create(stream_id=body.stream_id, seed=body.seed)
    except InvalidSeedError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StreamExistsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except StreamLimitError as exc:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc))

    return StreamSchema.from_snapshot(stream_id, snap)


@router.get("/streams", response_model=StreamListResponse)
def list_streams(
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamListResponse:
    return StreamListResponse(
        streams=[StreamSchema.from_snapshot(sid, snap) for sid, snap in manager.snapshots().items()]
    )


@router.get("/streams/{stream_id}", response_model=StreamSchema)
def get_stream(
    stream_id: str,
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamSchema:
    try:
        return StreamSchema.from_snapshot(stream_id, manager.snapshot(stream_id))
    except StreamNotFoundError as exc:
        raise _not_found(exc)


@router.delete("/streams/{stream_id}", response_model=StatusResponse)
def delete_stream(
    stream_id: str,
    manager: StreamManager = Depends(get_stream_manager),
) -> StatusResponse:
    try:
        manager.delete(stream_id)
    except StreamNotFoundError as exc:
        raise _not_found(exc)
    return StatusResponse(status="ok", message=f"Stream '{stream_id}' deleted.")


@router.post("/streams/{stream_id}/reseed", response_model=StreamSchema)
def reseed_stream(
    stream_id: str,
    body: SeedRequest,
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamSchema:
    try:
        snap = manager.reseed(stream_id, body.seed)
    except StreamNotFoundError as exc:
        raise _not_found(exc)
    except InvalidSeedError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return StreamSchema.from_snapshot(stream_id, snap)


@router.post("/streams/{stream_id}/int", response_model=IntDrawResponse)
def draw_ints(
    stream_id: str,
    body: IntDrawRequest,
    manager: StreamManager = Depends(get_stream_manager),
) -> IntDrawResponse:
    cfg = manager.config
    if body.count > cfg.max_draw_count:
        raise HTTPException(
            status_code=422,
            detail=f"count must be <= {cfg.max_draw_count}, got {body.count}",
        )
    low = cfg.default_low if body.low is None else body.low
    high = cfg.default_high if body.high is None else body.high
    if high < low:
        raise HTTPException(status_code=422, detail=f"high ({high}) must be >= low ({low})")

    try:
        values, snap = manager.draw_ints(stream_id, body.count, low, high)
    except StreamNotFoundError as exc:
        raise _not_found(exc)
    except InvalidRangeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return IntDrawResponse(stream=StreamSchema.from_snapshot(stream_id, snap), values=values)


@router.post("/streams/{stream_id}/bytes", response_model=BytesDrawResponse)
def draw_bytes(
    stream_id: str,
    body: BytesDrawRequest,
    manager: StreamManager = Depends(get_stream_manager),
) -> BytesDrawResponse:
    limit = manager.config.max_bytes_length
    if body.length > limit:
        raise HTTPException(status_code=422, detail=f"length must be <= {limit}, got {body.length}")

    try:
        data, snap = manager.draw_bytes(
            stream_id, body.length, decimal=body.decimal, readable=body.readable
        )
    except StreamNotFoundError as exc:
        raise _not_found(exc)
    return BytesDrawResponse(stream=StreamSchema.from_snapshot(stream_id, snap), data=data)


@router.post("/streams/{stream_id}/save", response_model=StreamSchema)
def save_stream(
    stream_id: str,
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamSchema:
    try:
        return StreamSchema.from_snapshot(stream_id, manager.save(stream_id))
    except StreamNotFoundError as exc:
        raise _not_found(exc)


@router.post("/streams/{stream_id}/restore", response_model=StreamSchema)
def restore_stream(
    stream_id: str,
    manager: StreamManager = Depends(get_stream_manager),
) -> StreamSchema:
    """Roll the stream back to its last save. The draw counter keeps advancing."""
    try:
        return StreamSchema.from_snapshot(stream_id, manager.restore(stream_id))
    except StreamNotFoundError as exc:
        raise _not_found(exc)
