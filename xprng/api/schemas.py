"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from xprng.core.snapshot import GeneratorSnapshot


# --- Requests ---

class SeedRequest(BaseModel):
    seed: int | str | None = Field(
        None, description="Integer or text seed; omit to seed from the clock."
    )


class CreateStreamRequest(SeedRequest):
    stream_id: str | None = Field(
        None, min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.\-]+$"
    )


class IntDrawRequest(BaseModel):
    count: int = Field(1, ge=0)
    low: int | None = None     # None -> config default
    high: int | None = None


class BytesDrawRequest(BaseModel):
    length: int = Field(1, ge=0)
    decimal: bool = False
    readable: bool = False


# --- Responses ---

class StreamSchema(BaseModel):
    stream_id: str
    state: int
    counter: int
    increment: int
    saved_state: int | None = None
    seed_source: str

    @classmethod
    def from_snapshot(cls, stream_id: str, snap: GeneratorSnapshot) -> StreamSchema:
        return cls(stream_id=stream_id, **snap.to_dict())


class StreamListResponse(BaseModel):
    streams: list[StreamSchema]


class IntDrawResponse(BaseModel):
    stream: StreamSchema
    values: list[int]


class BytesDrawResponse(BaseModel):
    stream: StreamSchema
    data: list[int] | str


class StatusResponse(BaseModel):
    status: str          # "ok"
    message: str = ""


class GeneratorConfigResponse(BaseModel):
    multiplier: int
    modulus: int
    initial_increment: int
    default_low: int
    default_high: int
    max_streams: int
    max_draw_count: int
    max_bytes_length: int
    active_streams: int
