"""GET /api/v1/config: expose generator constants and service limits."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from xprng.api.dependencies import get_stream_manager
from xprng.api.schemas import GeneratorConfigResponse
from xprng.api.stream_manager import StreamManager
from xprng.core.generator import PseudoRandom

router = APIRouter()


@router.get("/config", response_model=GeneratorConfigResponse)
def get_config(
    manager: StreamManager = Depends(get_stream_manager),
) -> GeneratorConfigResponse:
    cfg = manager.config
    return GeneratorConfigResponse(
        multiplier=PseudoRandom.MULTIPLIER,
        modulus=PseudoRandom.MODULUS,
        initial_increment=PseudoRandom.INITIAL_INCREMENT,
        default_low=cfg.default_low,
        default_high=cfg.default_high,
        max_streams=cfg.max_streams,
        max_draw_count=cfg.max_draw_count,
        max_bytes_length=cfg.max_bytes_length,
        active_streams=manager.stream_count,
    )
