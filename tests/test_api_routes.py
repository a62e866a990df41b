"""Tests for the stream API routes and application factory.

Route functions are called directly with an explicit StreamManager.
"""

import sys
import os

import pytest
from fastapi import HTTPException

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from xprng.api.app import create_app
from xprng.api.dependencies import get_stream_manager, set_stream_manager
from xprng.api.routes.config import get_config
from xprng.api.routes.streams import (
    create_stream,
    delete_stream,
    draw_bytes,
    draw_ints,
    get_stream,
    list_streams,
    reseed_stream,
    restore_stream,
    save_stream,
)
from xprng.api.schemas import (
    BytesDrawRequest,
    CreateStreamRequest,
    IntDrawRequest,
    SeedRequest,
    StreamSchema,
)
from xprng.api.stream_manager import StreamManager
from xprng.config import GeneratorConfig


@pytest.fixture
def manager() -> StreamManager:
    return StreamManager(GeneratorConfig(max_streams=3, max_draw_count=100, max_bytes_length=64))


def _create(manager, stream_id="s", seed=123) -> StreamSchema:
    return create_stream(CreateStreamRequest(stream_id=stream_id, seed=seed), manager=manager)


class TestStreamRoutes:
    def test_create(self, manager):
        s = _create(manager)
        assert s.stream_id == "s"
        assert s.state == 123
        assert s.seed_source == "integer"
        assert s.saved_state is None

    def test_create_generated_id(self, manager):
        s = create_stream(CreateStreamRequest(seed="abc"), manager=manager)
        assert s.stream_id == "stream-1"
        assert s.state == 0x352441C2
        assert s.seed_source == "text"

    def test_create_duplicate_is_409(self, manager):
        _create(manager)
        with pytest.raises(HTTPException) as exc:
            _create(manager)
        assert exc.value.status_code == 409

    def test_create_over_limit_is_429(self, manager):
        for i in range(3):
            _create(manager, stream_id=f"s{i}")
        with pytest.raises(HTTPException) as exc:
            _create(manager, stream_id="s3")
        assert exc.value.status_code == 429

    def test_duplicate_at_limit_is_409(self, manager):
        for i in range(3):
            _create(manager, stream_id=f"s{i}")
        with pytest.raises(HTTPException) as exc:
            _create(manager, stream_id="s0")
        assert exc.value.status_code == 409

    def test_get_and_list(self, manager):
        _create(manager, "b", 2)
        _create(manager, "a", 1)
        assert get_stream("a", manager=manager).state == 1
        listed = list_streams(manager=manager)
        assert [s.stream_id for s in listed.streams] == ["a", "b"]

    def test_get_unknown_is_404(self, manager):
        with pytest.raises(HTTPException) as exc:
            get_stream("missing", manager=manager)
        assert exc.value.status_code == 404

    def test_delete(self, manager):
        _create(manager)
        assert delete_stream("s", manager=manager).status == "ok"
        with pytest.raises(HTTPException) as exc:
            delete_stream("s", manager=manager)
        assert exc.value.status_code == 404

    def test_draw_ints(self, manager):
        _create(manager)
        resp = draw_ints("s", IntDrawRequest(count=5, low=0, high=1000), manager=manager)
        assert resp.values == [903, 436, 796, 107, 863]
        assert resp.stream.counter == 5

    def test_draw_ints_uses_config_defaults(self, manager):
        _create(manager)
        resp = draw_ints("s", IntDrawRequest(count=5), manager=manager)
        assert resp.values == [230, 111, 203, 27, 220]

    def test_draw_ints_inverted_range_is_422(self, manager):
        _create(manager)
        with pytest.raises(HTTPException) as exc:
            draw_ints("s", IntDrawRequest(count=1, low=5, high=1), manager=manager)
        assert exc.value.status_code == 422
        assert get_stream("s", manager=manager).counter == 0

    def test_draw_ints_over_limit_is_422(self, manager):
        _create(manager)
        with pytest.raises(HTTPException) as exc:
            draw_ints("s", IntDrawRequest(count=101), manager=manager)
        assert exc.value.status_code == 422

    def test_draw_ints_unknown_is_404(self, manager):
        with pytest.raises(HTTPException) as exc:
            draw_ints("nope", IntDrawRequest(count=1), manager=manager)
        assert exc.value.status_code == 404

    def test_draw_bytes(self, manager):
        _create(manager, seed=42)
        resp = draw_bytes("s", BytesDrawRequest(length=8, decimal=True), manager=manager)
        assert resp.data == [61, 94, 230, 166, 0, 50, 82, 177]

    def test_draw_readable_bytes(self, manager):
        _create(manager, seed=42)
        resp = draw_bytes("s", BytesDrawRequest(length=12, readable=True), manager=manager)
        assert resp.data == "6Bu] 2>aPlP*"

    def test_draw_bytes_over_limit_is_422(self, manager):
        _create(manager)
        with pytest.raises(HTTPException) as exc:
            draw_bytes("s", BytesDrawRequest(length=65), manager=manager)
        assert exc.value.status_code == 422

    def test_save_restore(self, manager):
        _create(manager)
        draw_ints("s", IntDrawRequest(count=2, low=0, high=1000), manager=manager)
        saved = save_stream("s", manager=manager)
        assert saved.saved_state == 1871451093
        draw_ints("s", IntDrawRequest(count=3, low=0, high=1000), manager=manager)
        restored = restore_stream("s", manager=manager)
        assert restored.state == 1871451093
        assert restored.counter == 5
        resp = draw_ints("s", IntDrawRequest(count=2, low=0, high=1000), manager=manager)
        assert resp.values == [958, 807]

    def test_reseed(self, manager):
        _create(manager)
        draw_ints("s", IntDrawRequest(count=3), manager=manager)
        s = reseed_stream("s", SeedRequest(seed="abc"), manager=manager)
        assert s.counter == 0
        assert s.state == 0x352441C2

    def test_reseed_unknown_is_404(self, manager):
        with pytest.raises(HTTPException) as exc:
            reseed_stream("nope", SeedRequest(seed=1), manager=manager)
        assert exc.value.status_code == 404


class TestSchemas:
    def test_seed_keeps_numeric_text_as_text(self):
        assert SeedRequest(seed="123").seed == "123"
        assert SeedRequest(seed=123).seed == 123

    def test_negative_count_rejected(self):
        with pytest.raises(Exception):
            IntDrawRequest(count=-1)

    def test_stream_id_pattern(self):
        with pytest.raises(Exception):
            CreateStreamRequest(stream_id="has space")


class TestConfigRoute:
    def test_config(self, manager):
        _create(manager)
        cfg = get_config(manager=manager)
        assert cfg.multiplier == 1664525
        assert cfg.modulus == 2**32
        assert cfg.initial_increment == 1013904223
        assert cfg.max_streams == 3
        assert cfg.active_streams == 1


class TestAppFactory:
    def test_routes_registered(self):
        app = create_app(GeneratorConfig())
        paths = app.openapi()["paths"]
        assert "/api/v1/streams" in paths
        assert "/api/v1/streams/{stream_id}/int" in paths
        assert "/api/v1/config" in paths

    def test_dependency_requires_startup(self):
        set_stream_manager(None)
        with pytest.raises(RuntimeError):
            get_stream_manager()

    def test_dependency_returns_manager(self, manager):
        set_stream_manager(manager)
        try:
            assert get_stream_manager() is manager
        finally:
            set_stream_manager(None)
