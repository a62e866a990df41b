"""FastAPI dependency injection: provides the StreamManager singleton."""

from __future__ import annotations

from xprng.api.stream_manager import StreamManager

_stream_manager: StreamManager | None = None


def set_stream_manager(manager: StreamManager | None) -> None:
    global _stream_manager
    _stream_manager = manager


def get_stream_manager() -> StreamManager:
    if _stream_manager is None:
        raise RuntimeError("StreamManager not initialized; server not started correctly.")
    return _stream_manager
