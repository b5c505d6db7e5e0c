"""
Route guide connection port (contracts-first).

The demos only depend on this protocol, so they can be driven by the real
gRPC client or by in-memory fakes. Call objects follow grpc.aio: streaming
requests go through `write()`/`done_writing()`, the client-streaming call is
awaited for its single response, and streaming responses are async-iterated.
"""
from __future__ import annotations

from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Protocol


class RecordRouteCall(Protocol):
    async def write(self, request: Any) -> None: ...

    async def done_writing(self) -> None: ...

    def __await__(self): ...


class RouteChatCall(Protocol):
    async def write(self, request: Any) -> None: ...

    async def done_writing(self) -> None: ...

    def done(self) -> bool: ...

    def __aiter__(self) -> AsyncIterator[Any]: ...


class RouteGuidePort(Protocol):
    """One binding to a RouteGuide endpoint, shared by every demo."""

    def get_feature(self, point: Any) -> Awaitable[Any]: ...

    def list_features(self, rectangle: Any) -> AsyncIterable[Any]: ...

    def record_route(self) -> RecordRouteCall: ...

    def route_chat(self) -> RouteChatCall: ...


__all__ = ["RouteGuidePort", "RecordRouteCall", "RouteChatCall"]
