"""
RouteGuide gRPC client

One insecure grpc.aio channel to one endpoint, exposing one method per call
shape. The channel is opened explicitly (or on `async with`) and closed once;
the same client is shared by every demo, grpc multiplexes concurrent calls
over the channel.
"""
from __future__ import annotations

from typing import Optional, Sequence

import grpc

from core.logging_config import get_logger
from grpc_app.generated import route_guide_pb2, route_guide_pb2_grpc
from grpc_app.interceptors.logging import LoggingClientInterceptor
from grpc_app.interceptors.request_id import RequestIdClientInterceptor


logger = get_logger(__name__)


def default_interceptors() -> Sequence[grpc.aio.ClientInterceptor]:
    return (
        RequestIdClientInterceptor(),  # outermost: metadata visible to the logger
        LoggingClientInterceptor(),
    )


class RouteGuideClient:
    """
    Client binding to a routeguide.RouteGuide endpoint

    Usage::

        async with RouteGuideClient("localhost:50051") as client:
            feature = await client.get_feature(Point(latitude=1, longitude=2))
    """

    def __init__(
        self,
        target: str,
        interceptors: Optional[Sequence[grpc.aio.ClientInterceptor]] = None,
    ):
        """
        Args:
            target: host:port of the RouteGuide server
            interceptors: client interceptors, defaults to request-id + logging
        """
        self.target = target
        self._interceptors = list(default_interceptors() if interceptors is None else interceptors)
        self._channel: Optional[grpc.aio.Channel] = None
        self._stub: Optional[route_guide_pb2_grpc.RouteGuideStub] = None

    def open(self) -> None:
        if self._channel is not None:
            return
        self._channel = grpc.aio.insecure_channel(self.target, interceptors=self._interceptors)
        self._stub = route_guide_pb2_grpc.RouteGuideStub(self._channel)
        logger.info("grpc_channel_opened", target=self.target)

    async def close(self) -> None:
        if self._channel is not None:
            await self._channel.close()
            self._channel = None
            self._stub = None
            logger.info("grpc_channel_closed", target=self.target)

    async def __aenter__(self) -> "RouteGuideClient":
        self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _require_open(self) -> route_guide_pb2_grpc.RouteGuideStub:
        if self._stub is None:
            raise RuntimeError("RouteGuideClient is not open; use `async with` or call open() first")
        return self._stub

    def get_feature(self, point: route_guide_pb2.Point) -> grpc.aio.UnaryUnaryCall:
        """Unary: await the returned call for the Feature at `point`."""
        return self._require_open().GetFeature(point)

    def list_features(self, rectangle: route_guide_pb2.Rectangle) -> grpc.aio.UnaryStreamCall:
        """Server streaming: async-iterate the returned call for each Feature."""
        return self._require_open().ListFeatures(rectangle)

    def record_route(self) -> grpc.aio.StreamUnaryCall:
        """Client streaming: write() Points, done_writing(), then await the RouteSummary."""
        return self._require_open().RecordRoute()

    def route_chat(self) -> grpc.aio.StreamStreamCall:
        """Bidirectional streaming: write()/done_writing() RouteNotes while iterating inbound ones."""
        return self._require_open().RouteChat()
