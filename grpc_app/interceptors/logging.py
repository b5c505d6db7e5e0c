from __future__ import annotations

import time
from typing import Any, Callable

import grpc

from core.logging_config import get_logger
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, metadata_value


logger = get_logger(__name__)


def _method_name(details: grpc.aio.ClientCallDetails) -> str:
    method = details.method
    return method.decode() if isinstance(method, bytes) else method


class LoggingClientInterceptor(
    grpc.aio.UnaryUnaryClientInterceptor,
    grpc.aio.UnaryStreamClientInterceptor,
    grpc.aio.StreamUnaryClientInterceptor,
    grpc.aio.StreamStreamClientInterceptor,
):
    """Log when a call starts and, via a done callback, when it finishes.

    Streaming calls finish long after the interceptor returns, so the elapsed
    time covers the whole stream and not just the call setup.
    """

    async def _intercept(self, kind: str, continuation: Callable, details, request: Any):
        method = _method_name(details)
        request_id = metadata_value(details, REQUEST_ID_META_KEY)
        logger.debug("grpc_call", method=method, kind=kind, request_id=request_id)
        start = time.perf_counter()

        call = await continuation(details, request)

        def _done(finished_call) -> None:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(
                "grpc_call_done",
                method=method,
                kind=kind,
                cancelled=finished_call.cancelled(),
                elapsed_ms=round(elapsed_ms, 2),
                request_id=request_id,
            )

        call.add_done_callback(_done)
        return call

    async def intercept_unary_unary(self, continuation: Callable, client_call_details, request: Any):
        return await self._intercept("unary_unary", continuation, client_call_details, request)

    async def intercept_unary_stream(self, continuation: Callable, client_call_details, request: Any):
        return await self._intercept("unary_stream", continuation, client_call_details, request)

    async def intercept_stream_unary(self, continuation: Callable, client_call_details, request_iterator: Any):
        return await self._intercept("stream_unary", continuation, client_call_details, request_iterator)

    async def intercept_stream_stream(self, continuation: Callable, client_call_details, request_iterator: Any):
        return await self._intercept("stream_stream", continuation, client_call_details, request_iterator)
