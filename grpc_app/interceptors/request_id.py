from __future__ import annotations

import uuid
import contextvars
from typing import Any, Callable, Optional

import grpc


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("grpc_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


def set_request_id(request_id: Optional[str]) -> contextvars.Token:
    """Pin the id sent with every call made from the current context."""
    return _request_id_var.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_var.reset(token)


def metadata_value(details: grpc.aio.ClientCallDetails, key: str) -> str | None:
    for md_key, md_value in details.metadata or ():
        if md_key == key:
            return md_value
    return None


def with_metadata(details: grpc.aio.ClientCallDetails, key: str, value: str) -> grpc.aio.ClientCallDetails:
    metadata = grpc.aio.Metadata(*tuple(details.metadata or ()))
    metadata.add(key, value)
    return grpc.aio.ClientCallDetails(
        method=details.method,
        timeout=details.timeout,
        metadata=metadata,
        credentials=details.credentials,
        wait_for_ready=details.wait_for_ready,
    )


class RequestIdClientInterceptor(
    grpc.aio.UnaryUnaryClientInterceptor,
    grpc.aio.UnaryStreamClientInterceptor,
    grpc.aio.StreamUnaryClientInterceptor,
    grpc.aio.StreamStreamClientInterceptor,
):
    """Attach an x-request-id entry to every outgoing call.

    Uses the id pinned with set_request_id() when there is one, otherwise a
    fresh uuid4 per call. An id already present in the call metadata wins.
    """

    def _details(self, details: grpc.aio.ClientCallDetails) -> grpc.aio.ClientCallDetails:
        if metadata_value(details, REQUEST_ID_META_KEY):
            return details
        return with_metadata(details, REQUEST_ID_META_KEY, get_request_id() or str(uuid.uuid4()))

    async def intercept_unary_unary(self, continuation: Callable, client_call_details, request: Any):
        return await continuation(self._details(client_call_details), request)

    async def intercept_unary_stream(self, continuation: Callable, client_call_details, request: Any):
        return await continuation(self._details(client_call_details), request)

    async def intercept_stream_unary(self, continuation: Callable, client_call_details, request_iterator: Any):
        return await continuation(self._details(client_call_details), request_iterator)

    async def intercept_stream_stream(self, continuation: Callable, client_call_details, request_iterator: Any):
        return await continuation(self._details(client_call_details), request_iterator)
