"""Run the four RouteGuide demos strictly one after another."""
from __future__ import annotations

import enum
import time
import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Tuple

import grpc
from structlog.contextvars import bound_contextvars

from core.logging_config import get_logger
from domain.common.exceptions import BusinessException
from grpc_app.interceptors.request_id import reset_request_id, set_request_id


logger = get_logger(__name__)

Demo = Callable[[], Awaitable[None]]


class SequenceState(str, enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING_UNARY = "running_unary"
    RUNNING_SERVER_STREAM = "running_server_stream"
    RUNNING_CLIENT_STREAM = "running_client_stream"
    RUNNING_BIDI = "running_bidi"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SequenceResult:
    state: SequenceState
    error: Optional[BaseException] = None
    completed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state is SequenceState.DONE


def _error_fields(exc: BaseException) -> dict:
    if isinstance(exc, grpc.aio.AioRpcError):
        return {"status": str(exc.code()), "details": exc.details()}
    if isinstance(exc, BusinessException):
        return {"code": int(exc.code), "error_type": exc.error_type, "details": exc.details}
    return {"error_type": type(exc).__name__}


class DemoSequencer:
    """State machine gating each demo on the successful completion of the previous one.

    The first failing demo moves the sequencer to FAILED and keeps its error;
    the demos after it are never started.
    """

    def __init__(
        self,
        *,
        get_feature: Demo,
        list_features: Demo,
        record_route: Demo,
        route_chat: Demo,
    ) -> None:
        self._steps: Tuple[Tuple[SequenceState, str, Demo], ...] = (
            (SequenceState.RUNNING_UNARY, "GetFeature", get_feature),
            (SequenceState.RUNNING_SERVER_STREAM, "ListFeatures", list_features),
            (SequenceState.RUNNING_CLIENT_STREAM, "RecordRoute", record_route),
            (SequenceState.RUNNING_BIDI, "RouteChat", route_chat),
        )
        self.state = SequenceState.NOT_STARTED
        self.error: Optional[BaseException] = None
        self.transitions: List[SequenceState] = [self.state]

    def _enter(self, state: SequenceState) -> None:
        self.state = state
        self.transitions.append(state)

    async def _run_demo(self, name: str, demo: Demo) -> None:
        # Every call made by one demo carries the same x-request-id
        request_id = str(uuid.uuid4())
        token = set_request_id(request_id)
        try:
            with bound_contextvars(demo=name, request_id=request_id):
                logger.info("demo_started")
                start = time.perf_counter()
                try:
                    await demo()
                except Exception as exc:
                    logger.error("demo_failed", error=str(exc), **_error_fields(exc))
                    raise
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info("demo_finished", elapsed_ms=round(elapsed_ms, 2))
        finally:
            reset_request_id(token)

    async def run(self) -> SequenceResult:
        if self.state is not SequenceState.NOT_STARTED:
            raise RuntimeError(f"sequence already ran (state={self.state.value})")

        completed: List[str] = []
        for state, name, demo in self._steps:
            self._enter(state)
            print(f"-------------- {name} --------------")
            try:
                await self._run_demo(name, demo)
            except Exception as exc:
                self.error = exc
                self._enter(SequenceState.FAILED)
                return SequenceResult(SequenceState.FAILED, exc, completed)
            completed.append(name)

        self._enter(SequenceState.DONE)
        logger.info("sequence_finished", demos=completed)
        return SequenceResult(SequenceState.DONE, None, completed)
