"""Application service running the four RouteGuide call-shape demos.

Each demo is a coroutine that returns once the demo completed and raises the
first error it meets. Results are printed on stdout as they are observed;
lifecycle events go to the structured log.
"""
from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple

from application.ports.route_guide import RouteGuidePort
from core.logging_config import get_logger
from domain.common.exceptions import EmptyFeatureDatasetException, RouteGuideConfigException
from grpc_app.mappers.route_guide import (
    feature_record_to_proto,
    format_point,
    format_raw_point,
    make_note,
    make_point,
    make_rectangle,
)
from grpc_app.generated import route_guide_pb2
from infrastructure.repositories.feature_repository import JsonFeatureRepository


logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]

# GetFeature lookups: one location with a feature, one without
FEATURE_LOOKUPS: Tuple[Tuple[int, int], ...] = ((409146138, -746188906), (0, 0))

# ListFeatures search area, as (lo, hi) corners
SEARCH_AREA = ((400000000, -750000000), (420000000, -730000000))

CHAT_NOTES: Tuple[Tuple[str, int, int], ...] = (
    ("First message", 0, 0),
    ("Second message", 0, 1),
    ("Third message", 1, 0),
    ("Fourth message", 0, 0),
)


async def join_all(aws: Iterable[Awaitable]) -> list:
    """Wait for every awaitable; on the first error cancel the rest and raise it.

    Results come back in argument order.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()

    failed = [t for t in tasks if t in done and not t.cancelled() and t.exception() is not None]
    if failed:
        # Let the cancelled siblings unwind before reporting
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()
    return [task.result() for task in tasks]


def _print_feature(feature: route_guide_pb2.Feature) -> None:
    print(f'Found feature called "{feature.name}" at {format_point(feature.location)}')


class RouteGuideDemoService:
    def __init__(
        self,
        client: RouteGuidePort,
        *,
        db_path: Optional[str] = None,
        num_points: int = 10,
        delay_range_ms: Tuple[int, int] = (500, 1500),
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._db_path = db_path
        self._num_points = num_points
        self._delay_range_ms = delay_range_ms
        self._rng = rng or random.Random()
        self._sleep = sleep

    # Unary
    async def _report_feature(self, latitude: int, longitude: int) -> None:
        feature = await self._client.get_feature(make_point(latitude, longitude))
        if feature.name == "":
            print(f"Found no feature at {format_point(feature.location)}")
        else:
            _print_feature(feature)

    async def run_get_feature(self) -> None:
        """Look up a point with a feature and one without, concurrently."""
        await join_all(self._report_feature(lat, lon) for lat, lon in FEATURE_LOOKUPS)

    # Server streaming
    async def run_list_features(self) -> None:
        """Print every feature inside the search area as it is streamed back."""
        lo, hi = (make_point(*corner) for corner in SEARCH_AREA)
        print(f"Looking for features between {format_point(lo)} and {format_point(hi)}")
        count = 0
        async for feature in self._client.list_features(make_rectangle(lo, hi)):
            _print_feature(feature)
            count += 1
        logger.info("features_listed", count=count)

    # Client streaming
    def load_features(self) -> List[route_guide_pb2.Feature]:
        if not self._db_path:
            raise RouteGuideConfigException(
                "No feature database given; pass --db_path or set ROUTE_GUIDE__DB_PATH",
                field="db_path",
            )
        return [feature_record_to_proto(r) for r in JsonFeatureRepository(self._db_path).load()]

    def pick_route(self, features: Sequence[route_guide_pb2.Feature]) -> List[route_guide_pb2.Feature]:
        """Sample the route uniformly, with replacement."""
        if not features:
            raise EmptyFeatureDatasetException(self._db_path)
        return [self._rng.choice(features) for _ in range(self._num_points)]

    async def run_record_route(self) -> None:
        """Stream randomly chosen dataset points with pacing, then print the summary."""
        route = self.pick_route(await asyncio.to_thread(self.load_features))

        call = self._client.record_route()
        low, high = self._delay_range_ms
        for feature in route:
            print(f"Visiting point {format_point(feature.location)}")
            await call.write(feature.location)
            await self._sleep(self._rng.randint(low, high) / 1000)
        await call.done_writing()

        summary = await call
        print(f"Finished trip with {summary.point_count} points")
        print(f"Passed {summary.feature_count} features")
        print(f"Travelled {summary.distance} meters")
        print(f"It took {summary.elapsed_time} seconds")

    # Bidirectional streaming
    async def _send_notes(self, call) -> None:
        # The peer may end the RPC before every note is out; the receiving side
        # then sees the end of stream and there is nothing left to write to.
        for index, (message, latitude, longitude) in enumerate(CHAT_NOTES):
            if call.done():
                logger.info("route_chat_peer_finished", unsent=len(CHAT_NOTES) - index)
                return
            note = make_note(message, latitude, longitude)
            print(f'Sending message "{message}" at {format_raw_point(note.location)}')
            try:
                await call.write(note)
            except asyncio.InvalidStateError:
                if not call.done():
                    raise
                logger.info("route_chat_peer_finished", unsent=len(CHAT_NOTES) - index)
                return
        if not call.done():
            await call.done_writing()

    async def _receive_notes(self, call) -> None:
        async for note in call:
            print(f'Got message "{note.message}" at {format_raw_point(note.location)}')

    async def run_route_chat(self) -> None:
        """Send the chat notes while printing whatever the peer sends back.

        Completes when the peer ends the stream.
        """
        call = self._client.route_chat()
        await join_all((self._send_notes(call), self._receive_notes(call)))
