"""Run the RouteGuide client demos against one server.

    python route_guide_main.py --db_path route_guide_db.json [--host localhost] [--port 50051]

Exits 0 when all four demos completed, 1 when one of them failed.
"""
from __future__ import annotations

import argparse
import asyncio
import random
import sys
from typing import Optional, Sequence

from application.services.route_guide_service import RouteGuideDemoService
from application.services.sequencer import DemoSequencer, SequenceResult
from core.config import GrpcSettings, settings
from core.logging_config import get_logger
from grpc_app.client import RouteGuideClient


logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    cfg = settings.route_guide
    parser = argparse.ArgumentParser(description="RouteGuide gRPC client demos")
    parser.add_argument("--db_path", default=cfg.db_path, help="JSON feature database for RecordRoute")
    parser.add_argument("--host", default=settings.grpc.host)
    parser.add_argument("--port", type=int, default=settings.grpc.port)
    parser.add_argument("--seed", type=int, default=cfg.seed, help="seed route sampling and pacing")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> SequenceResult:
    cfg = settings.route_guide
    endpoint = GrpcSettings(host=args.host, port=args.port)
    async with RouteGuideClient(endpoint.target) as client:
        demos = RouteGuideDemoService(
            client,
            db_path=args.db_path,
            num_points=cfg.num_points,
            delay_range_ms=(cfg.delay_min_ms, cfg.delay_max_ms),
            rng=random.Random(args.seed),
        )
        sequencer = DemoSequencer(
            get_feature=demos.run_get_feature,
            list_features=demos.run_list_features,
            record_route=demos.run_record_route,
            route_chat=demos.run_route_chat,
        )
        return await sequencer.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    result = asyncio.run(run(args))
    if not result.ok:
        print(f"Route guide demos failed: {result.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
