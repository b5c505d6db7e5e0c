"""Generated protobuf and gRPC modules for routeguide.RouteGuide.

`grpc.protos_and_services` runs protoc from grpcio-tools over
`grpc_app/protos/route_guide.proto` on first import, yielding the same modules
as::

    python -m grpc_tools.protoc -I. --python_out=. --grpc_python_out=. \
        grpc_app/protos/route_guide.proto

The proto path is resolved against sys.path, so the directory holding
`grpc_app` must be on it.
"""
from __future__ import annotations

import sys
from pathlib import Path

import grpc


PROTO_PATH = "grpc_app/protos/route_guide.proto"

_ROOT = str(Path(__file__).resolve().parents[2])
if _ROOT not in sys.path:
    sys.path.append(_ROOT)

route_guide_pb2, route_guide_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

__all__ = ["PROTO_PATH", "route_guide_pb2", "route_guide_pb2_grpc"]
