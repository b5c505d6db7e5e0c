from __future__ import annotations

from application.dto import FeatureRecordDTO
from grpc_app.generated import route_guide_pb2


# Point coordinates are degrees multiplied by 10**7
COORD_FACTOR = 1e7


def to_degrees(value: int) -> float:
    return value / COORD_FACTOR


def _format_number(value: float) -> str:
    # Whole numbers print without a fraction: 0 -> "0", 40.0 -> "40".
    # Others use Python's shortest repr, so tiny values keep the exponent
    # form with two digits: 1 -> "1e-07".
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_point(point: route_guide_pb2.Point) -> str:
    """Scaled "lat, lon" in degrees, e.g. "40.9146138, -74.6188906"."""
    return f"{_format_number(to_degrees(point.latitude))}, {_format_number(to_degrees(point.longitude))}"


def format_raw_point(point: route_guide_pb2.Point) -> str:
    """Unscaled "lat, lon" as carried on the wire; used for RouteNote locations."""
    return f"{point.latitude}, {point.longitude}"


def make_point(latitude: int, longitude: int) -> route_guide_pb2.Point:
    return route_guide_pb2.Point(latitude=latitude, longitude=longitude)


def make_rectangle(lo: route_guide_pb2.Point, hi: route_guide_pb2.Point) -> route_guide_pb2.Rectangle:
    return route_guide_pb2.Rectangle(lo=lo, hi=hi)


def make_note(message: str, latitude: int, longitude: int) -> route_guide_pb2.RouteNote:
    return route_guide_pb2.RouteNote(message=message, location=make_point(latitude, longitude))


def feature_record_to_proto(record: FeatureRecordDTO) -> route_guide_pb2.Feature:
    return route_guide_pb2.Feature(
        name=record.name,
        location=make_point(record.location.latitude, record.location.longitude),
    )
