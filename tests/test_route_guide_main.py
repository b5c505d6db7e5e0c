import pytest

import route_guide_main
from application.services.sequencer import SequenceResult, SequenceState
from core.config import GrpcSettings, RouteGuideSettings, Settings, settings


def test_parse_args_defaults_come_from_settings():
    args = route_guide_main.parse_args([])
    assert args.host == settings.grpc.host
    assert args.port == settings.grpc.port
    assert args.db_path == settings.route_guide.db_path


def test_parse_args_overrides():
    args = route_guide_main.parse_args(["--db_path", "db.json", "--host", "example", "--port", "6000", "--seed", "5"])
    assert (args.db_path, args.host, args.port, args.seed) == ("db.json", "example", 6000, 5)


@pytest.mark.parametrize(
    "result, code",
    [
        (SequenceResult(SequenceState.DONE), 0),
        (SequenceResult(SequenceState.FAILED, RuntimeError("boom")), 1),
    ],
)
def test_main_exit_status(monkeypatch, result, code):
    async def fake_run(args):
        return result

    monkeypatch.setattr(route_guide_main, "run", fake_run)
    assert route_guide_main.main([]) == code


def test_settings_defaults():
    cfg = Settings().route_guide
    assert cfg.num_points == 10
    assert (cfg.delay_min_ms, cfg.delay_max_ms) == (500, 1500)
    assert Settings().grpc.target == "localhost:50051"


def test_settings_nested_env(monkeypatch):
    monkeypatch.setenv("GRPC__PORT", "6001")
    monkeypatch.setenv("ROUTE_GUIDE__NUM_POINTS", "3")
    s = Settings()
    assert s.grpc.target == "localhost:6001"
    assert s.route_guide.num_points == 3


def test_settings_reject_inverted_delay_range():
    with pytest.raises(ValueError):
        RouteGuideSettings(delay_min_ms=2000, delay_max_ms=1000)


def test_settings_ignore_unknown_keys(monkeypatch):
    monkeypatch.setenv("PROJECT_NAME", "something else")
    s = Settings(UNRELATED_FLAG="1")
    dumped = s.model_dump()
    assert "UNRELATED_FLAG" not in dumped
    assert "PROJECT_NAME" not in dumped


@pytest.mark.asyncio
async def test_run_connects_to_the_requested_endpoint(monkeypatch):
    targets = []

    class Stop(Exception):
        pass

    class RecordingClient:
        def __init__(self, target):
            targets.append(target)

        async def __aenter__(self):
            raise Stop

        async def __aexit__(self, *exc_info):
            return None

    monkeypatch.setattr(route_guide_main, "RouteGuideClient", RecordingClient)
    with pytest.raises(Stop):
        await route_guide_main.run(route_guide_main.parse_args(["--host", "example", "--port", "6000"]))

    assert targets == [GrpcSettings(host="example", port=6000).target] == ["example:6000"]
