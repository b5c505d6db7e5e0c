import pytest

from domain.common.exceptions import FeatureDatasetLoadException
from infrastructure.repositories.feature_repository import JsonFeatureRepository
from shared.codes import BusinessCode


def test_load_valid_dataset(feature_db, sample_records):
    records = JsonFeatureRepository(feature_db(sample_records)).load()

    assert len(records) == 3
    assert records[0].name == "Patriots Path, Mendham, NJ 07945, USA"
    assert records[0].location.latitude == 407838351
    assert records[0].location.longitude == -746143763
    assert records[2].name == ""


def test_missing_name_defaults_to_empty(feature_db):
    records = JsonFeatureRepository(feature_db([{"location": {"latitude": 1, "longitude": 2}}])).load()
    assert records[0].name == ""


def test_missing_file(tmp_path):
    with pytest.raises(FeatureDatasetLoadException) as ei:
        JsonFeatureRepository(tmp_path / "nope.json").load()
    assert ei.value.code == BusinessCode.DATASET_LOAD_ERROR
    assert ei.value.field == "db_path"


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(FeatureDatasetLoadException) as ei:
        JsonFeatureRepository(path).load()
    assert "invalid JSON" in ei.value.message


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "not a list"},
        [{"name": "no location"}],
        [{"name": "bad latitude", "location": {"latitude": "north", "longitude": 1}}],
        [{"name": "float latitude", "location": {"latitude": 40.5, "longitude": 1}}],
        [{"name": "beyond int32", "location": {"latitude": 3000000000, "longitude": 1}}],
        [{"name": "below int32", "location": {"latitude": 1, "longitude": -2147483649}}],
    ],
)
def test_malformed_records(feature_db, payload):
    with pytest.raises(FeatureDatasetLoadException) as ei:
        JsonFeatureRepository(feature_db(payload)).load()
    assert "malformed record" in ei.value.message


def test_empty_dataset_loads_as_empty_list(feature_db):
    assert JsonFeatureRepository(feature_db([])).load() == []


def test_int32_bounds_are_accepted(feature_db):
    records = JsonFeatureRepository(feature_db([
        {"name": "edge", "location": {"latitude": 2147483647, "longitude": -2147483648}},
    ])).load()
    assert (records[0].location.latitude, records[0].location.longitude) == (2147483647, -2147483648)
