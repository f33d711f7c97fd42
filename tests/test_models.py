"""Tests for query result parsing."""

import json
from datetime import datetime, timezone

import pytest

from quake_query.errors import DeserializationError
from quake_query.models import Feature, Geometry, Metadata, QueryResult

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "metadata": {
        "generated": 1700000100000,
        "url": "https://earthquake.usgs.gov/fdsnws/event/1/query?format=geojson&minmagnitude=2",
        "title": "USGS Earthquakes",
        "status": 200,
        "api": "1.14.0",
        "count": 5,  # deliberately wrong
        "unknown": "ignored",
    },
    "features": [
        {
            "type": "Feature",
            "id": "us7000test1",
            "properties": {
                "mag": 4.5,
                "place": "10km NE of Somewhere",
                "time": 1700000000000,
                "url": "https://earthquake.usgs.gov/earthquakes/eventpage/us7000test1",
            },
            "geometry": {"type": "Point", "coordinates": [-118.5, 34.0, 10.0]},
        },
        {
            "type": "Feature",
            "id": "us7000test2",
            "properties": {"mag": 2.1, "place": "5km SW of Elsewhere", "time": 1699999000000},
            "geometry": {"type": "Point", "coordinates": [-117.2, 33.5, 5.5]},
        },
    ],
    "bbox": [-118.5, 33.5, 5.5, -117.2, 34.0, 10.0],
}


class TestQueryResult:
    def test_from_json(self):
        result = QueryResult.from_json(json.dumps(SAMPLE_GEOJSON))
        assert result.type == "FeatureCollection"
        assert [f.id for f in result.features] == ["us7000test1", "us7000test2"]
        assert result.bbox == (-118.5, 33.5, 5.5, -117.2, 34.0, 10.0)

    def test_metadata_fields(self):
        meta = QueryResult.from_dict(SAMPLE_GEOJSON).metadata
        assert meta.generated == 1700000100000
        assert meta.title == "USGS Earthquakes"
        assert meta.status == 200
        assert meta.api == "1.14.0"
        assert meta.url.endswith("minmagnitude=2")

    def test_count_not_cross_checked(self):
        result = QueryResult.from_dict(SAMPLE_GEOJSON)
        assert result.metadata.count == 5
        assert len(result.features) == 2

    def test_missing_bbox_is_none(self):
        result = QueryResult.from_json('{"type": "FeatureCollection", "metadata": {}, "features": []}')
        assert result.bbox is None
        assert result.features == ()

    def test_missing_features_defaults_to_empty(self):
        result = QueryResult.from_json('{"type": "FeatureCollection"}')
        assert result.features == ()
        assert result.metadata == Metadata()

    def test_single_feature_sample(self):
        body = (
            '{"type":"FeatureCollection","metadata":{},"features":'
            '[{"type":"Feature","id":"us1","properties":{},"geometry":{}}]}'
        )
        result = QueryResult.from_json(body)
        assert len(result.features) == 1
        assert result.features[0].id == "us1"
        assert result.features[0].geometry == Geometry()

    def test_not_json(self):
        with pytest.raises(DeserializationError) as exc:
            QueryResult.from_json("not json")
        assert isinstance(exc.value.__cause__, ValueError)

    @pytest.mark.parametrize("body", [
        "[]",
        '"just a string"',
        '{"features": {}}',
        '{"features": [1, 2]}',
        '{"metadata": []}',
        '{"metadata": {"count": "three"}}',
        '{"metadata": {"status": true}}',
        '{"bbox": "1,2,3,4"}',
        '{"features": [{"id": 5}]}',
        '{"features": [{"geometry": []}]}',
        '{"bbox": ["a", "b", "c", "d"]}',
        '{"bbox": [1, 2, 3, 4, 5, 6, 7]}',
        '{"bbox": [1, 2, true, 4]}',
        '{"features": [{"geometry": {"type": "Point", "coordinates": ["1", "2"]}}]}',
    ])
    def test_shape_mismatch(self, body):
        with pytest.raises(DeserializationError):
            QueryResult.from_json(body)

    def test_deeply_nested_json(self):
        with pytest.raises(DeserializationError) as exc:
            QueryResult.from_json("[" * 200000)
        assert exc.value.__cause__ is not None

    def test_bbox_with_four_values(self):
        result = QueryResult.from_json('{"bbox": [-120, 30, -110, 40]}')
        assert result.bbox == (-120, 30, -110, 40)

    def test_immutable(self):
        result = QueryResult.from_dict(SAMPLE_GEOJSON)
        with pytest.raises(AttributeError):
            result.type = "other"

    def test_to_dict_keeps_shape(self):
        result = QueryResult.from_dict(SAMPLE_GEOJSON)
        d = result.to_dict()
        assert d["type"] == "FeatureCollection"
        assert d["metadata"]["count"] == 5
        assert "unknown" not in d["metadata"]
        assert d["features"][0]["geometry"]["coordinates"] == [-118.5, 34.0, 10.0]
        assert d["bbox"] == SAMPLE_GEOJSON["bbox"]


class TestFeature:
    def test_accessors(self):
        feature = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        assert feature.magnitude == 4.5
        assert feature.place == "10km NE of Somewhere"
        assert feature.time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert (feature.longitude, feature.latitude, feature.depth) == (-118.5, 34.0, 10.0)

    def test_properties_passed_through(self):
        feature = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        assert feature.properties["url"].endswith("us7000test1")

    def test_accessors_absent(self):
        feature = Feature.from_dict({"type": "Feature", "id": "x"})
        assert feature.magnitude is None
        assert feature.place is None
        assert feature.time is None
        assert feature.depth is None
        assert feature.properties == {}

    def test_accessors_ignore_wrong_types(self):
        feature = Feature.from_dict({
            "id": "a",
            "properties": {"mag": "4.2", "time": "2024", "place": 12},
        })
        assert feature.magnitude is None
        assert feature.time is None
        assert feature.place is None
        assert feature.properties["mag"] == "4.2"

    def test_bool_is_not_a_magnitude(self):
        feature = Feature.from_dict({"properties": {"mag": True, "time": False}})
        assert feature.magnitude is None
        assert feature.time is None

    def test_properties_read_only(self):
        feature = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        with pytest.raises(TypeError):
            feature.properties["mag"] = 9.9

    def test_source_dict_not_shared(self):
        raw = {"id": "a", "properties": {"mag": 1.0}}
        feature = Feature.from_dict(raw)
        raw["properties"]["mag"] = 8.0
        assert feature.magnitude == 1.0

    def test_hashable(self):
        a = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        b = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_to_dict_serializable(self):
        feature = Feature.from_dict(SAMPLE_GEOJSON["features"][0])
        assert json.loads(json.dumps(feature.to_dict()))["properties"]["mag"] == 4.5
