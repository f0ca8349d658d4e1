"""Tests for the KmlFolder, KmlFeature and ParseResult models."""

from __future__ import annotations

import pytest

from kml_geojson.models import GeometryType, KmlFeature, KmlFolder, ParseResult


def _feature(folder_id: str | None = "f1") -> KmlFeature:
    return KmlFeature(
        id="a",
        geometry_type=GeometryType.LINE_STRING,
        coordinates=[[0.0, 0.0], [1.0, 1.0]],
        properties={"name": "n", "description": "", "folder_id": folder_id, "line-width": 2.0},
    )


class TestKmlFolder:
    def test_round_trip(self) -> None:
        folder = KmlFolder(folder_id="f2", name="Child", parent_folder_id="f1")
        assert KmlFolder.from_dict(folder.to_dict()) == folder

    def test_from_dict_requires_id(self) -> None:
        with pytest.raises(TypeError, match="folder_id"):
            KmlFolder.from_dict({"name": "x"})


class TestKmlFeature:
    def test_geojson_mapping(self) -> None:
        assert _feature().to_dict() == {
            "type": "Feature",
            "id": "a",
            "geometry": {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0]]},
            "properties": {"name": "n", "description": "", "folder_id": "f1", "line-width": 2.0},
        }

    def test_from_dict(self) -> None:
        assert KmlFeature.from_dict(_feature().to_dict()) == _feature()

    def test_from_dict_rejects_unknown_geometry(self) -> None:
        with pytest.raises(ValueError):
            KmlFeature.from_dict({"geometry": {"type": "MultiPoint", "coordinates": []}})

    def test_from_dict_rejects_missing_geometry(self) -> None:
        with pytest.raises(TypeError, match="geometry"):
            KmlFeature.from_dict({"properties": {}})


class TestParseResult:
    def test_to_dict(self) -> None:
        result = ParseResult(
            folders=[KmlFolder(folder_id="f1", name="Top")],
            features=[_feature()],
        )
        output = result.to_dict()
        assert output["folders"] == [{"folder_id": "f1", "name": "Top", "parent_folder_id": None}]
        assert output["geojson"] == {
            "type": "FeatureCollection",
            "features": [_feature().to_dict()],
        }

    def test_features_in_folder(self) -> None:
        inside, outside = _feature("f1"), _feature(None)
        result = ParseResult(features=[inside, outside])
        assert result.features_in_folder("f1") == [inside]
        assert result.features_in_folder(None) == [outside]

    def test_empty(self) -> None:
        assert ParseResult().geojson == {"type": "FeatureCollection", "features": []}
