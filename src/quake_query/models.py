"""Result objects for FDSN event queries in GeoJSON format."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from quake_query.errors import DeserializationError


def _expect(value: Any, kind: type | tuple[type, ...], name: str) -> Any:
    """Return value unchanged if it is None or of the given kind."""
    if value is not None and not isinstance(value, kind):
        raise DeserializationError(
            f"'{name}' has unexpected type {type(value).__name__}"
        )
    return value


def _expect_number(value: Any, name: str) -> Any:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool):
        raise DeserializationError(f"'{name}' has unexpected type bool")
    return _expect(value, (int, float), name)


def _number_list(values: list, name: str) -> tuple[float, ...]:
    return tuple(_expect_number(v, f"{name}[{i}]") for i, v in enumerate(values))


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


@dataclass(frozen=True)
class Geometry:
    """Coordinate representation of an event, usually a Point."""

    type: str | None = None
    coordinates: tuple[float, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> Geometry:
        coords = _expect(data.get("coordinates"), list, "geometry.coordinates") or []
        return cls(
            type=_expect(data.get("type"), str, "geometry.type"),
            coordinates=_number_list(coords, "geometry.coordinates"),
        )

    def to_dict(self) -> dict:
        d: dict[str, Any] = {}
        if self.type is not None:
            d["type"] = self.type
        if self.coordinates:
            d["coordinates"] = list(self.coordinates)
        return d


@dataclass(frozen=True)
class Metadata:
    generated: int | None = None
    url: str | None = None
    title: str | None = None
    status: int | None = None
    api: str | None = None
    count: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Metadata:
        return cls(
            generated=_expect_number(data.get("generated"), "metadata.generated"),
            url=_expect(data.get("url"), str, "metadata.url"),
            title=_expect(data.get("title"), str, "metadata.title"),
            status=_expect_number(data.get("status"), "metadata.status"),
            api=_expect(data.get("api"), str, "metadata.api"),
            count=_expect_number(data.get("count"), "metadata.count"),
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class Feature:
    """A single earthquake event from the catalog.

    ``properties`` is a read-only view of the attributes returned by the server.
    The accessors below read the common USGS attributes and return None when
    an attribute is absent or not a number where one is expected.
    """

    type: str | None
    properties: Mapping[str, Any] = field(hash=False)
    geometry: Geometry
    id: str | None

    @classmethod
    def from_dict(cls, data: dict) -> Feature:
        props = _expect(data.get("properties"), dict, "feature.properties") or {}
        geom = _expect(data.get("geometry"), dict, "feature.geometry") or {}
        return cls(
            type=_expect(data.get("type"), str, "feature.type"),
            properties=MappingProxyType(dict(props)),
            geometry=Geometry.from_dict(geom),
            id=_expect(data.get("id"), str, "feature.id"),
        )

    @property
    def magnitude(self) -> float | None:
        return _as_number(self.properties.get("mag"))

    @property
    def place(self) -> str | None:
        place = self.properties.get("place")
        return place if isinstance(place, str) else None

    @property
    def time(self) -> datetime | None:
        ms = _as_number(self.properties.get("time"))
        if ms is None:
            return None
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)

    def _coordinate(self, index: int) -> float | None:
        coords = self.geometry.coordinates
        return coords[index] if len(coords) > index else None

    @property
    def longitude(self) -> float | None:
        return self._coordinate(0)

    @property
    def latitude(self) -> float | None:
        return self._coordinate(1)

    @property
    def depth(self) -> float | None:
        return self._coordinate(2)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "properties": dict(self.properties),
            "geometry": self.geometry.to_dict(),
        }
        if self.type is not None:
            d["type"] = self.type
        if self.id is not None:
            d["id"] = self.id
        return d


@dataclass(frozen=True)
class QueryResult:
    """Root of a query response: metadata plus the matching features.

    ``metadata.count`` is reported by the server and is not checked against
    ``len(features)``.
    """

    type: str | None
    metadata: Metadata
    features: tuple[Feature, ...] = ()
    bbox: tuple[float, ...] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> QueryResult:
        if not isinstance(data, dict):
            raise DeserializationError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        meta = _expect(data.get("metadata"), dict, "metadata") or {}
        raw_features = _expect(data.get("features"), list, "features") or []
        bbox = _expect(data.get("bbox"), list, "bbox")
        if bbox is not None and len(bbox) > 6:
            raise DeserializationError(f"'bbox' has {len(bbox)} values, expected at most 6")

        features = []
        for i, raw in enumerate(raw_features):
            if not isinstance(raw, dict):
                raise DeserializationError(
                    f"features[{i}] has unexpected type {type(raw).__name__}"
                )
            features.append(Feature.from_dict(raw))

        return cls(
            type=_expect(data.get("type"), str, "type"),
            metadata=Metadata.from_dict(meta),
            features=tuple(features),
            bbox=_number_list(bbox, "bbox") if bbox is not None else None,
        )

    @classmethod
    def from_json(cls, raw: str) -> QueryResult:
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise DeserializationError(f"Response is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "metadata": self.metadata.to_dict(),
            "features": [f.to_dict() for f in self.features],
        }
        if self.type is not None:
            d["type"] = self.type
        if self.bbox is not None:
            d["bbox"] = list(self.bbox)
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
