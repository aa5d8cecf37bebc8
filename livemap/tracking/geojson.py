"""GeoJSON conversion for track buffers and detailed aircraft tracks."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from livemap.models.aircraft import TrackPosition
from livemap.tracking.buffer import TrackPoint


def _feature_collection(features: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


def tracks_to_geojson(buffers: Mapping[str, Sequence[TrackPoint]]) -> dict[str, Any]:
    """One LineString per buffer; a single point is not a drawable line."""

    features = []
    for icao24, points in buffers.items():
        if len(points) < 2:
            continue
        features.append(
            {
                "type": "Feature",
                "properties": {"icao24": icao24},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[p.longitude, p.latitude] for p in points],
                },
            }
        )
    return _feature_collection(features)


def _valid_positions(positions: Iterable[TrackPosition]) -> list[TrackPosition]:
    return [
        pos for pos in positions if pos.longitude is not None and pos.latitude is not None
    ]


def track_line_geojson(
    icao24: str, positions: Iterable[TrackPosition]
) -> dict[str, Any]:
    coordinates = [[pos.longitude, pos.latitude] for pos in _valid_positions(positions)]
    if len(coordinates) < 2:
        return _feature_collection([])

    return _feature_collection(
        [
            {
                "type": "Feature",
                "properties": {"icao24": icao24},
                "geometry": {"type": "LineString", "coordinates": coordinates},
            }
        ]
    )


def track_points_geojson(
    icao24: str, positions: Iterable[TrackPosition]
) -> dict[str, Any]:
    features = [
        {
            "type": "Feature",
            "properties": {"icao24": icao24, "timestamp": pos.timestamp, "index": index},
            "geometry": {"type": "Point", "coordinates": [pos.longitude, pos.latitude]},
        }
        for index, pos in enumerate(_valid_positions(positions))
    ]
    return _feature_collection(features)


__all__ = ["track_line_geojson", "track_points_geojson", "tracks_to_geojson"]
