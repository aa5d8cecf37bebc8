"""Track history and recency filtering for live aircraft."""

from .buffer import TrackBufferManager, TrackBuffers, TrackPoint, update_tracks
from .geojson import track_line_geojson, track_points_geojson, tracks_to_geojson
from .recency import age_color, filter_recent, map_center, with_position

__all__ = [
    "TrackBufferManager",
    "TrackBuffers",
    "TrackPoint",
    "age_color",
    "filter_recent",
    "map_center",
    "track_line_geojson",
    "track_points_geojson",
    "tracks_to_geojson",
    "update_tracks",
    "with_position",
]
