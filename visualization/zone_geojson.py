"""
Zone GeoJSON — export PFZ polygons and CHE hypoxia zones as a GeoJSON
FeatureCollection for map layers.
"""

import json

from shapely.geometry import Polygon, mapping


def _iso(ts):
    return ts.isoformat() if hasattr(ts, "isoformat") else ts


def zone_feature(polygon) -> dict:
    """One PFZPolygon → GeoJSON Feature (geometry + display properties)."""
    geom = Polygon(polygon.boundary)
    return {
        "type": "Feature",
        "id": polygon.id,
        "geometry": mapping(geom),
        "properties": {
            "id": polygon.id,
            "species": list(polygon.species),
            "dominant_species": polygon.dominant_species,
            "potential": polygon.potential,
            "mean_hsi": round(polygon.mean_hsi, 4),
            "max_hsi": round(polygon.max_hsi, 4),
            "area_km2": round(polygon.area_km2, 2),
            "confidence": round(polygon.confidence, 3),
            "nearest_port": polygon.nearest_port,
            "distance_to_shore_km": round(polygon.distance_to_shore_km, 1),
            "estimated_travel_time_hours": polygon.estimated_travel_time_hours,
            "cell_count": polygon.cell_count,
            "timestamp": _iso(polygon.timestamp),
        },
    }


def zones_to_geojson(polygons) -> dict:
    """
    Args:
        polygons: iterable of PFZPolygon

    Returns:
        GeoJSON FeatureCollection dict (rings closed, lon/lat order)
    """
    return {
        "type": "FeatureCollection",
        "features": [zone_feature(p) for p in polygons],
    }


def hypoxia_zones_to_geojson(zones: list[dict]) -> dict:
    """Same export for the dicts returned by extract_hypoxia_zones()."""
    features = []
    for i, z in enumerate(zones):
        props = {k: v for k, v in z.items() if k not in ("boundary", "centroid")}
        props["centroid"] = [z["centroid"].lon, z["centroid"].lat]
        features.append({
            "type": "Feature",
            "id": f"HYP-{i}",
            "geometry": mapping(Polygon(z["boundary"])),
            "properties": props,
        })
    return {"type": "FeatureCollection", "features": features}


def write_geojson(collection: dict, path: str) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(collection, fh, indent=2)
