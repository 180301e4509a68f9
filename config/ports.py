"""
Fishing ports and synthetic productivity hotspots for the Indian EEZ.

PORTS is a placeholder gazetteer used for "nearest port" advisories.
SYNTHETIC_HOTSPOTS drive the synthetic ocean provider; each one carries the
water-mass character that its Gaussian blob pulls local conditions toward.
"""

PORTS = [
    {"name": "Mumbai",        "lat": 18.94, "lon": 72.84},
    {"name": "Kochi",         "lat": 9.97,  "lon": 76.27},
    {"name": "Chennai",       "lat": 13.08, "lon": 80.27},
    {"name": "Visakhapatnam", "lat": 17.69, "lon": 83.22},
    {"name": "Goa",           "lat": 15.49, "lon": 73.83},
]

SYNTHETIC_HOTSPOTS = [
    # ── West coast ─────────────────────────────────────────────────────────
    {
        "name": "Kerala Coast",
        "lat": 9.5, "lon": 75.5, "radius": 1.8, "intensity": 0.98,
        # coastal upwelling — mackerel grounds
        "target": {"sst": 27.5, "chlorophyll": 1.6, "depth": 40.0, "dissolved_oxygen": 6.5},
    },
    {
        "name": "Mumbai Offshore",
        "lat": 18.5, "lon": 71.5, "radius": 1.5, "intensity": 0.95,
        "target": {"sst": 26.5, "chlorophyll": 3.0, "depth": 28.0, "dissolved_oxygen": 6.5},
    },
    {
        "name": "Goa Waters",
        "lat": 15.2, "lon": 72.8, "radius": 1.2, "intensity": 0.92,
        "target": {"sst": 25.5, "chlorophyll": 0.9, "depth": 60.0, "dissolved_oxygen": 6.0},
    },
    {
        "name": "Lakshadweep",
        "lat": 11.5, "lon": 72.0, "radius": 1.4, "intensity": 0.88,
        # oceanic, oligotrophic
        "target": {"sst": 27.0, "chlorophyll": 0.3, "depth": 200.0, "dissolved_oxygen": 6.0},
    },
    # ── South / east ───────────────────────────────────────────────────────
    {
        "name": "Sri Lanka Basin",
        "lat": 8.0, "lon": 79.5, "radius": 2.0, "intensity": 0.96,
        "target": {"sst": 25.5, "chlorophyll": 0.15, "depth": 400.0, "dissolved_oxygen": 6.0},
    },
    {
        "name": "Vizag Offshore",
        "lat": 17.5, "lon": 84.0, "radius": 1.6, "intensity": 0.90,
        "target": {"sst": 25.0, "chlorophyll": 0.8, "depth": 60.0, "dissolved_oxygen": 6.0},
    },
]
