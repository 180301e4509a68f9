"""
Global constants for PFZWatch.

Thresholds, grid defaults and Coastal Health Engine (CHE) model weights.
Kept as plain data so a deployment can tune them without touching the
scoring pipeline.
"""

# ═══════════════════════════════════════════════════════════════════════════
# Habitat Suitability Index (HSI)
# ═══════════════════════════════════════════════════════════════════════════
HSI_THRESHOLDS = {
    "high": 0.7,
    "medium": 0.5,
    "low": 0.3,
}

# Default cut used when turning an HSI grid into fishing-zone polygons
PFZ_EXTRACTION_THRESHOLD = 0.65

MIN_PFZ_AREA_KM2 = 10

# Cells closer than CLUSTER_RADIUS_FACTOR × resolution belong to one zone
CLUSTER_RADIUS_FACTOR = 2.5
POLYGON_PADDING_FACTOR = 0.5
KM_PER_DEGREE = 111

# Above this many candidate cells, clustering switches to a KD-tree
KDTREE_MIN_CELLS = 2000

POTENTIAL_TIERS = {
    "high":   {"min_hsi": 0.8, "color": "#ef4444", "label": "High Potential"},
    "medium": {"min_hsi": 0.6, "color": "#f59e0b", "label": "Medium Potential"},
    "low":    {"min_hsi": 0.0, "color": "#3b82f6", "label": "Low Potential"},
}

# (factor, plausible min, plausible max, multiplier when outside)
CONFIDENCE_RULES = [
    ("sst",              15.0, 35.0,  0.7),
    ("chlorophyll",       0.0, 50.0,  0.7),
    ("dissolved_oxygen",  0.0, 15.0,  0.7),
    ("depth",            10.0, 500.0, 0.9),  # satellite coverage thins out
]
CONFIDENCE_FLOOR = 0.3

NEUTRAL_SUITABILITY = 0.5

LOCATION_RECOMMENDATIONS = [
    (0.8, "Excellent fishing conditions. Strong catch potential."),
    (0.6, "Good conditions. Moderate catch expected."),
    (0.4, "Fair conditions. Consider alternative locations."),
    (0.0, "Poor conditions. Not recommended for fishing."),
]

# ═══════════════════════════════════════════════════════════════════════════
# Forecast region
# ═══════════════════════════════════════════════════════════════════════════
DEFAULT_PFZ_BOUNDS = {
    "min_lat": 8.0,
    "max_lat": 22.0,
    "min_lon": 68.0,
    "max_lon": 88.0,
}
DEFAULT_GRID_RESOLUTION = 0.5   # degrees
MAX_GRID_RESOLUTION = 0.3       # grids are never coarser than this

COASTLINE_LON = 73.0            # approximate Indian west coast
VESSEL_SPEED_KMH = 18.5         # ~10 knots

MAX_COMPARISON_SPECIES = 3

# ═══════════════════════════════════════════════════════════════════════════
# Coastal Health Engine
# ═══════════════════════════════════════════════════════════════════════════
STANDARD_DEPTHS = (0, 2, 5, 10, 20, 30, 50, 100)  # metres

DO_CRIT = 2.0  # mg/L, hypoxia cut-off

CHE_RISK_THRESHOLDS = {
    "safe": 0.3,
    "warning": 0.6,
}

CHE_RISK_LEVELS = {
    "safe":    {"color": "#22c55e", "label": "Safe"},
    "warning": {"color": "#eab308", "label": "Warning"},
    "high":    {"color": "#ef4444", "label": "High Risk"},
}

# DZRI = σ(w1·f_hyp + w2·D_depth + w3·P + w4·S_strat + b)
DZRI_WEIGHTS = {"w1": 2.0, "w2": 1.0, "w3": 1.0, "w4": 1.0, "b": -2.0}

# PEI = σ(4·Σ αi·xi + c)
PEI_WEIGHTS = {
    "NO3": 0.25,
    "PO4": 0.20,
    "Turbidity": 0.20,
    "CDOM": 0.15,
    "Chl": 0.20,
    "c": -0.5,
}
PEI_SCALE = 4.0

ORS_TAU = 10.0  # days

NORMALIZATION_RANGES = {
    "NO3":       {"min": 0.0, "max": 50.0},  # µmol/L
    "PO4":       {"min": 0.0, "max": 3.0},   # µmol/L
    "Turbidity": {"min": 0.0, "max": 20.0},  # NTU
    "CDOM":      {"min": 0.0, "max": 2.0},   # m⁻¹
    "Chl":       {"min": 0.0, "max": 30.0},  # µg/L
}
