from __future__ import annotations
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
OUTPUT = ROOT / "output"

# raw beach seine export (adjust to yours)
RAW_SEINE_CSV = DATA / "Bseine_Raw.csv"

# keys
SITE_KEYS = ["WaterYear", "WaterYearType", "Region"]  # one row of the community matrix
AGG_KEYS = SITE_KEYS + ["Family", "CommonName"]
DUPLICATE_KEYS = ["SampleDate", "WaterYear", "WaterYearType", "StationCode", "Region", "CommonName"]

# Above Lisbon / Below Lisbon
REGIONS = ("AL", "BL")

# cleaning rules
NON_FISH_TAXA = ("Siberian Prawn", "Mississippi Grass Shrimp")
TAXON_RENAMES = {"Inland Silverside": "Mississippi Silverside"}
MIN_WATER_YEAR = 2011

# community subset
FAMILIES_OF_INTEREST = ("Cyprinidae", "Centrarchidae")

# ordination / tests (vegan defaults)
DISTANCE_METRIC = "braycurtis"
NMDS_DIMENSIONS = 3
NMDS_TRYMAX = 200
PERMANOVA_PERMUTATIONS = 999
ANOSIM_PERMUTATIONS = 10000
GROUPINGS = ("Region", "WaterYearType")
REQUIRED_GROUPING = "Region"  # other groupings are skipped when they cannot be tested
SEED = 0

# figures
FIG_WIDTH_IN = 4
FIG_HEIGHT_IN = 3
FIG_DPI = 300  # ggsave dpi="print"
FACET_FIG_WIDTH_IN = 8
FACET_FIG_HEIGHT_IN = 6
ELLIPSE_LEVEL = 0.50
NMDS_TITLE = "NMDS - Centrarchids and Cyprinids - 2011-2019"
