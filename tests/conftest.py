import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

BASE_RECORD = dict(
    SampleDate=pd.Timestamp("2012-03-01"),
    WaterYear=2012,
    WaterYearType="Below Normal",
    StationCode="AL1",
    Region="AL",
    Family="Centrarchidae",
    CommonName="Bluegill",
    Count=2.0,
    CPUE=2.0,
)

WATER_YEAR_TYPES = {
    2011: "Wet", 2012: "Below Normal", 2013: "Dry", 2014: "Critical",
    2015: "Critical", 2016: "Below Normal", 2017: "Wet", 2018: "Below Normal",
}

# (CommonName, Family, mean CPUE in AL, mean CPUE in BL)
TAXA = [
    ("Bluegill", "Centrarchidae", 6.0, 0.5),
    ("Largemouth Bass", "Centrarchidae", 3.0, 0.2),
    ("Green Sunfish", "Centrarchidae", 1.5, 0.0),
    ("Golden Shiner", "Cyprinidae", 0.3, 2.5),
    ("Sacramento Pikeminnow", "Cyprinidae", 0.0, 4.0),
    ("Splittail", "Cyprinidae", 0.4, 6.0),
    ("Inland Silverside", "Atherinopsidae", 2.0, 2.0),
    ("Siberian Prawn", "Palaemonidae", 5.0, 5.0),
]


@pytest.fixture
def make_records():
    """Build normalized seine records from partial rows; unspecified columns take BASE_RECORD values."""
    def _make(rows):
        df = pd.DataFrame([{**BASE_RECORD, **row} for row in rows], columns=list(BASE_RECORD))
        df["WaterYear"] = df["WaterYear"].astype("int64")
        df["Count"] = df["Count"].astype(float)
        df["CPUE"] = df["CPUE"].astype(float)
        return df
    return _make


def _community_index(years):
    tuples = [(y, WATER_YEAR_TYPES[y], r) for y in years for r in ("AL", "BL")]
    return pd.MultiIndex.from_tuples(tuples, names=["WaterYear", "WaterYearType", "Region"])


@pytest.fixture
def community():
    """12 sites x 6 taxa; AL sites dominated by centrarchids, BL sites by cyprinids."""
    rng = np.random.default_rng(1)
    index = _community_index(range(2011, 2017))
    al = np.array([1.5, 1.2, 1.0, 0.1, 0.0, 0.1])
    bl = al[::-1]
    rows = [(al if region == "AL" else bl) + rng.uniform(0.0, 0.2, size=6)
            for _, _, region in index]
    columns = pd.Index(["Bluegill", "Largemouth Bass", "Green Sunfish",
                        "Golden Shiner", "Sacramento Pikeminnow", "Splittail"], name="CommonName")
    return pd.DataFrame(np.vstack(rows), index=index, columns=columns)


@pytest.fixture
def raw_seine_csv(tmp_path):
    """
    A small raw export: 8 water years, 2 regions, 2 stations each, 3 hauls per
    station and year. Includes rows the cleaning has to drop (prawns, N/A region,
    2009 hauls, zero catches).
    """
    rng = np.random.default_rng(7)
    rows = []
    stations = {"AL": ("AL1", "AL2"), "BL": ("BL1", "BL2"), "N/A": ("YB",)}
    for year in [2009] + list(WATER_YEAR_TYPES):
        wyt = WATER_YEAR_TYPES.get(year, "Dry")
        for region, codes in stations.items():
            for code in codes:
                for month in (3, 5, 7):
                    date = f"{year}-{month:02d}-1{rng.integers(0, 9)}"
                    for name, family, mean_al, mean_bl in TAXA:
                        mean = mean_al if region == "AL" else mean_bl
                        cpue = float(np.round(rng.gamma(2.0, mean / 2.0), 3)) if mean > 0 else 0.0
                        count = max(int(round(cpue * 4)), 0)
                        rows.append({
                            "SampleDate": date,
                            "WaterYear": year,
                            "WaterYearType": wyt,
                            "StationCode": code,
                            "Region": region,
                            "Family": family,
                            "CommonName": name,
                            "Count": count,
                            "CPUE": cpue,
                        })
    path = tmp_path / "Bseine_Raw.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path
