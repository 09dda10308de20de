"""
Literal corrections to the beach seine record, kept as versioned tables.

Every entry is a (SampleDate, CommonName, StationCode, Count) tuple that was
identified by hand as a duplicate sample or a gear-failure event. Rows matching
an entry exactly are removed during cleaning.

- CORRECTION_TABLES maps a table version to its entries.
- DEFAULT_VERSION is the table applied by the default cleaning profile.
"""
from __future__ import annotations
from typing import NamedTuple

import pandas as pd


class Correction(NamedTuple):
    sample_date: str
    common_name: str
    station_code: str
    count: int
    reason: str


_GEAR_RESAMPLE = "AEU resample on 2011-06-27 due to gear issue"

CORRECTION_TABLES: dict[str, tuple[Correction, ...]] = {
    "2023-01-19": (
        Correction("2011-06-27", "Bigscale Logperch", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Golden Shiner", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Mississippi Silverside", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Sacramento Pikeminnow", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Shimofuri Goby", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Splittail", "BL5", 6, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Striped Bass", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2011-06-27", "Tule Perch", "BL5", 1, _GEAR_RESAMPLE),
        Correction("2016-02-03", "Bluegill", "BL1", 1, "duplicate entry"),
        Correction("2017-04-27", "Chinook Salmon", "BL5", 3, "Chinook recorded with count of 3"),
    ),
}

DEFAULT_VERSION = "2023-01-19"


def get_corrections(version: str = DEFAULT_VERSION) -> tuple[Correction, ...]:
    """Return the correction entries for a table version."""
    try:
        return CORRECTION_TABLES[version]
    except KeyError:
        raise ValueError(
            f"Unknown correction table version: {version}. "
            f"Available: {sorted(CORRECTION_TABLES)}"
        ) from None


def corrections_frame(version: str = DEFAULT_VERSION) -> pd.DataFrame:
    """
    Correction table as a DataFrame with the record's column names.

    SampleDate is parsed to datetime so it compares directly with cleaned records.
    """
    rows = get_corrections(version)
    df = pd.DataFrame(
        [r._asdict() for r in rows],
        columns=["sample_date", "common_name", "station_code", "count", "reason"],
    ).rename(columns={
        "sample_date": "SampleDate",
        "common_name": "CommonName",
        "station_code": "StationCode",
        "count": "Count",
        "reason": "Reason",
    })
    df["SampleDate"] = pd.to_datetime(df["SampleDate"])
    df["Count"] = df["Count"].astype(float)
    return df
