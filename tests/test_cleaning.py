import pandas as pd
import pytest

from seinedata.cleaning import (
    PROFILES,
    clean_seine_records,
    correction_mask,
    find_duplicate_samples,
    get_profile,
    normalize_columns,
)
from seinedata.config import NON_FISH_TAXA


def test_normalize_columns_big_camel():
    df = pd.DataFrame(columns=["Sample Date", "water_year", "WaterYearType", "CPUE", "common name"])
    out = normalize_columns(df)
    assert list(out.columns) == ["SampleDate", "WaterYear", "WaterYearType", "Cpue", "CommonName"]


def test_clean_drops_excluded_rows(make_records):
    df = make_records([
        {},                                                   # kept
        {"CommonName": "Siberian Prawn", "Family": "Palaemonidae"},
        {"CommonName": "Mississippi Grass Shrimp", "Family": "Palaemonidae"},
        {"CPUE": 0.0, "Count": 0.0},
        {"CPUE": float("nan")},
        {"WaterYear": 2010, "SampleDate": pd.Timestamp("2010-03-01")},
        {"Region": "N/A", "StationCode": "YB"},
    ])
    out = clean_seine_records(df)
    assert len(out) == 1
    assert out.loc[0, "CommonName"] == "Bluegill"


def test_clean_output_properties(make_records):
    df = make_records([
        {"CPUE": 1.0},
        {"CPUE": 3.5, "Region": "BL", "StationCode": "BL1"},
        {"CPUE": 0.0},
        {"WaterYear": 2009},
        {"CommonName": "Siberian Prawn"},
        {"Region": "N/A"},
    ])
    out = clean_seine_records(df)
    assert (out["CPUE"] > 0).all()
    assert (out["WaterYear"] > 2010).all()
    assert not out["CommonName"].isin(NON_FISH_TAXA).any()
    assert set(out["Region"]) <= {"AL", "BL"}


def test_inland_silverside_renamed(make_records):
    df = make_records([{"CommonName": "Inland Silverside", "Family": "Atherinopsidae"}])
    out = clean_seine_records(df)
    assert out["CommonName"].tolist() == ["Mississippi Silverside"]


def test_correction_entries_removed(make_records):
    day = pd.Timestamp("2011-06-27")
    bl5 = dict(SampleDate=day, WaterYear=2011, WaterYearType="Wet",
               StationCode="BL5", Region="BL", Family="Cyprinidae")
    df = make_records([
        {**bl5, "CommonName": "Splittail", "Count": 6.0, "CPUE": 1.5},  # correction entry
        {**bl5, "CommonName": "Splittail", "Count": 5.0, "CPUE": 1.25},  # different count, kept
        {**bl5, "CommonName": "Splittail", "Count": 6.0, "CPUE": 1.5, "StationCode": "BL4"},
    ])
    out = clean_seine_records(df)
    assert len(out) == 2
    assert not ((out["StationCode"] == "BL5") & (out["Count"] == 6.0)).any()


def test_corrections_see_renamed_taxa(make_records):
    # Recorded as Inland Silverside; the correction table uses the new name.
    df = make_records([{
        "SampleDate": pd.Timestamp("2011-06-27"), "WaterYear": 2011, "WaterYearType": "Wet",
        "StationCode": "BL5", "Region": "BL", "Family": "Atherinopsidae",
        "CommonName": "Inland Silverside", "Count": 1.0, "CPUE": 0.25,
    }, {}])
    out = clean_seine_records(df)
    assert "Mississippi Silverside" not in out["CommonName"].tolist()
    assert len(out) == 1


def test_correction_mask_matches_whole_tuple(make_records):
    df = make_records([
        {"SampleDate": pd.Timestamp("2016-02-03"), "WaterYear": 2016,
         "StationCode": "BL1", "Region": "BL", "CommonName": "Bluegill", "Count": 1.0},
        {"SampleDate": pd.Timestamp("2016-02-04"), "WaterYear": 2016,
         "StationCode": "BL1", "Region": "BL", "CommonName": "Bluegill", "Count": 1.0},
    ])
    assert correction_mask(df).tolist() == [True, False]


def test_exact_duplicates_removed(make_records):
    df = make_records([{}, {}, {"CPUE": 4.0}])
    out = clean_seine_records(df)
    assert len(out) == 2


def test_clean_is_idempotent(make_records):
    df = make_records([
        {},
        {"CommonName": "Inland Silverside", "Family": "Atherinopsidae"},
        {"Region": "BL", "StationCode": "BL2", "CPUE": 0.7},
        {"CommonName": "Siberian Prawn"},
    ])
    once = clean_seine_records(df)
    twice = clean_seine_records(once)
    pd.testing.assert_frame_equal(once, twice)


def test_negative_cpue_rejected(make_records):
    df = make_records([{"CPUE": -1.0}])
    with pytest.raises(ValueError):
        clean_seine_records(df)


def test_empty_result_raises(make_records):
    df = make_records([{"CPUE": 0.0}])
    with pytest.raises(ValueError):
        clean_seine_records(df)


def test_find_duplicate_samples(make_records):
    df = make_records([{"CPUE": 1.0}, {"CPUE": 2.0}, {"StationCode": "AL2"}])
    dups = find_duplicate_samples(df)
    assert len(dups) == 1
    assert dups.loc[0, "StationCode"] == "AL1"
    assert dups.loc[0, "n"] == 2


def test_find_duplicate_samples_missing_key(make_records):
    with pytest.raises(KeyError):
        find_duplicate_samples(make_records([{}]), keys=["SampleDate", "Gear"])


def test_2019_profile(make_records):
    df = make_records([
        {"WaterYear": 2005},
        {"CPUE": 0.0, "Count": 0.0},
        {"CommonName": "NoCatch", "Family": None},
        {"CommonName": "Inland Silverside", "Family": "Atherinopsidae"},
    ])
    out = clean_seine_records(df, "cpue-all-2019")
    assert len(out) == 3
    assert "NoCatch" not in out["CommonName"].tolist()
    assert "Inland Silverside" in out["CommonName"].tolist()
    assert 2005 in out["WaterYear"].tolist()


def test_get_profile():
    assert get_profile("bseine-raw-2023") is PROFILES["bseine-raw-2023"]
    prof = PROFILES["cpue-all-2019"]
    assert get_profile(prof) is prof
    with pytest.raises(ValueError):
        get_profile("bseine-2099")


def test_duplicate_report_uses_filtered_records(make_records):
    df = make_records([
        {"CPUE": 1.0},
        {"CPUE": 2.0},                                     # same event, kept
        {"WaterYear": 2009, "CPUE": 1.0},
        {"WaterYear": 2009, "CPUE": 2.0},                  # dropped by year
        {"CommonName": "Siberian Prawn", "CPUE": 1.0},
        {"CommonName": "Siberian Prawn", "CPUE": 2.0},     # dropped taxon
    ])
    cleaned, dups = clean_seine_records(df, with_duplicates=True)
    assert len(cleaned) == 2
    assert len(dups) == 1
    assert dups.loc[0, "WaterYear"] == 2012
    assert dups.loc[0, "CommonName"] == "Bluegill"
