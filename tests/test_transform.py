import numpy as np
import pandas as pd
import pytest

from seinedata.transform import (
    aggregate_cpue,
    community_to_long,
    fourth_root,
    pivot_community,
    subset_families,
)


def _long(rows):
    return pd.DataFrame(rows, columns=["WaterYear", "WaterYearType", "Region", "Family",
                                       "CommonName", "CPUE4th"])


def test_fourth_root_basic():
    X = np.array([[0, 1, 16], [81, 256, 625]])
    Y = fourth_root(X)
    assert np.allclose(Y, [[0, 1, 2], [3, 4, 5]])


def test_fourth_root_rejects_negative():
    with pytest.raises(ValueError):
        fourth_root([1.0, -0.5])


def test_aggregate_mean_and_fourth_root(make_records):
    df = make_records([
        {"CPUE": 2.0, "StationCode": "AL1"},
        {"CPUE": 4.0, "StationCode": "AL2"},
        {"CPUE": 1.0, "Region": "BL", "StationCode": "BL1"},
    ])
    out = aggregate_cpue(df)
    assert list(out.columns) == ["WaterYear", "WaterYearType", "Region", "Family",
                                 "CommonName", "MeanCPUE", "CPUE4th"]
    al = out.loc[out["Region"] == "AL"].iloc[0]
    assert al["MeanCPUE"] == pytest.approx(3.0)
    assert al["CPUE4th"] == pytest.approx(1.316074, abs=1e-6)
    assert len(out) == 2


def test_aggregate_adds_no_zero_rows(make_records):
    df = make_records([
        {"CommonName": "Bluegill"},
        {"CommonName": "Splittail", "Family": "Cyprinidae", "Region": "BL", "StationCode": "BL1"},
    ])
    out = aggregate_cpue(df)
    assert len(out) == 2
    assert (out["MeanCPUE"] > 0).all()


def test_subset_families():
    df = _long([
        (2012, "Dry", "AL", "Centrarchidae", "Bluegill", 1.0),
        (2012, "Dry", "AL", "Cyprinidae", "Splittail", 1.0),
        (2012, "Dry", "AL", "Atherinopsidae", "Mississippi Silverside", 1.0),
    ])
    out = subset_families(df, ("Cyprinidae", "Centrarchidae"))
    assert out["CommonName"].tolist() == ["Bluegill", "Splittail"]


def test_pivot_zero_fill_and_shape():
    df = _long([
        (2012, "Dry", "BL", "Cyprinidae", "Splittail", 1.2),
        (2012, "Dry", "AL", "Centrarchidae", "Bluegill", 1.5),
        (2013, "Wet", "AL", "Centrarchidae", "Bluegill", 1.1),
        (2013, "Wet", "AL", "Cyprinidae", "Golden Shiner", 0.9),
    ])
    wide = pivot_community(df)
    assert wide.shape == (3, 3)
    assert wide.index.names == ["WaterYear", "WaterYearType", "Region"]
    assert wide.index.is_monotonic_increasing
    # first-seen order of taxa
    assert list(wide.columns) == ["Splittail", "Bluegill", "Golden Shiner"]
    assert wide.loc[(2012, "Dry", "AL"), "Splittail"] == 0.0
    assert wide.loc[(2013, "Wet", "AL"), "Golden Shiner"] == pytest.approx(0.9)
    assert (wide.to_numpy() >= 0).all()


def test_pivot_duplicate_site_taxon_raises():
    df = _long([
        (2012, "Dry", "AL", "Centrarchidae", "Bluegill", 1.5),
        (2012, "Dry", "AL", "Centrarchidae", "Bluegill", 1.2),
    ])
    with pytest.raises(ValueError):
        pivot_community(df)


def test_pivot_empty_raises():
    with pytest.raises(ValueError):
        pivot_community(_long([]))


def test_pivot_round_trip():
    df = _long([
        (2012, "Dry", "BL", "Cyprinidae", "Splittail", 1.2),
        (2012, "Dry", "AL", "Centrarchidae", "Bluegill", 1.5),
        (2013, "Wet", "AL", "Centrarchidae", "Bluegill", 1.1),
        (2013, "Wet", "AL", "Cyprinidae", "Golden Shiner", 0.9),
    ]).drop(columns="Family")
    keys = ["WaterYear", "WaterYearType", "Region", "CommonName"]

    back = community_to_long(pivot_community(df))

    expected = df.sort_values(keys).reset_index(drop=True)
    got = back.sort_values(keys).reset_index(drop=True)
    pd.testing.assert_frame_equal(got, expected, check_dtype=False)
