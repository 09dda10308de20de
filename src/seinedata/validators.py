from __future__ import annotations
import pandera as pa
from pandera import Column, DataFrameSchema, Check

from .config import NON_FISH_TAXA, REGIONS

# Required columns of a normalized raw export. Region may hold "N/A" here.
schema_raw = DataFrameSchema({
    "SampleDate": Column(pa.DateTime, nullable=False, coerce=True),
    "WaterYear": Column(int, nullable=False, coerce=True),
    "WaterYearType": Column(nullable=True),
    "StationCode": Column(nullable=False),
    "Region": Column(nullable=True),
    "Family": Column(nullable=True),
    "CommonName": Column(nullable=False),
    "Count": Column(float, nullable=True, coerce=True),
    "CPUE": Column(float, Check.ge(0), nullable=True, coerce=True),
})

schema_clean = DataFrameSchema({
    "SampleDate": Column(pa.DateTime, nullable=False, coerce=True),
    "WaterYear": Column(int, nullable=False),
    "Region": Column(checks=Check.isin(list(REGIONS)), nullable=False),
    "CommonName": Column(checks=Check.notin(list(NON_FISH_TAXA)), nullable=False),
    "CPUE": Column(float, Check.ge(0), nullable=False),
})

schema_aggregated = DataFrameSchema({
    "WaterYear": Column(int, nullable=False),
    "Region": Column(checks=Check.isin(list(REGIONS)), nullable=False),
    "CommonName": Column(nullable=False),
    "MeanCPUE": Column(float, Check.ge(0), nullable=False),
    "CPUE4th": Column(float, Check.ge(0), nullable=False),
})


def validate_raw(df):
    return schema_raw.validate(df, lazy=True)


def assert_clean(df):
    schema_clean.validate(df, lazy=True)


def assert_aggregated(df):
    schema_aggregated.validate(df, lazy=True)
