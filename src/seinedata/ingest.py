from __future__ import annotations
import logging

import pandas as pd

from .cleaning import cast_types, normalize_columns
from .config import RAW_SEINE_CSV
from .validators import validate_raw

logger = logging.getLogger(__name__)

RAW_RENAMES = {"Cpue": "CPUE"}
RAW_TYPES = {"SampleDate": "datetime64[ns]", "CPUE": "float64", "Count": "float64"}


def read_seine_raw(path: str | None = None) -> pd.DataFrame:
    """
    Read a raw beach seine CSV export and normalize it to the record columns.

    Column names are converted to BigCamel case, "Cpue" is renamed to "CPUE",
    and the result is checked against the raw schema. A missing required column
    raises pandera's SchemaErrors.
    """
    path = path or RAW_SEINE_CSV
    df = pd.read_csv(path)
    logger.info("read %d rows from %s", len(df), path)
    df = normalize_columns(df).rename(columns=RAW_RENAMES)
    df = cast_types(df, RAW_TYPES)
    return validate_raw(df)
