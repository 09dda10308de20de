from __future__ import annotations
from pathlib import Path
import pandas as pd
from .config import OUTPUT

def save_table(df: pd.DataFrame, name: str, directory: str | Path | None = None) -> Path:
    """
    Save a DataFrame to the output directory.

    The format follows the file suffix: ".csv" writes CSV, anything else
    writes Parquet. A MultiIndex (e.g. a community matrix) is written as
    ordinary columns.

    Args:
        df: The DataFrame to save
        name: The filename (without path) for the saved file
        directory: Target directory (default: config.OUTPUT)

    Returns:
        Path: The full path to the saved file
    """
    directory = Path(directory or OUTPUT)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    out = df.reset_index() if isinstance(df.index, pd.MultiIndex) else df
    if path.suffix == ".csv":
        out.to_csv(path, index=False)
    else:
        out.to_parquet(path, index=False)
    return path

def load_table(name: str, directory: str | Path | None = None) -> pd.DataFrame:
    """
    Load a DataFrame saved by save_table.

    Args:
        name: The filename (without path) to load
        directory: Source directory (default: config.OUTPUT)

    Returns:
        pd.DataFrame: The loaded DataFrame
    """
    path = Path(directory or OUTPUT) / name
    if path.suffix == ".csv":
        return pd.read_csv(path)
    return pd.read_parquet(path)
