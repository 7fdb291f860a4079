"""
Data processing module for the pitch-type classification analysis.

Contains the dataset loading system plus sampling, splitting, cleaning
and categorical encoding of Statcast pitch tables.
"""

import os
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from config import (
    SCHEMA_COLUMNS, ID_COLUMNS, CATEGORICAL_ALPHABETS, DATA_FILES, TARGET_COL
)

logger = logging.getLogger(__name__)


class DatasetLoadError(IOError):
    """Raised when a pitch table is absent or cannot be parsed."""


def load_dataset(path: str) -> pd.DataFrame:
    """
    Read one pitch table into a DataFrame without transforming it.

    Column names and row order are preserved exactly as in the file.

    Args:
        path (str): Location of the CSV file

    Returns:
        pd.DataFrame: The raw table

    Raises:
        DatasetLoadError: If the file is missing, unparseable, or lacks schema columns
    """
    if not os.path.isfile(path):
        raise DatasetLoadError(f"Dataset file not found: {path}")

    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Could not parse {path}: {e}") from e

    missing_cols = [col for col in SCHEMA_COLUMNS if col not in df.columns]
    if missing_cols:
        raise DatasetLoadError(f"{path} is missing columns: {', '.join(missing_cols)}")

    return df


class PitchDataSystem:
    """
    Loads the three pitch tables used by the analysis.

    Attributes:
        data_dir (str): Directory containing the CSV files
        data_files (Dict[str, str]): Dataset name -> file name
        datasets (Dict[str, pd.DataFrame]): Tables loaded so far
    """

    def __init__(self, data_dir: str = "data", data_files: Optional[Dict[str, str]] = None):
        self.data_dir = data_dir
        self.data_files = data_files if data_files is not None else DATA_FILES
        self.datasets = {}

    def load_all(self) -> Dict[str, pd.DataFrame]:
        """
        Load the regular-season, missing-data and post-season tables.

        Returns:
            Dict[str, pd.DataFrame]: Tables keyed by dataset name

        Raises:
            DatasetLoadError: If any table cannot be loaded
        """
        for name, filename in self.data_files.items():
            path = os.path.join(self.data_dir, filename)
            try:
                self.datasets[name] = load_dataset(path)
            except DatasetLoadError as e:
                logger.error(f"Error loading {name} data: {str(e)}")
                raise
            logger.info(f"Loaded {len(self.datasets[name])} {name} pitch records")

        return self.datasets


def sample_rows(df: pd.DataFrame, n: int, seed: Optional[int]) -> pd.DataFrame:
    """Draw `n` rows uniformly without replacement, keeping original index labels."""
    if n < 0 or n > len(df):
        raise ValueError(f"Cannot sample {n} rows from a dataset of {len(df)} rows")
    return df.sample(n=n, replace=False, random_state=seed)


def split_dataset(df: pd.DataFrame, ratio: float,
                  seed: Optional[int]) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Partition a dataset into estimation and validation sets.

    The estimation set holds round(ratio * len(df)) randomly chosen rows;
    the validation set holds every remaining row.

    Args:
        df (pd.DataFrame): Dataset with a unique index
        ratio (float): Share of rows assigned to the estimation set, in [0, 1]
        seed (Optional[int]): Random seed for the row selection

    Returns:
        Tuple[pd.DataFrame, pd.DataFrame]: (estimation, validation)
    """
    if not 0 <= ratio <= 1:
        raise ValueError(f"Split ratio must be between 0 and 1, got {ratio}")
    if not df.index.is_unique:
        raise ValueError("Cannot split a dataset with duplicate index labels")

    n_estimation = int(round(ratio * len(df)))
    estimation = df.sample(n=n_estimation, replace=False, random_state=seed)
    validation = df.drop(index=estimation.index)

    logger.info(f"Split {len(df)} rows into {len(estimation)} estimation "
                f"and {len(validation)} validation rows")
    return estimation, validation


def clean_dataset(df: pd.DataFrame, drop_columns: List[str] = ID_COLUMNS) -> pd.DataFrame:
    """
    Remove non-predictive columns, then every row with a missing value.

    Missing values are handled by deletion only; nothing is imputed.

    Args:
        df (pd.DataFrame): Raw pitch table
        drop_columns (List[str]): Columns to remove before the missing-value filter

    Returns:
        pd.DataFrame: Complete-case table without the dropped columns
    """
    # Unknown names raise KeyError
    trimmed = df.drop(columns=list(drop_columns))
    cleaned = trimmed.dropna()

    removed = len(trimmed) - len(cleaned)
    if removed:
        logger.info(f"Dropped {removed} of {len(trimmed)} rows with missing values")

    return cleaned


def encode_categoricals(df: pd.DataFrame,
                        alphabets: Dict[str, List[str]] = CATEGORICAL_ALPHABETS) -> pd.DataFrame:
    """
    Convert text columns into categoricals over fixed alphabets.

    Values outside a column's alphabet become missing categories; they are
    counted in the log but do not raise.

    Args:
        df (pd.DataFrame): Cleaned pitch table
        alphabets (Dict[str, List[str]]): Column name -> allowed values

    Returns:
        pd.DataFrame: Copy of the table with categorical columns
    """
    encoded = df.copy()

    for col, categories in alphabets.items():
        if col not in encoded.columns:
            continue
        original = encoded[col]
        known = original.where(original.isin(categories))
        encoded[col] = pd.Categorical(known, categories=categories)

        unknown = int((known.isna() & original.notna()).sum())
        if unknown:
            logger.warning(f"{unknown} values in '{col}' fall outside {categories}")

    return encoded


def summarize_missing(df: pd.DataFrame) -> pd.DataFrame:
    """Count and rate of missing values per column, worst first."""
    counts = df.isna().sum()
    summary = pd.DataFrame({
        'column': counts.index,
        'missing': counts.values.astype(int),
        'missing_rate': (counts.values / max(len(df), 1)).astype(np.float64)
    })
    return summary.sort_values('missing', ascending=False, kind='stable').reset_index(drop=True)


def drop_unlabeled(df: pd.DataFrame, label_col: str = TARGET_COL) -> pd.DataFrame:
    """Remove rows whose label was lost during encoding (pitch types outside the alphabet)."""
    labeled = df.dropna(subset=[label_col])
    removed = len(df) - len(labeled)
    if removed:
        logger.warning(f"Dropped {removed} rows with an unrecognized '{label_col}'")
    return labeled
