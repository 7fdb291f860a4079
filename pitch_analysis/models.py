"""
Model fitting and prediction for pitch-type classification.

Contains the k-nearest-neighbors and decision tree trainers plus the
conversion between pitch-type labels and the numeric codes the models use.
"""

import logging
from typing import Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.neighbors import KNeighborsRegressor
from sklearn.tree import DecisionTreeClassifier

from config import PITCH_TYPES, TARGET_COL, TREE_CONFIG, RANDOM_STATE

logger = logging.getLogger(__name__)


def encode_pitch_codes(labels) -> np.ndarray:
    """Map pitch-type labels to ordinal codes 1..7; anything else becomes 0."""
    lookup = {label: code for code, label in enumerate(PITCH_TYPES, start=1)}
    return np.array([lookup.get(label, 0) for label in pd.Series(labels).astype(object)],
                    dtype=int)


def decode_pitch_codes(codes) -> np.ndarray:
    """
    Map integer codes back to pitch-type labels.

    Codes outside 1..7 have no label and come back as NaN.

    Args:
        codes: Sequence of integer codes

    Returns:
        np.ndarray: Object array of labels (NaN where undefined)
    """
    codes = np.asarray(codes, dtype=int)
    labels = np.full(codes.shape, np.nan, dtype=object)

    in_range = (codes >= 1) & (codes <= len(PITCH_TYPES))
    labels[in_range] = np.array(PITCH_TYPES, dtype=object)[codes[in_range] - 1]

    if (~in_range).any():
        logger.warning(f"{int((~in_range).sum())} predicted codes fall outside 1..{len(PITCH_TYPES)}")

    return labels


def feature_matrix(df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the model input from an encoded pitch table.

    Every column except the pitch type is used. Categorical columns enter as
    their integer codes plus one (L=1, R=2); numeric columns are left unscaled.
    """
    X = df.drop(columns=[TARGET_COL])
    for col in X.columns:
        if isinstance(X[col].dtype, pd.CategoricalDtype):
            X[col] = X[col].cat.codes.astype(int) + 1
    return X


def _training_data(df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.Series]:
    if len(df) == 0:
        raise ValueError("Cannot fit a model on an empty estimation set")
    if df[TARGET_COL].isna().any():
        raise ValueError(f"Estimation set has rows without a '{TARGET_COL}' label")
    return feature_matrix(df), df[TARGET_COL]


def fit_knn(df: pd.DataFrame, k: int) -> KNeighborsRegressor:
    """
    Fit a k-nearest-neighbors model on ordinal pitch-type codes.

    The model averages the codes of the k closest rows (Euclidean distance),
    which treats the nominal pitch type as a number. Predictions therefore
    have to be rounded back to a label, and rows near class boundaries can be
    mapped to a pitch type none of their neighbors had.

    Args:
        df (pd.DataFrame): Cleaned, encoded estimation set
        k (int): Number of neighbors

    Returns:
        KNeighborsRegressor: Fitted model
    """
    X, y = _training_data(df)
    if k > len(X):
        raise ValueError(f"k={k} exceeds the {len(X)} rows in the estimation set")

    model = KNeighborsRegressor(n_neighbors=k)
    model.fit(X, encode_pitch_codes(y))
    return model


def fit_tree(df: pd.DataFrame, random_state: Optional[int] = RANDOM_STATE) -> DecisionTreeClassifier:
    """
    Fit a decision tree classifier on pitch-type labels.

    Args:
        df (pd.DataFrame): Cleaned, encoded estimation set
        random_state (Optional[int]): Seed for the tree's feature tie-breaking

    Returns:
        DecisionTreeClassifier: Fitted model
    """
    X, y = _training_data(df)

    model = DecisionTreeClassifier(random_state=random_state, **TREE_CONFIG)
    model.fit(X, np.asarray(y.astype(object)))
    logger.info(f"Decision tree fitted: depth {model.get_depth()}, {model.get_n_leaves()} leaves")
    return model


def predict_knn(model: KNeighborsRegressor, df: pd.DataFrame) -> np.ndarray:
    """Predict pitch types by rounding averaged neighbor codes to the nearest label."""
    raw = model.predict(feature_matrix(df))
    return decode_pitch_codes(np.rint(raw).astype(int))


def predict_tree(model: DecisionTreeClassifier, df: pd.DataFrame) -> np.ndarray:
    """Predict pitch types with a fitted decision tree."""
    return np.asarray(model.predict(feature_matrix(df)), dtype=object)
