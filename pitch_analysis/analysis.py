"""
Evaluation module for comparing pitch-type models.

Contains the accuracy metric, per-pitch-type breakdowns, the neighbor-count
comparison, the changeup override ensemble, and the final test evaluation.
"""

import logging
from typing import Dict, Iterable

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from config import PITCH_TYPES, TARGET_COL, OVERRIDE_PITCH_TYPE, KNN_NEIGHBORS
from .models import fit_knn, predict_knn

logger = logging.getLogger(__name__)


def _paired_arrays(actual, predicted):
    actual = np.asarray(pd.Series(actual).astype(object), dtype=object)
    predicted = np.asarray(pd.Series(predicted).astype(object), dtype=object)
    if len(actual) != len(predicted):
        raise ValueError(f"Length mismatch: {len(actual)} actual vs {len(predicted)} predicted")
    return actual, predicted


def accuracy(actual, predicted) -> float:
    """
    Classification accuracy as 1 - mean(actual != predicted).

    Missing values never match anything, including another missing value.

    Args:
        actual: True labels
        predicted: Predicted labels, same length as actual

    Returns:
        float: Share of positions where the labels agree

    Raises:
        ValueError: If the sequences are empty or differ in length
    """
    actual, predicted = _paired_arrays(actual, predicted)
    if len(actual) == 0:
        raise ValueError("Cannot compute accuracy of empty sequences")

    mismatches = (actual != predicted) | pd.isna(actual) | pd.isna(predicted)
    return float(1 - mismatches.mean())


def per_class_accuracy(actual, predicted) -> pd.DataFrame:
    """Per pitch type: how many rows carry it and the share predicted correctly."""
    actual, predicted = _paired_arrays(actual, predicted)

    rows = []
    for pitch_type in PITCH_TYPES:
        mask = actual == pitch_type
        count = int(mask.sum())
        rows.append({
            'pitch_type': pitch_type,
            'count': count,
            'accuracy': accuracy(actual[mask], predicted[mask]) if count else np.nan
        })

    return pd.DataFrame(rows)


def confusion(actual, predicted) -> pd.DataFrame:
    """Confusion matrix over the pitch-type alphabet (rows actual, columns predicted)."""
    actual, predicted = _paired_arrays(actual, predicted)
    # Rows with an undefined label fall outside PITCH_TYPES and are left out
    predicted = np.array(['NA' if pd.isna(p) else p for p in predicted], dtype=object)
    actual = np.array(['NA' if pd.isna(a) else a for a in actual], dtype=object)
    if not np.isin(actual, PITCH_TYPES).any():
        return pd.DataFrame(0, index=PITCH_TYPES, columns=PITCH_TYPES)

    cm = confusion_matrix(actual, predicted, labels=PITCH_TYPES)
    return pd.DataFrame(cm, index=PITCH_TYPES, columns=PITCH_TYPES)


def combine_predictions(knn_preds, tree_preds) -> np.ndarray:
    """
    Override KNN predictions with the tree's changeup calls.

    Wherever the tree predicted OVERRIDE_PITCH_TYPE the result is that label;
    every other row keeps the KNN prediction unchanged.

    Args:
        knn_preds: KNN predicted labels
        tree_preds: Decision tree predicted labels, same length

    Returns:
        np.ndarray: Combined predicted labels
    """
    knn_preds, tree_preds = _paired_arrays(knn_preds, tree_preds)
    return np.where(tree_preds == OVERRIDE_PITCH_TYPE, OVERRIDE_PITCH_TYPE, knn_preds)


def evaluate_knn_neighbors(estimation: pd.DataFrame, validation: pd.DataFrame,
                           neighbors: Iterable[int] = KNN_NEIGHBORS) -> Dict[int, Dict]:
    """
    Fit KNN at each neighbor count and score it on the validation set.

    Returns:
        Dict[int, Dict]: k -> {'accuracy': float, 'predictions': np.ndarray}
    """
    results = {}
    for k in neighbors:
        model = fit_knn(estimation, k)
        predictions = predict_knn(model, validation)
        score = accuracy(validation[TARGET_COL], predictions)
        logger.info(f"KNN (k={k}) validation accuracy: {score:.4f}")
        results[k] = {'accuracy': score, 'predictions': predictions}
    return results


def select_best_k(knn_results: Dict[int, Dict]) -> int:
    """Neighbor count with the highest validation accuracy; ties go to the smallest k."""
    if not knn_results:
        raise ValueError("No KNN results to choose from")
    return min(knn_results, key=lambda k: (-knn_results[k]['accuracy'], k))


def final_test_evaluation(train: pd.DataFrame, test: pd.DataFrame, k: int) -> Dict:
    """Refit KNN at k on the full training sample and score it on the test sample.

    Args:
        train (pd.DataFrame): Cleaned, encoded training sample
        test (pd.DataFrame): Cleaned, encoded post-season sample
        k (int): Neighbor count chosen on the validation set

    Returns:
        Dict: Dictionary containing:
            - k (int): Neighbor count used.
            - accuracy (float): Test accuracy.
            - per_class (pd.DataFrame): Output of per_class_accuracy.
            - confusion_matrix (pd.DataFrame): Output of confusion.
            - predictions (np.ndarray): Predicted labels.
            - actuals (np.ndarray): True labels.
    """
    model = fit_knn(train, k)
    predictions = predict_knn(model, test)
    actuals = np.asarray(test[TARGET_COL].astype(object), dtype=object)

    score = accuracy(actuals, predictions)
    logger.info(f"Test Accuracy (KNN, k={k}): {score:.4f}")

    return {
        'k': k,
        'accuracy': score,
        'per_class': per_class_accuracy(actuals, predictions),
        'confusion_matrix': confusion(actuals, predictions),
        'predictions': predictions,
        'actuals': actuals
    }
