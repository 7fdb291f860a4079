"""
Pitch-Type Classification

Compares k-nearest-neighbors and decision tree models for identifying MLB
pitch types from Statcast release, movement and plate-crossing measurements.

Version: 1.0
"""

from .data_processing import (
    PitchDataSystem, DatasetLoadError, load_dataset, sample_rows,
    split_dataset, clean_dataset, encode_categoricals
)
from .models import fit_knn, fit_tree, predict_knn, predict_tree
from .analysis import accuracy, combine_predictions, final_test_evaluation
from .visualization import plot_results, export_results, save_summary_report

__version__ = "1.0"

__all__ = [
    'PitchDataSystem',
    'DatasetLoadError',
    'load_dataset',
    'sample_rows',
    'split_dataset',
    'clean_dataset',
    'encode_categoricals',
    'fit_knn',
    'fit_tree',
    'predict_knn',
    'predict_tree',
    'accuracy',
    'combine_predictions',
    'final_test_evaluation',
    'plot_results',
    'export_results',
    'save_summary_report'
]
