"""
Visualization and export functionality for pitch-type classification results.

Contains functions for creating plots and exporting results to JSON and text.
"""

import json
import logging
from typing import Dict, Optional

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd

from config import PITCH_TYPES, PITCH_TYPE_NAMES

logger = logging.getLogger(__name__)


def plot_results(validation_scores: Dict[str, float], results: Dict,
                 filename: str = "pitch_type_results.png", show: bool = True):
    """Create a 1x2 dashboard of validation accuracies and the test confusion matrix.

    Args:
        validation_scores (Dict[str, float]): Model name -> validation accuracy.
        results (Dict): Output from final_test_evaluation containing the
            confusion matrix and test accuracy.
        filename (str): Output image path.
        show (bool): Whether to display the figure after saving.
    """
    fig, axes = plt.subplots(1, 2, figsize=(15, 6))

    # Validation comparison
    names = list(validation_scores.keys())
    scores = [validation_scores[name] for name in names]
    x_pos = range(len(names))
    axes[0].bar(x_pos, scores, color='steelblue', alpha=0.8)
    axes[0].set_xticks(list(x_pos))
    axes[0].set_xticklabels(names, rotation=30, ha='right')
    axes[0].set_ylabel('Accuracy')
    axes[0].set_ylim(0, 1)
    axes[0].set_title('Validation Accuracy by Model')
    axes[0].grid(True, alpha=0.3)
    for x, score in zip(x_pos, scores):
        axes[0].annotate(f"{score:.3f}", (x, score), xytext=(0, 3),
                         textcoords='offset points', ha='center', fontsize=8)

    # Confusion matrix
    sns.heatmap(results['confusion_matrix'], annot=True, fmt='d', cmap='Blues', ax=axes[1],
                xticklabels=PITCH_TYPES, yticklabels=PITCH_TYPES)
    axes[1].set_xlabel('Predicted')
    axes[1].set_ylabel('Actual')
    axes[1].set_title(f"Test Confusion Matrix (KNN, k={results['k']}, "
                      f"accuracy {results['accuracy']:.3f})")

    plt.tight_layout()
    plt.savefig(filename, dpi=300, bbox_inches='tight')
    logger.info(f"Results visualization saved as '{filename}'")
    if show:
        plt.show()
    plt.close(fig)


def export_results(validation_scores: Dict[str, float], results: Dict,
                   missing_summary: Optional[pd.DataFrame] = None,
                   filename: str = "pitch_type_results.json"):
    """Export validation and test results to JSON format.

    Args:
        validation_scores (Dict[str, float]): Model name -> validation accuracy
        results (Dict): Output from final_test_evaluation
        missing_summary (pd.DataFrame): Per-column missing counts of the missing-data variant
        filename (str): Output filename for JSON export
    """
    # Pitch types absent from the test set have no accuracy
    per_class = [
        {
            'pitch_type': row['pitch_type'],
            'count': int(row['count']),
            'accuracy': None if pd.isna(row['accuracy']) else float(row['accuracy'])
        }
        for _, row in results['per_class'].iterrows()
    ]

    export_data = {
        "validation_accuracy": {name: float(score) for name, score in validation_scores.items()},
        "final_model": {
            "model": "knn",
            "k": int(results['k']),
            "test_accuracy": float(results['accuracy']),
            "per_class_accuracy": per_class,
            "confusion_matrix": {
                actual: {predicted: int(count) for predicted, count in row.items()}
                for actual, row in results['confusion_matrix'].iterrows()
            }
        },
        "missing_data": [
            {'column': row['column'], 'missing': int(row['missing']),
             'missing_rate': float(row['missing_rate'])}
            for _, row in missing_summary.iterrows()
        ] if missing_summary is not None else [],
        "summary": {
            "best_validation_model": max(validation_scores, key=validation_scores.get)
                                     if validation_scores else None,
            "test_rows": int(len(results['actuals']))
        }
    }

    with open(filename, 'w') as f:
        json.dump(export_data, f, indent=2)

    logger.info(f"Results exported to {filename}")


def save_summary_report(validation_scores: Dict[str, float], results: Dict,
                        missing_summary: Optional[pd.DataFrame] = None,
                        filename: str = "analysis_summary.txt"):
    """Generate and save a text summary report.

    Args:
        validation_scores (Dict[str, float]): Model name -> validation accuracy
        results (Dict): Output from final_test_evaluation
        missing_summary (pd.DataFrame): Per-column missing counts of the missing-data variant
        filename (str): Output text file name
    """
    with open(filename, 'w') as f:
        f.write("PITCH TYPE CLASSIFICATION - ANALYSIS SUMMARY\n")
        f.write("=" * 50 + "\n\n")

        f.write("VALIDATION ACCURACY\n")
        f.write("-" * 20 + "\n")
        for name, score in validation_scores.items():
            f.write(f"  {name}: {score:.3f}\n")

        f.write("\nFINAL TEST (POST-SEASON)\n")
        f.write("-" * 24 + "\n")
        f.write(f"Model: KNN, k={results['k']}\n")
        f.write(f"Test Accuracy: {results['accuracy']:.3f}\n")
        f.write(f"Test Rows: {len(results['actuals'])}\n\n")

        f.write("Accuracy by Pitch Type:\n")
        for _, row in results['per_class'].iterrows():
            name = PITCH_TYPE_NAMES.get(row['pitch_type'], row['pitch_type'])
            if row['count']:
                f.write(f"  {row['pitch_type']} ({name}): {row['accuracy']:.1%} of {row['count']} pitches\n")
            else:
                f.write(f"  {row['pitch_type']} ({name}): no pitches\n")

        if missing_summary is not None and not missing_summary.empty:
            f.write("\nMISSING DATA VARIANT\n")
            f.write("-" * 20 + "\n")
            incomplete = missing_summary[missing_summary['missing'] > 0]
            if incomplete.empty:
                f.write("  No missing values\n")
            for _, row in incomplete.iterrows():
                f.write(f"  {row['column']}: {row['missing']} missing ({row['missing_rate']:.1%})\n")

        f.write("\nNOTES\n")
        f.write("-" * 5 + "\n")
        f.write("  KNN averages ordinal pitch-type codes and rounds the mean back to a label;\n")
        f.write("  the codes carry no real ordering, so boundary rows can be mislabeled.\n")

    logger.info(f"Summary report saved as '{filename}'")
