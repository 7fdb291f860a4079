"""
Main execution file for the pitch-type classification analysis.

This file orchestrates the complete pipeline from data loading through
model comparison, ensembling, final testing and report export.

Version: 1.0
"""

import os
import logging
import warnings
from collections import Counter
from typing import Optional

from pitch_analysis.data_processing import (
    PitchDataSystem, sample_rows, split_dataset, clean_dataset,
    encode_categoricals, summarize_missing, drop_unlabeled
)
from pitch_analysis.models import fit_tree, predict_tree
from pitch_analysis.analysis import (
    accuracy, per_class_accuracy, combine_predictions, evaluate_knn_neighbors,
    select_best_k, final_test_evaluation
)
from pitch_analysis.visualization import plot_results, export_results, save_summary_report
from config import (
    DATA_DIR, RESULTS_DIR, RANDOM_STATE, SAMPLE_CONFIG, KNN_NEIGHBORS,
    TARGET_COL, OVERRIDE_PITCH_TYPE
)

# Configure logging and suppress warnings for cleaner output
warnings.filterwarnings('ignore')
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def main(data_dir: str = DATA_DIR, results_dir: str = RESULTS_DIR,
         seed: Optional[int] = RANDOM_STATE,
         train_sample_size: int = SAMPLE_CONFIG['train_sample_size'],
         test_sample_size: int = SAMPLE_CONFIG['test_sample_size'],
         estimation_ratio: float = SAMPLE_CONFIG['estimation_ratio'],
         neighbors=KNN_NEIGHBORS, show_plots: bool = True):
    """Run the end-to-end pipeline: load, sample, clean, train, compare, test, report.

    Steps:
        1) Load the regular-season, missing-data and post-season tables.
        2) Draw fixed-size samples and split the training sample.
        3) Drop identifying columns and incomplete rows; encode categoricals
           and drop rows whose pitch type is outside the alphabet.
        4) Compare KNN neighbor counts on the validation set.
        5) Fit the decision tree and score it on the validation set.
        6) Score the changeup-override ensemble of KNN and tree.
        7) Refit KNN at the best k on the full training sample and test it.
        8) Export the figure, JSON results and text summary.

    Returns:
        Tuple: (validation_scores, results)
            - validation_scores: Dict of model name -> validation accuracy.
            - results: Dict from final_test_evaluation.
    """
    logger.info("Starting pitch-type classification analysis...")

    try:
        # Load data
        logger.info("Step 1: Loading datasets...")
        system = PitchDataSystem(data_dir=data_dir)
        datasets = system.load_all()
        missing_summary = summarize_missing(datasets['missing_data'])

        # Sample and split
        logger.info("Step 2: Sampling and splitting...")
        train_sample = sample_rows(datasets['regular_season'], train_sample_size, seed)
        test_sample = sample_rows(datasets['post_season'], test_sample_size, seed)
        estimation, validation = split_dataset(train_sample, estimation_ratio, seed)

        # Clean and encode
        logger.info("Step 3: Cleaning and encoding...")
        estimation = drop_unlabeled(encode_categoricals(clean_dataset(estimation)))
        validation = drop_unlabeled(encode_categoricals(clean_dataset(validation)))
        train_full = drop_unlabeled(encode_categoricals(clean_dataset(train_sample)))
        test_full = drop_unlabeled(encode_categoricals(clean_dataset(test_sample)))

        logger.info(f"Estimation: {len(estimation)} rows, validation: {len(validation)} rows, "
                    f"train: {len(train_full)} rows, test: {len(test_full)} rows")
        logger.info(f"Pitch type distribution: {Counter(train_full[TARGET_COL].astype(str))}")

        # Compare neighbor counts
        logger.info("Step 4: Comparing KNN neighbor counts...")
        knn_results = evaluate_knn_neighbors(estimation, validation, neighbors)
        best_k = select_best_k(knn_results)
        logger.info(f"Best neighbor count: k={best_k}")

        validation_scores = {f"KNN (k={k})": r['accuracy'] for k, r in knn_results.items()}

        # Decision tree
        logger.info("Step 5: Fitting decision tree...")
        tree = fit_tree(estimation, random_state=seed)
        tree_preds = predict_tree(tree, validation)
        validation_scores['Decision Tree'] = accuracy(validation[TARGET_COL], tree_preds)
        logger.info(f"Decision tree validation accuracy: {validation_scores['Decision Tree']:.4f}")

        tree_by_class = per_class_accuracy(validation[TARGET_COL], tree_preds)
        logger.info("\nDecision tree accuracy by pitch type:")
        print(tree_by_class.round(4).to_string(index=False))

        # Ensemble
        logger.info(f"Step 6: Combining KNN (k={best_k}) with tree {OVERRIDE_PITCH_TYPE} calls...")
        combined = combine_predictions(knn_results[best_k]['predictions'], tree_preds)
        ensemble_name = f"KNN + Tree ({OVERRIDE_PITCH_TYPE} override)"
        validation_scores[ensemble_name] = accuracy(validation[TARGET_COL], combined)
        logger.info(f"Ensemble validation accuracy: {validation_scores[ensemble_name]:.4f}")

        # Final test
        logger.info("Step 7: Final evaluation on post-season data...")
        results = final_test_evaluation(train_full, test_full, best_k)
        print(results['per_class'].round(4).to_string(index=False))

        # Export
        logger.info("Step 8: Exporting results...")
        os.makedirs(results_dir, exist_ok=True)
        plot_results(validation_scores, results,
                     filename=os.path.join(results_dir, "pitch_type_results.png"),
                     show=show_plots)
        try:
            export_results(validation_scores, results, missing_summary,
                           filename=os.path.join(results_dir, "pitch_type_results.json"))
        except Exception as e:
            logger.warning(f"JSON export failed: {str(e)}")
            logger.info("Continuing without JSON export...")

        save_summary_report(validation_scores, results, missing_summary,
                            filename=os.path.join(results_dir, "analysis_summary.txt"))

        logger.info("Pitch-type classification analysis completed successfully!")

        return validation_scores, results

    except Exception as e:
        logger.error(f"Error in main execution: {str(e)}")
        raise


if __name__ == "__main__":
    validation_scores, results = main()

    print(f"\nFinal test accuracy (KNN, k={results['k']}): {results['accuracy']:.4f}")
    print("\nAnalysis complete! Check the generated files:")
    print(f"- {RESULTS_DIR}/pitch_type_results.png (visualization)")
    print(f"- {RESULTS_DIR}/pitch_type_results.json (detailed results)")
    print(f"- {RESULTS_DIR}/analysis_summary.txt (summary report)")
