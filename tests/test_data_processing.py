import pandas as pd
import pytest

from config import SCHEMA_COLUMNS, ID_COLUMNS, PITCH_TYPES, DATA_FILES
from pitch_analysis.data_processing import (
    DatasetLoadError,
    PitchDataSystem,
    clean_dataset,
    drop_unlabeled,
    encode_categoricals,
    load_dataset,
    sample_rows,
    split_dataset,
    summarize_missing,
)


class TestLoadDataset:
    def test_preserves_columns_and_row_order(self, raw_pitches, tmp_path) -> None:
        path = tmp_path / "pitches.csv"
        raw_pitches.to_csv(path, index=False)

        df = load_dataset(str(path))

        assert list(df.columns) == SCHEMA_COLUMNS
        assert df['release_speed'].tolist() == pytest.approx(raw_pitches['release_speed'].tolist())

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(DatasetLoadError):
            load_dataset(str(tmp_path / "nope.csv"))

    def test_load_error_is_an_io_error(self, tmp_path) -> None:
        with pytest.raises(IOError):
            load_dataset(str(tmp_path / "nope.csv"))

    def test_empty_file_raises(self, tmp_path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(DatasetLoadError):
            load_dataset(str(path))

    def test_missing_schema_columns_raises(self, raw_pitches, tmp_path) -> None:
        path = tmp_path / "partial.csv"
        raw_pitches.drop(columns=['release_spin_rate']).to_csv(path, index=False)
        with pytest.raises(DatasetLoadError, match="release_spin_rate"):
            load_dataset(str(path))


class TestPitchDataSystem:
    def test_loads_all_named_datasets(self, data_dir) -> None:
        datasets = PitchDataSystem(data_dir=str(data_dir)).load_all()

        assert set(datasets) == set(DATA_FILES)
        assert len(datasets['regular_season']) == 280
        assert len(datasets['post_season']) == 140

    def test_missing_file_propagates(self, data_dir) -> None:
        (data_dir / DATA_FILES['post_season']).unlink()
        with pytest.raises(DatasetLoadError):
            PitchDataSystem(data_dir=str(data_dir)).load_all()


class TestSampleRows:
    def test_returns_requested_size(self, raw_pitches) -> None:
        sample = sample_rows(raw_pitches, 50, seed=1)
        assert len(sample) == 50
        assert sample.index.is_unique
        assert set(sample.index) <= set(raw_pitches.index)

    def test_same_seed_same_rows(self, raw_pitches) -> None:
        first = sample_rows(raw_pitches, 50, seed=7)
        second = sample_rows(raw_pitches, 50, seed=7)
        assert first.index.tolist() == second.index.tolist()

    def test_whole_dataset(self, raw_pitches) -> None:
        assert len(sample_rows(raw_pitches, len(raw_pitches), seed=1)) == len(raw_pitches)

    def test_too_many_rows_raises(self, raw_pitches) -> None:
        with pytest.raises(ValueError):
            sample_rows(raw_pitches, len(raw_pitches) + 1, seed=1)


class TestSplitDataset:
    def test_disjoint_and_complete(self, raw_pitches) -> None:
        estimation, validation = split_dataset(raw_pitches, 0.8, seed=3)

        assert set(estimation.index).isdisjoint(validation.index)
        assert len(estimation) + len(validation) == len(raw_pitches)
        assert set(estimation.index) | set(validation.index) == set(raw_pitches.index)

    def test_sizes_follow_ratio(self, raw_pitches) -> None:
        estimation, validation = split_dataset(raw_pitches, 0.7, seed=3)
        assert len(estimation) == round(0.7 * len(raw_pitches))
        assert len(validation) == len(raw_pitches) - len(estimation)

    def test_reproducible_with_seed(self, raw_pitches) -> None:
        first, _ = split_dataset(raw_pitches, 0.5, seed=11)
        second, _ = split_dataset(raw_pitches, 0.5, seed=11)
        assert first.index.tolist() == second.index.tolist()

    def test_works_on_sampled_index(self, raw_pitches) -> None:
        sample = sample_rows(raw_pitches, 100, seed=2)
        estimation, validation = split_dataset(sample, 0.8, seed=2)
        assert len(estimation) == 80
        assert len(validation) == 20

    @pytest.mark.parametrize("ratio", [-0.1, 1.5])
    def test_invalid_ratio_raises(self, raw_pitches, ratio) -> None:
        with pytest.raises(ValueError):
            split_dataset(raw_pitches, ratio, seed=1)


class TestCleanDataset:
    def test_no_missing_values_or_id_columns(self, raw_pitches) -> None:
        cleaned = clean_dataset(raw_pitches)

        assert not cleaned.isna().any().any()
        assert not set(ID_COLUMNS) & set(cleaned.columns)

    def test_column_count(self, raw_pitches) -> None:
        cleaned = clean_dataset(raw_pitches)
        assert len(cleaned.columns) == len(SCHEMA_COLUMNS) - len(ID_COLUMNS)

    def test_rows_are_subset(self, raw_pitches) -> None:
        cleaned = clean_dataset(raw_pitches)
        assert set(cleaned.index) <= set(raw_pitches.index)
        assert len(cleaned) == len(raw_pitches) - 9

    def test_unknown_column_raises(self, raw_pitches) -> None:
        with pytest.raises(KeyError):
            clean_dataset(raw_pitches, drop_columns=['not_a_column'])

    def test_does_not_modify_input(self, raw_pitches) -> None:
        clean_dataset(raw_pitches)
        assert list(raw_pitches.columns) == SCHEMA_COLUMNS


class TestEncodeCategoricals:
    def test_fixed_categories(self, raw_pitches) -> None:
        encoded = encode_categoricals(clean_dataset(raw_pitches))

        assert list(encoded['stand'].cat.categories) == ['L', 'R']
        assert list(encoded['p_throws'].cat.categories) == ['L', 'R']
        assert list(encoded['pitch_type'].cat.categories) == PITCH_TYPES

    @pytest.mark.filterwarnings("error")
    def test_unknown_value_becomes_missing(self) -> None:
        df = pd.DataFrame({'stand': ['L', 'S', 'R'], 'pitch_type': ['FF', 'KN', 'SL']})

        encoded = encode_categoricals(df)

        assert encoded['stand'].isna().tolist() == [False, True, False]
        assert encoded['pitch_type'].isna().tolist() == [False, True, False]

    def test_input_left_as_text(self, raw_pitches) -> None:
        encode_categoricals(raw_pitches)
        assert not isinstance(raw_pitches['stand'].dtype, pd.CategoricalDtype)


class TestDropUnlabeled:
    def test_removes_unrecognized_pitch_types(self) -> None:
        df = pd.DataFrame({'pitch_type': ['FF', 'KC', 'SL', 'KC'], 'stand': ['L', 'R', 'R', 'L']})

        labeled = drop_unlabeled(encode_categoricals(df))

        assert labeled['pitch_type'].astype(object).tolist() == ['FF', 'SL']
        assert labeled.index.tolist() == [0, 2]

    def test_keeps_fully_labeled_table(self, raw_pitches) -> None:
        encoded = encode_categoricals(clean_dataset(raw_pitches))
        assert len(drop_unlabeled(encoded)) == len(encoded)


class TestSummarizeMissing:
    def test_counts_per_column(self) -> None:
        df = pd.DataFrame({'a': [1.0, None, None], 'b': [1.0, 2.0, None], 'c': [1, 2, 3]})

        summary = summarize_missing(df)

        assert summary['column'].tolist() == ['a', 'b', 'c']
        assert summary['missing'].tolist() == [2, 1, 0]
        assert summary['missing_rate'].iloc[0] == pytest.approx(2 / 3)
