"""Shared pytest fixtures: synthetic Statcast pitch tables."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from config import SCHEMA_COLUMNS, PITCH_TYPES, DATA_FILES
from pitch_analysis.data_processing import clean_dataset, encode_categoricals

# Rough per-type centers: (release_speed, release_spin_rate, pfx_x, pfx_z)
PITCH_PROFILES = {
    'CH': (84.0, 1750.0, -1.2, 0.6),
    'CU': (78.0, 2600.0, 0.7, -1.0),
    'FC': (89.0, 2350.0, 0.3, 0.7),
    'FF': (95.0, 2300.0, -0.6, 1.4),
    'FS': (86.0, 1400.0, -0.9, 0.3),
    'SI': (93.0, 2150.0, -1.3, 0.8),
    'SL': (85.0, 2450.0, 0.5, 0.1),
}


def make_pitches(n_per_type: int = 40, seed: int = 0, missing_rows: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    for pitch_type in PITCH_TYPES:
        speed, spin, pfx_x, pfx_z = PITCH_PROFILES[pitch_type]
        for _ in range(n_per_type):
            release_speed = speed + rng.normal(0, 0.8)
            rows.append({
                'pitch_type': pitch_type,
                'game_date': f"2023-0{rng.integers(4, 10)}-1{rng.integers(0, 10)}",
                'release_speed': release_speed,
                'release_pos_x': rng.normal(-1.5, 0.5),
                'release_pos_z': rng.normal(5.8, 0.3),
                'player_name': f"Pitcher {rng.integers(1, 30)}",
                'batter': int(rng.integers(400000, 700000)),
                'pitcher': int(rng.integers(400000, 700000)),
                'zone': int(rng.integers(1, 15)),
                'stand': rng.choice(['L', 'R']),
                'p_throws': rng.choice(['L', 'R']),
                'pfx_x': pfx_x + rng.normal(0, 0.1),
                'pfx_z': pfx_z + rng.normal(0, 0.1),
                'plate_x': rng.normal(0, 0.7),
                'plate_z': rng.normal(2.4, 0.8),
                'vx0': rng.normal(5, 2),
                'vy0': -release_speed * 1.45,
                'vz0': rng.normal(-4, 2),
                'ax': rng.normal(-5, 5),
                'ay': rng.normal(28, 3),
                'az': rng.normal(-20, 6),
                'effective_speed': release_speed + rng.normal(0, 0.5),
                'release_spin_rate': spin + rng.normal(0, 40),
                'release_extension': rng.normal(6.3, 0.3),
                'release_pos_y': rng.normal(54.2, 0.3),
            })

    df = pd.DataFrame(rows, columns=SCHEMA_COLUMNS)
    df = df.sample(frac=1, random_state=seed).reset_index(drop=True)

    if missing_rows:
        holes = rng.choice(len(df), size=missing_rows, replace=False)
        for i, row in enumerate(holes):
            col = ['release_spin_rate', 'effective_speed', 'pitch_type'][i % 3]
            df.loc[row, col] = np.nan

    return df


@pytest.fixture
def raw_pitches() -> pd.DataFrame:
    return make_pitches(n_per_type=40, seed=0, missing_rows=9)


@pytest.fixture
def encoded_pitches() -> pd.DataFrame:
    return encode_categoricals(clean_dataset(make_pitches(n_per_type=30, seed=1)))


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the three named CSV files."""
    make_pitches(n_per_type=40, seed=2, missing_rows=6).to_csv(
        tmp_path / DATA_FILES['regular_season'], index=False)
    make_pitches(n_per_type=20, seed=3, missing_rows=30).to_csv(
        tmp_path / DATA_FILES['missing_data'], index=False)
    make_pitches(n_per_type=20, seed=4, missing_rows=4).to_csv(
        tmp_path / DATA_FILES['post_season'], index=False)
    return tmp_path
