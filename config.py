"""
Configuration file for the pitch-type classification analysis.

Contains all constants, mappings, and configuration parameters used throughout the project.
"""

# Full column schema of the Statcast extracts (regular season, missing-data variant, post-season)
SCHEMA_COLUMNS = [
    'pitch_type', 'game_date', 'release_speed', 'release_pos_x', 'release_pos_z',
    'player_name', 'batter', 'pitcher', 'zone', 'stand', 'p_throws',
    'pfx_x', 'pfx_z', 'plate_x', 'plate_z',
    'vx0', 'vy0', 'vz0', 'ax', 'ay', 'az',
    'effective_speed', 'release_spin_rate', 'release_extension', 'release_pos_y'
]

# Identifying fields removed before any model sees the data
ID_COLUMNS = ['player_name', 'game_date', 'batter', 'pitcher']

TARGET_COL = 'pitch_type'

# Pitch type labels, in ordinal order (codes 1..7 for KNN averaging)
PITCH_TYPES = ['CH', 'CU', 'FC', 'FF', 'FS', 'SI', 'SL']

PITCH_TYPE_NAMES = {
    'CH': 'Changeup',
    'CU': 'Curveball',
    'FC': 'Cutter',
    'FF': 'Four-Seam Fastball',
    'FS': 'Splitter',
    'SI': 'Sinker',
    'SL': 'Slider'
}

# Fixed alphabets for the categorical columns
CATEGORICAL_ALPHABETS = {
    'stand': ['L', 'R'],        # Batter stance
    'p_throws': ['L', 'R'],     # Pitcher throwing hand
    'pitch_type': PITCH_TYPES
}

# Ensemble rule: wherever the tree predicts this label, it overrides KNN
OVERRIDE_PITCH_TYPE = 'CH'

# Sampling and splitting
SAMPLE_CONFIG = {
    'train_sample_size': 50000,   # Rows drawn from the regular season
    'test_sample_size': 1500,     # Rows drawn from the post-season
    'estimation_ratio': 0.8       # Share of the training sample used for fitting
}

# Default seed for sampling, splitting and tree tie-breaking
RANDOM_STATE = 42

# Neighbor counts compared on the validation set
KNN_NEIGHBORS = (1, 5, 10)

# Decision tree hyperparameters (library defaults, listed for visibility)
TREE_CONFIG = {
    'criterion': 'gini',
    'max_depth': None,
    'min_samples_split': 2,
    'min_samples_leaf': 1
}

# File paths
DATA_DIR = "data"
RESULTS_DIR = "results"

DATA_FILES = {
    'regular_season': 'regular_season.csv',
    'missing_data': 'regular_season_missing.csv',
    'post_season': 'post_season.csv'
}
