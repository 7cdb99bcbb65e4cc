"""
Central configuration for the dimensionality clustering analysis harness.
"""

# --- Experiment Grid ---

# Dimensions swept by default: powers of two from 2 to 512.
DEFAULT_DIMS: tuple[int, ...] = tuple(2**p for p in range(1, 10))

# Multipliers applied to each cluster's uniform(0, 1) standard deviation.
DEFAULT_SD_MULTS: tuple[float, ...] = (1.0, 2.0, 3.0, 4.0)

# Cluster counts evaluated in a full run.
DEFAULT_CLUSTER_COUNTS: tuple[int, ...] = (4, 8)

# Inclusive (min, max, step) range for the number of points in each cluster.
DEFAULT_SIZE_RANGE: tuple[int, int, int] = (15, 60, 5)

# Repetitions per (dim, sd_mult, k) grid cell.
DEFAULT_TRIALS_PER_CELL: int = 10

# Base seed from which every per-trial seed is derived.
BASE_SEED: int = 42

# --- Clustering Adapter ---

# Default clustering method (key into clustering.METHOD_SPECS).
DEFAULT_METHOD: str = "kmeans"

# Number of random restarts; the lowest-inertia run is kept.
KMEANS_N_INIT: int = 10

# Iteration cap for a single k-means run.
KMEANS_MAX_ITER: int = 20

# Wall-clock budget (seconds) for one clustering call. None disables it.
CLUSTERING_TIMEOUT: float | None = None

# --- Label Alignment ---

# Default alignment solver: "hungarian" (production) or "brute_force" (reference).
ALIGNMENT_METHOD: str = "hungarian"

# Largest k accepted by the brute-force reference (k! permutations).
BRUTE_FORCE_MAX_K: int = 10

# --- Runner ---

# Retries for trials that fail with an expected adapter failure.
MAX_RETRIES: int = 0

# Worker count for joblib.Parallel. Set DCA_N_JOBS env var to override.
N_JOBS: int = 1

# Environment variable consulted for the worker count.
N_JOBS_ENV_VAR: str = "DCA_N_JOBS"
