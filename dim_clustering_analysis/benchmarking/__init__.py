"""
Experiment runner for the dimensionality sweep, plus summary and export helpers.
"""

from .pipeline import ExperimentRunner, iter_trial_keys, results_to_frame, run_grid
from .seeding import derive_trial_seed
from .summary import accuracy_trend_violations, summarize_results
from .trial import default_adapter_factory, run_trial
from .export import load_results, save_results

__all__ = [
    "ExperimentRunner",
    "iter_trial_keys",
    "results_to_frame",
    "run_grid",
    "derive_trial_seed",
    "accuracy_trend_violations",
    "summarize_results",
    "default_adapter_factory",
    "run_trial",
    "load_results",
    "save_results",
]
