import numpy as np
import pytest

from dim_clustering_analysis.alignment import align_labels
from dim_clustering_analysis.clustering import (
    METHOD_SPECS,
    ClusteringAdapter,
    GaussianMixtureAdapter,
    KMeansAdapter,
    make_adapter,
    normalize_predictions,
)
from dim_clustering_analysis.errors import (
    ClusteringTimeout,
    DegenerateClustering,
    DimensionMismatch,
    InvalidClusterCount,
    LabelOutOfRange,
)


@pytest.fixture
def separated_blobs():
    rng = np.random.default_rng(0)
    centers = np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])
    points = np.vstack([rng.normal(c, 0.1, size=(20, 2)) for c in centers])
    labels = np.repeat(np.arange(3), 20)
    return points, labels


def test_normalize_predictions_ranks_raw_labels():
    out = normalize_predictions(np.array([5, 5, 9, 9, 7]), n_points=5, k=3)
    assert out.tolist() == [0, 0, 2, 2, 1]


def test_normalize_predictions_reports_degenerate_clusterings():
    with pytest.raises(DegenerateClustering) as excinfo:
        normalize_predictions(np.array([1, 1, 1, 4]), n_points=4, k=3)
    assert excinfo.value.n_found == 2
    assert excinfo.value.k == 3


def test_normalize_predictions_rejects_bad_shapes_and_extra_labels():
    with pytest.raises(DimensionMismatch):
        normalize_predictions(np.array([0, 1]), n_points=3, k=2)
    with pytest.raises(LabelOutOfRange):
        normalize_predictions(np.array([0, 1, 2]), n_points=3, k=2)


@pytest.mark.parametrize("method", sorted(METHOD_SPECS))
def test_registry_adapters_recover_separated_blobs(method, separated_blobs):
    points, labels = separated_blobs
    adapter = make_adapter(method, seed=0)
    assert isinstance(adapter, ClusteringAdapter)

    pred = adapter.cluster(points, 3)

    assert pred.shape == labels.shape
    assert set(pred.tolist()) == {0, 1, 2}
    assert align_labels(labels, pred, 3).accuracy == 1.0


def test_kmeans_defaults_follow_configuration():
    adapter = make_adapter("kmeans", seed=1)
    assert isinstance(adapter, KMeansAdapter)
    assert adapter.n_init == 10
    assert adapter.max_iter == 20
    assert adapter.algorithm == "lloyd"

    assert make_adapter("kmeans", max_iter=5).max_iter == 5
    assert isinstance(make_adapter("gmm"), GaussianMixtureAdapter)


def test_unknown_method_is_rejected():
    with pytest.raises(ValueError, match="Unknown method"):
        make_adapter("spectral")


def test_kmeans_is_reproducible_for_a_seed(separated_blobs):
    points, _ = separated_blobs
    a = KMeansAdapter(seed=3).cluster(points, 4)
    b = KMeansAdapter(seed=3).cluster(points, 4)
    assert np.array_equal(a, b)


def test_too_few_points_is_degenerate():
    with pytest.raises(DegenerateClustering):
        KMeansAdapter(seed=0).cluster(np.zeros((2, 3)), 3)


def test_invalid_inputs_fail_fast():
    with pytest.raises(InvalidClusterCount):
        KMeansAdapter().cluster(np.zeros((4, 2)), 0)
    with pytest.raises(DimensionMismatch):
        KMeansAdapter().cluster(np.zeros(5), 2)


def test_exceeding_time_budget_raises_timeout(separated_blobs):
    points, _ = separated_blobs
    adapter = KMeansAdapter(seed=0, timeout=1e-9)
    with pytest.raises(ClusteringTimeout, match="budget"):
        adapter.cluster(points, 3)
    assert adapter.last_elapsed_ > 0


def test_iteration_cap_can_be_treated_as_timeout():
    # Centers crowded at one end of a uniform line need many steps to settle.
    points = np.linspace(0.0, 1.0, 200).reshape(-1, 1)
    init = np.array([[0.0], [0.01], [0.02]])
    adapter = KMeansAdapter(init=init, max_iter=1, n_init=1, fail_on_max_iter=True)
    with pytest.raises(ClusteringTimeout, match="iteration cap"):
        adapter.cluster(points, 3)


def test_convergence_on_last_allowed_iteration_is_not_a_timeout():
    points = np.vstack([np.zeros((5, 2)), np.full((5, 2), 10.0)])
    init = np.array([[0.0, 0.0], [10.0, 10.0]])
    adapter = KMeansAdapter(init=init, max_iter=1, n_init=1, fail_on_max_iter=True)

    labels = adapter.cluster(points, 2)

    assert adapter.last_n_iter_ == 1
    assert labels.tolist() == [0] * 5 + [1] * 5


def test_adapter_parameters_are_validated():
    with pytest.raises(ValueError, match="n_init"):
        KMeansAdapter(n_init=0)
    with pytest.raises(ValueError, match="max_iter"):
        KMeansAdapter(max_iter=0)
