import numpy as np
import pytest

from dim_clustering_analysis.errors import DimensionMismatch, InvalidClusterCount
from dim_clustering_analysis.generators import (
    draw_cluster_specs,
    generate_case_data,
    generate_gaussian_clusters,
)


def test_shapes_sizes_and_cluster_major_order():
    point_set = generate_gaussian_clusters(4, 3, 1.0, (15, 60, 5), seed=42)

    sizes = point_set.cluster_sizes
    assert len(sizes) == 4
    assert all(15 <= s <= 60 and s % 5 == 0 for s in sizes)
    assert point_set.points.shape == (sum(sizes), 3)
    assert point_set.n_points == sum(sizes)
    assert point_set.n_dims == 3
    assert point_set.n_clusters == 4

    expected = np.repeat(np.arange(4), sizes)
    assert np.array_equal(point_set.true_labels, expected)


def test_same_seed_reproduces_identical_point_sets():
    a = generate_gaussian_clusters(5, 16, 2.0, seed=7)
    b = generate_gaussian_clusters(5, 16, 2.0, seed=7)
    c = generate_gaussian_clusters(5, 16, 2.0, seed=8)

    assert np.array_equal(a.points, b.points)
    assert np.array_equal(a.true_labels, b.true_labels)
    assert not np.array_equal(a.points, c.points) or a.cluster_sizes != c.cluster_sizes


def test_collapsed_size_range_gives_equal_cluster_sizes():
    point_set = generate_gaussian_clusters(6, 2, 1.0, (20, 20, 5), seed=1)
    assert point_set.cluster_sizes == [20] * 6
    assert point_set.n_points == 120


def test_centers_are_latin_hypercube_stratified_and_scaled_by_k():
    k, ndim = 8, 5
    specs = draw_cluster_specs(k, ndim, 1.0, (15, 60, 5), np.random.default_rng(3))
    centers = np.vstack([spec.center for spec in specs])

    assert centers.shape == (k, ndim)
    assert centers.min() >= 0.0
    assert centers.max() < k
    # One center per unit stratum along every axis.
    for axis in range(ndim):
        assert sorted(np.floor(centers[:, axis]).astype(int)) == list(range(k))


def test_spreads_are_scaled_uniform_draws():
    specs = draw_cluster_specs(50, 2, 3.0, (15, 60, 5), np.random.default_rng(0))
    spreads = np.array([spec.spread for spec in specs])
    assert (spreads > 0).all()
    assert (spreads < 3.0).all()
    assert [spec.label for spec in specs] == list(range(50))


def test_points_concentrate_around_their_center():
    point_set = generate_gaussian_clusters(3, 200, 1.0, (60, 60, 1), seed=5)
    for spec in point_set.specs:
        block = point_set.points[point_set.true_labels == spec.label]
        assert np.allclose(block.mean(axis=0).mean(), spec.center.mean(), atol=0.2)
        assert (block - spec.center).std() == pytest.approx(spec.spread, rel=0.1)


def test_invalid_arguments_fail_fast():
    with pytest.raises(InvalidClusterCount):
        generate_gaussian_clusters(0, 2, 1.0, seed=0)
    with pytest.raises(DimensionMismatch):
        generate_gaussian_clusters(3, 0, 1.0, seed=0)
    with pytest.raises(ValueError, match="sd_mult"):
        generate_gaussian_clusters(3, 2, 0.0, seed=0)
    with pytest.raises(ValueError, match="size_range"):
        generate_gaussian_clusters(3, 2, 1.0, (30, 20, 5), seed=0)
    with pytest.raises(ValueError, match="either"):
        generate_gaussian_clusters(3, 2, 1.0, seed=0, rng=np.random.default_rng(0))


def test_generated_arrays_are_read_only():
    point_set = generate_gaussian_clusters(2, 2, 1.0, seed=0)
    with pytest.raises(ValueError):
        point_set.true_labels[0] = 1


def test_generate_case_data_builds_frame_and_metadata():
    data_df, y, point_set, meta = generate_case_data(
        {"n_clusters": 3, "n_features": 4, "sd_mult": 2.0, "seed": 9}
    )
    assert data_df.shape == (point_set.n_points, 4)
    assert list(data_df.columns) == ["F0", "F1", "F2", "F3"]
    assert np.array_equal(y, point_set.true_labels)
    assert meta["generator"] == "gaussian"
    assert meta["n_clusters"] == 3
    assert meta["cluster_sizes"] == point_set.cluster_sizes

    with pytest.raises(ValueError, match="Unknown generator"):
        generate_case_data({"generator": "moons", "n_clusters": 2, "n_features": 2})
    with pytest.raises(ValueError, match="n_features"):
        generate_case_data({"n_clusters": 2})
