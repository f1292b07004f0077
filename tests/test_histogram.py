import numpy as np
import pytest

import whist as wh


def test_auto_edges_six_values_five_bins():
    h = wh.histogram([0, 1, 2, 3, 4, 5], 5)
    assert h.shape == (5,)
    assert h.sum() == pytest.approx(1.0)
    np.testing.assert_allclose(h, np.array([1, 1, 1, 1, 2]) / 6.0)


def test_explicit_edges_unweighted():
    h = wh.histogram([1, 2, 3], [1, 2, 3, 4])
    np.testing.assert_allclose(h, [1 / 3, 1 / 3, 1 / 3])


def test_explicit_edges_weighted():
    h = wh.histogram([1, 2, 3], [1, 2, 3, 4], weights=[0, 0, 5])
    np.testing.assert_allclose(h, [0.0, 0.0, 1.0])


def test_two_dimensional_diagonal():
    h = wh.histogram([[1, 1], [2, 2], [3, 3]], [1, 2, 3, 4])
    assert h.shape == (3, 3)
    np.testing.assert_allclose(h, np.eye(3) / 3.0)


def test_everything_excluded_raises():
    with pytest.raises(wh.EmptyHistogramError):
        wh.histogram([-10, 10], [0, 1, 2])


def test_sample_on_last_edge_lands_in_last_bin():
    raw = wh.raw_histogram([1.0, 2.0, 4.0], [1, 2, 3, 4])
    np.testing.assert_array_equal(raw.counts, [1.0, 1.0, 1.0])
    assert raw.counts.shape == (3,)


def test_sums_to_one():
    rng = np.random.default_rng(11)
    a = rng.normal(size=(1000, 2))
    w = rng.uniform(0.0, 3.0, size=1000)
    h = wh.histogram(a, [8, [-1, 0, 1]], weights=w)
    assert h.shape == (8, 2)
    assert h.sum() == pytest.approx(1.0, rel=1e-9)


def test_weight_scaling_invariance():
    rng = np.random.default_rng(12)
    a = rng.normal(size=(300, 2))
    w = rng.uniform(0.1, 2.0, size=300)
    h1 = wh.histogram(a, 6, weights=w)
    h2 = wh.histogram(a, 6, weights=3.7 * w)
    np.testing.assert_allclose(h1, h2, rtol=1e-9, atol=1e-15)


def test_unit_weight_equivalence():
    rng = np.random.default_rng(13)
    a = rng.normal(size=(300, 3))
    np.testing.assert_array_equal(
        wh.histogram(a, 4), wh.histogram(a, 4, weights=np.ones(300))
    )


@pytest.mark.parametrize("scale", [1e-6, 1.0, 1e9])
def test_auto_edges_cover_every_sample(scale):
    rng = np.random.default_rng(14)
    a = scale * rng.normal(size=(2000, 2))
    raw = wh.raw_histogram(a, 13)
    assert raw.total() == 2000.0


def test_identical_coordinates_stay_on_diagonal():
    rng = np.random.default_rng(15)
    x = rng.normal(size=500)
    h = wh.histogram(np.column_stack([x, x]), 7)
    off_diagonal = ~np.eye(7, dtype=bool)
    assert np.all(h[off_diagonal] == 0.0)
    assert np.trace(h) == pytest.approx(1.0)


def test_broadcast_equals_per_dimension():
    rng = np.random.default_rng(16)
    a = rng.uniform(0, 3, size=(100, 2))
    edges = [0, 1, 2, 3]
    np.testing.assert_array_equal(
        wh.histogram(a, edges), wh.histogram(a, [edges, edges])
    )
    np.testing.assert_array_equal(
        wh.histogram(a, 5), wh.histogram(a, wh.PerDimension([5, 5]))
    )


def test_per_dimension_bin_counts_shape():
    a = np.array([[0.0, 0.0], [1.0, 1.0]])
    assert wh.histogram(a, wh.PerDimension([3, 4])).shape == (3, 4)


def test_negative_weights_allowed():
    h = wh.histogram([1.0, 2.0], [0, 1, 2, 3], weights=[2.0, -1.0])
    np.testing.assert_allclose(h, [0.0, 2.0, -1.0])


def test_cancelling_weights_raise():
    with pytest.raises(wh.EmptyHistogramError):
        wh.histogram([0.5, 1.5], [0, 1, 2], weights=[1.0, -1.0])


def test_no_samples_raise_empty():
    with pytest.raises(wh.EmptyHistogramError):
        wh.histogram(np.empty((0, 2)), 3)
    with pytest.raises(wh.EmptyHistogramError):
        wh.histogram([], [0, 1])


def test_integer_input_converted():
    h = wh.histogram(np.array([1, 2, 2, 3], dtype=np.int8), [1, 2, 3])
    assert h.dtype == float
    np.testing.assert_allclose(h, [0.25, 0.75])


def test_shape_errors():
    with pytest.raises(wh.ShapeError):
        wh.histogram(np.zeros((2, 2, 2)), 3)
    with pytest.raises(wh.ShapeError):
        wh.histogram(5.0, 3)
    with pytest.raises(wh.ShapeError):
        wh.histogram([1, 2, 3], [1, 2, 3, 4], weights=[1, 1])
    with pytest.raises(wh.ShapeError):
        wh.histogram([[1, 1], [2, 2]], [[0, 1, 2], [0, 1, 2], [0, 1, 2]])


def test_shape_checked_before_emptiness():
    # out-of-range samples and bad weights: the shape problem wins
    with pytest.raises(wh.ShapeError):
        wh.histogram([-10, 10], [0, 1, 2], weights=[1, 1, 1])


def test_degenerate_edges():
    with pytest.raises(wh.DegenerateEdgesError):
        wh.histogram([1, 2, 3], [1.0])
    with pytest.raises(wh.DegenerateEdgesError):
        wh.histogram([1, 2, 3], 0)


def test_column_weights_accepted():
    h = wh.histogram([1, 2, 3], [1, 2, 3, 4], weights=[[0], [0], [5]])
    np.testing.assert_allclose(h, [0.0, 0.0, 1.0])


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        wh.histogram([-10, 10], [0, 1, 2])
