import numpy as np
import pytest
import torch

from ksweep.algorithms import KMeans
from ksweep.exceptions import ParameterError

from data_gen import make_blobs
from utils import perm_invariant_accuracy


def test_kmeans_fits_simple_blobs():
    rng = np.random.default_rng(0)
    X1 = rng.normal(loc=0.0, scale=0.3, size=(100, 2))
    X2 = rng.normal(loc=3.0, scale=0.3, size=(100, 2))
    X = np.vstack([X1, X2])

    km = KMeans(n_clusters=2, init="k-means++", random_state=0)
    km.fit(X)

    assert km.labels_ is not None, "Expected labels_ after fit"
    assert len(km.labels_) == X.shape[0]
    assert km.cluster_centers_.shape == (2, 2)
    assert km.converged_
    y_true = np.repeat([0, 1], 100)
    assert perm_invariant_accuracy(km.labels_.numpy(), y_true) == 1.0


def test_predict_matches_labels_after_convergence():
    X, _ = make_blobs(n_per=40, seed=1)
    km = KMeans(n_clusters=3, random_state=5).fit(X)
    assert km.converged_
    assert torch.equal(km.predict(X), km.labels_)


def test_transform_returns_euclidean_distances_to_centers():
    X, _ = make_blobs(n_per=20, seed=2)
    km = KMeans(n_clusters=3, random_state=0).fit(X)
    D = km.transform(X)
    assert D.shape == (X.shape[0], 3)
    expected = torch.cdist(torch.from_numpy(X), km.cluster_centers_, compute_mode="donot_use_mm_for_euclid_dist")
    assert torch.allclose(D, expected, atol=1e-9)
    assert km.score(X) == pytest.approx(-float((D.min(dim=1)[0] ** 2).sum()), rel=1e-9)


def test_objective_history_is_non_increasing():
    X, _ = make_blobs(n_per=50, seed=4)
    km = KMeans(n_clusters=3, random_state=11).fit(X)
    objectives = [state.objective_value for state in km.history_]
    assert len(objectives) == km.n_iter_
    for before, after in zip(objectives, objectives[1:]):
        assert after <= before + 1e-9 * max(1.0, abs(before))
    assert km.inertia_ == objectives[-1]


def test_iteration_cap_is_not_an_error():
    X, _ = make_blobs(n_per=50, seed=4)
    km = KMeans(n_clusters=3, max_iter=1, random_state=0).fit(X)
    assert km.n_iter_ == 1
    assert not km.converged_
    assert km.labels_.shape == (X.shape[0],)


def test_invalid_parameters():
    X = np.zeros((3, 2))
    with pytest.raises(ParameterError):
        KMeans(n_clusters=4).fit(X)
    with pytest.raises(ParameterError):
        KMeans(n_clusters=0).fit(X)
    with pytest.raises(ParameterError):
        KMeans(n_clusters=2, max_iter=0).fit(X)
    with pytest.raises(ParameterError):
        KMeans(n_clusters=2, init="spectral")


def test_predict_before_fit_raises():
    with pytest.raises(RuntimeError):
        KMeans(n_clusters=2).predict(np.zeros((3, 2)))


def test_history_ends_with_a_step_that_moved_no_rows():
    X, _ = make_blobs(n_per=30, seed=6)
    km = KMeans(n_clusters=3, random_state=2).fit(X)
    assert km.converged_
    assert km.history_[-1].n_changed == 0
    assert [state.iteration for state in km.history_] == list(range(km.n_iter_))
