import numpy as np
import pytest
from sklearn.cluster import KMeans
from sklearn.utils import check_random_state

from kselect.clustering.kmeans import run_partition
from kselect.exceptions import DegenerateTrialError


def test_run_partition_output_shapes(blobs):
    run = run_partition(blobs, 3, random_state=0)

    assert run.prototypes.shape == (3, 3)
    assert run.k == 3
    assert run.labels.shape == (len(blobs),)
    assert set(np.unique(run.labels)) == {1, 2, 3}
    assert run.error >= 0
    assert 1 <= run.n_iter <= 100


def test_run_partition_error_matches_assignment(blobs):
    run = run_partition(blobs, 4, random_state=3)

    centers = run.prototypes[run.labels - 1]
    assert run.error == pytest.approx(np.sum((blobs - centers) ** 2))


def test_run_partition_matches_sklearn_lloyd(blobs):
    seed = 11
    init_idx = check_random_state(seed).choice(len(blobs), size=3, replace=False)

    run = run_partition(blobs, 3, max_iter=100, random_state=seed)
    reference = KMeans(
        n_clusters=3, init=blobs[init_idx], n_init=1,
        max_iter=100, tol=0, algorithm='lloyd'
    ).fit(blobs)

    assert run.error == pytest.approx(reference.inertia_)
    np.testing.assert_allclose(
        np.sort(run.prototypes, axis=0),
        np.sort(reference.cluster_centers_, axis=0)
    )


def test_run_partition_is_reproducible(blobs):
    first = run_partition(blobs, 3, random_state=5)
    second = run_partition(blobs, 3, random_state=5)

    np.testing.assert_array_equal(first.labels, second.labels)
    np.testing.assert_array_equal(first.prototypes, second.prototypes)
    assert first.error == second.error


def test_run_partition_with_missing_values(blobs_with_missing):
    run = run_partition(blobs_with_missing, 3, random_state=0)

    assert np.isfinite(run.error)
    assert set(np.unique(run.labels)) == {1, 2, 3}


def test_run_partition_more_clusters_than_points():
    with pytest.raises(DegenerateTrialError):
        run_partition(np.zeros((2, 2)), 3, random_state=0)


def test_run_partition_too_few_distinct_points():
    data = np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 1.0], [1.0, 1.0]])

    with pytest.raises(DegenerateTrialError) as exc_info:
        run_partition(data, 3, random_state=0)

    assert exc_info.value.k == 3
    assert exc_info.value.n_empty >= 1


def test_run_partition_respects_iteration_cap(blobs):
    run = run_partition(blobs, 3, max_iter=1, random_state=2)
    assert run.n_iter == 1
