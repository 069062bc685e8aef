from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from kselect.data.loader import as_dataset, load_dataset
from kselect.exceptions import InvalidInputError


def test_matrix_is_copied_as_float():
    original = np.array([[1, 2], [3, 4]])
    data = as_dataset(original)

    assert data.dtype == np.float64
    data[0, 0] = 99
    assert original[0, 0] == 1


def test_nested_list():
    assert as_dataset([[1, 2], [3, 4], [5, 6]]).shape == (3, 2)


def test_vector_becomes_single_column():
    assert as_dataset(np.array([1.0, 2.0, 3.0])).shape == (3, 1)


def test_dataframe_keeps_numeric_columns():
    frame = pd.DataFrame({'x': [1.0, 2.0], 'name': ['a', 'b'], 'y': [3, None]})
    data = as_dataset(frame)

    assert data.shape == (2, 2)
    assert np.isnan(data[1, 1])


def test_struct_prefers_data_over_codebook():
    data = as_dataset({'data': [[1.0]], 'codebook': [[2.0], [3.0]]})
    np.testing.assert_array_equal(data, [[1.0]])


def test_map_struct_uses_codebook():
    map_struct = SimpleNamespace(codebook=np.ones((4, 3)), topol=None)
    assert as_dataset(map_struct).shape == (4, 3)


def test_struct_without_fields():
    with pytest.raises(InvalidInputError):
        as_dataset({'labels': [1, 2]})


@pytest.mark.parametrize('bad', [
    np.empty((0, 3)),
    np.empty((3, 0)),
    np.zeros((2, 2, 2)),
    [['a', 'b']],
])
def test_invalid_shapes(bad):
    with pytest.raises(InvalidInputError):
        as_dataset(bad)


def test_load_csv(tmp_path):
    path = tmp_path / 'points.csv'
    pd.DataFrame({'id': ['p1', 'p2', 'p3'], 'x': [0.0, 1.0, 2.0], 'y': [1.0, None, 3.0]}).to_csv(path, index=False)

    data = load_dataset(path, verbose=False)

    assert data.shape == (3, 2)
    assert np.isnan(data[1, 1])


def test_load_npy(tmp_path):
    path = tmp_path / 'points.npy'
    np.save(path, np.arange(6.0).reshape(3, 2))
    assert load_dataset(path, verbose=False).shape == (3, 2)


def test_load_npz_codebook(tmp_path, capsys):
    path = tmp_path / 'map.npz'
    np.savez(path, codebook=np.zeros((5, 4)))

    data = load_dataset(path)

    assert data.shape == (5, 4)
    assert '5 points x 4 dims' in capsys.readouterr().out


def test_load_unknown_suffix(tmp_path):
    path = tmp_path / 'points.txt'
    path.write_text('1 2\n')
    with pytest.raises(InvalidInputError):
        load_dataset(path)
