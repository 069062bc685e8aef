import json

import numpy as np
import pandas as pd

from config import get_config_from_args
from main import main, parse_args


def test_config_from_args():
    args = parse_args(['--data', 'x.csv', '--n-max', '6', '--c-max', '3',
                       '--seed', '4', '--no-plots', '--verbose', '0'])
    config = get_config_from_args(args)

    assert config.clustering.n_max == 6
    assert config.clustering.c_max == 3
    assert config.clustering.random_seed == 4
    assert config.clustering.max_iter == 100
    assert config.save_plots is False
    assert config.verbose == 0


def test_end_to_end(tmp_path, blobs):
    data_path = tmp_path / 'blobs.csv'
    pd.DataFrame(blobs, columns=['a', 'b', 'c']).to_csv(data_path, index=False)

    results = main([
        '--data', str(data_path),
        '--n-max', '5',
        '--c-max', '3',
        '--seed', '2',
        '--output-dir', str(tmp_path / 'out'),
        '--experiment-name', 'run',
        '--verbose', '0',
    ])

    base = tmp_path / 'out' / 'run'
    assert (base / 'results' / 'cluster_selection.csv').exists()
    assert (base / 'plots' / 'cluster_selection.png').exists()

    with open(base / 'results' / 'summary.json') as f:
        summary = json.load(f)
    assert summary['random_seed'] == 2
    assert summary['n_max'] == 5
    assert np.isfinite(results.errors).all()
