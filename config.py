"""
Configuration settings for the cluster-count selection pipeline.

This module centralizes all configurable parameters including paths
and clustering settings.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PathConfig:
    """Output path configurations."""
    output_dir: Path = Path("outputs")
    experiment_name: str = "kselect_experiment"

    @property
    def base_dir(self) -> Path:
        return Path(self.output_dir) / self.experiment_name

    @property
    def plots_dir(self) -> Path:
        return self.base_dir / "plots"

    @property
    def results_dir(self) -> Path:
        return self.base_dir / "results"

    def create_dirs(self):
        """Create directories if they don't exist."""
        for dir_path in [self.base_dir, self.plots_dir, self.results_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass
class ClusteringConfig:
    """Clustering configuration."""
    n_max: Optional[int] = None  # ceil(sqrt(n)) when unset
    c_max: int = 5               # k-means runs per k
    max_iter: int = 100
    norm_p: float = 2            # Davies-Bouldin norm order
    random_seed: Optional[int] = None
    n_jobs: Optional[int] = None


@dataclass
class Config:
    """Main configuration container."""
    paths: PathConfig = field(default_factory=PathConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)

    verbose: int = 1
    save_plots: bool = True


def get_default_config() -> Config:
    """Return default configuration."""
    return Config()


def get_config_from_args(args) -> Config:
    """Create configuration from command-line arguments."""
    config = get_default_config()

    # Override with args if provided
    if getattr(args, 'n_max', None) is not None:
        config.clustering.n_max = args.n_max
    if getattr(args, 'c_max', None) is not None:
        config.clustering.c_max = args.c_max
    if getattr(args, 'max_iter', None) is not None:
        config.clustering.max_iter = args.max_iter
    if getattr(args, 'seed', None) is not None:
        config.clustering.random_seed = args.seed
    if getattr(args, 'n_jobs', None) is not None:
        config.clustering.n_jobs = args.n_jobs
    if getattr(args, 'output_dir', None) is not None:
        config.paths.output_dir = Path(args.output_dir)
    if getattr(args, 'experiment_name', None) is not None:
        config.paths.experiment_name = args.experiment_name
    if hasattr(args, 'verbose'):
        config.verbose = args.verbose
    if getattr(args, 'no_plots', False):
        config.save_plots = False

    return config
