"""
Threshold sweep runner.

For every (alpha, beta) pair in the config, searches the v1 grid for the
truncation fraction whose bootstrap coverage is closest to h1, and writes the
resulting (v1, p, alpha, beta) table.

Usage:
    python experiments/threshold_sweep.py --config config/threshold_sweep.yaml
    python experiments/threshold_sweep.py --config config/threshold_sweep.yaml --workers 8
"""

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np
import yaml

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stablecov.logger import FlexibleLogger, get_system_info
from stablecov.threshold_search import DEFAULT_GRID, SearchResult, make_grid, sweep


def load_config(config_path: str) -> Dict[str, Any]:
    """Load YAML configuration file."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    return config


def build_pairs(param_config: Dict[str, Any]) -> List[Tuple[float, float]]:
    """(alpha, beta) pairs: explicit `pairs`, or the product of `alphas` and `betas`."""
    if 'pairs' in param_config:
        return [(float(a), float(b)) for a, b in param_config['pairs']]
    alphas = param_config.get('alphas', [1.5])
    betas = param_config.get('betas', [0.0])
    return [(float(a), float(b)) for a, b in itertools.product(alphas, betas)]


def build_grid(grid_config: Dict[str, Any]) -> np.ndarray:
    """v1 grid: explicit `values`, or `start`/`stop`/`step`."""
    if not grid_config:
        return DEFAULT_GRID
    if 'values' in grid_config:
        return np.asarray(grid_config['values'], dtype=float)
    return make_grid(grid_config['start'], grid_config['stop'], grid_config['step'])


def run_sweep(config: Dict[str, Any], logging_config_path: str = 'config/logging_config.yaml'):
    """Run the threshold sweep described by config and save the result table."""
    print("\n" + "="*60)
    print("THRESHOLD SWEEP: bootstrap coverage vs truncation fraction")
    print("="*60)

    exp_config = config['experiment']
    sim_config = config['simulation']

    output_dir = Path(exp_config.get('output_dir', 'outputs/threshold_sweep'))
    output_dir.mkdir(parents=True, exist_ok=True)

    logger = FlexibleLogger(
        logging_config_path=logging_config_path,
        experiment_config=config
    )

    sys_info = get_system_info()
    print(f"\n📋 System Info:")
    print(f"  Python: {sys_info['python_version'].split()[0]}")
    print(f"  NumPy: {sys_info['numpy_version']}  SciPy: {sys_info['scipy_version']}")
    if 'git_commit' in sys_info:
        print(f"  Git: {sys_info['git_commit'][:8]}")

    pairs = build_pairs(config.get('parameters', {}))
    grid = build_grid(config.get('grid', {}))
    print(f"\n🔬 {len(pairs)} (alpha, beta) pair(s), {grid.size} v1 value(s) in [{grid[0]:g}, {grid[-1]:g}]")
    print(f"  T={sim_config['T']}  N={sim_config['N']}  B={sim_config['B']}  h1={sim_config['h1']}")

    step = 0

    def log_result(result: SearchResult):
        nonlocal step
        logger.log(result.to_row(), step=step)
        step += 1

    table = sweep(
        sim_config['T'], sim_config['N'], sim_config['B'], pairs, sim_config['h1'], grid,
        seed=exp_config.get('seed', 42),
        workers=sim_config.get('workers', 1),
        scheme=sim_config.get('scheme', 'mammen'),
        distribution=sim_config.get('distribution', 'stable'),
        progress=True,
        on_result=log_result,
    )

    table_path = output_dir / 'threshold_table.csv'
    table.to_csv(table_path, index=False)
    with open(output_dir / 'run_info.json', 'w') as f:
        json.dump({'config': config, 'system': sys_info}, f, indent=2, default=str)

    logger.finish()
    print(f"\n{table.to_string(index=False)}")
    print(f"\n✅ Sweep complete! Table saved to {table_path}")
    return table


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Search the truncation fraction v1 per (alpha, beta)')
    parser.add_argument('--config', type=str, required=True,
                        help='Path to experiment config file')
    parser.add_argument('--logging-config', type=str, default='config/logging_config.yaml',
                        help='Path to logging config file')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker processes (overrides simulation.workers)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Root seed (overrides experiment.seed)')

    args = parser.parse_args()

    config = load_config(args.config)
    if args.workers is not None:
        config['simulation']['workers'] = args.workers
    if args.seed is not None:
        config['experiment']['seed'] = args.seed

    print(f"\n🚀 Starting sweep with {config['simulation'].get('workers', 1)} worker(s)")
    run_sweep(config, logging_config_path=args.logging_config)


if __name__ == '__main__':
    main()
