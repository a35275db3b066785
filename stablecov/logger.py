"""
Result logging for coverage sweeps.

Backends:
- File-based logging (JSONL/CSV), one record per (alpha, beta) search
- Console logging of each record as it arrives
"""

import csv
import json
import sys
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import torch


def _to_python(key: str, value: Any) -> Dict[str, Any]:
    """Flatten a metric value into JSON/CSV friendly entries."""
    if isinstance(value, torch.Tensor):
        value = value.detach().cpu().numpy()

    if isinstance(value, np.ndarray):
        if value.size == 1:
            return {key: float(value.reshape(-1)[0])}
        return {
            f"{key}_mean": float(np.mean(value)),
            f"{key}_std": float(np.std(value)),
            f"{key}_min": float(np.min(value)),
            f"{key}_max": float(np.max(value)),
        }
    if isinstance(value, np.generic):
        return {key: value.item()}
    if isinstance(value, (int, float, str, bool)) or value is None:
        return {key: value}
    return {key: str(value)}


class BaseLogger:
    """Base class for all logger backends."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def log(self, metrics: Dict[str, Any], step: int):
        """Log metrics at given step."""
        raise NotImplementedError

    def finish(self):
        """Clean up resources."""
        pass


class FileLogger(BaseLogger):
    """File-based logger supporting JSON lines and CSV formats."""

    def __init__(self, config: Dict[str, Any], experiment_config: Dict[str, Any]):
        super().__init__(config)

        self.experiment_config = experiment_config
        file_config = config.get('files', {})

        # Experiment config wins over logging config
        base_dir = (experiment_config.get('experiment', {}).get('output_dir') or
                    file_config.get('output_dir', 'outputs/logs'))
        self.output_dir = Path(base_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.formats = file_config.get('formats', ['json'])
        self.basename = file_config.get('basename', 'results')

        self.csv_file = None
        self.csv_writer = None
        self.json_file = None

        if 'csv' in self.formats:
            self.csv_file = open(self.output_dir / f'{self.basename}.csv', 'w', newline='')
        if 'json' in self.formats:
            self.json_file = open(self.output_dir / f'{self.basename}.jsonl', 'w')

    def log(self, metrics: Dict[str, Any], step: int):
        """Append one record to every open file."""
        log_entry = {'step': step}
        for key, value in metrics.items():
            log_entry.update(_to_python(key, value))

        if self.json_file is not None:
            json.dump(log_entry, self.json_file)
            self.json_file.write('\n')
            self.json_file.flush()

        if self.csv_file is not None:
            if self.csv_writer is None:
                # Header comes from the first record
                self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=list(log_entry.keys()),
                                                 extrasaction='ignore')
                self.csv_writer.writeheader()
            self.csv_writer.writerow(log_entry)
            self.csv_file.flush()

    def finish(self):
        """Close file handles."""
        if self.json_file is not None:
            self.json_file.close()
        if self.csv_file is not None:
            self.csv_file.close()


class ConsoleLogger(BaseLogger):
    """Prints every record on one line."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.precision = config.get('console', {}).get('precision', 4)

    def log(self, metrics: Dict[str, Any], step: int):
        parts = []
        for key, value in metrics.items():
            if isinstance(value, float):
                parts.append(f"{key}={value:.{self.precision}f}")
            else:
                parts.append(f"{key}={value}")
        print(f"[{step:4d}] " + "  ".join(parts))


class FlexibleLogger:
    """
    Main logger class that manages multiple backends.

    Usage:
        logger = FlexibleLogger('config/logging_config.yaml', experiment_config)
        logger.log({'v1': 0.9, 'p': 0.948, 'alpha': 1.5, 'beta': 0.0}, step=0)
        logger.finish()
    """

    def __init__(self, logging_config_path: Optional[str] = None,
                 experiment_config: Optional[Dict[str, Any]] = None):
        """
        Initialize flexible logger.

        Args:
            logging_config_path: Path to logging_config.yaml
            experiment_config: Full experiment configuration dict
        """
        self.backends = []
        self.experiment_config = experiment_config or {}

        if logging_config_path:
            import yaml
            with open(logging_config_path, 'r') as f:
                self.logging_config = yaml.safe_load(f) or {}
        else:
            self.logging_config = {}

        # Experiment-specific settings override the logging config
        exp_logging = self.experiment_config.get('logging', {})
        backends_config = self.logging_config.get('backends', {})

        if exp_logging.get('use_files', backends_config.get('files', {}).get('enabled', True)):
            try:
                self.backends.append(FileLogger(self.logging_config, self.experiment_config))
                print("✓ File logger initialized")
            except OSError as e:
                warnings.warn(f"Failed to initialize File logger: {e}")

        if exp_logging.get('use_console', backends_config.get('console', {}).get('enabled', False)):
            self.backends.append(ConsoleLogger(self.logging_config))
            print("✓ Console logger initialized")

        if not self.backends:
            warnings.warn("No logging backends initialized!")

    def log(self, metrics: Dict[str, Any], step: int):
        """Log metrics to all backends."""
        for backend in self.backends:
            try:
                backend.log(metrics, step)
            except (OSError, ValueError, TypeError) as e:
                warnings.warn(f"Error logging to {backend.__class__.__name__}: {e}")

    def finish(self):
        """Finish all backends."""
        print("\nFinalizing logging...")
        for backend in self.backends:
            try:
                backend.finish()
                print(f"✓ {backend.__class__.__name__} finalized")
            except OSError as e:
                warnings.warn(f"Error finishing {backend.__class__.__name__}: {e}")
        print("Logging complete.")


def get_system_info() -> Dict[str, Any]:
    """Get system information for reproducibility."""
    import platform
    import subprocess

    import pandas as pd
    import scipy

    info = {
        'platform': platform.platform(),
        'python_version': sys.version,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
        'pandas_version': pd.__version__,
        'pytorch_version': torch.__version__,
    }

    # Try to get git commit
    try:
        git_commit = subprocess.check_output(['git', 'rev-parse', 'HEAD'],
                                             stderr=subprocess.DEVNULL).decode('ascii').strip()
        info['git_commit'] = git_commit

        git_status = subprocess.check_output(['git', 'status', '--porcelain'],
                                             stderr=subprocess.DEVNULL).decode('ascii').strip()
        info['git_dirty'] = len(git_status) > 0
    except (subprocess.CalledProcessError, OSError):
        pass

    return info
