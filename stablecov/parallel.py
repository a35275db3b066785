"""
Fork-join helpers for Monte Carlo fan-out.

Each task gets its own SeedSequence child so draws never overlap between
tasks and results do not depend on how many worker processes are used.
"""

from concurrent.futures import ProcessPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence]


def spawn_seeds(seed: SeedLike, n: int) -> List[np.random.SeedSequence]:
    """Spawn n independent child seed sequences from seed."""
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return seed.spawn(n)


def parallel_map(fn: Callable[[Any], Any], tasks: Sequence[Any], workers: Optional[int] = 1) -> List[Any]:
    """
    Apply fn to every task and return the results in task order.

    Args:
        fn: Module-level (picklable) function of one argument
        tasks: Task arguments
        workers: Number of processes; <= 1 runs serially, None uses all CPUs

    Returns:
        List of results, results[i] = fn(tasks[i])
    """
    tasks = list(tasks)
    if (workers is not None and workers <= 1) or len(tasks) <= 1:
        return [fn(task) for task in tasks]

    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(fn, tasks))
