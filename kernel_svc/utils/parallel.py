# File: kernel_svc/utils/parallel.py

"""
Map over independent tasks, sequentially or through joblib workers.
"""

from typing import Any, Callable, Iterable, List, Optional

from joblib import Parallel, delayed

from .logging_utils import get_logger

logger = get_logger(__name__)


def effective_n_jobs(n_jobs: Optional[int]) -> Optional[int]:
    """
    Translate the estimator's ``n_jobs`` into a joblib value.

    None keeps execution sequential, zero or less means every processor.
    """
    if n_jobs is None:
        return None
    return n_jobs if n_jobs > 0 else -1


def parallel_map(func: Callable[..., Any], tasks: Iterable[Any],
                 n_jobs: Optional[int] = None) -> List[Any]:
    """
    Apply ``func`` to every task and return results in task order.

    Args:
        func: Callable taking a single task
        tasks: Independent task arguments
        n_jobs: None for a plain loop, otherwise forwarded to joblib

    Returns:
        List of results, ordered like ``tasks`` regardless of completion order
    """
    tasks = list(tasks)
    jobs = effective_n_jobs(n_jobs)

    if jobs is None or len(tasks) <= 1:
        return [func(task) for task in tasks]

    logger.debug(f"Dispatching {len(tasks)} tasks to joblib (n_jobs={jobs})")
    return Parallel(n_jobs=jobs)(delayed(func)(task) for task in tasks)
