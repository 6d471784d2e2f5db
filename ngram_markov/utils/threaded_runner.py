# threaded_runner.py - run callables on a small thread pool and collect their results.

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable, List


def run_parallel(tasks: Iterable[Callable[[], Any]], max_workers: int = 4, ordered: bool = False) -> List:
    """
    Run zero-argument callables in a thread pool.
    Results come back in completion order, or in submission order with ordered=True.
    The first task exception is re-raised once every task has been submitted.
    """
    tasks = list(tasks)
    if not tasks:
        return []
    workers = max(1, min(max_workers, len(tasks)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ngram") as ex:
        futs = [ex.submit(t) for t in tasks]
        if ordered:
            return [f.result() for f in futs]
        return [f.result() for f in as_completed(futs)]


def repeat(fn: Callable[[], Any], times: int, max_workers: int = 4) -> List:
    """Call `fn` `times` times concurrently, results in submission order."""
    return run_parallel([fn] * max(0, times), max_workers=max_workers, ordered=True)
