import time
from contextlib import contextmanager
from functools import wraps
from typing import List, Dict, Any, Callable, Iterator, Optional, Type

_suite_state: Dict[str, List[Dict[str, Any]]] = {
    'cases': [],
    'results': []
}

PASS_MARK = '(^ ω ^)'
FAIL_MARK = '(ﾉಥДಥ)ﾉ'
SUMMARY_MARK = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    """terminal color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class CheckFailed(AssertionError):
    """an assertion made through this module, as opposed to an unexpected error."""
    pass


# --- registration and assertions ---

def test(description: str) -> Callable:
    """
    register a function as a case for run().
    the function is returned callable as-is, so pytest collects it too.
    """

    def decorator(func: Callable) -> Callable:
        _suite_state['cases'].append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# modules alias this as `test`; keep pytest from collecting the decorator itself
test.__test__ = False


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise CheckFailed(message)


def assert_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """equality check that reports both sides"""
    if not actual == expected:
        raise CheckFailed(f"{message + ': ' if message else ''}expected {expected!r}, got {actual!r}")


@contextmanager
def raises(error_type: Type[BaseException], match: Optional[str] = None) -> Iterator[Dict[str, Any]]:
    """
    expect the block to raise error_type (optionally with match in its message).
    the caught error is available afterwards as captured['error'].
    """
    captured: Dict[str, Any] = {'error': None}
    try:
        yield captured
    except error_type as e:
        if match is not None and match not in str(e):
            raise CheckFailed(f"{type(e).__name__} message {str(e)!r} does not contain {match!r}")
        captured['error'] = e
        return
    raise CheckFailed(f"expected {error_type.__name__} to be raised")


# --- runner ---

def _run_case(case: Dict[str, Any]) -> Dict[str, Any]:
    """call one case and time it; failures are recorded, never raised"""
    started = time.perf_counter()
    error = None
    try:
        case['func']()
    except CheckFailed as e:
        error = f"check failed: {e}"
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
    return {
        'description': case['description'],
        'error': error,
        'ms': (time.perf_counter() - started) * 1000,
    }


def run(title: str = "test run", only: Optional[str] = None) -> bool:
    """
    run the registered cases, or only those whose description contains `only`.
    prints one line per case with its timing and returns True when none failed.
    """
    cases = [c for c in _suite_state['cases'] if only is None or only in c['description']]
    skipped = len(_suite_state['cases']) - len(cases)

    print(f"\n{_c.info}--- {title}: {len(cases)} cases ---{_c.reset}")
    results = _suite_state['results'] = []

    for case in cases:
        result = _run_case(case)
        results.append(result)
        mark, label = (PASS_MARK, f"{_c.ok}✔ pass") if result['error'] is None else (FAIL_MARK, f"{_c.fail}✖ fail")
        print(f"  {label}{_c.reset}  {mark}  {result['description']} {_c.grey}({result['ms']:.1f}ms){_c.reset}")

    # cleared so several modules can run in one process
    _suite_state['cases'] = []
    return _print_summary(results, skipped)


def _print_summary(results: List[Dict[str, Any]], skipped: int) -> bool:
    failures = [r for r in results if r['error'] is not None]
    total_ms = sum(r['ms'] for r in results)
    color = _c.fail if failures else _c.ok

    print(f"\n{color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_MARK}  {len(results) - len(failures)}/{len(results)} passed in {_c.warn}{total_ms:.2f}ms{_c.reset}")
    if skipped:
        print(f"  {_c.grey}{skipped} filtered out{_c.reset}")
    if results:
        slowest = max(results, key=lambda r: r['ms'])
        print(f"  {_c.grey}slowest: {slowest['description']} ({slowest['ms']:.1f}ms){_c.reset}")
    for failure in failures:
        print(f"  {_c.fail}✖ {failure['description']}{_c.reset}")
        print(f"    {_c.grey}└─> {failure['error']}{_c.reset}")
    print(f"{color}---------------{_c.reset}\n")
    return not failures
