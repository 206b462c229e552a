"""
a small test harness. test modules register functions with @test and run
them from their __main__ block with main(); pytest collects the same
functions directly, so failures there surface as plain AssertionErrors.
"""
import sys
import time
import traceback
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

_registered: List[Dict[str, Any]] = []

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'

GREEN, RED, YELLOW, BLUE, GREY, RESET = (
    '\033[92m', '\033[91m', '\033[93m', '\033[94m', '\033[90m', '\033[0m'
)


class TestAssertionError(AssertionError):
    """an assert_that failure, reported without a traceback"""


def test(description: str) -> Callable:
    """register the decorated function under a readable description"""
    def register(func: Callable) -> Callable:
        _registered.append({'func': func, 'description': description})
        return func
    return register


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_raises(expected: Union[Type[BaseException], Tuple[Type[BaseException], ...]],
                  func: Callable, *args, message: Optional[str] = None, **kwargs) -> BaseException:
    """call func and fail unless it raises `expected`. returns the caught exception."""
    try:
        func(*args, **kwargs)
    except expected as e:
        return e
    names = expected.__name__ if isinstance(expected, type) else '/'.join(e.__name__ for e in expected)
    raise TestAssertionError(message or f"expected {names} to be raised")


def _run_one(func: Callable, verbose: bool) -> Optional[str]:
    """None on success, else a one-line reason"""
    try:
        func()
    except TestAssertionError as e:
        return f"assertion failed: {e}"
    except Exception as e:
        if verbose:
            traceback.print_exc()
        return f"{type(e).__name__}: {e}"
    return None


def run(title: str = "test run", only: Optional[str] = None, verbose: bool = False) -> bool:
    """
    run the registered tests (those whose description contains `only`, if
    given), print a report and return true when all of them passed.
    the registry is emptied afterwards so a script can run several suites.
    """
    print(f"\n{BLUE}--- starting: {title} ---{RESET}")
    started = time.perf_counter()
    selected = [t for t in _registered if not only or only in t['description']]

    failures = 0
    for entry in selected:
        reason = _run_one(entry['func'], verbose)
        if reason is None:
            print(f"  {GREEN}✔ pass{RESET}  {PASS_FACE}  {entry['description']}")
        else:
            failures += 1
            print(f"  {RED}✖ fail{RESET}  {FAIL_FACE}  {entry['description']}")
            print(f"    {GREY}└─> {reason}{RESET}")

    elapsed_ms = (time.perf_counter() - started) * 1000
    colour = GREEN if failures == 0 else RED
    print(f"\n{colour}--- summary ---{RESET}")
    print(f"  {SUMMARY_FACE}  ran {BLUE}{len(selected)}{RESET} tests in {YELLOW}{elapsed_ms:.2f}ms{RESET}")
    print(f"  {GREEN}passed: {len(selected) - failures}{RESET}, {RED}failed: {failures}{RESET}")
    print(f"{colour}---------------{RESET}\n")

    _registered.clear()
    return failures == 0


def main(title: str = "test run") -> None:
    """entry point for a test module: `python x_test.py [filter] [-v]`"""
    args = [a for a in sys.argv[1:] if a != '-v']
    ok = run(title=title, only=args[0] if args else None, verbose='-v' in sys.argv[1:])
    sys.exit(0 if ok else 1)
