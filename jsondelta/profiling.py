"""Tools for profiling diff/patch performance.

Diffing long arrays is the expensive part of jsondelta, since every
element is serialized to a comparison key before the elements are
paired. The timer in this module accumulates the time spent in named
segments of code, which is enough for initial considerations.

Add some statements like

    from jsondelta.profiling import timer
    with timer.time('name of segment'):
        <code to time>

or decorate a function with `@timer.profile()`, then launch
`python -m jsondelta.profiling a.json b.json`, which takes the same
arguments as `jdiff` and prints a table of all segments afterwards.

The segments already instrumented are:

    tokenize      serializing array elements to comparison keys
    lis           pairing elements and computing the subsequence
    diff_arrays   the complete array diff, including the above
"""

import contextlib
import functools
import time


from tabulate import tabulate


class Segment(object):
    __slots__ = ('calls', 'seconds')

    def __init__(self):
        self.calls = 0
        self.seconds = 0.0


class TimePaths(object):
    """Accumulates wall time and call counts per segment name."""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.segments = {}

    @property
    def map(self):
        "Plain dict view of the segments, {name: {'time': secs, 'calls': n}}."
        return {name: dict(time=s.seconds, calls=s.calls)
                for name, s in self.segments.items()}

    @contextlib.contextmanager
    def time(self, key):
        if not self.enabled:
            yield
            return
        start = time.perf_counter()
        try:
            yield
        finally:
            segment = self.segments.setdefault(key, Segment())
            segment.seconds += time.perf_counter() - start
            segment.calls += 1

    def profile(self, key=None):
        "Decorator timing every call of a function, by default under its name."
        def decorator(function):
            name = key or function.__name__
            @functools.wraps(function)
            def timed(*args, **kwargs):
                with self.time(name):
                    return function(*args, **kwargs)
            return timed
        return decorator

    @contextlib.contextmanager
    def enable(self):
        previous, self.enabled = self.enabled, True
        try:
            yield self
        finally:
            self.enabled = previous

    def reset(self):
        self.segments.clear()

    def __str__(self):
        rows = [(name, s.calls, s.seconds, s.seconds / s.calls)
                for name, s in sorted(self.segments.items(),
                                      key=lambda item: -item[1].seconds)]
        return tabulate(rows, headers=['Key', 'Calls', 'Time', 'Time/Call'])


timer = TimePaths(enabled=False)


def profile_diff_paths(args=None):
    from .jdiffapp import main
    try:
        with timer.enable():
            main(args)
    finally:
        print(str(timer))


if __name__ == "__main__":
    profile_diff_paths()
