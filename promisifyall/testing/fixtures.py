"""Test fixtures for promisifyall consumers.

These helpers build small callback-style APIs and record how they are used,
so test suites can check promisification without writing the same
boilerplate classes over and over.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Tuple


class CallbackRecorder:
    """Callback-style function that records calls and replies on demand.

    Example:
        fetch = CallbackRecorder(results=('value',))
        api = SimpleNamespace(fetch=fetch)
        promisify_all(api)
        assert await api.fetchAsync(1, 2) == 'value'
        assert fetch.calls == [((1, 2), {})]

    Args:
        results: Values passed to the callback after the error slot
        error: If set, passed in the error slot instead of results
        in_thread: Fire the callback from a worker thread
    """

    def __init__(self, results: Tuple = (), error: Any = None, in_thread: bool = False):
        self.results = tuple(results)
        self.error = error
        self.in_thread = in_thread
        self.calls: List[Tuple[Tuple, Dict[str, Any]]] = []
        self._threads: List[threading.Thread] = []

    def __call__(self, *args, **kwargs):
        *call_args, callback = args
        self.calls.append((tuple(call_args), kwargs))
        if self.in_thread:
            worker = threading.Thread(target=self._reply, args=(callback,))
            self._threads.append(worker)
            worker.start()
        else:
            self._reply(callback)

    def _reply(self, callback: Callable) -> None:
        if self.error is not None:
            callback(self.error)
        else:
            callback(None, *self.results)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for callbacks fired from worker threads."""
        for worker in self._threads:
            worker.join(timeout)


class AccessorProbe:
    """Counts getter invocations across accessor-bearing test classes."""

    def __init__(self):
        self.getter_calls = 0

    def hit(self) -> None:
        self.getter_calls += 1


def make_callback_class(name: str = 'Service', **extra: Any) -> type:
    """Create a class whose methods follow the callback convention.

    ``get(a, b, c, cb)`` replies with ``a, b, c, self.data`` and
    ``get_many(a..g, cb)`` with seven arguments plus ``self.data``.
    """
    def __init__(self, data=None):
        self.data = data

    def get(self, a, b, c, cb):
        cb(None, a, b, c, self.data)

    def get_many(self, a, b, c, d, e, f, g, cb):
        cb(None, a, b, c, d, e, f, g, self.data)

    namespace = {'__init__': __init__, 'get': get, 'get_many': get_many}
    namespace.update(extra)
    return type(name, (), namespace)


def make_accessor_class(probe: AccessorProbe) -> type:
    """Create a class with a method, an invalid name and two hostile properties.

    ``thrower`` raises from both getter and setter; ``counter`` records every
    getter call in ``probe``. Promisification must never trigger either.
    """
    def test(self, cb):
        cb(None, 'test')

    def invalid(self, cb):
        cb(None, 'invalid')

    def thrower_get(self):
        raise RuntimeError('getter called')

    def thrower_set(self, value):
        raise RuntimeError('setter called')

    def counter_get(self):
        probe.hit()
        return 0

    def counter_set(self, value):
        raise RuntimeError('setter called')

    cls = type('AccessorTest', (), {
        'test': test,
        'thrower': property(thrower_get, thrower_set),
        'counter': property(counter_get, counter_set),
    })
    setattr(cls, '---invalid---', invalid)
    return cls
