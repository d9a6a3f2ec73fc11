"""Wrapper construction.

A wrapper never holds on to the function it replaces. Each call looks the
origin up by name on the receiver, appends a node-style callback
``callback(error, *results)`` and returns a future settled by that callback.
"""

import asyncio
import concurrent.futures
import functools
import inspect
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from ..errors import CallbackError
from .markers import WrapperBinding, mark
from .reflector import Member


class CallStyle(Enum):
    """How a wrapper reaches its receiver."""
    METHOD = "method"           # Plain function on a class; receiver is self
    CLASS_BOUND = "class"       # staticmethod/classmethod; receiver is the class
    BOUND = "bound"             # Installed on a non-class object; receiver is that object


def call_style_for(owner: Any, member: Member) -> CallStyle:
    if not isinstance(owner, type):
        return CallStyle.BOUND
    if inspect.isfunction(member.raw):
        return CallStyle.METHOD
    # staticmethod, classmethod, or a callable object that does not bind
    return CallStyle.CLASS_BOUND


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _settle(future: Any, resolved: bool, value: Any) -> None:
    if future.done():
        # Settled by an earlier callback, or cancelled by the awaiting side
        return
    try:
        if resolved:
            future.set_result(value)
        else:
            future.set_exception(value)
    except (asyncio.InvalidStateError, concurrent.futures.InvalidStateError):
        # Lost a race with a callback fired from another thread
        pass


def _as_exception(error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    # Anything else, exception classes included, is carried untouched in .value
    return CallbackError(error)


def make_callback(future: Any) -> Callable[..., None]:
    """Build the trailing callback handed to the origin function.

    A non-None error rejects; otherwise zero results resolve to None, one
    result to itself and several to a list in callback order. Only the
    first call counts.
    """
    get_loop = getattr(future, 'get_loop', None)
    loop = get_loop() if get_loop is not None else None

    def callback(error: Any = None, *results: Any) -> None:
        if error is not None:
            resolved, value = False, _as_exception(error)
        elif not results:
            resolved, value = True, None
        elif len(results) == 1:
            resolved, value = True, results[0]
        else:
            resolved, value = True, list(results)

        if loop is None or _running_loop() is loop:
            _settle(future, resolved, value)
        else:
            # Fired from another thread; futures are not thread-safe
            loop.call_soon_threadsafe(_settle, future, resolved, value)

    return callback


class WrapperFactory:
    """Builds promise-returning wrappers for callback functions.

    Args:
        future_factory: Zero-argument callable returning a future-like object
            (``set_result``/``set_exception``/``done``). Defaults to a future on
            the running asyncio loop, so default wrappers must be called from
            within a coroutine or loop callback.
    """

    def __init__(self, future_factory: Optional[Callable[[], Any]] = None):
        self.future_factory = future_factory

    def new_future(self) -> Any:
        if self.future_factory is not None:
            return self.future_factory()
        return asyncio.get_running_loop().create_future()

    def call(self, resolve_origin: Callable[[], Callable], args: Tuple, kwargs: dict) -> Any:
        """Invoke the origin found by ``resolve_origin`` with a settling callback."""
        future = self.new_future()
        callback = make_callback(future)
        try:
            origin = resolve_origin()
            origin(*args, callback, **kwargs)
        except Exception as e:
            # A synchronous raise is a failure of the operation, not of the wrapper
            callback(e)
        return future

    def build(self, owner: Any, member: Member, wrapper_name: str) -> Any:
        """Create the value to install on ``owner`` under ``wrapper_name``.

        Returns a plain function for methods, a classmethod for static and
        class members of a class, and a closure over ``owner`` otherwise.
        """
        style = call_style_for(owner, member)
        origin_name = member.name
        factory = self

        if style is CallStyle.BOUND:
            def wrapper(*args, **kwargs):
                return factory.call(functools.partial(getattr, owner, origin_name), args, kwargs)
        else:
            def wrapper(receiver, *args, **kwargs):
                return factory.call(functools.partial(getattr, receiver, origin_name), args, kwargs)

        wrapper.__name__ = wrapper_name
        qualname = getattr(owner, '__qualname__', None) if isinstance(owner, type) else None
        wrapper.__qualname__ = f"{qualname}.{wrapper_name}" if qualname else wrapper_name
        if inspect.isfunction(member.function):
            wrapper.__module__ = member.function.__module__
        wrapper.__doc__ = (
            f"Call {origin_name}() with a trailing callback and return a future "
            f"for its outcome."
        )
        mark(wrapper, WrapperBinding(origin_name, wrapper_name, owner, member.function))

        if style is CallStyle.CLASS_BOUND:
            return classmethod(wrapper)
        return wrapper


def promisify(func: Callable, future_factory: Optional[Callable[[], Any]] = None) -> Callable:
    """Convert a single callback-style function into a future-returning one.

    Unlike the wrappers installed by promisify_all, the result is bound to
    ``func`` itself rather than to a name on a receiver.
    """
    factory = WrapperFactory(future_factory)

    @functools.wraps(func, updated=())
    def promisified(*args, **kwargs):
        return factory.call(lambda: func, args, kwargs)

    return promisified
