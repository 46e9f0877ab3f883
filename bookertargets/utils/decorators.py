"""Utility decorators."""

import functools
from typing import Any, Optional, TypeVar

T = TypeVar("T")


def singleton(cls: type[T]) -> type[T]:
    """
    Make the decorated class construct at most one instance per process.

    Arguments are only used by the first call. Not thread-safe; settings and
    stores are touched from the event loop only. Tests reset the instance
    with `_clear()`.

    Usage:
        @singleton
        class Settings:
            ...

        assert Settings() is Settings()
    """
    instance: Optional[T] = None

    @functools.wraps(cls)
    def get_instance(*args: Any, **kwargs: Any) -> T:
        nonlocal instance
        if instance is None:
            instance = cls(*args, **kwargs)
        return instance

    def clear() -> None:
        nonlocal instance
        instance = None

    get_instance._clear = clear  # type: ignore

    return get_instance  # type: ignore
