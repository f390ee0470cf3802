"""
Observer Registry

Ordered list of callbacks owned by a SettingsStore.
"""

import inspect
from typing import Any, Callable, Iterator

Observer = Callable[[Any], None]


class ObserverRegistry:
    """
    Registration-ordered callbacks.

    Duplicates are not filtered; registering the same callable twice
    means it is called twice. Removal drops every registration of the
    callable. Matching is by identity, except that bound methods match
    when they wrap the same function on the same instance (`obj.method`
    builds a new object on every access). A custom __eq__ is ignored.
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove(self, observer: Observer) -> None:
        """Unknown observers are ignored"""
        self._observers = [o for o in self._observers if not _same(o, observer)]

    def clear(self) -> None:
        self._observers = []

    def __iter__(self) -> Iterator[Observer]:
        # Snapshot so an observer can unsubscribe while being notified
        return iter(list(self._observers))

    def __len__(self) -> int:
        return len(self._observers)

    def __contains__(self, observer: object) -> bool:
        return any(_same(o, observer) for o in self._observers)


def _same(registered: object, observer: object) -> bool:
    if registered is observer:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(observer):
        return (
            registered.__func__ is observer.__func__
            and registered.__self__ is observer.__self__
        )
    # Methods of C types, e.g. list.append on a given list
    if inspect.isbuiltin(registered) and inspect.isbuiltin(observer):
        return (
            registered.__name__ == observer.__name__
            and registered.__self__ is observer.__self__
            and not inspect.ismodule(registered.__self__)
        )
    return False
