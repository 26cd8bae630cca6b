"""Pluggable true-randomness sources, looked up by configured name."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RandomSource(ABC):
    """One external service able to hand out a single score per call.

    A source never raises for service trouble and never remembers what it
    returned. Keeping a user's fetched score for the rest of the day belongs
    to whoever stores scores.
    """

    name: str = ""

    @abstractmethod
    def fetch(self, timeout_ms: int) -> int | None:
        """Ask the service for one integer in ``[0, 100]``.

        *timeout_ms* bounds the call as a whole. Once it has elapsed the
        request is abandoned, its connection is released, and the call
        returns. ``None`` stands for every way the service can let the
        caller down: no answer in time, a transport or HTTP error, or a
        payload without a usable integer.
        """


class RandomSourceRegistry:
    """Name-to-class table filled in by the :meth:`register` decorator."""

    _sources: dict[str, type[RandomSource]] = {}

    @classmethod
    def register(cls, name: str):
        """Decorate a :class:`RandomSource` subclass to make it reachable as *name*.

        Re-registering the same class is a no-op; claiming a name already
        held by a different class raises ``ValueError``.
        """

        def decorator(klass: type[RandomSource]) -> type[RandomSource]:
            holder = cls._sources.get(name)
            if holder is not None and holder is not klass:
                msg = f"Random source name {name!r} is already taken by {holder.__qualname__}"
                raise ValueError(msg)
            cls._sources[name] = klass
            return klass

        return decorator

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> RandomSource:
        """Build the source registered as *name*, passing *kwargs* to its constructor.

        Raises
        ------
        KeyError
            If nothing is registered under *name*.
        """
        try:
            klass = cls._sources[name]
        except KeyError:
            known = ", ".join(cls.available()) or "none registered"
            msg = f"No random source named {name!r} (known: {known})"
            raise KeyError(msg) from None
        return klass(**kwargs)

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls._sources)
