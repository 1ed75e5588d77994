"""Type-level decorator registry and per-instance annotation store.

Both stores guard each lookup-or-insert with their own lock; no lock is held
across an export or across user code that computes decorators.
"""

import itertools
import logging
import threading
import weakref
from dataclasses import dataclass, field
from typing import Any

from ..models.decorators import CONSTRAINT_TYPES, Constraint, DecoratorSet, Directive

logger = logging.getLogger(__name__)

DECORATORS_HOOK = "spytial_decorators"
DECORATORS_ATTRIBUTE = "__spytial_decorators__"


def declared_decorators(cls: type) -> DecoratorSet | None:
    """Get the decorators a class declares for itself, if any.

    A class declares decorators either with a ``spytial_decorators()``
    classmethod/staticmethod or a ``__spytial_decorators__`` attribute holding a
    DecoratorSet or its dictionary form.
    """
    hook = getattr(cls, DECORATORS_HOOK, None)
    if callable(hook):
        declared = hook()
    else:
        declared = getattr(cls, DECORATORS_ATTRIBUTE, None)

    if declared is None or isinstance(declared, DecoratorSet):
        return declared
    if isinstance(declared, dict):
        return DecoratorSet.from_dict(declared)
    raise TypeError(
        f"{cls.__name__} declares decorators of type {type(declared).__name__}, "
        "expected DecoratorSet or dict"
    )


class TypeRegistry:
    """Type name to statically declared DecoratorSet."""

    def __init__(self):
        self._lock = threading.Lock()
        self._types: dict[str, DecoratorSet] = {}

    def register(self, type_name: str, decorators: DecoratorSet) -> bool:
        """Register decorators for a type name.

        Registration is idempotent: an already-registered name keeps the
        decorators it was first registered with.

        Returns:
            True if the name was newly registered
        """
        with self._lock:
            if type_name in self._types:
                logger.debug(f"Type '{type_name}' already registered, keeping existing decorators")
                return False
            self._types[type_name] = decorators
        logger.debug(
            f"Registered type '{type_name}' with {len(decorators.constraints)} constraints "
            f"and {len(decorators.directives)} directives"
        )
        return True

    def get(self, type_name: str) -> DecoratorSet | None:
        with self._lock:
            return self._types.get(type_name)

    def ensure_registered(self, cls: type, type_name: str | None = None) -> DecoratorSet | None:
        """Get a class's decorators, registering its declaration on first use."""
        type_name = type_name or cls.__name__
        existing = self.get(type_name)
        if existing is not None:
            return existing

        declared = declared_decorators(cls)
        if declared is None:
            return None

        self.register(type_name, declared)
        return self.get(type_name)

    def register_types(self, *classes: type) -> None:
        """Register the declared decorators of each class."""
        for cls in classes:
            self.ensure_registered(cls)

    def type_names(self) -> list[str]:
        with self._lock:
            return list(self._types)

    def __contains__(self, type_name: str) -> bool:
        with self._lock:
            return type_name in self._types

    def __len__(self) -> int:
        with self._lock:
            return len(self._types)


@dataclass
class _InstanceEntry:
    placeholder: str
    constraints: list[Constraint] = field(default_factory=list)
    directives: list[Directive] = field(default_factory=list)

    def snapshot(self) -> DecoratorSet:
        return DecoratorSet(constraints=tuple(self.constraints), directives=tuple(self.directives))


class InstanceStore:
    """Object identity to DecoratorSet accumulated from runtime annotations.

    Entries of weak-referenceable objects are dropped when the object is
    collected. For other objects the caller must keep the object alive for as
    long as its annotations matter, since identities can be reused.
    """

    def __init__(self, placeholder_prefix: str = "obj_"):
        self.placeholder_prefix = placeholder_prefix
        self._lock = threading.Lock()
        self._entries: dict[int, _InstanceEntry] = {}
        self._counter = itertools.count(1)

    def _entry(self, instance: Any) -> _InstanceEntry:
        key = id(instance)
        created = False
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _InstanceEntry(f"{self.placeholder_prefix}{next(self._counter)}")
                self._entries[key] = entry
                created = True
        if created:
            try:
                weakref.finalize(instance, self._discard, key)
            except TypeError:
                logger.debug(f"{type(instance).__name__} is not weak-referenceable; entry kept until removed")
        return entry

    def _discard(self, key: int) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def placeholder_for(self, instance: Any) -> str:
        """Unique identifier standing in for ``self`` in this instance's selectors."""
        return self._entry(instance).placeholder

    def add(self, instance: Any, record: Constraint | Directive) -> None:
        entry = self._entry(instance)
        with self._lock:
            if record.kind in CONSTRAINT_TYPES:
                entry.constraints.append(record)
            else:
                entry.directives.append(record)

    def get(self, instance: Any) -> DecoratorSet | None:
        with self._lock:
            entry = self._entries.get(id(instance))
            return entry.snapshot() if entry is not None else None

    def remove(self, instance: Any) -> None:
        self._discard(id(instance))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
