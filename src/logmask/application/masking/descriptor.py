"""Type descriptors – per-type tables of field masking rules.

A :class:`TypeDescriptor` is built once per type by :class:`DescriptorBuilder`
from the type's *own* declared fields; fields inherited from base classes are
deliberately left out.  Fields are discovered, in declaration order, from:

* an explicit table given to :meth:`DescriptorBuilder.register`, or
* the class annotations (dataclass fields, pydantic model fields or plain
  annotated attributes) followed by unannotated ``__slots__`` entries.

Masking metadata is read from ``dataclasses.field(metadata=...)`` (see
:func:`~logmask.application.masking.rules.sensitive`) and from
``Annotated[...]`` extras.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import re
import sys
import types
import typing
from collections.abc import Iterator, Mapping
from datetime import date, time
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Final, Union

from logmask.application.masking.catalog import mask_text
from logmask.application.masking.rules import (
    MASK_METADATA_KEY,
    NO_MASKING,
    MaskingRule,
    MaskSensitiveData,
    resolve_rule,
)
from logmask.kernel.errors import FieldAccessError, InvalidPatternError, UnresolvedAnnotationError

__all__ = [
    "NULL_TEXT",
    "DescriptorBuilder",
    "FieldDescriptor",
    "TypeDescriptor",
    "is_maskable_type",
]

NULL_TEXT: Final = "null"

# datetime is a subclass of date, bool of int
_MASKABLE_TYPES: Final = (str, Decimal, date, time, bool, int, float)

_COLLECTION_ORIGINS: Final = frozenset({
    list, tuple, set, frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
})

_UNION_ORIGINS: Final = frozenset({Union, types.UnionType})

_CLASSVAR_PREFIXES: Final = ("ClassVar", "typing.ClassVar", "t.ClassVar")

_METADATA_MARKERS: Final = ("MaskSensitiveData", "Annotated")


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """Resolved masking data for one field; immutable once built."""

    name: str
    rule: MaskingRule = NO_MASKING
    pattern: re.Pattern[str] | None = None
    type_is_maskable: bool = False
    annotation: Any = dataclasses.field(default=None, compare=False, repr=False)

    @property
    def has_rule(self) -> bool:
        return self.pattern is not None

    def read(self, instance: Any) -> Any:
        try:
            return getattr(instance, self.name)
        except Exception as exc:
            raise FieldAccessError(type(instance).__name__, self.name, cause=exc) from exc

    def render(self, value: Any) -> str:
        """Text form of *value*, masked when the field carries a rule."""
        if value is None:
            return NULL_TEXT
        text = str(value)
        if self.pattern is None:
            return text
        return mask_text(text, self.pattern)


@dataclasses.dataclass(frozen=True)
class TypeDescriptor:
    """Ordered ``field name -> FieldDescriptor`` table of a single type."""

    cls: type
    fields: Mapping[str, FieldDescriptor] = dataclasses.field(hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", types.MappingProxyType(dict(self.fields)))

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields.values())

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self.fields[name]

    @property
    def type_name(self) -> str:
        return self.cls.__name__

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.fields)

    @property
    def is_sensitive(self) -> bool:
        """``True`` when at least one field is masked."""
        return any(f.has_rule for f in self.fields.values())


def is_maskable_type(annotation: Any) -> bool:
    """Whether *annotation* names a text/decimal/temporal/boolean/numeric type.

    ``Optional[...]``/unions of such types and collections of them qualify
    too.  Unresolved string annotations never do.
    """
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return is_maskable_type(typing.get_args(annotation)[0])
    if origin in _UNION_ORIGINS:
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        return bool(members) and all(is_maskable_type(a) for a in members)
    if origin in _COLLECTION_ORIGINS:
        members = [a for a in typing.get_args(annotation) if a is not Ellipsis]
        return bool(members) and all(is_maskable_type(a) for a in members)
    if origin is not None:
        return False
    return isinstance(annotation, type) and issubclass(annotation, _MASKABLE_TYPES)


def _raw_annotations(cls: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls))
    except NameError:
        # deferred evaluation (3.14+) with a name that does not resolve
        import annotationlib

        return dict(annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF))


def _own_annotations(cls: type) -> dict[str, Any]:
    """Own annotations of *cls*, each resolved on its own.

    A string that does not resolve stays a string.  One that names masking
    metadata raises :class:`UnresolvedAnnotationError`.
    """
    module = sys.modules.get(cls.__module__)
    # module names win over class attributes, as in typing.get_type_hints
    modulens = dict(vars(module)) if module is not None else {}
    classns = dict(vars(cls))
    annotations: dict[str, Any] = {}
    for name, annotation in _raw_annotations(cls).items():
        if isinstance(annotation, typing.ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, classns, modulens)  # noqa: S307
            except (NameError, SyntaxError, TypeError, AttributeError) as exc:
                if any(marker in annotation for marker in _METADATA_MARKERS):
                    raise UnresolvedAnnotationError(
                        cls.__name__, name, annotation, cause=exc
                    ) from exc
        annotations[name] = annotation
    return annotations


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(_CLASSVAR_PREFIXES)
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


def _annotated_metadata(annotation: Any) -> MaskSensitiveData | None:
    if typing.get_origin(annotation) is not Annotated:
        return None
    for extra in annotation.__metadata__:
        if isinstance(extra, MaskSensitiveData):
            return extra
    return None


class DescriptorBuilder:
    """Builds :class:`TypeDescriptor` objects from type-level structure only."""

    def __init__(self) -> None:
        self._registered: dict[type, tuple[tuple[str, MaskSensitiveData | None], ...]] = {}

    def register(
        self,
        cls: type,
        fields: Mapping[str, MaskSensitiveData | Mapping[str, Any] | None],
    ) -> None:
        """Declare the ordered field table of *cls* explicitly.

        Values are :class:`MaskSensitiveData`, the ``{namedStrategy,
        customPattern}`` mapping form, or ``None`` for an unmasked field.
        Replaces whatever the class declares through annotations.
        """
        table: list[tuple[str, MaskSensitiveData | None]] = []
        for name, meta in fields.items():
            if meta is not None and not isinstance(meta, MaskSensitiveData):
                meta = MaskSensitiveData.from_dict(meta)
            table.append((name, meta))
        self._registered[cls] = tuple(table)

    def unregister(self, cls: type) -> None:
        self._registered.pop(cls, None)

    def is_registered(self, cls: type) -> bool:
        return cls in self._registered

    def build(self, cls: type) -> TypeDescriptor:
        annotations = _own_annotations(cls)
        descriptors: dict[str, FieldDescriptor] = {}
        for name, annotation, metadata in self._declared_fields(cls, annotations):
            descriptors[name] = self._describe(cls, name, annotation, metadata)
        return TypeDescriptor(cls, descriptors)

    def _declared_fields(
        self,
        cls: type,
        annotations: dict[str, Any],
    ) -> Iterator[tuple[str, Any, MaskSensitiveData | None]]:
        registered = self._registered.get(cls)
        if registered is not None:
            for name, meta in registered:
                yield name, annotations.get(name), meta
            return

        if dataclasses.is_dataclass(cls):
            for f in dataclasses.fields(cls):
                if f.name not in annotations:
                    continue
                annotation = annotations[f.name]
                meta = f.metadata.get(MASK_METADATA_KEY) or _annotated_metadata(annotation)
                yield f.name, annotation, meta
            return

        model_fields = getattr(cls, "model_fields", None)
        seen: set[str] = set()
        for name, annotation in annotations.items():
            if _is_classvar(annotation):
                continue
            if isinstance(model_fields, Mapping) and name not in model_fields:
                continue
            seen.add(name)
            yield name, annotation, _annotated_metadata(annotation)

        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in seen or name in ("__dict__", "__weakref__"):
                continue
            yield name, None, None

    @staticmethod
    def _describe(
        cls: type,
        name: str,
        annotation: Any,
        metadata: MaskSensitiveData | None,
    ) -> FieldDescriptor:
        rule = resolve_rule(metadata)
        try:
            pattern = rule.compile()
        except re.error as exc:
            raise InvalidPatternError(
                cls.__name__, name, rule.custom_pattern or "", cause=exc
            ) from exc
        return FieldDescriptor(
            name=name,
            rule=rule,
            pattern=pattern,
            type_is_maskable=is_maskable_type(annotation),
            annotation=annotation,
        )
