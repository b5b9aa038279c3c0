"""Field resolution against document schemas.

Search definitions keep field references unresolved until they are rendered.
A :class:`Schema` turns each reference into the serialized field name stored
in the collection: plain strings for untyped collections, or attribute names
and :class:`FieldRef` members mapped through a pydantic model's aliases.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, get_args, runtime_checkable

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from atlas_search.exceptions import InvalidArgumentError, SchemaMismatchError

logger = logging.getLogger(__name__)


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    """Return the model class wrapped by an annotation (``Model | None``, ``list[Model]``)."""
    if isinstance(annotation, type) and not get_args(annotation):
        return annotation if issubclass(annotation, BaseModel) else None
    for arg in get_args(annotation):
        found = _nested_model(arg)
        if found is not None:
            return found
    return None


def _serialized_name(name: str, info: FieldInfo) -> str:
    return info.serialization_alias or info.alias or name


def _member_model(model: type[BaseModel], parts: tuple[str, ...]) -> type[BaseModel] | None:
    current: type[BaseModel] | None = model
    for part in parts:
        if current is None:
            return None
        current = _nested_model(current.model_fields[part].annotation)
    return current


@dataclass(frozen=True)
class FieldRef:
    """Typed reference to a (possibly nested) member of a pydantic model.

    Members are reached by attribute; members named like the reference's own
    fields (``model``, ``parts``) are reached by item, e.g. ``F.car["model"]``.
    """

    model: type[BaseModel]
    parts: tuple[str, ...]

    def __getattr__(self, name: str) -> "FieldRef":
        if name.startswith("_") or name in ("model", "parts"):
            raise AttributeError(name)
        return self._member(name)

    def __getitem__(self, name: str) -> "FieldRef":
        try:
            return self._member(name)
        except AttributeError as e:
            raise KeyError(name) from e

    def _member(self, name: str) -> "FieldRef":
        target = _member_model(self.model, self.parts)
        if target is None:
            raise AttributeError(f"{self} is not a nested model")
        if name not in target.model_fields:
            raise AttributeError(f"{target.__name__} has no field {name!r}")
        return FieldRef(self.model, (*self.parts, name))

    def __str__(self) -> str:
        return f"{self.model.__name__}.{'.'.join(self.parts)}"


class _ModelFields:
    """Attribute proxy returned by :func:`fields_of`."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    def __getattr__(self, name: str) -> FieldRef:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._model.model_fields:
            raise AttributeError(f"{self._model.__name__} has no field {name!r}")
        return FieldRef(self._model, (name,))

    def __getitem__(self, name: str) -> FieldRef:
        if name not in self._model.model_fields:
            raise KeyError(name)
        return FieldRef(self._model, (name,))

    def __repr__(self) -> str:
        return f"fields_of({self._model.__name__})"


def fields_of(model: type[BaseModel]) -> _ModelFields:
    """Build typed field references for ``model``.

    Examples:
        F = fields_of(Person)
        text("born", F.biography)
        near(F.address.location, GeoPoint(2.35, 48.85), 1000)
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise InvalidArgumentError("model", model, "expected a pydantic model class")
    return _ModelFields(model)


@runtime_checkable
class Schema(Protocol):
    """Maps field references to serialized field names."""

    def resolve(self, field: "str | FieldRef") -> str:
        """Return the serialized name or raise SchemaMismatchError."""
        ...


class UntypedSchema:
    """Schema for collections without a model: names are used as given."""

    def resolve(self, field: str | FieldRef) -> str:
        if isinstance(field, FieldRef):
            raise SchemaMismatchError(field, "typed field references need a ModelSchema")
        if not isinstance(field, str):
            raise SchemaMismatchError(field, "expected a field name")
        return field

    def __repr__(self) -> str:
        return "UntypedSchema()"


class ModelSchema:
    """Schema backed by a pydantic model; members map to their aliases."""

    def __init__(self, model: type[BaseModel]) -> None:
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise InvalidArgumentError("model", model, "expected a pydantic model class")
        self.model = model

    def resolve(self, field: str | FieldRef) -> str:
        match field:
            case FieldRef(model=owner, parts=parts):
                if not issubclass(self.model, owner):
                    raise SchemaMismatchError(
                        field, f"member of {owner.__name__}, not of {self.model.__name__}"
                    )
                return self._serialize(parts, field)
            case str() if field:
                return self._serialize(tuple(field.split(".")), field)
            case _:
                raise SchemaMismatchError(field, "expected a field name or FieldRef")

    def _serialize(self, parts: tuple[str, ...], field: str | FieldRef) -> str:
        model: type[BaseModel] | None = self.model
        names: list[str] = []
        for index, part in enumerate(parts):
            if model is None:
                # Below a non-model field (dicts, free-form documents).
                names.extend(parts[index:])
                break
            name = self._lookup(model, part)
            if name is None:
                if model.model_config.get("extra") == "allow":
                    logger.debug(
                        "Passing %r through: %s allows extra fields", field, model.__name__
                    )
                    names.extend(parts[index:])
                    break
                raise SchemaMismatchError(field, f"{model.__name__} has no field {part!r}")
            info = model.model_fields[name]
            names.append(_serialized_name(name, info))
            model = _nested_model(info.annotation)
        return ".".join(names)

    @staticmethod
    def _lookup(model: type[BaseModel], part: str) -> str | None:
        if part in model.model_fields:
            return part
        for name, info in model.model_fields.items():
            if _serialized_name(name, info) == part:
                return name
        return None

    def __repr__(self) -> str:
        return f"ModelSchema({self.model.__name__})"


UNTYPED = UntypedSchema()

SchemaLike = Schema | type[BaseModel] | None


def as_schema(schema: SchemaLike = None) -> Schema:
    """Normalize ``None``, a pydantic model class, or a Schema into a Schema."""
    if schema is None:
        return UNTYPED
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return ModelSchema(schema)
    if isinstance(schema, Schema):
        return schema
    raise InvalidArgumentError("schema", schema, "expected a Schema or a pydantic model class")
