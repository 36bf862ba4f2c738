"""Record types exchanged by the example services, and their plain-data form.

The plain form is made of dicts, lists, strings, numbers, booleans and
``None`` only, so it can be handed to any codec (JSON, MessagePack, ...).
Enum variants become their names, optional fields become ``None``, and
records become dicts whose keys follow the field order.
"""

import types
import typing
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Optional, TypeVar, Union

T = TypeVar("T")

_NONE_TYPE = type(None)


@dataclass
class Analysis:
    """Counts describing a piece of text."""

    length: int
    word_count: int
    char_count: int
    uppercase_count: int


class Role(Enum):
    """The role a user holds."""

    ADMIN = "Admin"
    MODERATOR = "Moderator"
    USER = "User"
    GUEST = "Guest"


@dataclass
class Preferences:
    """User interface preferences."""

    theme: str
    language: str
    notifications_enabled: bool


@dataclass
class UserMetadata:
    """Bookkeeping data attached to a user."""

    created_at: int
    last_login: Optional[int]
    preferences: Preferences


@dataclass
class User:
    """A registered user."""

    id: int
    username: str
    email: str
    roles: list[Role]
    metadata: UserMetadata


@dataclass
class Transaction:
    """A transfer of money between two accounts."""

    from_: int = field(metadata={"name": "from"})
    to: int
    amount: float
    currency: str
    timestamp: int


@dataclass
class TransactionResult:
    """The outcome of processing a transaction."""

    success: bool
    transaction_id: Optional[str]
    balance: float
    error: Optional[str]


def _wire_name(f) -> str:
    return f.metadata.get("name", f.name)


def to_plain(value: Any) -> Any:
    """Convert records, enums and containers into plain data."""
    if is_dataclass(value) and not isinstance(value, type):
        return {_wire_name(f): to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    return value


def from_plain(cls: type, data: Any) -> Any:
    """Build an instance of ``cls`` from plain data.

    Raises TypeError when a value has the wrong shape and ValueError when
    a required field is missing or an enum variant is unknown. Fields not
    known to the record are ignored. All integer fields are unsigned.
    """
    return _decode(cls, data, cls.__name__)


def _is_optional(tp: Any) -> bool:
    return _is_union(tp) and _NONE_TYPE in typing.get_args(tp)


def _is_union(tp: Any) -> bool:
    origin = typing.get_origin(tp)
    return origin is Union or origin is types.UnionType


def _decode(tp: Any, value: Any, path: str) -> Any:
    if tp is Any:
        return value

    if _is_union(tp):
        args = typing.get_args(tp)
        if value is None and _NONE_TYPE in args:
            return None
        errors = []
        for arg in args:
            if arg is _NONE_TYPE:
                continue
            try:
                return _decode(arg, value, path)
            except (TypeError, ValueError) as exc:
                errors.append(exc)
        if len(errors) == 1:
            raise errors[0]
        raise TypeError(f"{path}: value {value!r} matches no allowed type")

    origin = typing.get_origin(tp)
    if origin in (list, tuple):
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"{path}: expected a sequence, got {type(value).__name__}")
        (item_type,) = typing.get_args(tp)[:1] or (Any,)
        return [_decode(item_type, item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(tp, type) and issubclass(tp, Enum):
        if isinstance(value, tp):
            return value
        try:
            return tp(value)
        except ValueError:
            raise ValueError(f"{path}: unknown variant {value!r}") from None

    if isinstance(tp, type) and is_dataclass(tp):
        if isinstance(value, tp):
            return value
        if not isinstance(value, dict):
            raise TypeError(f"{path}: expected a mapping, got {type(value).__name__}")
        kwargs = {}
        for f in fields(tp):
            key = _wire_name(f)
            field_type = f.type
            if key in value:
                kwargs[f.name] = _decode(field_type, value[key], f"{path}.{key}")
            elif _is_optional(field_type):
                kwargs[f.name] = None
            else:
                raise ValueError(f"{path}: missing field {key!r}")
        return tp(**kwargs)

    if tp is bool:
        if not isinstance(value, bool):
            raise TypeError(f"{path}: expected a boolean, got {value!r}")
        return value
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{path}: expected an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"{path}: expected an unsigned integer, got {value}")
        return value
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{path}: expected a number, got {value!r}")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise TypeError(f"{path}: expected a string, got {value!r}")
        return value

    raise TypeError(f"{path}: unsupported type {tp!r}")