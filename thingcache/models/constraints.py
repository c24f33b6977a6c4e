# This file is part of thingcache.
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License version 3, as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranties of MERCHANTABILITY,
# SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with this program.  If not, see <http://www.gnu.org/licenses/>.
"""Constrained pydantic types for thingcache models."""

import copy
import re
import types
from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

import pydantic

from thingcache import errors

K = TypeVar("K")
V = TypeVar("V")

MAX_GILD_COUNT = 2**15 - 1
"""Reddit reports gild counts as a 16-bit signed integer."""

_RECORD_ID_REGEX = r"^[A-Za-z0-9][A-Za-z0-9_.:-]*$"
_RECORD_ID_COMPILED_REGEX = re.compile(_RECORD_ID_REGEX)
MAX_RECORD_ID_LENGTH = 128

FULLNAME_KINDS: Mapping[str, str] = types.MappingProxyType(
    {
        "t1": "comment",
        "t2": "account",
        "t3": "link",
        "t4": "message",
        "t5": "subreddit",
        "t6": "award",
    }
)
"""Reddit fullname prefixes and the kind of thing they identify."""

DEFAULT_KIND = "thing"


def is_valid_record_id(record_id: object) -> bool:
    """Determine whether a value can be used as a record id."""
    return (
        isinstance(record_id, str)
        and len(record_id) <= MAX_RECORD_ID_LENGTH
        and _RECORD_ID_COMPILED_REGEX.match(record_id) is not None
    )


def validate_record_id(record_id: object) -> str:
    """Validate a record id.

    :param record_id: The id to check.
    :returns: The same id if it's valid.
    :raises InvalidIdError: if the id is empty or malformed.
    """
    if not is_valid_record_id(record_id):
        raise errors.InvalidIdError(record_id)
    return record_id  # type: ignore[return-value]


def kind_from_id(record_id: str) -> str:
    """Get the kind of thing a fullname identifies.

    >>> kind_from_id("t3_abc")
    'link'
    >>> kind_from_id("abc")
    'thing'
    """
    prefix, sep, _ = record_id.partition("_")
    if not sep:
        return DEFAULT_KIND
    return FULLNAME_KINDS.get(prefix, DEFAULT_KIND)


def _freeze_mapping(value: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return types.MappingProxyType(dict(value))


def _thaw_mapping(value: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(value)


def freeze_value(value: Any) -> Any:  # noqa: ANN401
    """Get a read-only deep copy of a value.

    Mappings become read-only mappings, lists and tuples become tuples and sets
    become frozensets, all the way down. Other values are deep-copied.
    """
    if isinstance(value, Mapping):
        return types.MappingProxyType(
            {key: freeze_value(item) for key, item in value.items()}
        )
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze_value(item) for item in value)
    return copy.deepcopy(value)


def thaw_value(value: Any) -> Any:  # noqa: ANN401
    """Get a plain, mutable copy of a value made by :func:`freeze_value`."""
    if isinstance(value, Mapping):
        return {key: thaw_value(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw_value(item) for item in value]
    if isinstance(value, frozenset):
        return [thaw_value(item) for item in value]
    return value


RecordId = Annotated[
    str,
    pydantic.BeforeValidator(validate_record_id),
    pydantic.Field(
        description="The stable id of the remote resource, usually its fullname.",
        examples=["t3_abc", "t1_c0ffee"],
    ),
]

GildCount = Annotated[
    int,
    pydantic.Field(
        ge=0,
        le=MAX_GILD_COUNT,
        description="How many times the thing has been gilded.",
    ),
]

FrozenDict = Annotated[
    Mapping[K, V],
    pydantic.AfterValidator(_freeze_mapping),
    pydantic.PlainSerializer(_thaw_mapping),
]
"""A mapping that can't be modified once validated. Serializes as a dict."""

DeepFrozenDict = Annotated[
    Mapping[K, V],
    pydantic.AfterValidator(freeze_value),
    pydantic.PlainSerializer(thaw_value),
]
"""A mapping frozen all the way down once validated. Serializes as plain data."""
