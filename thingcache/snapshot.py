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
"""Convert Reddit "thing" JSON into snapshots for the registry.

The fetcher hands over listing children that are already deserialized::

    {"kind": "t3", "data": {"name": "t3_abc", "gilded": 1, "gildings": {...}}}

Keys that belong to a capability are moved into that capability's view and
everything else is kept as the record's base fields.
"""
from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pydantic

from thingcache import errors
from thingcache.models import (
    FULLNAME_KINDS,
    CapabilityTag,
    CapabilityView,
    EditableView,
    GildableView,
    VotableView,
    VoteDirection,
)
from thingcache.registry import ThingSnapshot

logger = logging.getLogger(__name__)

_GILDABLE_KEYS = frozenset({"can_gild", "gilded", "gildings"})
_VOTABLE_KEYS = frozenset({"score", "likes"})
_EDITABLE_KEYS = frozenset({"edited"})
_ID_KEYS = frozenset({"name"})


class _RawThing(pydantic.BaseModel):
    """A listing child as returned by the Reddit API."""

    kind: str = pydantic.Field(min_length=1)
    data: dict[str, Any]


class _RawGildable(pydantic.BaseModel):
    can_gild: bool = False
    gilded: int = 0
    gildings: dict[str, int] = pydantic.Field(default_factory=dict)


class _RawVotable(pydantic.BaseModel):
    score: int = 0
    likes: bool | None = None


class _RawEditable(pydantic.BaseModel):
    edited: float | bool = False


def parse_thing(child: Mapping[str, Any]) -> ThingSnapshot:
    """Convert a Reddit listing child into a snapshot.

    :param child: A mapping with ``kind`` and ``data`` keys.
    :returns: The snapshot, ready for :meth:`ModelRegistry.ingest`.
    :raises SnapshotError: if the child is malformed.
    """
    try:
        raw = _RawThing.model_validate(child)
        capabilities = _parse_capabilities(raw.data)
    except pydantic.ValidationError as err:
        raise errors.SnapshotError.from_pydantic(err, source="thing") from None

    record_id = _get_id(raw)
    consumed = _ID_KEYS | _GILDABLE_KEYS | _VOTABLE_KEYS | _EDITABLE_KEYS
    base_fields = {key: value for key, value in raw.data.items() if key not in consumed}
    kind = FULLNAME_KINDS.get(raw.kind, raw.kind)

    logger.debug(
        "Parsed %s %r with %d fields and %d capabilities.",
        kind,
        record_id,
        len(base_fields),
        len(capabilities),
    )
    return ThingSnapshot(record_id, base_fields, capabilities, kind)


def parse_listing(listing: Mapping[str, Any]) -> list[ThingSnapshot]:
    """Convert the children of a Reddit listing into snapshots.

    :param listing: A mapping of ``{"kind": "Listing", "data": {"children": [...]}}``.
    :raises SnapshotError: if the listing or any child is malformed.
    """
    data = listing.get("data")
    children = data.get("children") if isinstance(data, Mapping) else None
    if listing.get("kind") != "Listing" or not isinstance(children, Iterable):
        raise errors.SnapshotError(
            "Bad listing content:",
            details="Expected a mapping of kind 'Listing' with a list of children.",
        )
    return [parse_thing(child) for child in children]


def _get_id(raw: _RawThing) -> str:
    name = raw.data.get("name")
    if isinstance(name, str) and name:
        return name
    thing_id = raw.data.get("id")
    if isinstance(thing_id, str) and thing_id:
        return f"{raw.kind}_{thing_id}"
    raise errors.SnapshotError(
        f"Bad {raw.kind} thing content:",
        details="Thing data has neither a 'name' nor an 'id'.",
    )


def _parse_capabilities(
    data: Mapping[str, Any],
) -> dict[CapabilityTag, CapabilityView]:
    capabilities: dict[CapabilityTag, CapabilityView] = {}
    if _GILDABLE_KEYS & data.keys():
        gildable = _RawGildable.model_validate(_subset(data, _GILDABLE_KEYS))
        capabilities[CapabilityTag.GILDABLE] = GildableView(
            is_gildable=gildable.can_gild,
            gild_count=gildable.gilded,
            gildings=gildable.gildings,
        )
    if _VOTABLE_KEYS & data.keys():
        votable = _RawVotable.model_validate(_subset(data, _VOTABLE_KEYS))
        capabilities[CapabilityTag.VOTABLE] = VotableView(
            score=votable.score, vote=VoteDirection.from_likes(votable.likes)
        )
    if _EDITABLE_KEYS & data.keys():
        editable = _RawEditable.model_validate(_subset(data, _EDITABLE_KEYS))
        capabilities[CapabilityTag.EDITABLE] = EditableView(
            edited=_edited_time(editable.edited)
        )
    return capabilities


def _edited_time(edited: float | bool) -> datetime.datetime | None:
    """Reddit reports ``false`` for unedited things, or the epoch time of the edit."""
    if isinstance(edited, bool):
        return None
    return datetime.datetime.fromtimestamp(edited, tz=datetime.timezone.utc)


def _subset(data: Mapping[str, Any], keys: frozenset[str]) -> dict[str, Any]:
    return {key: data[key] for key in keys if key in data}
