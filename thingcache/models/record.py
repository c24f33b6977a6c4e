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
"""Immutable snapshots of remote resources and their capabilities."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import pydantic

from thingcache import errors
from thingcache.models import base
from thingcache.models.capabilities import (
    CapabilityTag,
    CapabilityView,
    GildableView,
    get_capability_tag,
    parse_view,
)
from thingcache.models.constraints import (
    DeepFrozenDict,
    FrozenDict,
    RecordId,
    is_valid_record_id,
    kind_from_id,
)

if TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self

CapabilityMapping = Mapping[CapabilityTag, CapabilityView | Mapping[str, Any]]


def check_capability_shapes(capabilities: Mapping[Any, Any]) -> None:
    """Ensure every capability view is stored under its own tag.

    Raw field mappings carry no tag of their own, so only views are checked.

    :raises ShapeMismatchError: if a view's tag doesn't match its key.
    """
    for key, view in capabilities.items():
        if not isinstance(view, CapabilityView):
            continue
        tag = get_capability_tag(key) if isinstance(key, str) else key
        if view.tag is not tag:
            raise errors.ShapeMismatchError(tag, view.tag)


class ModelRecord(base.ThingBaseModel):
    """An immutable snapshot of a remote resource.

    A record holds the resource's core fields, which are opaque to thingcache,
    and at most one view per capability. Records are never modified: the
    ``with_*`` methods return new records, so anything holding an older record
    keeps seeing the snapshot it was given.

    Records compare by value but are not hashable, since their fields are
    mappings. Key them by :attr:`id` instead.
    """

    __hash__ = None  # type: ignore[assignment]

    id: RecordId
    kind: str = ""
    """What type of resource this is. Inferred from the id's fullname prefix."""

    base_fields: DeepFrozenDict[str, Any] = pydantic.Field(
        default_factory=dict, validate_default=True
    )
    capabilities: FrozenDict[CapabilityTag, CapabilityView] = pydantic.Field(
        default_factory=dict, validate_default=True
    )

    @pydantic.field_validator("base_fields", mode="before")
    @classmethod
    def _copy_fields(cls, value: Any) -> Any:  # noqa: ANN401
        if isinstance(value, Mapping):
            return dict(value)
        return value

    @pydantic.field_validator("capabilities", mode="before")
    @classmethod
    def _parse_capabilities(cls, value: Any) -> Any:  # noqa: ANN401
        if not isinstance(value, Mapping):
            return value
        check_capability_shapes(value)
        return {
            get_capability_tag(tag): parse_view(tag, view)
            for tag, view in value.items()
        }

    @pydantic.model_validator(mode="before")
    @classmethod
    def _infer_kind(cls, data: Any) -> Any:  # noqa: ANN401
        if not isinstance(data, dict) or data.get("kind"):
            return data
        record_id = data.get("id")
        if is_valid_record_id(record_id):
            return {**data, "kind": kind_from_id(record_id)}
        return data

    @classmethod
    def create(
        cls,
        record_id: str,
        fields: Mapping[str, Any] | None = None,
        capabilities: CapabilityMapping | None = None,
        *,
        kind: str | None = None,
    ) -> Self:
        """Create a record, reporting bad input as thingcache errors.

        :param record_id: The id of the resource.
        :param fields: The resource's core fields.
        :param capabilities: Views, or raw view fields, keyed by capability.
        :param kind: The type of resource. Inferred from the id if not given.
        :raises InvalidIdError: if the id is empty or malformed.
        :raises ShapeMismatchError: if a view is keyed by a tag that isn't its own.
        :raises SnapshotError: if the fields or a capability's data are invalid.
        """
        try:
            return cls(
                id=record_id,
                kind=kind or "",
                base_fields=fields if fields is not None else {},
                capabilities=capabilities if capabilities is not None else {},
            )
        except pydantic.ValidationError as err:
            raise errors.SnapshotError.from_pydantic(
                err, source=f"{record_id} snapshot"
            ) from None

    def capability(self, tag: CapabilityTag) -> CapabilityView | None:
        """Get this record's view for a capability, if it has one."""
        return self.capabilities.get(tag)

    def has_capability(self, tag: CapabilityTag) -> bool:
        """Determine whether this record carries a capability."""
        return tag in self.capabilities

    @property
    def gildable(self) -> GildableView | None:
        """This record's gilding metadata, if it can be gilded."""
        view = self.capability(CapabilityTag.GILDABLE)
        return view if isinstance(view, GildableView) else None

    def with_capability(self, tag: CapabilityTag, view: CapabilityView) -> Self:
        """Get a copy of this record with a capability's view added or replaced.

        :raises ShapeMismatchError: if the view is not for the given capability.
        """
        if view.tag is not tag:
            raise errors.ShapeMismatchError(tag, view.tag)
        return self.with_capabilities({tag: view})

    def with_capabilities(self, capabilities: CapabilityMapping) -> Self:
        """Get a copy of this record with several capabilities added or replaced.

        Each given view replaces the previous view for its capability entirely.
        Capabilities that aren't given are kept.
        """
        check_capability_shapes(capabilities)
        return self.create(
            self.id,
            self.base_fields,
            {**self.capabilities, **capabilities},
            kind=self.kind,
        )

    def without_capability(self, tag: CapabilityTag) -> Self:
        """Get a copy of this record without a capability."""
        if tag not in self.capabilities:
            return self
        remaining = {t: v for t, v in self.capabilities.items() if t is not tag}
        return self.create(self.id, self.base_fields, remaining, kind=self.kind)
