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
"""Capability views: optional, typed facets a model record may carry.

Each capability is identified by a :class:`CapabilityTag` and carried by one
:class:`CapabilityView` subclass. Defining a subclass with a ``tag`` registers
it, so records can validate raw data for that capability::

    class SaveableView(CapabilityView):
        tag: ClassVar[CapabilityTag] = CapabilityTag.SAVEABLE

        is_saved: bool = False
"""
from __future__ import annotations

import datetime
import enum
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

import pydantic

from thingcache import errors
from thingcache.models import base
from thingcache.models.constraints import MAX_GILD_COUNT, FrozenDict, GildCount
from thingcache.util.string import humanize_list

if TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self


class CapabilityTag(enum.Enum):
    """Identifier for an optional capability of a model."""

    GILDABLE = "gildable"
    VOTABLE = "votable"
    EDITABLE = "editable"


class VoteDirection(enum.Enum):
    """The current user's vote on a thing."""

    UP = "up"
    NONE = "none"
    DOWN = "down"

    @classmethod
    def from_likes(cls, likes: bool | None) -> VoteDirection:
        """Convert Reddit's ``likes`` value to a vote direction."""
        if likes is None:
            return cls.NONE
        return cls.UP if likes else cls.DOWN


_VIEW_CLASSES: dict[CapabilityTag, type[CapabilityView]] = {}


class CapabilityView(base.ThingBaseModel):
    """A read-only bundle of one capability's fields."""

    tag: ClassVar[CapabilityTag]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:  # noqa: ANN401
        super().__pydantic_init_subclass__(**kwargs)
        tag = cls.__dict__.get("tag")
        if tag is None:
            return
        if tag in _VIEW_CLASSES and _VIEW_CLASSES[tag] is not cls:
            raise TypeError(
                f"Capability {tag.value!r} already has a view: "
                f"{_VIEW_CLASSES[tag].__name__}"
            )
        _VIEW_CLASSES[tag] = cls

    def as_tag(self, tag: CapabilityTag) -> Self | None:
        """Get this view if it carries the given capability, otherwise None."""
        if getattr(self, "tag", None) is tag:
            return self
        return None


class GildableView(CapabilityView):
    """Gilding metadata for models that can receive Reddit Gold.

    ``gild_count`` is the count reported by the platform and ``gildings`` is
    the breakdown by award tier. When the two disagree, the breakdown is
    authoritative: use :attr:`effective_gild_count`.
    """

    tag: ClassVar[CapabilityTag] = CapabilityTag.GILDABLE
    __hash__ = None  # type: ignore[assignment]

    is_gildable: bool = False
    """Whether the current user can gild this thing when the snapshot was taken."""

    gild_count: GildCount = 0
    gildings: FrozenDict[str, pydantic.NonNegativeInt] = pydantic.Field(
        default_factory=dict, validate_default=True
    )

    @property
    def gildings_total(self) -> int:
        """The number of gildings across all award tiers."""
        return sum(self.gildings.values())

    @property
    def effective_gild_count(self) -> int:
        """The gild count, derived from the breakdown where there is one.

        Capped at the largest count Reddit can report, so a breakdown totalling
        more than that still yields a storable count.
        """
        if self.gildings:
            return min(self.gildings_total, MAX_GILD_COUNT)
        return self.gild_count

    @property
    def is_consistent(self) -> bool:
        """Whether the reported count agrees with the (capped) breakdown."""
        return self.gild_count == self.effective_gild_count

    @property
    def is_capped(self) -> bool:
        """Whether the breakdown totals more than the largest reportable count."""
        return self.gildings_total > MAX_GILD_COUNT

    def reconciled(self) -> GildableView:
        """Get a view whose gild count is derived from its gildings."""
        if self.gild_count == self.effective_gild_count:
            return self
        return self.model_copy(update={"gild_count": self.effective_gild_count})


class VotableView(CapabilityView):
    """Voting state for models that can be voted on."""

    tag: ClassVar[CapabilityTag] = CapabilityTag.VOTABLE

    score: int = 0
    vote: VoteDirection = VoteDirection.NONE


class EditableView(CapabilityView):
    """Edit state for models whose author can edit them."""

    tag: ClassVar[CapabilityTag] = CapabilityTag.EDITABLE

    edited: datetime.datetime | None = None

    @property
    def is_edited(self) -> bool:
        return self.edited is not None


def view_class_for(tag: CapabilityTag) -> type[CapabilityView]:
    """Get the view class registered for a capability.

    :raises KeyError: if no view is registered for the capability.
    """
    try:
        return _VIEW_CLASSES[tag]
    except KeyError:
        raise KeyError(f"No capability view registered for {tag!r}") from None


def get_capability_tag(value: object) -> CapabilityTag:
    """Get a capability tag from a tag or its name.

    :raises ValueError: if the value names no known capability.
    """
    if isinstance(value, CapabilityTag):
        return value
    try:
        return CapabilityTag(value)
    except ValueError:
        valid = humanize_list((tag.value for tag in _VIEW_CLASSES), "or")
        raise ValueError(
            f"unknown capability {value!r} (expected one of {valid})"
        ) from None


def parse_view(
    tag: CapabilityTag | str, data: CapabilityView | Mapping[str, Any]
) -> CapabilityView:
    """Build the view for a capability from raw data.

    Views are passed through unchanged, so a view for a different capability
    is left for the caller to reject.

    :param tag: The capability the data describes.
    :param data: A view or a mapping of the view's fields.
    :returns: The view.
    :raises SnapshotError: if the data is not valid for the capability.
    """
    if isinstance(data, CapabilityView):
        return data
    view_class = view_class_for(get_capability_tag(tag))
    try:
        return view_class.model_validate(data)
    except pydantic.ValidationError as err:
        raise errors.SnapshotError.from_pydantic(
            err, source=f"{view_class.tag.value} capability"
        ) from None
