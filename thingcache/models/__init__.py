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
"""Models for things and their capabilities."""

from thingcache.models.base import ThingBaseModel
from thingcache.models.capabilities import (
    CapabilityTag,
    CapabilityView,
    EditableView,
    GildableView,
    VotableView,
    VoteDirection,
    get_capability_tag,
    parse_view,
    view_class_for,
)
from thingcache.models.constraints import (
    FULLNAME_KINDS,
    MAX_GILD_COUNT,
    DeepFrozenDict,
    FrozenDict,
    GildCount,
    RecordId,
    freeze_value,
    is_valid_record_id,
    kind_from_id,
    thaw_value,
    validate_record_id,
)
from thingcache.models.record import ModelRecord, check_capability_shapes

__all__ = [
    "ThingBaseModel",
    "CapabilityTag",
    "CapabilityView",
    "EditableView",
    "GildableView",
    "VotableView",
    "VoteDirection",
    "get_capability_tag",
    "parse_view",
    "view_class_for",
    "FULLNAME_KINDS",
    "MAX_GILD_COUNT",
    "DeepFrozenDict",
    "FrozenDict",
    "GildCount",
    "RecordId",
    "freeze_value",
    "is_valid_record_id",
    "kind_from_id",
    "thaw_value",
    "validate_record_id",
    "ModelRecord",
    "check_capability_shapes",
]
