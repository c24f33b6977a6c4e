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
"""A capability-aware registry of read-only Reddit models."""

from importlib.metadata import PackageNotFoundError, version

from thingcache import errors, models
from thingcache._config import ConfigModel, load_config
from thingcache.models import (
    CapabilityTag,
    CapabilityView,
    EditableView,
    GildableView,
    ModelRecord,
    VotableView,
    VoteDirection,
)
from thingcache.registry import ModelRegistry, RegistryQuery, ThingSnapshot
from thingcache.snapshot import parse_listing, parse_thing

try:
    __version__ = version("thingcache")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "dev"

__all__ = [
    "__version__",
    "errors",
    "models",
    "ConfigModel",
    "load_config",
    "CapabilityTag",
    "CapabilityView",
    "EditableView",
    "GildableView",
    "ModelRecord",
    "VotableView",
    "VoteDirection",
    "ModelRegistry",
    "RegistryQuery",
    "ThingSnapshot",
    "parse_listing",
    "parse_thing",
]
