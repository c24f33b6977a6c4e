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
"""Error classes for thingcache.

All errors inherit from craft_cli.CraftError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import yaml
from craft_cli import CraftError

from thingcache.util.error_formatting import format_pydantic_errors

if TYPE_CHECKING:  # pragma: no cover
    import pydantic
    from typing_extensions import Self


class ThingcacheError(CraftError):
    """Base class for all thingcache errors."""


class InvalidIdError(ThingcacheError):
    """A record id is empty or malformed."""

    def __init__(self, record_id: object) -> None:
        if isinstance(record_id, str) and not record_id:
            message = "Record id must not be empty."
        else:
            message = f"Invalid record id: {record_id!r}"
        super().__init__(
            message,
            details=(
                "Record ids start with an ASCII letter or digit, followed by "
                "letters, digits, '_', '-', '.' or ':'."
            ),
            resolution="Use the thing's fullname (for example 't3_abc') as its id.",
            reportable=False,
        )
        self.record_id = record_id


class ShapeMismatchError(ThingcacheError):
    """A capability view is stored under a tag that isn't its own."""

    def __init__(self, tag: object, view_tag: object) -> None:
        super().__init__(
            f"Capability view for {_tag_name(view_tag)!r} "
            f"cannot be stored as {_tag_name(tag)!r}.",
            details=f"Expected a view whose tag is {_tag_name(tag)!r}.",
            reportable=False,
        )
        self.tag = tag
        self.view_tag = view_tag


class SnapshotError(ThingcacheError):
    """Snapshot data handed to thingcache is not valid."""

    @classmethod
    def from_pydantic(
        cls,
        error: pydantic.ValidationError,
        *,
        source: str = "snapshot",
        **kwargs: str | bool | int | None,
    ) -> Self:
        """Convert this error from a pydantic ValidationError.

        :param error: The pydantic error to convert
        :param source: A description of where the malformed data came from
        :param kwargs: additional keyword arguments get passed to CraftError
        """
        message = format_pydantic_errors(error.errors(), file_name=source)
        return cls(message, **kwargs)  # type: ignore[arg-type]


class YamlError(ThingcacheError, yaml.YAMLError):
    """Craft-cli friendly version of a YAML error."""

    @classmethod
    def from_yaml_error(cls, filename: str, error: yaml.YAMLError) -> Self:
        """Convert a pyyaml YAMLError to a thingcache YamlError."""
        message = f"error parsing {filename!r}"
        if isinstance(error, yaml.MarkedYAMLError):
            message += f": {error.problem}"
        details = str(error)
        return cls(
            message,
            details=details,
            resolution=f"Ensure {filename} contains valid YAML",
        )


def _tag_name(tag: object) -> object:
    return getattr(tag, "value", tag)
