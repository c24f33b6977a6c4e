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
"""Base pydantic model for thingcache models."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pydantic

from thingcache import errors

if TYPE_CHECKING:  # pragma: no cover
    from typing_extensions import Self


def alias_generator(s: str) -> str:
    """Generate an alias for a model field."""
    return s.replace("_", "-")


class ThingBaseModel(pydantic.BaseModel):
    """Base model for thingcache classes.

    Models are frozen: every change produces a new value.
    """

    model_config = pydantic.ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=alias_generator,
    )

    def marshal(self) -> dict[str, Any]:
        """Convert to a dictionary of plain, YAML-safe values."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def unmarshal(cls, data: dict[str, Any]) -> Self:
        """Create and populate a new model object from dictionary data.

        The unmarshal method validates entries in the input dictionary, populating
        the corresponding fields in the data object.
        :param data: The dictionary data to unmarshal.
        :return: The newly created object.
        :raise TypeError: If data is not a dictionary.
        :raise SnapshotError: If the data is not valid for this model.
        """
        if not isinstance(data, dict):  # pyright: ignore[reportUnnecessaryIsInstance]
            raise TypeError(f"{cls.__name__} data is not a dictionary")

        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as err:
            raise errors.SnapshotError.from_pydantic(
                err, source=f"{cls.__name__} data"
            ) from None
