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
"""Tests for ThingBaseModel."""

import pydantic
import pytest
from thingcache import errors, models


class MyBaseModel(models.ThingBaseModel):

    value_one: int
    value_two: str = "two"

    @pydantic.field_validator("value_one", mode="after")
    @classmethod
    def _validate_value_one(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Value one must not be negative")
        return value


def test_alias_generator():
    assert models.base.alias_generator("is_gildable") == "is-gildable"


def test_marshal():
    model = MyBaseModel(value_one=1)

    assert model.marshal() == {"value-one": 1, "value-two": "two"}


@pytest.mark.parametrize(
    "data",
    [
        {"value-one": 1, "value-two": "three"},
        {"value_one": 1, "value_two": "three"},
    ],
)
def test_unmarshal(data):
    assert MyBaseModel.unmarshal(data) == MyBaseModel(value_one=1, value_two="three")


def test_unmarshal_errors():
    with pytest.raises(errors.SnapshotError) as exc_info:
        MyBaseModel.unmarshal({"value-one": -1, "value-three": 3})

    assert str(exc_info.value) == (
        "Bad MyBaseModel data content:\n"
        "- value one must not be negative (in field 'value-one')\n"
        "- extra field 'value-three' not permitted in top-level snapshot"
    )


def test_frozen():
    model = MyBaseModel(value_one=1)

    with pytest.raises(pydantic.ValidationError):
        model.value_one = 2  # type: ignore[misc]
