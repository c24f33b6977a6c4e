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
"""Tests for ModelRecord."""

import pydantic
import pytest
import pytest_check
from thingcache import errors
from thingcache.models import (
    CapabilityTag,
    EditableView,
    GildableView,
    ModelRecord,
    VotableView,
    check_capability_shapes,
)


@pytest.fixture
def record(silver_gildable) -> ModelRecord:
    return ModelRecord.create(
        "t3_abc", {"title": "x"}, {CapabilityTag.GILDABLE: silver_gildable}
    )


@pytest.mark.parametrize(
    ("record_id", "kind", "expected_kind"),
    [
        ("t1_abc", None, "comment"),
        ("t2_abc", None, "account"),
        ("t3_abc", None, "link"),
        ("t4_abc", None, "message"),
        ("t5_abc", None, "subreddit"),
        ("t6_abc", None, "award"),
        ("t9_abc", None, "thing"),
        ("abc", None, "thing"),
        ("t3_abc", "crosspost", "crosspost"),
    ],
)
def test_create_kind(record_id, kind, expected_kind):
    record = ModelRecord.create(record_id, kind=kind)

    assert record.kind == expected_kind


def test_create_defaults():
    record = ModelRecord.create("t1_abc")

    pytest_check.equal(record.id, "t1_abc")
    pytest_check.equal(dict(record.base_fields), {})
    pytest_check.equal(dict(record.capabilities), {})


@pytest.mark.parametrize("record_id", ["", " ", "t3 abc", "_t3", "t3/abc", None, 3])
def test_create_invalid_id(record_id):
    with pytest.raises(errors.InvalidIdError):
        ModelRecord.create(record_id)


def test_create_shape_mismatch(upvoted):
    with pytest.raises(errors.ShapeMismatchError) as exc_info:
        ModelRecord.create("t3_abc", {}, {CapabilityTag.GILDABLE: upvoted})

    assert exc_info.value.args[0] == (
        "Capability view for 'votable' cannot be stored as 'gildable'."
    )


def test_construct_shape_mismatch(upvoted):
    with pytest.raises(errors.ShapeMismatchError):
        ModelRecord(id="t3_abc", capabilities={CapabilityTag.EDITABLE: upvoted})


def test_create_from_raw_capabilities():
    record = ModelRecord.create(
        "t3_abc",
        {"title": "x"},
        {"gildable": {"gild-count": 1}, CapabilityTag.VOTABLE: {"score": 3}},
    )

    assert dict(record.capabilities) == {
        CapabilityTag.GILDABLE: GildableView(gild_count=1),
        CapabilityTag.VOTABLE: VotableView(score=3),
    }


@pytest.mark.parametrize(
    "capabilities",
    [
        pytest.param({"gold": {}}, id="unknown-tag"),
        pytest.param({"gildable": {"gild-count": -1}}, id="bad-view"),
        pytest.param({"votable": "lots"}, id="not-a-mapping"),
    ],
)
def test_create_invalid_capabilities(capabilities):
    with pytest.raises(errors.SnapshotError):
        ModelRecord.create("t3_abc", {}, capabilities)


def test_record_is_immutable(record):
    with pytest.raises(pydantic.ValidationError):
        record.kind = "comment"  # type: ignore[misc]
    with pytest.raises(TypeError):
        record.base_fields["title"] = "y"  # type: ignore[index]
    with pytest.raises(TypeError):
        record.capabilities[CapabilityTag.EDITABLE] = None  # type: ignore[index]


def test_base_fields_are_copied():
    fields = {"title": "x", "flair": {"text": "news"}}
    record = ModelRecord.create("t3_abc", fields)

    fields["title"] = "y"
    fields["flair"]["text"] = "olds"

    assert dict(record.base_fields) == {"title": "x", "flair": {"text": "news"}}


def test_nested_base_fields_are_read_only():
    record = ModelRecord.create(
        "t3_abc", {"tags": ["a"], "flair": {"text": "news", "colors": {"red"}}}
    )

    pytest_check.equal(record.base_fields["tags"], ("a",))
    pytest_check.equal(record.base_fields["flair"]["colors"], frozenset({"red"}))
    with pytest.raises(AttributeError):
        record.base_fields["tags"].append("b")
    with pytest.raises(TypeError):
        record.base_fields["flair"]["text"] = "olds"


def test_marshal_thaws_nested_base_fields():
    fields = {"tags": ["a", "b"], "flair": {"text": "news"}}
    record = ModelRecord.create("t3_abc", fields)

    pytest_check.equal(record.marshal()["base-fields"], fields)
    pytest_check.equal(ModelRecord.unmarshal(record.marshal()), record)
    voted = record.with_capability(CapabilityTag.VOTABLE, VotableView(score=1))
    pytest_check.equal(voted.base_fields, record.base_fields)


def test_record_is_not_hashable(record):
    with pytest.raises(TypeError):
        hash(record)


def test_capability(record, silver_gildable):
    pytest_check.equal(record.capability(CapabilityTag.GILDABLE), silver_gildable)
    pytest_check.is_none(record.capability(CapabilityTag.VOTABLE))
    pytest_check.is_true(record.has_capability(CapabilityTag.GILDABLE))
    pytest_check.is_false(record.has_capability(CapabilityTag.EDITABLE))


def test_gildable_property(record, silver_gildable):
    pytest_check.equal(record.gildable, silver_gildable)
    pytest_check.is_none(ModelRecord.create("t3_abc").gildable)


def test_with_capability_adds(record, upvoted):
    new = record.with_capability(CapabilityTag.VOTABLE, upvoted)

    pytest_check.equal(new.capability(CapabilityTag.VOTABLE), upvoted)
    pytest_check.equal(new.gildable, record.gildable)
    pytest_check.equal(new.base_fields, record.base_fields)
    pytest_check.is_false(record.has_capability(CapabilityTag.VOTABLE))


def test_with_capability_replaces_whole_view(record):
    replacement = GildableView(gild_count=1)

    new = record.with_capability(CapabilityTag.GILDABLE, replacement)

    assert new.gildable == replacement
    assert dict(new.gildable.gildings) == {}


def test_with_capability_shape_mismatch(record, upvoted):
    with pytest.raises(errors.ShapeMismatchError):
        record.with_capability(CapabilityTag.EDITABLE, upvoted)


def test_with_capabilities(record, upvoted):
    edited = EditableView()

    new = record.with_capabilities(
        {CapabilityTag.VOTABLE: upvoted, CapabilityTag.EDITABLE: edited}
    )

    assert set(new.capabilities) == set(CapabilityTag)


def test_without_capability(record):
    new = record.without_capability(CapabilityTag.GILDABLE)

    pytest_check.is_false(new.has_capability(CapabilityTag.GILDABLE))
    pytest_check.is_true(record.has_capability(CapabilityTag.GILDABLE))
    pytest_check.is_(new.without_capability(CapabilityTag.GILDABLE), new)


def test_equality(silver_gildable):
    first = ModelRecord.create(
        "t3_abc", {"title": "x"}, {CapabilityTag.GILDABLE: silver_gildable}
    )
    second = ModelRecord.create(
        "t3_abc", {"title": "x"}, {CapabilityTag.GILDABLE: silver_gildable}
    )

    pytest_check.equal(first, second)
    pytest_check.not_equal(first, first.without_capability(CapabilityTag.GILDABLE))


def test_marshal(record):
    assert record.marshal() == {
        "id": "t3_abc",
        "kind": "link",
        "base-fields": {"title": "x"},
        "capabilities": {
            "gildable": {
                "is-gildable": True,
                "gild-count": 2,
                "gildings": {"silver": 2},
            }
        },
    }


def test_marshal_unmarshal(record, upvoted):
    record = record.with_capabilities(
        {CapabilityTag.VOTABLE: upvoted, CapabilityTag.EDITABLE: EditableView()}
    )

    assert ModelRecord.unmarshal(record.marshal()) == record


def test_unmarshal_invalid():
    with pytest.raises(errors.SnapshotError, match="^Bad ModelRecord data content:"):
        ModelRecord.unmarshal({"id": "t3_abc", "base-fields": []})


def test_unmarshal_not_dict():
    with pytest.raises(TypeError, match="ModelRecord data is not a dictionary"):
        ModelRecord.unmarshal([])  # type: ignore[arg-type]


def test_check_capability_shapes(silver_gildable, upvoted):
    check_capability_shapes(
        {
            CapabilityTag.GILDABLE: silver_gildable,
            "votable": upvoted,
            CapabilityTag.EDITABLE: {"edited": None},
        }
    )

    with pytest.raises(errors.ShapeMismatchError):
        check_capability_shapes({"gildable": upvoted})
