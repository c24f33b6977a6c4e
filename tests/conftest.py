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
"""Shared data for all thingcache tests."""

from __future__ import annotations

import pytest
from thingcache import ConfigModel, ModelRegistry
from thingcache.models import GildableView, VotableView, VoteDirection


@pytest.fixture
def clean_environment(monkeypatch):
    """Keep the developer's THINGCACHE_* variables out of a test."""
    for item in ConfigModel.model_fields:
        monkeypatch.delenv(f"THINGCACHE_{item.upper()}", raising=False)


@pytest.fixture
def config() -> ConfigModel:
    return ConfigModel()


@pytest.fixture
def registry(config) -> ModelRegistry:
    return ModelRegistry(config=config)


@pytest.fixture
def silver_gildable() -> GildableView:
    return GildableView(is_gildable=True, gild_count=2, gildings={"silver": 2})


@pytest.fixture
def upvoted() -> VotableView:
    return VotableView(score=42, vote=VoteDirection.UP)


@pytest.fixture
def fake_link_child() -> dict:
    """A Reddit listing child for a link, trimmed to a few fields."""
    return {
        "kind": "t3",
        "data": {
            "id": "abc",
            "name": "t3_abc",
            "title": "A link",
            "subreddit": "python",
            "can_gild": True,
            "gilded": 3,
            "gildings": {"gid_1": 1, "gid_2": 2},
            "score": 1234,
            "likes": True,
            "edited": 1700000000.0,
        },
    }
