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
"""Tests for logging helpers."""

import logging

import pytest_check
from hypothesis import given, strategies
from thingcache import util


@given(names=strategies.lists(strategies.text()))
def test_setup_loggers_resulting_level(names):
    for name in names:
        logger = logging.getLogger(name)
        logger.setLevel(logging.NOTSET)

    util.setup_loggers(*names)

    for name in names:
        logger = logging.getLogger(name)
        pytest_check.equal(logger.level, logging.DEBUG)


def test_setup_loggers_default():
    logging.getLogger("thingcache").setLevel(logging.NOTSET)

    util.setup_loggers()

    assert logging.getLogger("thingcache").level == logging.DEBUG


def test_setup_loggers_covers_modules():
    logging.getLogger("thingcache").setLevel(logging.NOTSET)

    util.setup_loggers()

    for module in ("thingcache.registry", "thingcache.snapshot", "thingcache._config"):
        assert logging.getLogger(module).getEffectiveLevel() == logging.DEBUG
