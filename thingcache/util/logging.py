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
"""Logging helpers."""

from __future__ import annotations

import logging

LIBRARY_LOGGERS = ("thingcache",)


def setup_loggers(*names: str) -> None:
    """Set up loggers by name so that craft-cli handles them correctly.

    With no names, sets up the thingcache library logger.
    """
    for lib in names or LIBRARY_LOGGERS:
        logger = logging.getLogger(lib)
        logger.setLevel(logging.DEBUG)
