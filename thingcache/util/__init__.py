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
"""Utilities for thingcache."""

from thingcache.util.logging import setup_loggers
from thingcache.util.string import humanize_list, strtobool
from thingcache.util.yaml import dump_yaml, safe_yaml_load

__all__ = [
    "setup_loggers",
    "humanize_list",
    "strtobool",
    "dump_yaml",
    "safe_yaml_load",
]
