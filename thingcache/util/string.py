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
"""String helpers for configuration values and messages."""

from collections.abc import Iterable

_TRUE_WORDS = frozenset({"true", "t", "yes", "y", "on", "1"})
_FALSE_WORDS = frozenset({"false", "f", "no", "n", "off", "0"})


def strtobool(value: str) -> bool:
    """Convert a configuration string such as ``"yes"`` or ``"off"`` to a boolean.

    Surrounding whitespace and case are ignored.

    :raises ValueError: if the string is not a boolean word.
    """
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def humanize_list(names: Iterable[str], conjunction: str, *, empty: str = "") -> str:
    """Quote and sort names, joining them into a phrase for a message.

    >>> humanize_list(["votable", "gildable", "editable"], "or")
    "'editable', 'gildable', or 'votable'"
    """
    quoted = sorted(repr(name) for name in names)
    if not quoted:
        return empty
    if len(quoted) == 1:
        return quoted[0]
    if len(quoted) == 2:  # noqa: PLR2004
        return f"{quoted[0]} {conjunction} {quoted[1]}"
    return f"{', '.join(quoted[:-1])}, {conjunction} {quoted[-1]}"
