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
"""Configuration for thingcache.

Configuration items are read from ``THINGCACHE_*`` environment variables,
falling back to the defaults declared on :class:`ConfigModel`.
"""
from __future__ import annotations

import abc
import logging
import os
from collections.abc import Iterable
from typing import Any, final

import pydantic
from typing_extensions import override

from thingcache.util.string import strtobool

logger = logging.getLogger(__name__)

ENVIRONMENT_PREFIX = "THINGCACHE"


class ConfigModel(pydantic.BaseModel):
    """Configuration for a model registry."""

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid")

    verify_gildings: bool = True
    """Report gildable views whose cached count disagrees with their gildings."""

    reconcile_gild_count: bool = False
    """Store the gildings total as the gild count instead of the reported count."""


class ConfigHandler(abc.ABC):
    """An abstract class for configuration handlers."""

    @abc.abstractmethod
    def get_raw(self, item: str) -> Any:  # noqa: ANN401
        """Get the raw value for a configuration item.

        :param item: the name of the configuration item.
        :returns: The raw value of the item.
        :raises: KeyError if the item cannot be found.
        """


@final
class EnvironmentHandler(ConfigHandler):
    """Configuration handler to get values from environment variables."""

    def __init__(self, prefix: str = ENVIRONMENT_PREFIX) -> None:
        self._environ_prefix = prefix

    @override
    def get_raw(self, item: str) -> str:
        return os.environ[f"{self._environ_prefix}_{item.upper()}"]


@final
class MappingHandler(ConfigHandler):
    """Configuration handler that reads values from a mapping."""

    def __init__(self, values: dict[str, Any]) -> None:
        self._values = values

    @override
    def get_raw(self, item: str) -> Any:
        return self._values[item]


def load_config(handlers: Iterable[ConfigHandler] | None = None) -> ConfigModel:
    """Load the configuration from the given handlers.

    Handlers are tried in order and the first one that knows an item wins.
    Items no handler knows keep the model default.

    :param handlers: The handlers to query. Defaults to the environment.
    :returns: The loaded configuration.
    """
    handlers = list(handlers) if handlers is not None else [EnvironmentHandler()]
    values: dict[str, Any] = {}
    for item, field_info in ConfigModel.model_fields.items():
        for handler in handlers:
            try:
                value = handler.get_raw(item)
            except KeyError:
                continue
            if field_info.annotation is bool and isinstance(value, str):
                value = strtobool(value)
            values[item] = value
            break

    logger.debug("Loaded thingcache configuration: %s", values or "defaults")
    return ConfigModel.model_validate(values)
