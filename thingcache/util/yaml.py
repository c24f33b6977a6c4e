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
"""YAML helpers for thingcache snapshots."""
from __future__ import annotations

import pathlib
from typing import TYPE_CHECKING, Any, TextIO, cast

import yaml

from thingcache import errors

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Hashable


# pyright: reportUnknownMemberType=false
def _repr_str(dumper: yaml.Dumper, data: str) -> yaml.ScalarNode:
    """Multi-line string representer for the YAML dumper."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


def _dict_constructor(
    loader: yaml.Loader, node: yaml.MappingNode
) -> dict[Hashable, Any]:
    seen: set[Any] = set()
    for key_node, _ in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        if key_node.value in seen:
            raise yaml.constructor.ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key_node.value!r}",
                key_node.start_mark,
            )
        seen.add(key_node.value)

    # Necessary in order to make yaml merge tags work
    loader.flatten_mapping(node)
    return dict(loader.construct_mapping(node))


class _SafeYamlLoader(yaml.SafeLoader):
    def __init__(self, stream: TextIO) -> None:
        super().__init__(stream)

        self.add_constructor(
            yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _dict_constructor
        )


def safe_yaml_load(stream: TextIO) -> Any:  # noqa: ANN401 - The YAML could be anything
    """Equivalent to pyyaml's safe_load function, but rejecting duplicate keys.

    Records are keyed by id, so a duplicated key would silently drop a record.

    :param stream: Any text-like IO object.
    :returns: The loaded YAML data.
    """
    try:
        # Silencing S506 ("probable use of unsafe loader") because we override it by
        # using our own safe loader.
        return yaml.load(stream, Loader=_SafeYamlLoader)  # noqa: S506
    except yaml.YAMLError as error:
        filename = pathlib.Path(getattr(stream, "name", "<stream>")).name
        raise errors.YamlError.from_yaml_error(filename, error) from error


def dump_yaml(data: Any, stream: TextIO, **kwargs: Any) -> None:  # noqa: ANN401
    """Dump an object to a YAML stream using PyYAML.

    :param data: the data structure to dump.
    :param stream: The text stream to which to write.
    :param kwargs: Keyword arguments passed to pyyaml
    """
    yaml.add_representer(
        str, _repr_str, Dumper=cast(type[yaml.Dumper], yaml.SafeDumper)
    )
    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("allow_unicode", True)
    yaml.dump(data, stream, Dumper=yaml.SafeDumper, **kwargs)
