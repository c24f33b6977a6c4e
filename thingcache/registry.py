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
"""An in-memory registry of model records.

The registry holds the latest record for each id. Collaborators that fetch
things hand it snapshots; readers get or query records and check their
capabilities::

    registry = ModelRegistry()
    registry.upsert(
        "t3_abc",
        {"title": "x"},
        {CapabilityTag.GILDABLE: GildableView(gild_count=2, gildings={"gid_1": 2})},
    )
    registry.get("t3_abc").gildable.gild_count  # 2
"""

from __future__ import annotations

import logging
import pathlib
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, NamedTuple, final

from thingcache import _config, errors, util
from thingcache.models import (
    CapabilityTag,
    CapabilityView,
    MAX_GILD_COUNT,
    GildableView,
    ModelRecord,
    check_capability_shapes,
    get_capability_tag,
    parse_view,
    validate_record_id,
)

logger = logging.getLogger(__name__)

RecordPredicate = Callable[[ModelRecord], bool]


class ThingSnapshot(NamedTuple):
    """A point-in-time snapshot of a thing, as handed over by a fetcher."""

    id: str
    base_fields: Mapping[str, Any]
    capabilities: Mapping[CapabilityTag, CapabilityView | Mapping[str, Any]] = {}
    kind: str | None = None


@final
class RegistryQuery(Iterable[ModelRecord]):
    """A lazy, restartable sequence of records matching a predicate.

    The records are fixed when the query is made. Changes to the registry
    afterwards don't affect it, and each iteration starts from the beginning.
    """

    def __init__(
        self, records: tuple[ModelRecord, ...], predicate: RecordPredicate | None
    ) -> None:
        self._records = records
        self._predicate = predicate

    def __iter__(self) -> Iterator[ModelRecord]:
        if self._predicate is None:
            return iter(self._records)
        return filter(self._predicate, self._records)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(snapshot_size={len(self._records)})"


class ModelRegistry:
    """A thread-safe, in-memory store of the latest record for each id.

    :param config: The configuration to use. Loaded from the environment if
        not given.
    """

    def __init__(self, config: _config.ConfigModel | None = None) -> None:
        self._config = config if config is not None else _config.load_config()
        self._records: dict[str, ModelRecord] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> _config.ConfigModel:
        """The configuration of this registry."""
        return self._config

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._records

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(records={len(self)})"

    def upsert(
        self,
        record_id: str,
        base_fields: Mapping[str, Any] | None = None,
        capabilities: Mapping[Any, CapabilityView | Mapping[str, Any]] | None = None,
        *,
        kind: str | None = None,
    ) -> ModelRecord:
        """Create or replace the record for an id.

        A new record gets exactly the given fields and capabilities. For an
        existing record, the base fields are replaced wholesale and each given
        capability replaces the previous view for that capability entirely.
        Capabilities that aren't given are kept.

        :param record_id: The id of the resource.
        :param base_fields: The resource's core fields.
        :param capabilities: Views, or raw view fields, keyed by capability.
        :param kind: The type of resource. Kept from an existing record, or
            inferred from the id, if not given.
        :returns: The record now stored for the id.
        :raises InvalidIdError: if the id is empty or malformed.
        :raises ShapeMismatchError: if a view is keyed by a tag that isn't its own.
        :raises SnapshotError: if the fields or a capability's data are invalid.
        """
        validate_record_id(record_id)
        views = self._prepare_views(record_id, capabilities or {})

        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                record = ModelRecord.create(record_id, base_fields, views, kind=kind)
            else:
                record = ModelRecord.create(
                    record_id,
                    base_fields,
                    {**existing.capabilities, **views},
                    kind=kind or existing.kind,
                )
            self._records[record_id] = record

        logger.debug(
            "%s %s %r (capabilities: %s).",
            "Created" if existing is None else "Updated",
            record.kind,
            record_id,
            _describe_tags(views),
        )
        return record

    def ingest(
        self,
        snapshots: Iterable[
            ThingSnapshot | tuple[str, Mapping[str, Any], Mapping[Any, Any]]
        ],
    ) -> list[ModelRecord]:
        """Upsert a stream of snapshots.

        Snapshots are applied in order. If one is invalid, the ones before it
        stay applied and the error is raised.

        :param snapshots: ``(id, base_fields, capabilities)`` tuples or
            :class:`ThingSnapshot` objects.
        :returns: The records stored for each snapshot.
        """
        records: list[ModelRecord] = []
        for item in snapshots:
            snapshot = ThingSnapshot(*item)
            records.append(
                self.upsert(
                    snapshot.id,
                    snapshot.base_fields,
                    snapshot.capabilities,
                    kind=snapshot.kind,
                )
            )
        return records

    def get(self, record_id: str) -> ModelRecord | None:
        """Get the record for an id, or None if there isn't one.

        :raises InvalidIdError: if the id is empty or malformed.
        """
        validate_record_id(record_id)
        with self._lock:
            return self._records.get(record_id)

    def remove(self, record_id: str) -> bool:
        """Remove the record for an id.

        :returns: Whether there was a record to remove.
        :raises InvalidIdError: if the id is empty or malformed.
        """
        validate_record_id(record_id)
        with self._lock:
            removed = self._records.pop(record_id, None)

        if removed is None:
            logger.debug("No record %r to remove.", record_id)
            return False
        logger.debug("Removed %s %r.", removed.kind, record_id)
        return True

    def clear(self) -> None:
        """Remove all records."""
        with self._lock:
            count = len(self._records)
            self._records.clear()
        logger.debug("Cleared %d records.", count)

    def ids(self) -> list[str]:
        """Get the ids of all records, in the order they were first stored."""
        with self._lock:
            return list(self._records)

    def query(self, predicate: RecordPredicate | None = None) -> RegistryQuery:
        """Get the records that match a predicate.

        The records are taken from the registry when this is called and the
        predicate is applied lazily during iteration.

        :param predicate: A function deciding which records to include. All
            records are included if not given.
        """
        with self._lock:
            records = tuple(self._records.values())
        return RegistryQuery(records, predicate)

    def with_capability(self, tag: CapabilityTag) -> RegistryQuery:
        """Get the records that carry a capability."""
        return self.query(lambda record: record.has_capability(tag))

    def dump_yaml(self, path: pathlib.Path) -> None:
        """Write a snapshot of all records to a YAML file."""
        records = tuple(self.query())
        data = {"records": [record.marshal() for record in records]}
        with path.open("wt") as file:
            util.dump_yaml(data, stream=file)
        logger.debug("Wrote %d records to %r.", len(records), str(path))

    def load_yaml(self, path: pathlib.Path) -> list[ModelRecord]:
        """Restore records from a YAML file written by :meth:`dump_yaml`.

        Loaded records replace any records with the same ids. If any record
        in the file is invalid, nothing is loaded.

        :returns: The loaded records.
        :raises YamlError: if the file is not valid YAML.
        :raises SnapshotError: if the file's contents are not valid records.
        """
        with path.open() as file:
            data = util.safe_yaml_load(file)

        if not isinstance(data, dict) or not isinstance(data.get("records"), list):
            raise errors.SnapshotError(
                f"Bad {path.name} content:",
                details="Expected a mapping with a 'records' list.",
                resolution="Use a file written by ModelRegistry.dump_yaml.",
            )
        records = [ModelRecord.unmarshal(item) for item in data["records"]]

        with self._lock:
            for record in records:
                self._records[record.id] = record
        logger.debug("Loaded %d records from %r.", len(records), str(path))
        return records

    def _prepare_views(
        self,
        record_id: str,
        capabilities: Mapping[Any, CapabilityView | Mapping[str, Any]],
    ) -> dict[CapabilityTag, CapabilityView]:
        """Validate incoming capability views and apply gilding policy."""
        try:
            tagged = {
                get_capability_tag(key): value for key, value in capabilities.items()
            }
        except ValueError as err:
            raise errors.SnapshotError(
                f"Bad {record_id} snapshot content:", details=str(err)
            ) from None
        check_capability_shapes(tagged)

        views: dict[CapabilityTag, CapabilityView] = {}
        for tag, value in tagged.items():
            view = parse_view(tag, value)
            if not isinstance(view, GildableView):
                views[tag] = view
                continue
            if view.is_capped and self._config.verify_gildings:
                logger.debug(
                    "Gildings for %r total %d, over the maximum gild count %d.",
                    record_id,
                    view.gildings_total,
                    MAX_GILD_COUNT,
                )
            if not view.is_consistent:
                if self._config.verify_gildings:
                    logger.debug(
                        "Gild count for %r is %d, but its gildings total %d.",
                        record_id,
                        view.gild_count,
                        view.gildings_total,
                    )
                if self._config.reconcile_gild_count:
                    view = view.reconciled()
            views[tag] = view
        return views


def _describe_tags(tags: Iterable[CapabilityTag]) -> str:
    return util.humanize_list((tag.value for tag in tags), "and", empty="none")
