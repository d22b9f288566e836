"""Resolve trigger and folder ids of a container export to display names."""

from __future__ import annotations

from typing import Any, Iterable

from utils.lookups import BUILT_IN_TRIGGER_NAMES


def _iter_entries(raw: Any) -> Iterable[dict[str, Any]]:
    # Folders arrive either as an id-keyed mapping or as a list.
    if isinstance(raw, dict):
        raw = list(raw.values())
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]


def build_name_index(*sources: Any, id_field: str) -> dict[str, str]:
    """Map `id_field` -> `name` across one or more lists/mappings of entities.

    Entries missing either the id or the name are ignored; later sources do
    not override ids already seen.
    """
    index: dict[str, str] = {}
    for raw in sources:
        for entry in _iter_entries(raw):
            entity_id = entry.get(id_field)
            name = entry.get("name")
            if entity_id and name:
                index.setdefault(str(entity_id), str(name))
    return index


class TriggerManager:
    """Trigger id -> name lookups for a single container."""

    def __init__(self, triggers: Any, *, unknown_format: str = "{id}"):
        self.trigger_names = build_name_index(triggers, id_field="triggerId")
        self.unknown_format = unknown_format

    def trigger_name(self, trigger_id: Any) -> str:
        key = str(trigger_id)
        if key in self.trigger_names:
            return self.trigger_names[key]
        if key in BUILT_IN_TRIGGER_NAMES:
            return BUILT_IN_TRIGGER_NAMES[key]
        return self.unknown_format.format(id=key)

    def trigger_names_for(self, trigger_ids: Any) -> tuple[str, ...]:
        """Return display names for a list of trigger ids, preserving order."""
        if not isinstance(trigger_ids, list):
            return ()
        return tuple(self.trigger_name(trigger_id) for trigger_id in trigger_ids)


class FolderManager:
    """Folder id -> name lookups for a single container."""

    def __init__(self, *folder_sources: Any, unknown_label: str | None = None):
        self.folder_names = build_name_index(*folder_sources, id_field="folderId")
        self.unknown_label = unknown_label

    def folder_name(self, folder_id: Any) -> str:
        """Return the folder's name; unfoldered tags get an empty string."""
        if not folder_id:
            return ""
        key = str(folder_id)
        if key in self.folder_names:
            return self.folder_names[key]
        return key if self.unknown_label is None else self.unknown_label
