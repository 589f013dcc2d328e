"""
JSON encoding of schedule documents.

The member's ``schedule`` property holds a block list document:

    {
      "contentData": [{"contentTypeKey": ..., "key": ..., "values": [...]}],
      "settingsData": [],
      "expose": [{"contentKey": ..., "culture": null, "segment": null}],
      "Layout": {"Umbraco.BlockList": [{"contentUdi": null, "settingsUdi": null,
                                         "contentKey": ..., "settingsKey": null}]}
    }

Reading is tolerant: an empty, corrupt or non-object document reads as an
empty schedule, and missing sections are defaulted.
"""

import json
import logging
import uuid
from typing import Any, Optional

from .document import (
    BLOCK_LIST_LAYOUT_KEY,
    DEFAULT_EDITOR_ALIAS,
    EDITOR_ALIASES,
    FieldValue,
    ScheduleBlock,
    ScheduleDocument,
)

logger = logging.getLogger(__name__)

ELEMENT_UDI_PREFIX = "umb://element/"


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    # Legacy writers stored some values as JSON objects ({"date": ...})
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _non_blank(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _key_from_udi(udi: Any) -> Optional[str]:
    """Element UDIs (umb://element/<hex>) carry the key in bare hex"""
    if not isinstance(udi, str) or not udi.lower().startswith(ELEMENT_UDI_PREFIX):
        return None
    try:
        return str(uuid.UUID(udi[len(ELEMENT_UDI_PREFIX):]))
    except ValueError:
        return None


def _decode_block(entry: dict) -> Optional[ScheduleBlock]:
    key = _non_blank(entry.get("key")) or _key_from_udi(entry.get("udi"))
    if key is None:
        return None

    block = ScheduleBlock(key=key, content_type_key=_as_text(entry.get("contentTypeKey")))
    for raw in _as_list(entry.get("values")):
        if not isinstance(raw, dict):
            continue
        alias = _non_blank(raw.get("alias"))
        if alias is None:
            continue
        block.add_field(
            FieldValue(
                alias=alias,
                value=_as_text(raw.get("value")),
                editor_alias=_non_blank(raw.get("editorAlias"))
                or EDITOR_ALIASES.get(alias, DEFAULT_EDITOR_ALIAS),
                culture=_non_blank(raw.get("culture")),
                segment=_non_blank(raw.get("segment")),
            )
        )
    return block


def _layout_keys(entries: list) -> list[str]:
    keys = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        key = _non_blank(entry.get("contentKey")) or _key_from_udi(entry.get("contentUdi"))
        if key is not None:
            keys.append(key)
    return keys


def decode_document(text: Optional[str]) -> ScheduleDocument:
    """Parse a stored schedule, healing anything missing or malformed"""
    if text is None or not text.strip():
        return ScheduleDocument()

    try:
        root = json.loads(text)
    except ValueError as e:
        logger.warning(f"⚠️ Stored schedule is not valid JSON, starting from an empty schedule: {e}")
        return ScheduleDocument()

    if not isinstance(root, dict):
        if root is not None:
            logger.warning(
                f"⚠️ Stored schedule root is a {type(root).__name__}, starting from an empty schedule"
            )
        return ScheduleDocument()

    document = ScheduleDocument(settings_data=_as_list(root.get("settingsData")))

    keyless = 0
    duplicates = []
    for entry in _as_list(root.get("contentData")):
        block = _decode_block(entry) if isinstance(entry, dict) else None
        if block is None:
            keyless += 1
            continue
        if document.find(block.key) is not None:
            duplicates.append(block.key)
            continue
        document.items[block.key] = block
    if keyless:
        logger.warning(f"⚠️ Dropped {keyless} schedule entries without a usable key")
    if duplicates:
        logger.warning(f"⚠️ Dropped {len(duplicates)} schedule entries repeating a key: {duplicates}")

    layout = root.get("Layout")
    if isinstance(layout, dict):
        document.order = _layout_keys(_as_list(layout.get(BLOCK_LIST_LAYOUT_KEY)))
        document.extra_layouts = {k: v for k, v in layout.items() if k != BLOCK_LIST_LAYOUT_KEY}

    document.exposed = _layout_keys(_as_list(root.get("expose")))

    document.heal()
    return document


def encode_document(document: ScheduleDocument) -> str:
    """Serialize a schedule to compact JSON"""
    document.check_invariants()

    layout = {
        BLOCK_LIST_LAYOUT_KEY: [
            {"contentUdi": None, "settingsUdi": None, "contentKey": key, "settingsKey": None}
            for key in document.order
        ]
    }
    layout.update(document.extra_layouts)

    payload = {
        "contentData": [
            {
                "contentTypeKey": block.content_type_key,
                "key": block.key,
                "values": [
                    {
                        "alias": v.alias,
                        "value": v.value,
                        "editorAlias": v.editor_alias,
                        "culture": v.culture,
                        "segment": v.segment,
                    }
                    for v in block.values.values()
                ],
            }
            for block in document.items.values()
        ],
        "settingsData": list(document.settings_data),
        "expose": [{"contentKey": key, "culture": None, "segment": None} for key in document.exposed],
        "Layout": layout,
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
