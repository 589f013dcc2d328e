"""
In-memory model of a member's schedule block list.

A schedule document keeps three linked collections: the items themselves,
their layout order, and the set of exposed (published) item keys. They are
only ever changed together through ``ScheduleDocument.add_item`` and
``ScheduleDocument.remove_item``.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

BLOCK_LIST_LAYOUT_KEY = "Umbraco.BlockList"

START_TIME_ALIAS = "startTime"
TITLE_ALIAS = "title"
WORKOUT_ALIAS = "workout"

# Property editor recorded alongside each field value
EDITOR_ALIASES = {
    START_TIME_ALIAS: "Umbraco.DateTime",
    TITLE_ALIAS: "Umbraco.TextBox",
    WORKOUT_ALIAS: "Umbraco.ContentPicker",
}
DEFAULT_EDITOR_ALIAS = "Umbraco.TextBox"


def _field_key(alias: str) -> str:
    # Stored documents are not consistent about alias casing
    return alias.casefold()


@dataclass
class FieldValue:
    alias: str
    value: Optional[str]
    editor_alias: str = DEFAULT_EDITOR_ALIAS
    culture: Optional[str] = None
    segment: Optional[str] = None


@dataclass
class ScheduleBlock:
    """One schedule item: a content block with its field values"""

    key: str
    content_type_key: Optional[str]
    values: dict[str, FieldValue] = field(default_factory=dict)

    def get_field(self, alias: str) -> Optional[FieldValue]:
        return self.values.get(_field_key(alias))

    def value_of(self, alias: str) -> Optional[str]:
        found = self.get_field(alias)
        return found.value if found else None

    def add_field(self, value: FieldValue) -> bool:
        """Add a field unless one with the same alias exists. Returns whether it was added."""
        if self.get_field(value.alias) is not None:
            return False
        self.values[_field_key(value.alias)] = value
        return True

    def upsert_field(self, alias: str, value: Optional[str], editor_alias: Optional[str] = None) -> None:
        """Replace the value of a field if present (matched case-insensitively), else append it"""
        existing = self.get_field(alias)
        if existing is not None:
            existing.value = value
            return
        self.values[_field_key(alias)] = FieldValue(
            alias=alias,
            value=value,
            editor_alias=editor_alias or EDITOR_ALIASES.get(alias, DEFAULT_EDITOR_ALIAS),
        )


def new_item_key() -> str:
    return str(uuid.uuid4())


@dataclass
class ScheduleDocument:
    """A member's schedule: items, layout order and exposure markers"""

    items: dict[str, ScheduleBlock] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)
    exposed: list[str] = field(default_factory=list)
    settings_data: list = field(default_factory=list)
    # Layout kinds other than the block list, passed through untouched
    extra_layouts: dict = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.items)

    def find(self, key: str) -> Optional[ScheduleBlock]:
        """Look up an item by key, ignoring case"""
        if key in self.items:
            return self.items[key]
        wanted = key.casefold()
        for item_key, block in self.items.items():
            if item_key.casefold() == wanted:
                return block
        return None

    def add_item(self, block: ScheduleBlock) -> str:
        """Give the block a fresh key and register it in items, order and exposed"""
        key = new_item_key()
        while self.find(key) is not None:
            key = new_item_key()
        block.key = key
        self.items[key] = block
        self.order.append(key)
        self.exposed.append(key)
        return key

    def remove_item(self, key: str) -> bool:
        """Remove an item from all three collections. Returns whether anything was removed."""
        wanted = key.casefold()
        before = (len(self.items), len(self.order), len(self.exposed))

        self.items = {k: v for k, v in self.items.items() if k.casefold() != wanted}
        self.order = [k for k in self.order if k.casefold() != wanted]
        self.exposed = [k for k in self.exposed if k.casefold() != wanted]

        return before != (len(self.items), len(self.order), len(self.exposed))

    def upsert_field(self, block: ScheduleBlock, alias: str, value: Optional[str]) -> None:
        block.upsert_field(alias, value, EDITOR_ALIASES.get(alias))

    def heal(self) -> bool:
        """
        Bring order and exposed back in line with items.

        Drops keys that reference no item (and duplicates), then appends
        items missing from either list. Returns True if anything changed.
        """
        changed = False
        item_keys = {k.casefold(): k for k in self.items}

        for name in ("order", "exposed"):
            current = getattr(self, name)
            seen = set()
            kept = []
            for raw_key in current:
                key = item_keys.get(raw_key.casefold())
                if key is not None and key not in seen:
                    seen.add(key)
                    kept.append(key)
            for key in self.items:
                if key not in seen:
                    seen.add(key)
                    kept.append(key)
            if kept != current:
                logger.debug(f"Healed schedule {name}: {len(current)} -> {len(kept)} entries")
                setattr(self, name, kept)
                changed = True

        return changed

    def check_invariants(self) -> None:
        """Raise ValueError if order or exposed reference unknown items"""
        dangling = [k for k in self.order + self.exposed if k not in self.items]
        if dangling:
            raise ValueError(f"Schedule references unknown items: {sorted(set(dangling))}")
