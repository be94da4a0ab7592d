# src/netdisk/services/sorting.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from .listing import EntryRow


class SortKey(str, Enum):
    NAME = "name"
    TIME = "time"
    TYPE = "type"
    SIZE = "size"

    @classmethod
    def parse(cls, value: Union[str, "SortKey", None]) -> Optional["SortKey"]:
        try:
            return cls(value)
        except ValueError:
            return None


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Union[str, "SortOrder", None]) -> Optional["SortOrder"]:
        try:
            return cls(value)
        except ValueError:
            return None


# Time sorts on the rendered timestamp, whose fixed format orders like the instant.
_SORT_FIELDS: Dict[SortKey, Callable[[EntryRow], object]] = {
    SortKey.NAME: lambda row: row.name,
    SortKey.TIME: lambda row: row.modified_at,
    SortKey.TYPE: lambda row: row.kind,
    SortKey.SIZE: lambda row: row.byte_size,
}


def sort_rows(rows: List[EntryRow], key, order) -> List[EntryRow]:
    """
    Stable in-place sort of listing rows; returns the same list.

    An unknown key or order leaves the rows untouched.
    """
    sort_key = SortKey.parse(key)
    sort_order = SortOrder.parse(order)
    if sort_key is None or sort_order is None:
        return rows
    rows.sort(key=_SORT_FIELDS[sort_key], reverse=sort_order is SortOrder.DESC)
    return rows
