# src/netdisk/services/breadcrumbs.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import urllib.parse
from typing import List

from pydantic import BaseModel


class BreadcrumbSegment(BaseModel):
    label: str
    href: str
    is_active: bool = False


def build_breadcrumbs(nav_path: str, raw_query: str = "") -> List[BreadcrumbSegment]:
    """Splits a navigation path into cumulative, clickable segments."""
    segments: List[BreadcrumbSegment] = []
    href = ""
    for name in nav_path.split("/"):
        if not name:
            continue
        href += "/" + urllib.parse.quote(name)
        current = href + "?" + raw_query if raw_query else href
        segments.append(BreadcrumbSegment(label=name, href=current))
    if segments:
        segments[-1].is_active = True
    return segments
