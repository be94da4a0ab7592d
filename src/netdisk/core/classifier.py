# src/netdisk/core/classifier.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

FOLDER_LABEL = "Folder"
DEFAULT_LABEL = "File"
DEFAULT_ICON = "fa-file-o"


# --- Descriptor Models ---
class ExtName(BaseModel):
    ext: str
    name: str


class NameIcon(BaseModel):
    name: str
    icon: str


class PreviewRule(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    limit: int = 0
    extensions: List[str] = Field(default_factory=list, alias="list")
    url: str = ""


class FileTypesDescriptor(BaseModel):
    extname: List[ExtName] = Field(default_factory=list)
    nameicon: List[NameIcon] = Field(default_factory=list)
    preview: PreviewRule = Field(default_factory=PreviewRule)


class FileClassifier:
    """Maps a path to a (type label, icon id, preview url) triple."""

    def __init__(self, descriptor: Optional[FileTypesDescriptor] = None):
        descriptor = descriptor or FileTypesDescriptor()
        self._ext_names: Dict[str, str] = {e.ext.lower(): e.name for e in descriptor.extname}
        self._name_icons: Dict[str, str] = {n.name: n.icon for n in descriptor.nameicon}
        self._preview_limit = descriptor.preview.limit
        self._preview_exts = {ext.lower() for ext in descriptor.preview.extensions}
        self._preview_template = descriptor.preview.url

    @classmethod
    def from_file(cls, path: Path) -> "FileClassifier":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            descriptor = FileTypesDescriptor.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            raise ConfigurationError(f"Cannot load file type descriptor {path}: {e}")
        log.info(f"Loaded {len(descriptor.extname)} file type mappings from {path}")
        return cls(descriptor)

    def type_name(self, ext: str) -> str:
        return self._ext_names.get(ext.lower(), DEFAULT_LABEL)

    def icon(self, name: str) -> str:
        return self._name_icons.get(name, DEFAULT_ICON)

    def enable_preview(self, ext: str, size: int) -> bool:
        return size < self._preview_limit and ext.lower() in self._preview_exts

    def preview_url(self, ext: str, size: int, url: str) -> str:
        if not self.enable_preview(ext, size):
            return ""
        if self._preview_template:
            return self._preview_template.replace("{url}", url)
        return url

    def classify(self, path, size: int, href: str = "", is_dir: Optional[bool] = None) -> Tuple[str, str, str]:
        if is_dir is None:
            is_dir = os.path.isdir(path)
        if is_dir:
            return FOLDER_LABEL, self.icon(FOLDER_LABEL), ""
        ext = os.path.splitext(str(path))[1]
        name = self.type_name(ext)
        return name, self.icon(name), self.preview_url(ext, size, href)
