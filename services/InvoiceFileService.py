# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: services/InvoiceFileService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from utility.logging_utils import get_class_logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_name(filename: str) -> str:
    name = Path(filename or "").name.strip() or "upload.bin"
    return _UNSAFE_CHARS.sub("_", name)


@dataclass
class InvoiceFileService:
    """
    Keeps uploaded originals on local disk so a deleted invoice can take
    its file with it. Files live as '<epoch-ms>-<file id>-<safe filename>';
    the file id (the invoice id when given, else a fresh uuid) keeps
    same-named uploads apart.
    """
    upload_dir: str
    enabled: bool = True
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.root = Path(self.upload_dir)

    def save_bytes(self, *, filename: str, data: bytes, file_id: Optional[str] = None) -> Optional[str]:
        if not self.enabled:
            return None

        self.root.mkdir(parents=True, exist_ok=True)
        file_id = _UNSAFE_CHARS.sub("_", file_id or uuid.uuid4().hex)
        target = self.root / f"{int(time.time() * 1000)}-{file_id}-{_safe_name(filename)}"
        # "x" refuses to overwrite another upload's original
        with target.open("xb") as fh:
            fh.write(data)

        self.logger.info("save_bytes: filename='%s' -> '%s' bytes=%d", filename, target, len(data))
        return str(target)

    def delete_file(self, filepath: Optional[str]) -> bool:
        if not filepath:
            return False

        path = Path(filepath)
        try:
            path.unlink()
        except FileNotFoundError:
            self.logger.warning("delete_file: '%s' already gone", filepath)
            return False

        self.logger.info("delete_file: removed '%s'", filepath)
        return True
