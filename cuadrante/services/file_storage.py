"""
Blob storage for uploaded documents and generated payslips.

Paths are bucket-relative (``empleados-docs/<id>/<name>``); the returned URL
is what gets stored on the records.
"""
from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from cuadrante.core.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

DOCUMENTS_BUCKET = "empleados-docs"
PAYSLIPS_PREFIX = "nominas"

_UNSAFE = re.compile(r"[^a-zA-Z0-9._-]")


def safe_file_name(name: str | None) -> str:
    """ "Contrato firmado (1).pdf" -> "Contrato_firmado_1.pdf"."""
    cleaned = re.sub(r"\s+", "_", (name or "").strip())
    cleaned = _UNSAFE.sub("", cleaned)
    return cleaned or "archivo.pdf"


class FileStorage(ABC):

    @abstractmethod
    async def upload(self, path: str, data: bytes) -> str:
        """Stores ``data`` (overwriting) and returns its public URL."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Removes the file; missing files are ignored."""

    @abstractmethod
    def path_from_url(self, url: str) -> str | None:
        """Inverse of ``upload``'s URL, None for foreign URLs."""


class LocalFileStorage(FileStorage):
    """Files under MEDIA_DIR, served by the app under MEDIA_URL."""

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise ValidationError(f"Ruta no permitida: {path}")
        return target

    async def upload(self, path: str, data: bytes) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error("Upload of %s failed: %s", path, e)
            raise PersistenceError(f"No se pudo guardar {path}") from e
        logger.info("Stored %s (%d bytes)", path, len(data))
        return f"{self.base_url}/{path}"

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Delete of %s failed: %s", path, e)
            raise PersistenceError(f"No se pudo borrar {path}") from e
        logger.info("Deleted %s", path)

    def path_from_url(self, url: str) -> str | None:
        prefix = f"{self.base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):]
