"""Read the body markup out of a ZIP-packaged word-processing document."""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path

from resume_scorer.exceptions import ContainerCorruptError, ContainerNotFoundError

logger = logging.getLogger(__name__)

DOCUMENT_ENTRY = "word/document.xml"


def _open_archive(path: Path) -> zipfile.ZipFile:
    if not path.is_file():
        raise ContainerCorruptError("Document file does not exist", path=path)
    if not zipfile.is_zipfile(path):
        raise ContainerCorruptError("File is not a valid ZIP container", path=path)
    try:
        return zipfile.ZipFile(path, "r")
    except (zipfile.BadZipFile, OSError) as exc:
        raise ContainerCorruptError(f"Could not open container: {exc}", path=path) from exc


def read_document_xml(file_path: str | Path, entry: str = DOCUMENT_ENTRY) -> str:
    """Return the body markup of a .docx container as text.

    Raises:
        ContainerCorruptError: the file is missing or not a readable archive.
        ContainerNotFoundError: the archive has no ``entry`` member.
    """
    path = Path(file_path)
    with _open_archive(path) as archive:
        if entry not in archive.namelist():
            raise ContainerNotFoundError(
                "Body markup entry missing from container", path=path, entry=entry
            )
        try:
            data = archive.read(entry)
        except (
            zipfile.BadZipFile,
            OSError,
            RuntimeError,
            zlib.error,
            EOFError,
            NotImplementedError,
        ) as exc:
            # CRC mismatch, damaged or truncated stream, encrypted entry, unknown compression
            raise ContainerCorruptError(
                f"Could not read container entry: {exc}", path=path, entry=entry
            ) from exc

    logger.debug("Read %d bytes from %s:%s", len(data), path.name, entry)
    return data.decode("utf-8", errors="replace")


def list_entries(file_path: str | Path) -> list[str]:
    """Return the member names of the container, in archive order."""
    path = Path(file_path)
    with _open_archive(path) as archive:
        return archive.namelist()
