"""
Key file storage.

A key file is a JSON document with exactly nine members. Only ``key_type``
and ``master_seed`` are read back; every other member is derived from them
and is rewritten in full on every write.
"""

from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel

from ..runtime.errors import DirectoryCreateError, FileOpenError, JsonParseError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class KeyFileRecord(BaseModel):
    """Contents of a key file."""

    key_type: str
    master_seed: str
    master_seed_hex: str
    master_key: str
    public_key: str
    public_key_hex: str
    secret_key: str
    secret_key_hex: str
    account_id: str

    model_config = {"populate_by_name": True, "extra": "forbid", "frozen": True}

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2) + "\n"


KEY_FILE_MEMBERS = frozenset(KeyFileRecord.model_fields)


def is_suspect(data: Dict[str, Any]) -> bool:
    """True if a loaded document does not hold exactly the key file members."""
    return set(data) != KEY_FILE_MEMBERS


def read_key_file(path: PathLike) -> Dict[str, Any]:
    """
    Read a key file as a JSON object.

    Args:
        path: Key file path

    Returns:
        The parsed document. A document with missing or extra members still
        loads; it is only logged as suspect.

    Raises:
        FileOpenError: If the file cannot be read
        JsonParseError: If the file does not hold a JSON object
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileOpenError(f"Failed to open key file: {path}", path=str(path), cause=e)

    try:
        data = json.loads(text)
    except ValueError as e:
        raise JsonParseError(f"Unable to parse json key file: {path}",
                             details={"path": str(path)}, cause=e)
    if not isinstance(data, dict):
        raise JsonParseError(f"Unable to parse json key file: {path}",
                             details={"path": str(path)})

    if is_suspect(data):
        missing = sorted(KEY_FILE_MEMBERS - set(data))
        extra = sorted(set(data) - KEY_FILE_MEMBERS)
        logger.debug(f"Suspect key file {path}: missing={missing} extra={extra}")
    else:
        logger.debug(f"Read key file {path}")
    return data


def write_key_file(record: KeyFileRecord, path: PathLike) -> None:
    """
    Write a key file, replacing any existing file.

    The record is written to a temporary file in the target directory which
    then replaces the target, so a failed write leaves the old file intact.

    Raises:
        DirectoryCreateError: If the parent directory cannot be created
        FileOpenError: If the file cannot be written
    """
    path = Path(path)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(f"Cannot create directory: {parent}", path=str(parent), cause=e)
    if path.is_dir():
        raise FileOpenError(f"Cannot open key file: {path}", path=str(path))

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=str(parent), prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(record.to_json())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise FileOpenError(f"Cannot open key file: {path}", path=str(path), cause=e)
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug(f"Wrote key file {path}")


__all__ = [
    "KeyFileRecord",
    "KEY_FILE_MEMBERS",
    "is_suspect",
    "read_key_file",
    "write_key_file",
]
