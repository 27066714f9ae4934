"""
Tool configuration.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from pydantic import BaseModel, Field

from .crypto.key_type import KeyType

KEYFILE_DIR = ".ripple"
KEYFILE_NAME = "secret-key.txt"


def default_keyfile(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Default key file location.

    ``$HOME/.ripple/secret-key.txt``, or the same path under the current
    directory when HOME is unset or empty.
    """
    home = (os.environ if env is None else env).get("HOME")
    base = Path(home) if home else Path.cwd()
    return base / KEYFILE_DIR / KEYFILE_NAME


class ToolConfig(BaseModel):
    """Settings of the command line tool."""

    keyfile: Path = Field(default_factory=default_keyfile)
    default_key_type: KeyType = KeyType.SECP256K1

    model_config = {"populate_by_name": True}

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None,
                 keyfile: Optional[Union[str, Path]] = None) -> ToolConfig:
        """
        Build the configuration from the environment.

        Args:
            env: Environment mapping; os.environ when omitted
            keyfile: Explicit key file, overriding the default location
        """
        path = Path(keyfile) if keyfile else default_keyfile(env)
        return cls(keyfile=path)


__all__ = [
    "ToolConfig",
    "default_keyfile",
]
