"""
ripple-serialize command line tool.

    ripple-serialize [--keyfile PATH] [--version] [-v] <command> [<argument> ...]

Commands that take data read it from stdin when no argument is given.
"""

from __future__ import annotations
import argparse
import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import __version__, facade
from .config import ToolConfig, default_keyfile
from .crypto.key_type import KeyType
from .keys.ripple_key import RippleKey
from .runtime.errors import (
    FieldError,
    FileOpenError,
    InvalidKeyTypeError,
    OverwriteRefusedError,
    ParseError,
    RippleSerializeError,
    UsageError,
)

logger = logging.getLogger(__name__)

PROG = "ripple-serialize"
MAX_BACKUPS = 1000
SECURITY_NOTE = "\n\nThis file should be stored securely and not shared.\n\n"

COMMANDS_HELP = """Commands:
  Serialization:
    serialize [<argument>]              Serialize from JSON.
    deserialize [<argument>]            Deserialize to JSON.

  Transaction signing:
    sign [<argument>]                   Sign for submission.
    multiSign [<argument>]              Apply a multi-signature.
      Signing commands require a valid keyfile.
      Input can be serialized or unserialized JSON.
      Output will always be unserialized JSON.

      If an <argument> is not provided, the data will be
      read from stdin.

  Key Management:
    create_keyfile [<keytype> [<seed>]] Create a new keyfile.
      Specifying <seed> on the command line is strongly discouraged,
      particularly on a shared machine. Instead, create a random seed,
      edit the keyfile "master_seed", then run repair_keyfile.
    repair_keyfile                      Resync "master_seed"-derived fields.

      Default keyfile is: {keyfile}
"""


def _print_json(value: Dict[str, Any]) -> None:
    print(json.dumps(value, indent=2))


def _key_summary(key: RippleKey) -> str:
    return (f"Key type is {key.key_type.value}.\n"
            f"Account ID is {key.address}.\n"
            f"{SECURITY_NOTE}")


def do_serialize(data: str) -> None:
    try:
        result = facade.serialize_from_json(data)
    except (ParseError, FieldError) as e:
        logger.debug(f"serialize failed: {e}")
        print(f'Unable to serialize "{data}"')
        return
    print(result)


def do_deserialize(data: str) -> None:
    try:
        result = facade.deserialize_to_json(data)
    except (ParseError, FieldError) as e:
        logger.debug(f"deserialize failed: {e}")
        print(f'Unable to deserialize "{data}"')
        return
    _print_json(result)


def _do_sign(data: str, keyfile: Path, sign: Callable) -> None:
    try:
        tx = facade.make_transaction(data)
    except (ParseError, FieldError) as e:
        logger.debug(f"sign failed: {e}")
        print(f'Unable to sign "{data}"')
        return
    _print_json(sign(tx, RippleKey.from_file(keyfile)))


def do_single_sign(data: str, keyfile: Path) -> None:
    _do_sign(data, keyfile, facade.sign_single)


def do_multi_sign(data: str, keyfile: Path) -> None:
    _do_sign(data, keyfile, facade.sign_multi)


def do_create_keyfile(keyfile: Path, key_type: str, seed: Optional[str],
                      default_key_type: KeyType = KeyType.SECP256K1) -> None:
    """
    Create a key file.

    Raises:
        OverwriteRefusedError: If the key file already exists
        SeedParseError: If seed cannot be parsed
    """
    if keyfile.exists():
        raise OverwriteRefusedError(f"Refusing to overwrite existing key file: {keyfile}")

    kt = default_key_type
    if key_type:
        try:
            kt = KeyType.from_string(key_type)
        except InvalidKeyTypeError:
            print(f'Invalid key type: "{key_type}"')
            return

    key = RippleKey.from_options(kt, seed)
    key.write_to_file(keyfile)

    print(f"New ripple key created.\n"
          f"Stored in {keyfile}.\n"
          f"{_key_summary(key)}", end="")


def backup_keyfile(keyfile: Path) -> Optional[Path]:
    """
    Copy the key file to the first unused ``<keyfile>.bak.<n>``.

    Returns:
        The backup path, or None if all backup names are taken

    Raises:
        FileOpenError: If the key file cannot be copied
    """
    for i in range(MAX_BACKUPS):
        backup = Path(f"{keyfile}.bak.{i}")
        if not backup.exists():
            try:
                shutil.copyfile(keyfile, backup)
            except OSError as e:
                raise FileOpenError(f"Failed to open key file: {keyfile}", path=str(keyfile), cause=e)
            logger.debug(f"Backed up {keyfile} to {backup}")
            return backup
    logger.debug(f"{keyfile} already has {MAX_BACKUPS} backups, not making another")
    return None


def do_repair_keyfile(keyfile: Path) -> None:
    backup_keyfile(keyfile)
    key = RippleKey.from_file(keyfile)
    facade.repair_key_file(key, keyfile)

    print(f"Ripple key in {keyfile} repaired.\n"
          f"{_key_summary(key)}", end="")


# command -> (min args, max args, reads stdin)
COMMAND_ARGS: Dict[str, Tuple[int, int, bool]] = {
    "serialize": (0, 1, True),
    "deserialize": (0, 1, True),
    "sign": (0, 1, True),
    "multiSign": (0, 1, True),
    "create_keyfile": (0, 2, False),
    "repair_keyfile": (0, 0, False),
}


def run_command(command: str, args: List[str], config: ToolConfig) -> None:
    """
    Run one command.

    Raises:
        UsageError: If the command is unknown or has the wrong number of
            arguments
        RippleSerializeError: If the command fails
    """
    if command not in COMMAND_ARGS:
        raise UsageError(f"Unknown command: {command}")
    min_args, max_args, reads_stdin = COMMAND_ARGS[command]
    if not min_args <= len(args) <= max_args:
        raise UsageError("Syntax error: Wrong number of arguments")

    if args:
        data = args[0]
    elif reads_stdin:
        data = sys.stdin.read()
    else:
        data = ""

    if command == "serialize":
        do_serialize(data)
    elif command == "deserialize":
        do_deserialize(data)
    elif command == "sign":
        do_single_sign(data, config.keyfile)
    elif command == "multiSign":
        do_multi_sign(data, config.keyfile)
    elif command == "create_keyfile":
        do_create_keyfile(config.keyfile, data, args[1] if len(args) >= 2 else None,
                          config.default_key_type)
    elif command == "repair_keyfile":
        do_repair_keyfile(config.keyfile)


def build_parser(keyfile: Path) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [options] <command> [<argument> ...]",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=COMMANDS_HELP.format(keyfile=keyfile),
    )
    parser.add_argument("--keyfile", help="Specify the key file.")
    parser.add_argument("--version", action="store_true", help="Display the build version.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Enable debug logging.")
    parser.add_argument("command", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("arguments", nargs="*", help=argparse.SUPPRESS)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser(default_keyfile())
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.version:
        print(f"{PROG} version {__version__}")
        return 0

    if not args.command:
        parser.print_help(sys.stderr)
        return 0

    config = ToolConfig.from_env(keyfile=args.keyfile)
    try:
        run_command(args.command, args.arguments, config)
    except RippleSerializeError as e:
        logger.debug(f"{args.command} failed: {e.to_dict()}")
        print(e.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
