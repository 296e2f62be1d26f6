"""
Command line entry point for binedit.
"""

import argparse
import logging
import shutil
import sys
from typing import Callable, Dict, List, Optional

from .core.editor import FileEditor
from .core.sequence import ByteSequence
from .ui.render import HexdumpRenderer
from .utils.hex_utils import format_offset, parse_hex_string, parse_number
from .utils.search import SearchEngine

logger = logging.getLogger('binedit')

DEFAULT_DUMP_LENGTH = 256


def _number(text: str) -> int:
    value = parse_number(text)
    if value is None or value < 0:
        raise argparse.ArgumentTypeError(f"not a non-negative number: {text!r}")

    return value


def _hex_bytes(text: str) -> bytes:
    value = parse_hex_string(text)
    if value is None:
        raise argparse.ArgumentTypeError(f"not a hex byte string: {text!r}")

    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        prog="binedit",
        description="binedit - Byte-level editor for files of any size"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    dump = commands.add_parser("dump", help="Print a hexdump")
    dump.add_argument("file", help="File to dump")
    dump.add_argument("--offset", type=_number, default=0, help="First byte to show")
    dump.add_argument("--length", type=_number, default=DEFAULT_DUMP_LENGTH,
                      help="Number of bytes to show")
    dump.add_argument("--width", type=_number, default=None,
                      help="Bytes per line (default: fit the terminal)")
    dump.add_argument("--color", action=argparse.BooleanOptionalAction, default=None,
                      help="Highlight the dump (default: when writing to a terminal)")

    inspect = commands.add_parser("inspect", help="Decode the bytes at an offset")
    inspect.add_argument("file", help="File to read")
    inspect.add_argument("offset", type=_number, help="Offset to decode")

    find = commands.add_parser("find", help="Search for a byte pattern")
    find.add_argument("file", help="File to search")
    find.add_argument("pattern", help="Hex bytes, or text with --text")
    find.add_argument("--text", action="store_true", help="Treat the pattern as UTF-8 text")
    find.add_argument("--offset", type=_number, default=0, help="Offset to start from")
    find.add_argument("--all", action="store_true", help="Print every match")

    for name, help_text, value_help in (
        ("patch", "Overwrite bytes in place", "Hex bytes to write"),
        ("insert", "Insert bytes, shifting the rest of the file", "Hex bytes to insert"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("file", help="File to edit")
        sub.add_argument("offset", type=_number, help="Offset of the first byte")
        sub.add_argument("data", type=_hex_bytes, help=value_help)
        sub.add_argument("-o", "--output", help="Write the result here instead of FILE")

    delete = commands.add_parser("delete", help="Remove bytes, shifting the rest of the file")
    delete.add_argument("file", help="File to edit")
    delete.add_argument("offset", type=_number, help="Offset of the first byte")
    delete.add_argument("count", type=_number, help="Number of bytes to remove")
    delete.add_argument("-o", "--output", help="Write the result here instead of FILE")

    replace = commands.add_parser("replace", help="Replace every match of a pattern")
    replace.add_argument("file", help="File to edit")
    replace.add_argument("pattern", help="Hex bytes, or text with --text")
    replace.add_argument("replacement", help="Replacement in the same notation")
    replace.add_argument("--text", action="store_true", help="Treat both as UTF-8 text")
    replace.add_argument("-o", "--output", help="Write the result here instead of FILE")

    return parser.parse_args(argv)


def _finish(editor: FileEditor, args: argparse.Namespace) -> int:
    """Persist the edit to the source or to --output."""

    if args.output:
        saved = editor.save_as_new_file(args.output)
    else:
        saved = editor.save()

    return 0 if saved else 1


def cmd_dump(editor: FileEditor, args: argparse.Namespace) -> int:
    data = editor.read(args.offset, args.length)
    if data is None:
        print(f"Nothing to show at offset {args.offset}", file=sys.stderr)
        return 1

    color = sys.stdout.isatty() if args.color is None else args.color
    renderer = HexdumpRenderer(color=color)

    if args.width:
        renderer.bytes_per_line = args.width
    else:
        renderer.set_bytes_per_line(shutil.get_terminal_size().columns)

    sys.stdout.write(renderer.render(data, args.offset))
    return 0


def cmd_inspect(editor: FileEditor, args: argparse.Namespace) -> int:
    data = editor.read(args.offset, 8)
    if data is None:
        print(f"Nothing to decode at offset {args.offset}", file=sys.stderr)
        return 1

    values = ByteSequence(data).represent(0)
    sys.stdout.write(HexdumpRenderer().render_representation(values, args.offset))
    return 0


def cmd_find(editor: FileEditor, args: argparse.Namespace) -> int:
    search_type = 'text' if args.text else 'hex'
    engine = SearchEngine(editor)

    if args.all:
        results = engine.find_all(args.pattern, search_type, args.offset)
    else:
        result = engine.find_next(args.pattern, search_type, args.offset)
        results = [result] if result else []

    for result in results:
        print(f"{format_offset(result.position)}  {result.position}")

    return 0 if results else 1


def cmd_patch(editor: FileEditor, args: argparse.Namespace) -> int:
    if not editor.insert(args.offset, args.data):
        return 1

    return _finish(editor, args)


def cmd_insert(editor: FileEditor, args: argparse.Namespace) -> int:
    if not editor.add(args.offset, args.data):
        return 1

    return _finish(editor, args)


def cmd_delete(editor: FileEditor, args: argparse.Namespace) -> int:
    if not editor.delete(args.offset, args.count):
        return 1

    return _finish(editor, args)


def cmd_replace(editor: FileEditor, args: argparse.Namespace) -> int:
    search_type = 'text' if args.text else 'hex'
    count = SearchEngine(editor).replace_all(args.pattern, args.replacement, search_type)
    print(f"{count} replacement(s)")

    if not count:
        return 1

    return _finish(editor, args)


COMMANDS: Dict[str, Callable[[FileEditor, argparse.Namespace], int]] = {
    "dump": cmd_dump,
    "inspect": cmd_inspect,
    "find": cmd_find,
    "patch": cmd_patch,
    "insert": cmd_insert,
    "delete": cmd_delete,
    "replace": cmd_replace,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    with FileEditor() as editor:
        if not editor.open(args.file):
            print(f"Error opening {args.file}", file=sys.stderr)
            return 1

        logger.debug("Running %s on %s", args.command, editor.source_path)
        return COMMANDS[args.command](editor, args)


if __name__ == "__main__":
    sys.exit(main())
