# ==================================================
# vt_bundle/cli.py
# ==================================================
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import Callable, Dict, List, Tuple

from .const import GAMES
from .errors import BundleError
from .lookup import HashDictionary
from .reader import BundleFile, open_bundle

log = logging.getLogger(__name__)

# ───────────────────────── configuration ──────────────────────
DEFAULT_GAME = os.getenv("VT_BUNDLE_GAME", "2")      # parsed by _game()
DEFAULT_LOOKUP = [p for p in os.getenv("VT_BUNDLE_LOOKUP", "").split(os.pathsep) if p]


class Die(Exception):
    """Fatal command error, printed as ``prog: message``."""


# ───────────────────────── commands ───────────────────────────
def action_dict(args, lookup: HashDictionary, out) -> int:
    lookup.dump(out)
    return 0


def action_dump(args, lookup: HashDictionary, out) -> int:
    if not args.args:
        raise Die("no bundle files provided")
    for path in args.args:
        with _open(path, args.game) as br:
            _report(path, br.dump_info, out, lookup)
    return 0


def action_list(args, lookup: HashDictionary, out) -> int:
    if not args.args:
        raise Die("no bundle files provided")
    for path in args.args:
        with _open(path, args.game) as br:
            out.write(f"BundleReader({path}) [\n")
            _report(path, br.dump_index, out, lookup)
            out.write("]\n")
    return 0


def action_help(args, lookup: HashDictionary, out) -> int:
    args.parser.print_help(sys.stderr)
    return 0


COMMANDS: Dict[str, Tuple[Callable, str]] = {
    "dict": (action_dict, "Print the generated hash lookup dictionary."),
    "dump": (action_dump, "Dump some internal bundle information."),
    "help": (action_help, "Print this help."),
    "list": (action_list, "List the assets inside the bundle."),
}


# ───────────────────── helper funcs ───────────────────────────
def _open(path: str, game: int) -> BundleFile:
    try:
        return open_bundle(path, game)
    except (BundleError, OSError) as exc:
        raise Die(f'BundleReader("{path}"): {_describe(exc)}') from exc


def _report(path: str, dump, out, lookup: HashDictionary):
    try:
        dump(out, lookup)
    except (BundleError, OSError) as exc:
        raise Die(f'BundleReader("{path}"): {_describe(exc)}') from exc


def _describe(exc: BaseException) -> str:
    if isinstance(exc, OSError) and not isinstance(exc, BundleError):
        return exc.strerror or str(exc)
    return str(exc)


def _game(value: str) -> int:
    try:
        game = int(value)
    except ValueError:
        game = None
    if game not in GAMES:
        raise argparse.ArgumentTypeError(f"invalid (game={value}). must be 1 or 2")
    return game


def build_parser() -> argparse.ArgumentParser:
    epilog = "commands:\n" + "\n".join(
        f"  {name:<20} {help_}" for name, (_, help_) in COMMANDS.items())
    p = argparse.ArgumentParser(
        prog="vt-bundle",
        usage="%(prog)s [options..] command [args..]",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("-g", "--game", type=_game, default=DEFAULT_GAME,
                   help="Select the game bundle version.")
    p.add_argument("-l", "--lookup", action="append", default=[], metavar="PATH",
                   help="Load a hash lookup file. Can be repeated.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    p.add_argument("command", nargs="?", default="help")
    p.add_argument("args", nargs="*")
    return p


def load_lookup(paths: List[str]) -> HashDictionary:
    lookup = HashDictionary()
    for path in paths:
        try:
            n = lookup.load_file(path)
        except (BundleError, OSError) as exc:
            raise Die(f"{path}: {_describe(exc)}") from exc
        log.info("%s: %d hashes", path, n)
    return lookup


def main(argv: List[str] | None = None, out=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.parser = parser
    out = out if out is not None else sys.stdout
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command not in COMMANDS:
            raise Die(f"'{args.command}' is not a valid command. See '{parser.prog} help'.")
        lookup = load_lookup(DEFAULT_LOOKUP + args.lookup)
        action, _ = COMMANDS[args.command]
        return action(args, lookup, out)
    except Die as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return 1
