# cli.py
import argparse
import logging
import sys
from typing import List, Optional

from .client import Dnf
from .config import Config
from .errors import DnfError
from .logger import setup_logger

_logger = setup_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dnfwrap", description="Thin wrapper around the dnf CLI")
    parser.add_argument("--binary", "-b", help="Path to the dnf binary (default: search $PATH)")
    parser.add_argument("--config-dir", help="Directory holding dnfwrap.conf")
    parser.add_argument("--verbose", "-v", action="store_true", help="Pass --verbose to dnf")
    parser.add_argument("--dry-run", "-n", action="store_true", help="Run the transaction in test mode")
    parser.add_argument("--no-assumeyes", action="store_true", help="Do not pass --assumeyes to dnf")
    parser.add_argument("--destdir", help="Pass --destdir to dnf")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ------------------------
    # Transactions
    # ------------------------
    p_install = subparsers.add_parser("install", aliases=["in"], help="Install a package")
    p_install.add_argument("package")
    p_install.set_defaults(func=cmd_install)

    p_update = subparsers.add_parser("update", aliases=["up"], help="Update a package, or everything")
    p_update.add_argument("package", nargs="?", default="")
    p_update.set_defaults(func=cmd_update)

    p_remove = subparsers.add_parser("remove", aliases=["rm"], help="Remove a package")
    p_remove.add_argument("package")
    p_remove.set_defaults(func=cmd_remove)

    # ------------------------
    # Queries
    # ------------------------
    p_search = subparsers.add_parser("search", aliases=["se"], help="Search for a package")
    p_search.add_argument("package")
    p_search.set_defaults(func=cmd_search)

    p_list = subparsers.add_parser("list", aliases=["ls"], help="List installed packages")
    p_list.set_defaults(func=cmd_list)

    p_depends = subparsers.add_parser("depends", aliases=["deps"], help="List the providers of a package's dependencies")
    p_depends.add_argument("package")
    p_depends.set_defaults(func=cmd_depends)

    return parser


def cmd_install(client, args, opt):
    client.install(args.package, opt)


def cmd_update(client, args, opt):
    client.update(args.package, opt)


def cmd_remove(client, args, opt):
    client.remove(args.package, opt)


def cmd_search(client, args, opt):
    client.search(args.package, opt)


def cmd_list(client, args, opt):
    client.list(opt)


def cmd_depends(client, args, opt):
    # dnf output is not teed here, only the parsed providers are printed
    opt.output = None
    for pkg in client.depends(args.package, opt):
        print(pkg.name)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Level must be in place before Config logs about a missing file
    setup_logger(level=logging.DEBUG if args.debug else logging.INFO)

    try:
        config = Config(args.config_dir)
        if not args.debug:
            _logger.setLevel(getattr(logging, config.log_level, logging.INFO))

        opt = config.options(output=sys.stdout)
        opt.verbose = opt.verbose or args.verbose
        opt.dry_run = opt.dry_run or args.dry_run
        opt.not_assume_yes = opt.not_assume_yes or args.no_assumeyes
        if args.destdir:
            opt.destdir = args.destdir

        client = Dnf(args.binary or config.binary_path)
        args.func(client, args, opt)
    except (DnfError, OSError) as e:
        _logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
