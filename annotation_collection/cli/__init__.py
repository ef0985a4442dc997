"""CLI interface for annotation_collection project.

Each subcommand lives in its own ``cli/<name>/__init__.py`` module exposing
``COMMAND_DESCRIPTION`` and ``command(subparser) -> handler``.
"""

import logging
import os
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from gettext import gettext as _
from pathlib import Path

import annotation_collection.utils.i18n  # noqa: F401
from annotation_collection import __version__
from annotation_collection.utils.env import default_config, load_cfg_from_env
from annotation_collection.utils.misc import load_module

logger = logging.getLogger(__name__)


def add_subcommand(subparsers, name: str, submodule):
    subparser = subparsers.add_parser(name, help=submodule.COMMAND_DESCRIPTION)
    common_flags(subparser)
    handler = submodule.command(subparser)
    subparser.set_defaults(fn=handler)


def common_flags(parser):
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=_("Give more details about what is happening"),
    )  # noqa: E501
    parser.add_argument(
        "-V",
        "--version",
        dest="is_show_version",
        action="store_true",
        help=_("Print version and exit"),
    )  # noqa: E501


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="annotation_collection", formatter_class=ArgumentDefaultsHelpFormatter
    )
    common_flags(parser)
    subparsers = parser.add_subparsers()

    for module in sorted(Path(__file__).parent.glob("*/__init__.py")):
        if str(module).find("pycache") > 0:
            continue
        module_name = module.parent.name
        subcommand_module = load_module(
            module, module_name=f"annotation_collection.cli.{module_name}"
        )
        add_subcommand(subparsers, module_name, subcommand_module)
    return parser


def main(argv=None):
    """
    The main function executes on commands:
    `python -m annotation_collection` and `$ annotation_collection `.
    """
    logging.basicConfig()
    cfg = load_cfg_from_env(default_config(), os.environ)
    logging.root.setLevel(str(cfg.log_level).upper())

    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(argv)
    args.cfg = cfg

    if args.verbose:
        logging.root.setLevel(logging.DEBUG)

    if args.is_show_version:
        print(__version__)
        sys.exit(0)
    logger.debug(f"{_('Starting')} annotation_collection v{__version__}")

    fn = args.__dict__.get("fn")
    args.__dict__["fn"] = None
    if fn is not None:
        fn(args)
    else:
        parser.parse_args([*argv, "--help"])
