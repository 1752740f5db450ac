"""
Argument parsing logic for MediaSort.
"""

import argparse
import dataclasses
import os
from pathlib import Path
from typing import Any

from mediasort.models import DIRECTORY_TEMPLATES, AppConfig, RunConfig, colorize, colors


def get_default_value(field_name: str, config_class: type = RunConfig) -> Any:
    """Extract default value from a config dataclass field."""
    f = config_class.__dataclass_fields__[field_name]
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return f.default


def get_default_info(default_val: Any) -> str:
    """Generate a string with default settings for help message."""
    return f"(default: '{colorize(str(default_val), colors.yellow)}')"


def get_config() -> AppConfig:
    """Parse command line arguments and return the AppConfig object."""

    parser = argparse.ArgumentParser(
        prog="mediasort",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Copy JPG and MP4 files into date-named folders by their capture date.\n"
        f"Requires {colorize('ExifTool', colors.green)} command-line tool and {colorize('PyExifTool', colors.green)} Python library.",
        epilog=f"Example: {colorize('mediasort', colors.green)} ~/DCIM ~/Photos -c -e ~/Unsorted",
    )

    parser.add_argument(
        "-c",
        "--copy-errors",
        dest="copy_errors",
        action="store_true",
        help="Copy files without capture date to ERROR_DIR/error/<modification date>",
    )

    def_dir_tmpl: str = get_default_value("directory_template")
    parser.add_argument(
        "-d",
        "--directory-template",
        dest="directory_template",
        type=str,
        choices=list(DIRECTORY_TEMPLATES),
        default=def_dir_tmpl,
        metavar="TEMPLATE",
        help=f"Template for directory names {get_default_info(def_dir_tmpl)}",
    )
    parser.add_argument(
        "-e",
        "--error-dir",
        dest="error_dir",
        type=str,
        default=None,
        metavar="ERROR_DIR",
        help="Directory receiving files without capture date (used with --copy-errors)",
    )
    parser.add_argument(
        "-E",
        "--show-errors",
        dest="show_errors",
        action="store_true",
        help="Show files with errors",
    )
    parser.add_argument(
        "-N",
        "--no-subfolders",
        dest="include_subfolders",
        action="store_false",
        default=get_default_value("include_subfolders"),
        help="Do not include files in subfolders of the source directory",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="store_true",
        help="Quiet mode (suppress non-error messages)",
    )
    parser.add_argument(
        "-S",
        "--settings",
        dest="show_settings",
        action="store_true",
        help="Show raw settings (variable values)",
    )
    parser.add_argument(
        "-v", "--version", dest="show_version", action="store_true", help="Print version and exit"
    )
    parser.add_argument(
        "-V",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Print detailed information during processing",
    )
    parser.add_argument(
        "-x",
        "--delete-source",
        dest="delete_source",
        action="store_true",
        help="Delete original files after they were copied",
    )
    parser.add_argument(
        "-y", "--yes", dest="yes", action="store_true", help="Assume 'yes' to all prompts"
    )
    parser.add_argument(
        "source",
        type=str,
        nargs="?",
        default=None,
        help="Directory with media files to sort",
    )
    parser.add_argument(
        "destination",
        type=str,
        nargs="?",
        default=None,
        help="Directory receiving the date folders",
    )

    args = parser.parse_args()

    # Directories are optional only for --version
    if not args.show_version and (args.source is None or args.destination is None):
        parser.error("the following arguments are required: source, destination")

    run_config = RunConfig(
        source_dir=Path(args.source or os.getcwd()).resolve(),
        dest_dir=Path(args.destination or os.getcwd()).resolve(),
        error_dir=Path(args.error_dir).resolve() if args.error_dir else None,
        include_subfolders=args.include_subfolders,
        copy_errors=args.copy_errors,
        delete_source=args.delete_source,
        directory_template=args.directory_template,
    )

    # Construct and return the immutable AppConfig
    return AppConfig(
        run=run_config,
        quiet=args.quiet,
        show_version=args.show_version,
        show_errors=args.show_errors,
        show_settings=args.show_settings,
        verbose=args.verbose,
        yes=args.yes,
    )
