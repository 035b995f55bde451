"""Command-line interface for romdat."""

import sys
import logging
import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from romdat import __version__
from romdat.config.loader import load_config, ConfigError
from romdat.config.validator import validate_config, ValidationError
from romdat.config.options import build_codec_options, build_filter, build_header
from romdat.dats import DatHeader, DatReader, DatWriter, group_items
from romdat.diagnostics import CollectingLogHandler, setup_logging
from romdat.formats import DatFormat, create_codec
from romdat.items.dat_item import DatItem
from romdat.stats import DatStats, stats_table

logger = logging.getLogger(__name__)

FORMAT_CHOICES = [fmt.value for fmt in DatFormat]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='romdat',
        description='Convert, filter and summarize plain-text ROM DAT files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a MAME -listroms dump to an SFV file
  romdat mame.lst --input-format listrom --output-format sfv -o mame.sfv

  # Print statistics for an SMDB file
  romdat genesis.txt --input-format smdb --stats

  # Use filters and header values from a config file
  romdat mame.lst --config romdat.yaml -o filtered.dat
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        'inputs',
        nargs='+',
        type=Path,
        metavar='INPUT',
        help='DAT files to read'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to romdat.yaml (default: ./romdat.yaml if present)'
    )

    parser.add_argument(
        '-f', '--input-format',
        choices=FORMAT_CHOICES,
        help='Format of the input files. Overrides dat.format.'
    )

    parser.add_argument(
        '-t', '--output-format',
        choices=FORMAT_CHOICES,
        help='Format of the output file (default: same as input)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        metavar='PATH',
        help='Write the filtered items to this file'
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print statistics of the filtered items'
    )

    return parser


def _load(config_path: Optional[Path]) -> Dict[str, Any]:
    """Load the given config, the default one if present, or an empty one."""
    if config_path is None and not (Path.cwd() / "romdat.yaml").exists():
        return {'dat': {}, 'header': {}, 'filter': {}, 'logging': {}}
    return load_config(config_path)


def read_inputs(
    paths: List[Path],
    config: Dict[str, Any],
    input_format: DatFormat,
    header: DatHeader
) -> Optional[List[DatItem]]:
    """
    Parse every input file with a fresh codec.

    Args:
        paths: Files to read, in order
        config: Loaded configuration
        input_format: Format of every input
        header: Header the codecs fill in; values already present win

    Returns:
        All accepted items, or None if any file could not be read
    """
    options = build_codec_options(config)
    items: List[DatItem] = []

    for index, path in enumerate(paths):
        codec = create_codec(
            input_format,
            header=header,
            game_name=options.game_name,
            missfile_options=options.missfile
        )
        context = options.parse_context(str(path))
        if len(paths) > 1:
            context = replace(context, source_id=index)

        reader = DatReader(codec, context)
        if not reader.parse_file(path, encoding=options.encoding):
            return None
        items.extend(reader.items)

    return items


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for romdat CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = _load(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    collector = CollectingLogHandler(level=logging.WARNING)
    try:
        setup_logging(config, extra_handlers=[collector])
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    options = build_codec_options(config)
    input_format = DatFormat(args.input_format) if args.input_format else options.dat_format
    output_format = DatFormat(args.output_format) if args.output_format else input_format

    # Config values first, then whatever the inputs declare
    header = build_header(config)
    items = read_inputs(args.inputs, config, input_format, header)
    if items is None:
        return 1

    grouped = build_filter(config).filter_items(group_items(items))

    exit_code = 0
    if args.output:
        header.set_if_blank('file_name', args.output.stem)
        codec = create_codec(
            output_format,
            header=header,
            game_name=options.game_name,
            missfile_options=options.missfile
        )
        writer = DatWriter(codec, ignore_blanks=options.ignore_blanks)
        if not writer.write_to_file(grouped, args.output):
            exit_code = 1

    if args.stats:
        stats = DatStats()
        for machine_items in grouped.values():
            for item in machine_items:
                stats.add_item(item)
        name = args.output.name if args.output else args.inputs[0].name
        Console().print(stats_table(stats, name, game_count=len(grouped),
                                    baddump_col=True, nodump_col=True))

    problems = collector.entries
    if problems:
        logger.info(f"{len(problems)} warnings or errors were logged")

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
