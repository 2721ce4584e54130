"""Main entry point for the fretmap command line.

This module parses command-line arguments, sets up logging, maps the
requested sequences onto the configured fretboard and prints the result.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

from fretmap import constants
from fretmap.base import FretmapError
from fretmap.config import Config, get_config_for_instrument
from fretmap.fretboard import get_frets
from fretmap.grid import Grid
from fretmap.parser import parse_sequences
from fretmap.printer import print_grid
from fretmap.tunings import Instrument, instrument_from_name


def run(config: Config, descriptors: List[str]) -> Grid:
    """Map the described sequences onto the configured fretboard.

    Args:
        config: The fretboard configuration.
        descriptors: Sequence descriptors, in display order.

    Returns:
        The fret grid.
    """
    config.validate()
    sequences = parse_sequences(descriptors)
    logging.info(
        "mapping %d sequences on %s (capo %d)",
        len(sequences),
        config.instrument_name,
        config.capo,
    )
    return get_frets(
        sequences,
        config.tuning_notes,
        config.capo,
        config.flipped,
        registry=config.registry,
        nb_frets=config.nb_frets,
        max_nb_frets=config.max_nb_frets,
    )


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options
        for fretmap.
    """
    parser = ArgumentParser(
        prog="fretmap", description="Show scales and patterns on a fretboard."
    )
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument(
        "--instrument",
        default=Instrument.StandardGuitar.name,
        help="one of: " + ", ".join(inst.name for inst in Instrument),
    )
    parser.add_argument("--tuning", help="custom tuning, lowest string first")
    parser.add_argument("--capo", type=int, default=0)
    parser.add_argument("--flipped", action="store_true")
    parser.add_argument("--frets", type=int, default=constants.VISIBLE_FRETS)
    parser.add_argument("--list-models", action="store_true")
    parser.add_argument(
        "sequences", nargs="*", help="descriptors such as 'A minor_pentatonic@1*0'"
    )
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the fretmap command line.

    Parses command-line arguments, configures logging, builds the fret grid
    and prints it.

    Returns:
        The process exit code.
    """
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper())
    try:
        config = get_config_for_instrument(
            instrument_from_name(args.instrument),
            capo=args.capo,
            flipped=args.flipped,
            visible_frets=args.frets,
        )
        if args.tuning:
            config = config.with_tuning_text(args.tuning)
        if args.list_models:
            print("\n".join(config.registry.names()))
            return 0
        grid = run(config, args.sequences)
    except (FretmapError, ValueError) as e:
        logging.error("%s", e)
        return 1
    print(print_grid(grid, config.visible_frets, config.flipped))
    logging.info("done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
