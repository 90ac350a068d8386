"""Command-Line Interface handler for BeatScript."""

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional

from .config_loader import ConfigLoader
from .log_setup import setup_logging
from .detector import is_structured_script
from .segmenter import parse_script
from .interpolation import LeadContext, interpolate_script
from .script_formatter import get_formatter
from .utils import ensure_dir_exists, read_script_file
from .exceptions import BeatScriptError, ConfigurationError

logger = logging.getLogger(__name__) # Get logger for this module

EXIT_NOT_STRUCTURED = 3

def parse_lead_args(pairs: Optional[List[str]]) -> Optional[LeadContext]:
    """
    Turns ["first_name=Ana", "company=Acme"] into a LeadContext.

    Raises:
        ConfigurationError: If an item is not of the form key=value.
    """
    if not pairs:
        return None
    values: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Invalid --lead value '{pair}'. Expected key=value.")
        values[key.strip()] = value.strip()
    return LeadContext.from_dict(values)


class CLIHandler:
    """Parses arguments and runs the script parser over one file."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="BeatScript: Parse numbered-beat call scripts into beats and branches.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-s", "--script",
            required=True,
            help="Path to the call script text/markdown file."
        )
        parser.add_argument(
            "-o", "--output",
            default=None,
            help="File to write the parsed script to. Prints to stdout when omitted."
        )
        parser.add_argument(
            "-f", "--format",
            default=None, # Default taken from config file
            choices=["json", "yaml", "text"],
            help="Override the output format specified in the config file."
        )
        parser.add_argument(
            "-c", "--config",
            default="config.yaml",
            help="Path to the configuration YAML file. Defaults are used if it does not exist."
        )
        parser.add_argument(
            "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        parser.add_argument(
            "--check",
            action="store_true",
            help=f"Only run structure detection. Exit 0 if structured, {EXIT_NOT_STRUCTURED} if not."
        )
        parser.add_argument(
            "--lead",
            nargs="*",
            metavar="KEY=VALUE",
            help="Lead fields for {{placeholder}} interpolation, e.g. first_name=Ana company=Acme."
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config, and parses the script."""
        args = self.parser.parse_args(argv)

        # --- Load Configuration ---
        try:
            config = ConfigLoader().load_or_default(args.config)
        except ConfigurationError as e:
            setup_logging(log_level=args.log_level)
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            sys.exit(1)

        setup_logging(log_level=args.log_level, config=config)

        try:
            content = read_script_file(args.script)

            # --- Detection only ---
            if args.check:
                structured = is_structured_script(content)
                print("structured" if structured else "unstructured")
                sys.exit(0 if structured else EXIT_NOT_STRUCTURED)

            parsed = parse_script(content)
            if not parsed.is_structured:
                logger.warning(f"{args.script} is not a structured beat script. Output will contain no beats.")
            else:
                logger.info(f"Parsed {len(parsed.beats)} beats from {args.script}")

            lead = parse_lead_args(args.lead)
            if lead is not None and config.get('interpolate', True):
                parsed = interpolate_script(parsed, lead)

            formatter = get_formatter(args.format or config.get('output_format', 'json'))
            if args.output:
                output_dir = os.path.dirname(os.path.abspath(args.output))
                ensure_dir_exists(output_dir)
                formatter.write(parsed, args.output)
            else:
                sys.stdout.write(formatter.format_script(parsed))
            sys.exit(0)

        except FileNotFoundError as e:
            logger.error(str(e))
            sys.exit(1)
        except BeatScriptError as e:
            # Catch errors originating from our application logic
            logger.error(f"A BeatScript error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            # Catch any other unexpected errors
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2) # Use a different exit code for unexpected crashes


def main() -> None:
    CLIHandler().run()
