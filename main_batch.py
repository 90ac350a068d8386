#!/usr/bin/env python3
"""
BeatScript Batch Processing Entry Point

Parses every call script in a directory and writes one parsed output per
script into an output directory.
"""

import argparse
import logging
import os
import sys
import time
from typing import Dict, List, Optional, Sequence

# Progress bar library
from tqdm import tqdm

from beatscript.config_loader import ConfigLoader
from beatscript.log_setup import setup_logging
from beatscript.segmenter import parse_script
from beatscript.script_formatter import ScriptFormatter, get_formatter
from beatscript.exceptions import BeatScriptError, ConfigurationError, FileSystemError
from beatscript.utils import ensure_dir_exists, read_script_file

# Initialize logger for this script
logger = logging.getLogger(__name__)

def find_script_files(input_dir: str, extensions: Sequence[str]) -> List[str]:
    """
    Finds script files in the input directory, sorted by filename.

    Args:
        input_dir: The directory to search.
        extensions: File extensions to accept (case-insensitive, e.g. ".md").

    Returns:
        A sorted list of file paths.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    wanted = tuple(ext.lower() for ext in extensions)
    scripts = []
    logger.info(f"Scanning directory for script files ({', '.join(wanted)}): {input_dir}")
    for filename in sorted(os.listdir(input_dir)):
        filepath = os.path.join(input_dir, filename)
        if filename.lower().endswith(wanted) and os.path.isfile(filepath):
            scripts.append(filepath)
    logger.info(f"Found {len(scripts)} script files.")
    return scripts


def process_batch(script_paths: List[str], output_dir: str, formatter: ScriptFormatter) -> Dict[str, int]:
    """
    Parses each script and writes its formatted output to output_dir as
    "<script filename>.<format extension>", e.g. "call.md.json".

    A failure on one script is logged and counted; the batch carries on.

    Returns:
        Counts keyed by "structured", "unstructured" and "failed".
    """
    counts = {"structured": 0, "unstructured": 0, "failed": 0}
    with tqdm(total=len(script_paths), unit="script", desc="Starting Batch") as pbar:
        for script_path in script_paths:
            script_filename = os.path.basename(script_path)
            pbar.set_description(f"Parsing: {script_filename[:30]}")
            # call.md and call.txt must not share an output file
            output_path = os.path.join(output_dir, f"{script_filename}.{formatter.extension}")
            try:
                parsed = parse_script(read_script_file(script_path))
                formatter.write(parsed, output_path)
                if parsed.is_structured:
                    counts["structured"] += 1
                else:
                    logger.warning(f"{script_filename} is not a structured beat script.")
                    counts["unstructured"] += 1
            except (BeatScriptError, FileNotFoundError) as e:
                logger.error(f"Failed to process '{script_filename}': {e}")
                counts["failed"] += 1
            finally:
                pbar.update(1) # Increment progress bar regardless of success/failure
    return counts


def run_batch_processing(argv: Optional[List[str]] = None) -> None:
    """Parses arguments, sets up, and runs the batch script parsing."""
    parser = argparse.ArgumentParser(
        description="BeatScript Batch: Parse every call script in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing the call script files."
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for parsed output. Defaults to <input-dir>/Parsed."
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "-f", "--format",
        default=None, # Default taken from config file
        choices=["json", "yaml", "text"],
        help="Override the output format specified in the config file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )
    args = parser.parse_args(argv)

    # --- Load Configuration ---
    try:
        config = ConfigLoader().load_or_default(args.config)
    except ConfigurationError as e:
        setup_logging(log_level=args.log_level, log_file_key='batch_log_file')
        logger.critical(f"Failed to load configuration: {e}")
        sys.exit(1)

    setup_logging(log_level=args.log_level, config=config, log_file_key='batch_log_file')

    try:
        formatter = get_formatter(args.format or config.get('output_format', 'json'))
        script_paths = find_script_files(args.input_dir, config.get('script_extensions', ['.md', '.txt']))
    except (FileNotFoundError, ValueError, BeatScriptError) as e:
        logger.critical(f"Input error: {e}")
        sys.exit(1)

    if not script_paths:
        logger.warning(f"No script files found in {args.input_dir}. Exiting.")
        sys.exit(0)

    output_dir = args.output_dir or os.path.join(args.input_dir, "Parsed")
    try:
        ensure_dir_exists(output_dir)
    except FileSystemError as e:
        logger.critical(f"Could not create output directory: {e}")
        sys.exit(1)

    batch_start_time = time.time()
    logger.info(f"--- Starting Batch Parsing for {len(script_paths)} scripts ---")
    try:
        counts = process_batch(script_paths, output_dir, formatter)
    except KeyboardInterrupt:
        logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
        sys.exit(1)

    total = len(script_paths)
    logger.info(f"--- Batch Parsing Finished in {time.time() - batch_start_time:.2f} seconds ---")
    logger.info(f"Structured: {counts['structured']}/{total} scripts")
    logger.info(f"Unstructured: {counts['unstructured']}/{total} scripts")
    logger.info(f"Failed: {counts['failed']}/{total} scripts")

    sys.exit(1 if counts["failed"] > 0 else 0)


if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("BeatScript requires Python 3.8 or later.\n")
        sys.exit(1)

    run_batch_processing()
