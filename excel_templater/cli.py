#!/usr/bin/env python3
"""
Command-line interface for the excel_templater package.
Usage:
  python -m excel_templater <excel_file> <template_file> [options]
"""

import argparse
import logging
import platform
import sys
from typing import Any, Dict, List, Optional

from . import __version__
from .config import ENGINES, check_encoding, load_config
from .errors import ExitCodes, TemplaterError
from .generator import GenerationSession
from .openpyxl_reader import OpenpyxlWorkbookReader
from .xlwings_reader import XlwingsWorkbookReader


def setup_logging(level_str: str = "INFO") -> None:
	"""Configure logging."""
	level = getattr(logging, str(level_str).upper(), logging.INFO)
	logging.basicConfig(
		level=level,
		format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
		datefmt='%H:%M:%S'
	)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog='excel-templater',
		description='Generate one text file per spreadsheet row by replacing header placeholders in a template'
	)
	# optional here so a missing argument ends in the usage text and exit code 1
	parser.add_argument('excel_file', nargs='?', help='Path to Excel file (first sheet is used, row 1 holds the placeholders)')
	parser.add_argument('template_file', nargs='?', help='Path to the text template')
	parser.add_argument('--engine', choices=ENGINES, help='Backend engine to use')
	parser.add_argument('--config', '-c', help='Path to config YAML file (optional)')
	parser.add_argument('--output-root', '-o', help='Directory in which the timestamped output folder is created (default: current directory)')
	parser.add_argument('--encoding', help='Encoding of the template and the generated files (default: utf-8)')
	parser.add_argument('--no-overwrite', action='store_true', help='Fail a row instead of replacing an existing file')
	parser.add_argument('--log-level', help='Logging level: DEBUG, INFO, WARNING, ERROR')
	parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
	return parser


def resolve_settings(args: argparse.Namespace) -> Dict[str, Any]:
	"""Merge the config file with command-line overrides."""
	config = load_config(args.config)
	if args.engine:
		config['engine'] = args.engine
	if args.output_root:
		config['output_root'] = args.output_root
	if args.encoding:
		config['encoding'] = args.encoding
		check_encoding(args.encoding)
	if args.no_overwrite:
		config['overwrite'] = False
	if args.log_level:
		config['log_level'] = args.log_level
	if not config['engine']:
		# default xlwings on Windows, openpyxl elsewhere
		config['engine'] = 'xlwings' if platform.system().lower().startswith('win') else 'openpyxl'
	return config


def generate(excel_file: str, template_file: str, config: Dict[str, Any]) -> Dict[str, Any]:
	ReaderCls = XlwingsWorkbookReader if config['engine'] == 'xlwings' else OpenpyxlWorkbookReader
	session = GenerationSession(
		excel_file,
		template_file,
		output_root=config['output_root'],
		encoding=config['encoding'],
		overwrite=bool(config['overwrite']),
	)
	with ReaderCls(excel_file) as reader:
		return session.run(reader.iter_rows())


def main(argv: Optional[List[str]] = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	if not args.excel_file or not args.template_file:
		parser.print_usage(sys.stdout)
		return ExitCodes.INVALID_ARGUMENTS

	try:
		config = resolve_settings(args)
		setup_logging(config['log_level'])
		result = generate(args.excel_file, args.template_file, config)
	except TemplaterError as e:
		print(f"Error: {e}", file=sys.stderr)
		return e.exit_code
	except KeyboardInterrupt:
		print("Interrupted", file=sys.stderr)
		return ExitCodes.INTERRUPTED

	print("\nGeneration completed.")
	print(f"Files written: {len(result['written'])}")
	if result['duplicates']:
		print(f"Duplicate filenames skipped: {len(result['duplicates'])}")
	if result['failed']:
		print(f"Rows failed: {len(result['failed'])}")
	print(f"Output folder: {result['output_folder']}")
	return ExitCodes.SUCCESS


if __name__ == "__main__":
	sys.exit(main())
