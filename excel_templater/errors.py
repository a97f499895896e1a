#!/usr/bin/env python3
"""
Exception types and process exit codes for excel_templater.
"""


class ExitCodes:
	SUCCESS = 0
	INVALID_ARGUMENTS = 1
	WORKBOOK_ERROR = 2
	OUTPUT_FOLDER_ERROR = 3
	INTERRUPTED = 130  # Ctrl+C


class TemplaterError(Exception):
	"""Fatal error that aborts the whole run."""

	exit_code = ExitCodes.INVALID_ARGUMENTS


class ConfigError(TemplaterError):
	exit_code = ExitCodes.INVALID_ARGUMENTS


class WorkbookError(TemplaterError):
	"""The spreadsheet is missing or cannot be opened."""

	exit_code = ExitCodes.WORKBOOK_ERROR


class OutputFolderError(TemplaterError):
	exit_code = ExitCodes.OUTPUT_FOLDER_ERROR
