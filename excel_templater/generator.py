#!/usr/bin/env python3
"""
Row processing: header mapping, output folder and one rendered file per data row.
"""

from __future__ import annotations

import itertools
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .cells import cell_at, cell_to_string
from .errors import OutputFolderError
from .template import TemplateRenderer

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def parse_header(values: Sequence[Any]) -> Dict[str, int]:
	"""Map every non-empty string header cell to its column index (last one wins)."""
	header_map: Dict[str, int] = {}
	for index, value in enumerate(values):
		if isinstance(value, str) and value:
			header_map[value] = index
	return header_map


def output_folder_name(input_path: str, now: Optional[datetime] = None) -> str:
	name = Path(input_path).name
	base, dot, _ext = name.rpartition(".")
	if not dot:
		base = name
	now = now or datetime.now()
	return f"{base}_{now.strftime(TIMESTAMP_FORMAT)}"


def create_output_folder(input_path: str, root: Optional[str] = None, now: Optional[datetime] = None) -> Path:
	folder = Path(root or os.getcwd()) / output_folder_name(input_path, now)
	try:
		folder.mkdir(parents=True, exist_ok=True)
	except OSError as e:
		raise OutputFolderError(f"Cannot create output folder {folder}: {e}") from e
	logger.info("Output folder: %s", folder)
	return folder


class GenerationSession:
	"""State of a single run: header mapping, filenames seen so far and the output folder."""

	def __init__(
		self,
		excel_file_path: str,
		template_path: str,
		output_root: Optional[str] = None,
		encoding: str = "utf-8",
		overwrite: bool = True,
	):
		self.excel_file_path = excel_file_path
		self.template_path = template_path
		# resolved once at startup
		self.output_root = output_root or os.getcwd()
		self.encoding = encoding
		self.overwrite = overwrite
		self.header_map: Dict[str, int] = {}
		self.filenames: Set[str] = set()
		self.output_folder: Optional[Path] = None
		self.renderer: Optional[TemplateRenderer] = None
		self.written: List[str] = []
		self.duplicates: List[str] = []
		self.failed: List[str] = []

	def read_header(self, values: Sequence[Any]) -> None:
		self.header_map = parse_header(values)
		self.renderer = TemplateRenderer(self.template_path, self.header_map, self.encoding)
		logger.debug("Placeholders: %s", ", ".join(self.header_map) or "(none)")

	def claim_filename(self, filename: str) -> bool:
		if filename in self.filenames:
			return False
		self.filenames.add(filename)
		return True

	def process_row(self, row_number: int, values: Sequence[Any]) -> Optional[Path]:
		"""Render one data row; returns the written path, or None when the row was skipped."""
		if self.output_folder is None or self.renderer is None:
			raise RuntimeError("read_header() and the output folder must come before process_row()")
		filename = cell_to_string(cell_at(values, 0))
		if not self.claim_filename(filename):
			logger.error("Duplicate filename detected - %s (row %d)", filename, row_number + 1)
			self.duplicates.append(filename)
			return None

		path = self.output_folder / filename
		if path.resolve().parent != self.output_folder.resolve():
			logger.error("Refusing to write %r outside the output folder (row %d)", filename, row_number + 1)
			self.failed.append(filename)
			return None

		content = self.renderer.render(values)
		mode = "w" if self.overwrite else "x"
		try:
			# newline="" writes "\n" as-is on every platform
			with open(path, mode, encoding=self.encoding, newline="") as f:
				f.write(content)
		except (OSError, UnicodeEncodeError):
			logger.exception("Failed to write %s (row %d)", path, row_number + 1)
			self.failed.append(filename)
			return None
		logger.info("%s completed successfully.", filename)
		self.written.append(str(path))
		return path

	def run(self, rows: Iterable[Tuple[int, Sequence[Any]]]) -> Dict[str, Any]:
		"""Process (row index, values) pairs as produced by a workbook reader."""
		rows = iter(rows)
		first = next(rows, None)
		pending: List[Tuple[int, Sequence[Any]]] = []
		if first is not None and first[0] == 0:
			self.read_header(first[1])
		else:
			# no header row: nothing to substitute, every row is data
			self.read_header([])
			if first is not None:
				pending.append(first)
		self.output_folder = create_output_folder(self.excel_file_path, self.output_root)

		for row_number, values in itertools.chain(pending, rows):
			self.process_row(row_number, values)
		return self.summary()

	def summary(self) -> Dict[str, Any]:
		return {
			"output_folder": str(self.output_folder) if self.output_folder else None,
			"written": list(self.written),
			"duplicates": list(self.duplicates),
			"failed": list(self.failed),
		}
