#!/usr/bin/env python3
"""
OpenPyXL-based workbook reader for cross-platform environments without local Excel.
Limitations:
- No live calculation engine; formula cells are read as formulas and count as empty values
- Only the first worksheet is read
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

from openpyxl import load_workbook
from openpyxl.cell.cell import TYPE_ERROR, TYPE_FORMULA
from openpyxl.worksheet.worksheet import Worksheet

from .cells import normalize_value, row_is_empty
from .errors import WorkbookError

logger = logging.getLogger(__name__)


class OpenpyxlWorkbookReader:
	"""Read the first sheet of a workbook using openpyxl (cross-platform)."""

	def __init__(self, excel_file_path: str):
		self.excel_file_path = Path(excel_file_path)
		self.workbook = None
		self.worksheet: Optional[Worksheet] = None
		if not self.excel_file_path.exists():
			raise WorkbookError(f"Excel file not found: {excel_file_path}")

	def __enter__(self):
		self.open_workbook()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.close_workbook()

	def open_workbook(self) -> None:
		# data_only=False keeps formulas as formulas so they can be told apart from text
		try:
			self.workbook = load_workbook(filename=str(self.excel_file_path), data_only=False, read_only=False)
		except Exception as e:
			raise WorkbookError(f"Cannot open workbook {self.excel_file_path}: {e}") from e
		self.worksheet = self.workbook.worksheets[0]
		logger.debug("Opened %s, reading sheet %r", self.excel_file_path.name, self.worksheet.title)

	def close_workbook(self) -> None:
		if self.workbook:
			self.workbook.close()
			self.workbook = None

	def _cell_value(self, cell) -> Any:
		if cell.data_type in (TYPE_FORMULA, TYPE_ERROR):
			return None
		return normalize_value(cell.value, self.workbook.epoch)

	def iter_rows(self) -> Iterator[Tuple[int, List[Any]]]:
		"""Yield (zero-based row index, values) for every populated row of the first sheet."""
		ws = self.worksheet
		if ws is None:
			raise WorkbookError("Workbook is not open")
		if not ws.max_row or not ws.max_column:
			return
		rows = ws.iter_rows(min_row=1, max_row=ws.max_row, min_col=1, max_col=ws.max_column)
		for index, row in enumerate(rows):
			# blank is judged on raw values: formula and error cells still make a row
			if row_is_empty([cell.value for cell in row]):
				continue
			yield index, [self._cell_value(cell) for cell in row]
