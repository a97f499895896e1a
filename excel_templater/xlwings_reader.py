#!/usr/bin/env python3
"""
Workbook reader using xlwings
Reads the first worksheet through a local Excel installation (Windows/macOS)
"""

import logging
from pathlib import Path
from typing import Any, Iterator, List, Sequence, Tuple

from .cells import normalize_value, row_is_empty
from .errors import WorkbookError

logger = logging.getLogger(__name__)


class XlwingsWorkbookReader:
	"""Read the first sheet of a workbook through Excel using xlwings"""

	def __init__(self, excel_file_path: str):
		"""
		Initialize the reader with an Excel file path

		Args:
			excel_file_path (str): Path to the Excel file
		"""
		self.excel_file_path = Path(excel_file_path)
		self.app = None
		self.workbook = None
		self.worksheet = None

		if not self.excel_file_path.exists():
			raise WorkbookError(f"Excel file not found: {excel_file_path}")

	def __enter__(self):
		"""Context manager entry"""
		self.open_workbook()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		"""Context manager exit"""
		self.close_workbook()

	def open_workbook(self):
		"""Start a hidden Excel instance and open the workbook"""
		try:
			import xlwings as xw
		except ImportError as e:
			raise WorkbookError("The xlwings engine needs the xlwings package and a local Excel; use --engine openpyxl") from e
		try:
			self.app = xw.App(visible=False)
			self.workbook = self.app.books.open(str(self.excel_file_path))
			self.worksheet = self.workbook.sheets[0]
			logger.debug("Opened %s, reading sheet %r", self.excel_file_path.name, self.worksheet.name)
		except Exception as e:
			self.close_workbook()
			raise WorkbookError(f"Cannot open workbook {self.excel_file_path}: {e}") from e

	def close_workbook(self):
		"""Close the workbook and Excel application"""
		try:
			if self.workbook:
				self.workbook.close()
			if self.app:
				self.app.quit()
		except Exception as e:
			logger.warning("Error closing workbook: %s", e)
		finally:
			self.workbook = None
			self.app = None

	@staticmethod
	def _formula_rows(formulas: Any) -> Sequence[Sequence[Any]]:
		if isinstance(formulas, str):
			return ((formulas,),)
		return formulas

	@staticmethod
	def normalize_rows(values: Sequence[Sequence[Any]], formulas: Any) -> List[List[Any]]:
		"""
		Combine a range's values with its formulas

		Args:
			values: 2-D list of cell values as returned by xlwings
			formulas: matching 2-D tuple of formulas (a plain str for a single cell)

		Returns:
			2-D list where formula cells are None and dates are Excel serial numbers
		"""
		out: List[List[Any]] = []
		for value_row, formula_row in zip(values, XlwingsWorkbookReader._formula_rows(formulas)):
			row: List[Any] = []
			for value, formula in zip(value_row, formula_row):
				if isinstance(formula, str) and formula.startswith("="):
					row.append(None)
				else:
					row.append(normalize_value(value))
			out.append(row)
		return out

	@staticmethod
	def populated_rows(values: Sequence[Sequence[Any]], formulas: Any) -> Iterator[Tuple[int, List[Any]]]:
		"""
		Yield (zero-based row index, normalized values), skipping blank rows

		A row holding only formulas or errors is not blank, even though its
		normalized values are all None.
		"""
		formula_rows = XlwingsWorkbookReader._formula_rows(formulas)
		normalized = XlwingsWorkbookReader.normalize_rows(values, formula_rows)
		for index, (raw, formula_row, row) in enumerate(zip(values, formula_rows, normalized)):
			if row_is_empty(raw) and not any(formula_row):
				continue
			yield index, row

	def iter_rows(self) -> Iterator[Tuple[int, List[Any]]]:
		"""Yield (zero-based row index, values) for every populated row of the first sheet"""
		if self.worksheet is None:
			raise WorkbookError("Workbook is not open")
		# used_range may start below/right of A1; read from A1 so column indexes stay absolute
		last_cell = self.worksheet.used_range.last_cell
		rng = self.worksheet.range((1, 1), (last_cell.row, last_cell.column))
		return self.populated_rows(rng.options(ndim=2).value, rng.formula)
