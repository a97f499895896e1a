#!/usr/bin/env python3
"""
Cell value rules shared by the workbook readers and the row processor.

Readers hand over plain Python values. Strings are kept verbatim, numbers are
rendered as their integer-truncated decimal form, and everything else
(blank, boolean, formula, error) renders as an empty string.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional, Sequence

from openpyxl.utils.datetime import WINDOWS_EPOCH, to_excel

_DATE_TYPES = (datetime.datetime, datetime.date, datetime.time, datetime.timedelta)


def normalize_value(value: Any, epoch: datetime.datetime = WINDOWS_EPOCH) -> Any:
	"""Map date-like values onto the serial number Excel stores for them."""
	if isinstance(value, _DATE_TYPES):
		return to_excel(value, epoch)
	return value


def cell_to_string(value: Any) -> str:
	if isinstance(value, str):
		return value
	# bool is an int subclass but counts as "other"
	if isinstance(value, bool):
		return ""
	if isinstance(value, (int, float)):
		try:
			return str(int(value))
		except (OverflowError, ValueError):
			return ""
	return ""


def cell_at(values: Sequence[Any], index: int) -> Optional[Any]:
	if 0 <= index < len(values):
		return values[index]
	return None


def row_is_empty(values: Sequence[Any]) -> bool:
	return all(v is None for v in values)
