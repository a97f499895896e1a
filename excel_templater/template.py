#!/usr/bin/env python3
"""
Literal placeholder substitution.

Placeholders are the header cells of the sheet; every occurrence of a placeholder
in the template is replaced by the string value of that column in the current row.
Replacement runs longest placeholder first (ties by column index) so that a
placeholder which is a substring of another one cannot break the longer token.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from .cells import cell_at, cell_to_string

logger = logging.getLogger(__name__)


def replacement_order(header_map: Dict[str, int]) -> List[Tuple[str, int]]:
	return sorted(header_map.items(), key=lambda item: (-len(item[0]), item[1]))


def substitute(text: str, header_map: Dict[str, int], values: Sequence[Any]) -> str:
	for placeholder, column in replacement_order(header_map):
		text = text.replace(placeholder, cell_to_string(cell_at(values, column)))
	return text


class TemplateRenderer:
	"""Render the template file once per data row."""

	def __init__(self, template_path: str, header_map: Dict[str, int], encoding: str = "utf-8"):
		self.template_path = Path(template_path)
		self.header_map = header_map
		self.encoding = encoding

	def load(self) -> str:
		"""Read the template with every line terminated by a single "\\n".

		The file is read again on each call. A read error is logged and whatever
		was read so far is returned, so only the current row is affected.
		"""
		lines: List[str] = []
		try:
			# universal newlines: \r\n and \r arrive as \n
			with self.template_path.open("r", encoding=self.encoding) as f:
				for line in f:
					lines.append(line if line.endswith("\n") else line + "\n")
		except (OSError, UnicodeDecodeError):
			logger.exception("Cannot read template %s", self.template_path)
		return "".join(lines)

	def render(self, values: Sequence[Any]) -> str:
		return substitute(self.load(), self.header_map, values)
