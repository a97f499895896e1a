from .generator import GenerationSession, create_output_folder, parse_header
from .openpyxl_reader import OpenpyxlWorkbookReader
from .template import TemplateRenderer
from .xlwings_reader import XlwingsWorkbookReader

__all__ = [
	"GenerationSession",
	"OpenpyxlWorkbookReader",
	"TemplateRenderer",
	"XlwingsWorkbookReader",
	"create_output_folder",
	"parse_header",
]

__version__ = "0.1.0"
