"""Excel styling and the workbook builder used by reports."""
from .formatters import fit_columns, kpi_card, style_header, write_cell
from .writer import WorkbookBuilder
