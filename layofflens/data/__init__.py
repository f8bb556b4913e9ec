"""CSV normalization, batch import, and the SQLite record store."""
from .schemas import LayoffRecord, RecordFilter, ImportReport, ValidationIssue
from .store import LayoffStore, StoreError, records_frame
from .normalize import normalize_row, normalize_rows, parse_count, parse_date
from .loader import import_csv, load_records, read_layoffs_csv
