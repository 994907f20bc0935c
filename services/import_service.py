"""
CSV import reconciliation.

Turns uploaded rows into inserts or updates of an owner's products. Rows are
handled strictly in file order and each storage call is awaited before the
next row starts, so a product_id repeated later in the same file updates the
record inserted by its first occurrence.

A bad row never aborts the batch. Failures are counted and reported with the
row number a spreadsheet would show (data row i is "Row i+2", the header
being row 1). Rows committed before a failure stay committed.
"""

from typing import Callable, Optional, Sequence
import structlog

from config import settings
from exceptions import DatabaseError, ImportLimitError
from models.imports import ImportOutcome, ImportRow, Value
from parsers.csv_parser import parse_product_csv
from parsers.row_parser import build_product_record, read_text
from services.product_store import ProductStore, SupabaseProductStore

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[float], None]
CancelCheck = Callable[[], bool]

HEADER_OFFSET = 2


class ImportService:
    """
    Product import business logic.

    One instance may serve many runs; all per-run state (known ids and the
    outcome) lives inside import_rows.
    """

    def __init__(self, store: Optional[ProductStore] = None):
        self.store = store or SupabaseProductStore()

    async def import_rows(
        self,
        rows: Sequence[ImportRow],
        owner: str,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ImportOutcome:
        """
        Reconcile parsed rows against the owner's products.

        Args:
            rows: Parsed rows, row 0 being the first line after the header
            owner: Owner id every write is scoped to
            on_progress: Receives (i + 1) / total after each row
            should_cancel: Checked before each row; True stops the run

        Returns:
            ImportOutcome with counters and ordered error messages
        """
        total = len(rows)
        outcome = ImportOutcome(total_rows=total)

        logger.info("import_started", owner=owner, row_count=total)

        # Point-in-time snapshot; grows as this run inserts
        known_ids = set(await self.store.list_ids(owner))

        for i, row in enumerate(rows):
            if should_cancel is not None and should_cancel():
                outcome.cancelled = True
                logger.info("import_cancelled", owner=owner, processed=outcome.processed)
                break

            row_number = i + HEADER_OFFSET
            try:
                await self._import_row(row, row_number, owner, known_ids, outcome)
            except Exception as e:
                logger.warning(
                    "import_row_unexpected_error",
                    owner=owner,
                    row=row_number,
                    error=str(e),
                    error_type=type(e).__name__
                )
                outcome.record_failure(f"Row {row_number}: Unexpected error - {e}")

            if on_progress is not None:
                on_progress((i + 1) / total)

        logger.info(
            "import_complete",
            owner=owner,
            created=outcome.created,
            updated=outcome.updated,
            failed=outcome.failed,
            cancelled=outcome.cancelled
        )

        return outcome

    async def _import_row(
        self,
        row: ImportRow,
        row_number: int,
        owner: str,
        known_ids: set[str],
        outcome: ImportOutcome,
    ) -> None:
        product_id = read_text(row, "product_id")
        name = read_text(row, "name")

        if not isinstance(product_id, Value) or not isinstance(name, Value):
            logger.debug("import_row_missing_fields", row=row_number)
            outcome.record_failure(f"Row {row_number}: Missing required fields.")
            return

        record = build_product_record(row, product_id.value, name.value)

        if record.product_id in known_ids:
            try:
                await self.store.update(owner, record.product_id, record)
            except DatabaseError as e:
                outcome.record_failure(f"Row {row_number}: Update failed: {e.reason}")
                return
            outcome.updated += 1
        else:
            try:
                await self.store.insert(owner, record)
            except DatabaseError as e:
                outcome.record_failure(f"Row {row_number}: Insert failed: {e.reason}")
                return
            outcome.created += 1
            known_ids.add(record.product_id)

    async def import_file(
        self,
        content: bytes,
        owner: str,
        on_progress: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ImportOutcome:
        """
        Parse and import an uploaded CSV file.

        Raises:
            ImportLimitError: If the file or row count exceeds the limits
            CSVParseError: If the file cannot be parsed; no row is imported
        """
        if len(content) > settings.import_max_bytes:
            raise ImportLimitError("file size", len(content), settings.import_max_bytes)

        rows = parse_product_csv(content)

        if len(rows) > settings.import_max_rows:
            raise ImportLimitError("row count", len(rows), settings.import_max_rows)

        return await self.import_rows(
            rows,
            owner,
            on_progress=on_progress,
            should_cancel=should_cancel,
        )


# Singleton instance for convenience
_import_service: Optional[ImportService] = None

def get_import_service() -> ImportService:
    """Get or create ImportService instance."""
    global _import_service
    if _import_service is None:
        _import_service = ImportService()
    return _import_service
