"""Invoice Repository — SQLAlchemy implementation of core.repository_protocols.InvoiceRepository.

Invariants:
    - Core aggregate in, core aggregate out: ORM records never leave this module
    - get_by_id loads lines eagerly, ordered by position
    - get_all returns summaries only (no lines), newest date first
    - update reconciles lines by id: new ids inserted, known ids updated in place,
      missing ids deleted, positions rewritten to the aggregate's order
    - Every write commits; the session manager rolls back on failure

Design Decisions:
    - Reconciliation lives here, not in the aggregate: which rows exist is a
      persistence concern, the aggregate only knows its current lines
    - Records restored through Invoice.restore()/InvoiceLine.restore(): stored rows
      are trusted and not re-validated
    - Last write wins: there is no version column, concurrent updates to the same
      invoice overwrite each other
"""

import logging
from typing import NamedTuple, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.core.domain_types import InvoiceId
from invoicing.core.errors import InvoiceNotFoundError
from invoicing.core.invoice import Invoice, InvoiceLine, InvoiceSummary
from invoicing.models.invoice import Invoice as InvoiceModel
from invoicing.models.invoice_line import InvoiceLine as InvoiceLineModel

logger = logging.getLogger(__name__)


class LineChanges(NamedTuple):
    """Row-level outcome of one reconciliation."""
    inserted: int
    updated: int
    deleted: int


def to_aggregate(record: InvoiceModel) -> Invoice:
    """Map an Invoice record (with loaded lines) to the domain aggregate."""
    lines = [
        InvoiceLine.restore(
            line.id, line.description, line.quantity, line.unit_price,
        )
        for line in sorted(record.lines, key=lambda r: r.position)
    ]
    return Invoice.restore(
        record.id,
        record.number,
        record.date,
        record.customer_name,
        record.customer_address,
        record.customer_vat,
        lines,
    )


def _to_line_record(line: InvoiceLine, position: int) -> InvoiceLineModel:
    return InvoiceLineModel(
        id=line.id,
        position=position,
        description=line.description,
        quantity=line.quantity,
        unit_price=line.unit_price,
    )


def reconcile_lines(
    record: InvoiceModel, lines: Sequence[InvoiceLine],
) -> LineChanges:
    """Make record.lines match the aggregate's lines. Mutates record in place."""
    persisted = {row.id: row for row in record.lines}
    current_ids = {line.id for line in lines}

    stale = [row for row in record.lines if row.id not in current_ids]
    for row in stale:
        record.lines.remove(row)  # delete-orphan cascade issues the DELETE

    inserted = updated = 0
    for position, line in enumerate(lines):
        row = persisted.get(line.id)
        if row is None:
            record.lines.append(_to_line_record(line, position))
            inserted += 1
            continue
        row.position = position
        row.description = line.description
        row.quantity = line.quantity
        row.unit_price = line.unit_price
        updated += 1

    return LineChanges(inserted=inserted, updated=updated, deleted=len(stale))


class SqlAlchemyInvoiceRepository:
    """Invoice aggregate persistence over one AsyncSession (one per request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, invoice: Invoice) -> None:
        record = InvoiceModel(
            id=invoice.id,
            number=invoice.number,
            date=invoice.date,
            customer_name=invoice.customer_name,
            customer_address=invoice.customer_address,
            customer_vat=invoice.customer_vat,
            lines=[
                _to_line_record(line, position)
                for position, line in enumerate(invoice.lines)
            ],
        )
        self.db.add(record)
        await self.db.commit()

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        record = await self._load_record(invoice_id)
        if record is None:
            return None
        return to_aggregate(record)

    async def get_all(self) -> list[InvoiceSummary]:
        result = await self.db.execute(
            select(InvoiceModel.id, InvoiceModel.number, InvoiceModel.date)
            .order_by(InvoiceModel.date.desc()),
        )
        return [
            InvoiceSummary(id=InvoiceId(row.id), number=row.number, date=row.date)
            for row in result
        ]

    async def update(self, invoice: Invoice) -> None:
        record = await self._load_record(invoice.id)
        if record is None:
            # Deleted between load and save
            raise InvoiceNotFoundError(invoice.id)

        record.number = invoice.number
        record.date = invoice.date
        record.customer_name = invoice.customer_name
        record.customer_address = invoice.customer_address
        record.customer_vat = invoice.customer_vat
        changes = reconcile_lines(record, invoice.lines)

        await self.db.commit()
        logger.debug(
            f"Invoice lines reconciled: {changes._asdict()}",
            extra={"invoice_id": invoice.id},
        )

    async def _load_record(self, invoice_id: InvoiceId) -> InvoiceModel | None:
        result = await self.db.execute(
            select(InvoiceModel).where(InvoiceModel.id == invoice_id),
        )
        return result.scalar_one_or_none()
