"""Integration tests for reference numbering"""

import asyncio
import pytest
from datetime import date
from sqlmodel import SQLModel

from src.adapter.database import create_engine, create_session_factory
from src.adapter.services.identity_provider import StaticIdentityProvider
from src.adapter.ledger import SqlAlchemyLedger
from src.app.use_cases.ledger import CreateInvoice, CreateInvoiceCommandDTO


def create_invoice_use_case(ledger):
    return CreateInvoice(
        ledger.uow,
        ledger.invoices,
        ledger.invoice_lines,
        ledger.invoice_financials,
        reference_numbers=ledger.reference_numbers,
        identity=ledger.identity,
    )


class TestReferenceNumbers:
    """Test per-tenant, per-year sequential numbers"""

    @pytest.mark.asyncio
    async def test_numbers_are_sequential_per_tenant(self, ledger):
        # Arrange
        use_case = create_invoice_use_case(ledger)

        # Act
        first = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 1, 10)))
        second = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 6, 10)))
        other_tenant = await use_case.execute(
            CreateInvoiceCommandDTO(tenant_id="tenant_other", issue_date=date(2025, 6, 10))
        )

        # Assert
        assert first.value.number == "INV-2025-00001"
        assert second.value.number == "INV-2025-00002"
        assert other_tenant.value.number == "INV-2025-00001"

    @pytest.mark.asyncio
    async def test_counter_resets_per_year(self, ledger):
        # Arrange
        use_case = create_invoice_use_case(ledger)

        # Act
        last_year = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2024, 12, 31)))
        this_year = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 1, 1)))

        # Assert
        assert last_year.value.number == "INV-2024-00001"
        assert this_year.value.number == "INV-2025-00001"

    @pytest.mark.asyncio
    async def test_imported_number_is_kept_and_seeds_counter(self, ledger):
        # Arrange
        use_case = create_invoice_use_case(ledger)

        # Act
        imported = await use_case.execute(
            CreateInvoiceCommandDTO(number="INV-2025-00041", issue_date=date(2025, 2, 1))
        )
        following = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 2, 2)))

        # Assert
        assert imported.value.number == "INV-2025-00041"
        assert following.value.number == "INV-2025-00042"
        stored = await ledger.invoices.get_by_id(imported.value.id)
        assert stored.sequence == 41

    @pytest.mark.asyncio
    async def test_number_imported_after_counter_exists_is_skipped(self, ledger):
        # Arrange
        use_case = create_invoice_use_case(ledger)
        first = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 1, 10)))
        imported = await use_case.execute(
            CreateInvoiceCommandDTO(number="INV-2025-00002", issue_date=date(2025, 1, 11))
        )

        # Act
        third = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 1, 12)))
        fourth = await use_case.execute(CreateInvoiceCommandDTO(issue_date=date(2025, 1, 13)))

        # Assert
        assert first.value.number == "INV-2025-00001"
        assert imported.value.number == "INV-2025-00002"
        assert third.is_ok()
        assert third.value.number == "INV-2025-00003"
        assert fourth.value.number == "INV-2025-00004"

    @pytest.mark.asyncio
    async def test_missing_tenant_is_rejected(self, db_session):
        # Arrange
        ledger = SqlAlchemyLedger(db_session, identity=StaticIdentityProvider())
        use_case = create_invoice_use_case(ledger)

        # Act
        result = await use_case.execute(CreateInvoiceCommandDTO())

        # Assert
        assert result.is_err()
        assert result.error.code == "TENANT_REQUIRED"


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_numbers(tmp_path):
    # Arrange
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    Session = create_session_factory(engine)

    async def create_one(day):
        async with Session() as session:
            ledger = SqlAlchemyLedger(
                session, identity=StaticIdentityProvider(tenant_id="tenant_integration", user_id="user_1")
            )
            return await create_invoice_use_case(ledger).execute(
                CreateInvoiceCommandDTO(issue_date=date(2025, 3, day))
            )

    # Act
    try:
        results = await asyncio.gather(*(create_one(day) for day in range(1, 7)))
    finally:
        await engine.dispose()

    # Assert
    assert all(result.is_ok() for result in results)
    numbers = sorted(result.value.number for result in results)
    assert numbers == [f"INV-2025-{n:05d}" for n in range(1, 7)]
