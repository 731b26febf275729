"""
Unit Tests for the customer credit use cases
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from erp_core.core.domain import Money
from erp_core.domains.ecommerce.application.use_cases import (
    CustomerCreditRequest,
    ReleaseCustomerCreditUseCase,
    ReserveCustomerCreditUseCase,
)


@pytest.mark.unit
class TestReserveCustomerCreditUseCase:
    """Tests for ReserveCustomerCreditUseCase"""

    @pytest.mark.asyncio
    async def test_reserve_credit(self, customer, mock_customer_repository):
        # Arrange
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReserveCustomerCreditUseCase(mock_customer_repository)

        # Act
        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="1200"))

        # Assert
        assert response.success
        assert response.credit_used == Decimal("1200")
        assert response.available_credit == Decimal("3800")
        mock_customer_repository.update.assert_awaited_once_with(customer)

    @pytest.mark.asyncio
    async def test_insufficient_credit(self, customer, mock_customer_repository):
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReserveCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="5000.01"))

        assert not response.success
        assert response.error_details["error"] == "INSUFFICIENT_CREDIT"
        assert customer.credit_used == Money.zero()
        mock_customer_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_inactive_customer(self, customer, mock_customer_repository):
        customer.deactivate()
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReserveCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="10"))

        assert not response.success
        assert response.error == "Customer ACME-01 is inactive"

    @pytest.mark.asyncio
    async def test_customer_not_found(self, mock_customer_repository):
        mock_customer_repository.get_by_id.return_value = None
        use_case = ReserveCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=uuid4(), amount="10"))

        assert not response.success
        assert response.error_details["error"] == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invalid_amount_literal(self, customer, mock_customer_repository):
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReserveCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="ten"))

        assert not response.success
        assert response.error_details == {}


@pytest.mark.unit
class TestReleaseCustomerCreditUseCase:
    """Tests for ReleaseCustomerCreditUseCase"""

    @pytest.mark.asyncio
    async def test_release_for_inactive_customer(self, customer, mock_customer_repository):
        customer.use_credit(Money("500"))
        customer.deactivate()
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReleaseCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="500"))

        assert response.success
        assert response.credit_used == Decimal("0")
        assert response.credit_limit == Decimal("5000")

    @pytest.mark.asyncio
    async def test_release_more_than_used(self, customer, mock_customer_repository):
        mock_customer_repository.get_by_id.return_value = customer
        use_case = ReleaseCustomerCreditUseCase(mock_customer_repository)

        response = await use_case.execute(CustomerCreditRequest(customer_id=customer.id, amount="1"))

        assert not response.success
        assert response.error == "release amount 1 exceeds credit used 0"
