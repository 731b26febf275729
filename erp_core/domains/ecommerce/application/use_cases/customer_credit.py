"""
Customer Credit Use Cases

Reserve and release customer credit, e.g. when an order on account is
accepted and later paid or cancelled.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any
from uuid import UUID

from erp_core.core.domain import DomainException, EntityNotFoundException, Money
from erp_core.core.shared.logger import get_use_case_logger
from erp_core.domains.ecommerce.application.ports import ICustomerRepository
from erp_core.domains.ecommerce.domain.entities.customer import Customer

logger = get_use_case_logger("customer_credit")


@dataclass
class CustomerCreditRequest:
    """Request for reserving or releasing credit."""

    customer_id: UUID
    amount: Decimal | str


@dataclass
class CustomerCreditResponse:
    """Credit ledger state after the operation."""

    customer_id: UUID | None = None
    credit_limit: Decimal | None = None
    credit_used: Decimal | None = None
    available_credit: Decimal | None = None
    success: bool = False
    error: str | None = None
    error_details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerCreditResponse":
        return cls(
            customer_id=customer.id,
            credit_limit=customer.credit_limit.amount,
            credit_used=customer.credit_used.amount,
            available_credit=customer.available_credit.amount,
            success=True,
        )


class _CustomerCreditUseCase:
    """Shared load / apply / persist flow."""

    action = ""
    require_active = True

    def __init__(self, customer_repository: ICustomerRepository):
        """
        Args:
            customer_repository: Repository for customer data access
        """
        self.customer_repository = customer_repository

    def _apply(self, customer: Customer, amount: Money) -> None:
        raise NotImplementedError

    async def execute(self, request: CustomerCreditRequest) -> CustomerCreditResponse:
        try:
            customer = await self.customer_repository.get_by_id(request.customer_id)
            if customer is None:
                raise EntityNotFoundException("Customer", request.customer_id)
            if self.require_active and not customer.is_active:
                return CustomerCreditResponse(
                    customer_id=request.customer_id,
                    success=False,
                    error=f"Customer {customer.customer_code} is inactive",
                )

            self._apply(customer, Money.of(request.amount))
            customer = await self.customer_repository.update(customer)

            logger.info(
                f"Credit {self.action} for customer {customer.customer_code}: {request.amount} "
                f"(available {customer.available_credit})",
                customer_code=customer.customer_code,
            )
            return CustomerCreditResponse.from_customer(customer)

        except DomainException as e:
            logger.warning(f"Credit {self.action} rejected for customer {request.customer_id}: {e.message}")
            return CustomerCreditResponse(
                customer_id=request.customer_id, success=False, error=e.message, error_details=e.to_dict()
            )
        except Exception as e:
            logger.error(f"Error during credit {self.action} for customer {request.customer_id}: {e}")
            return CustomerCreditResponse(customer_id=request.customer_id, success=False, error=str(e))


class ReserveCustomerCreditUseCase(_CustomerCreditUseCase):
    """
    Use Case: Reserve Customer Credit

    Fails with INSUFFICIENT_CREDIT when the amount exceeds the available credit.
    """

    action = "reserved"

    def _apply(self, customer: Customer, amount: Money) -> None:
        customer.use_credit(amount)


class ReleaseCustomerCreditUseCase(_CustomerCreditUseCase):
    """
    Use Case: Release Customer Credit

    Releasing is allowed for inactive customers too, so that open orders can
    still be settled.
    """

    action = "released"
    require_active = False

    def _apply(self, customer: Customer, amount: Money) -> None:
        customer.release_credit(amount)


__all__ = [
    "ReserveCustomerCreditUseCase",
    "ReleaseCustomerCreditUseCase",
    "CustomerCreditRequest",
    "CustomerCreditResponse",
]
