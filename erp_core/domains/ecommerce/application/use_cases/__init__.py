"""
Ecommerce Use Cases

Application services orchestrating the order lifecycle over the ports.
"""

from erp_core.domains.ecommerce.application.use_cases.change_order_status import (
    ChangeOrderStatusRequest,
    ChangeOrderStatusResponse,
    ChangeOrderStatusUseCase,
)
from erp_core.domains.ecommerce.application.use_cases.customer_credit import (
    CustomerCreditRequest,
    CustomerCreditResponse,
    ReleaseCustomerCreditUseCase,
    ReserveCustomerCreditUseCase,
)
from erp_core.domains.ecommerce.application.use_cases.order_totals import (
    CalculateOrderTotalsRequest,
    CalculateOrderTotalsResponse,
    CalculateOrderTotalsUseCase,
    ValidateOrderResponse,
    ValidateOrderUseCase,
)
from erp_core.domains.ecommerce.application.use_cases.record_payment import (
    PaymentLedgerResponse,
    RecordPaymentRequest,
    RecordPaymentUseCase,
    RecordRefundUseCase,
)

__all__ = [
    # Order status
    "ChangeOrderStatusUseCase",
    "ChangeOrderStatusRequest",
    "ChangeOrderStatusResponse",
    # Payments
    "RecordPaymentUseCase",
    "RecordRefundUseCase",
    "RecordPaymentRequest",
    "PaymentLedgerResponse",
    # Totals
    "CalculateOrderTotalsUseCase",
    "CalculateOrderTotalsRequest",
    "CalculateOrderTotalsResponse",
    "ValidateOrderUseCase",
    "ValidateOrderResponse",
    # Customer credit
    "ReserveCustomerCreditUseCase",
    "ReleaseCustomerCreditUseCase",
    "CustomerCreditRequest",
    "CustomerCreditResponse",
]
