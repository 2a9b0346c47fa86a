"""
Customer and credit business rules.

Views delegate here; persistence goes through the Django ORM.
"""

import logging
import uuid
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Optional

import pandas as pd
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidInputError, NotFoundError, OwnershipMismatchError
from .models import Credit, Customer

logger = logging.getLogger(__name__)

# First installment must fall before today + this many months.
MAX_MONTHS_TO_FIRST_INSTALLMENT = 3


@dataclass(frozen=True)
class CustomerPatch:
    """Fields a customer may change after registration; ``None`` means keep."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    income: Optional[Decimal] = None
    zip_code: Optional[str] = None
    street: Optional[str] = None

    def apply_to(self, customer: Customer) -> Customer:
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                setattr(customer, field.name, value)
        return customer


def first_installment_window(today=None):
    """Return the ``[start, end)`` dates allowed for a first installment."""
    today = today or timezone.localdate()
    # DateOffset clamps to month end (Nov 30 + 3 months -> Feb 28/29)
    end = (pd.Timestamp(today) + pd.DateOffset(months=MAX_MONTHS_TO_FIRST_INSTALLMENT)).date()
    return today, end


def is_valid_first_installment(day, today=None) -> bool:
    start, end = first_installment_window(today)
    return start <= day < end


class CustomerService:

    def save(self, customer: Customer) -> Customer:
        # IntegrityError on duplicate cpf/email propagates to the handler
        with transaction.atomic():
            customer.save(force_insert=True)
        logger.info("Saved customer %s (ID: %d)", customer, customer.pk)
        return customer

    def find_by_id(self, customer_id: int) -> Customer:
        try:
            return Customer.objects.get(pk=customer_id)
        except Customer.DoesNotExist:
            raise NotFoundError(f"Id {customer_id} not found")

    def delete(self, customer_id: int) -> None:
        customer = self.find_by_id(customer_id)
        with transaction.atomic():
            customer.delete()
        logger.info("Deleted customer ID %d and its credits", customer_id)

    def update(self, customer_id: int, patch: CustomerPatch) -> Customer:
        customer = patch.apply_to(self.find_by_id(customer_id))
        with transaction.atomic():
            customer.save()
        logger.info("Updated customer ID %d", customer_id)
        return customer


class CreditService:

    def __init__(self, customer_service: Optional[CustomerService] = None):
        self.customer_service = customer_service or CustomerService()

    def save(self, credit: Credit) -> Credit:
        # Date first: an out-of-window request never hits the database.
        if not is_valid_first_installment(credit.day_first_installment):
            raise InvalidInputError("Invalid Date")

        credit.customer = self.customer_service.find_by_id(credit.customer_id)
        credit.status = Credit.Status.PENDING
        credit.credit_code = uuid.uuid4()
        with transaction.atomic():
            credit.save(force_insert=True)

        logger.info(
            "Saved credit %s for customer ID %d (value=%s, installments=%d)",
            credit.credit_code,
            credit.customer_id,
            credit.credit_value,
            credit.number_of_installments,
        )
        return credit

    def find_all_by_customer(self, customer_id: int) -> list:
        return list(Credit.objects.for_customer(customer_id))

    def find_by_credit_code(self, customer_id: int, credit_code) -> Credit:
        try:
            code = credit_code if isinstance(credit_code, uuid.UUID) else uuid.UUID(str(credit_code))
        except ValueError:
            raise NotFoundError(f"Creditcode {credit_code} not found")
        credit = Credit.objects.by_code(code)
        if credit is None:
            raise NotFoundError(f"Creditcode {credit_code} not found")
        if credit.customer_id != customer_id:
            logger.warning(
                "Credit %s requested by customer ID %s but owned by customer ID %d",
                credit_code,
                customer_id,
                credit.customer_id,
            )
            raise OwnershipMismatchError("Contact admin")
        return credit
