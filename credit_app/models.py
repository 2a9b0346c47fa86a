import uuid
from dataclasses import dataclass
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from .validators import validate_cpf


@dataclass(frozen=True)
class Address:
    zip_code: str
    street: str


class Customer(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    cpf = models.CharField(max_length=11, unique=True, validators=[validate_cpf])
    email = models.EmailField(unique=True)
    income = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    password = models.CharField(max_length=128)  # hashed, see CustomerRequestSerializer
    zip_code = models.CharField(max_length=20)
    street = models.CharField(max_length=255)

    class Meta:
        db_table = 'customers'

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def address(self):
        return Address(zip_code=self.zip_code, street=self.street)

    @address.setter
    def address(self, value):
        self.zip_code = value.zip_code
        self.street = value.street


class CreditQuerySet(models.QuerySet):
    def by_code(self, credit_code):
        """Return the credit carrying ``credit_code`` or ``None``."""
        return self.filter(credit_code=credit_code).first()

    def for_customer(self, customer_id):
        return self.filter(customer_id=customer_id).order_by('id')


class Credit(models.Model):
    class Status(models.TextChoices):
        # Only PENDING is assigned today; the others await approval rules.
        PENDING = 'PENDING', 'Pending'
        APPROVED = 'APPROVED', 'Approved'
        REJECTED = 'REJECTED', 'Rejected'

    credit_code = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    credit_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    day_first_installment = models.DateField()
    number_of_installments = models.PositiveIntegerField()
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='credits')

    objects = CreditQuerySet.as_manager()

    class Meta:
        db_table = 'credits'

    def __str__(self):
        return f"Credit {self.credit_code} for customer {self.customer_id}"
