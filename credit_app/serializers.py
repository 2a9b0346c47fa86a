from decimal import Decimal

from django.contrib.auth.hashers import make_password
from django.utils import timezone
from rest_framework import serializers

from .models import Credit, Customer
from .services import CustomerPatch
from .validators import validate_cpf

MAX_INSTALLMENTS = 48


# --- Requests ---

class CustomerRequestSerializer(serializers.Serializer):
    # Plain Serializer: cpf/email uniqueness is left to the database (409).
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    cpf = serializers.CharField(max_length=11, validators=[validate_cpf])
    income = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
    email = serializers.EmailField()
    password = serializers.CharField(max_length=128, write_only=True)
    zip_code = serializers.CharField(max_length=20)
    street = serializers.CharField(max_length=255)

    def to_entity(self):
        data = dict(self.validated_data)
        data['password'] = make_password(data['password'])
        return Customer(**data)


class CustomerUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    income = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False
    )
    zip_code = serializers.CharField(max_length=20, required=False)
    street = serializers.CharField(max_length=255, required=False)

    def to_patch(self):
        return CustomerPatch(**self.validated_data)


class CreditRequestSerializer(serializers.Serializer):
    credit_value = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal('0.01')
    )
    day_first_installment = serializers.DateField()
    number_of_installments = serializers.IntegerField(min_value=1, max_value=MAX_INSTALLMENTS)
    customer_id = serializers.IntegerField()

    def validate_day_first_installment(self, value):
        if value <= timezone.localdate():
            raise serializers.ValidationError("must be a future date")
        return value

    def to_entity(self):
        return Credit(**self.validated_data)


class CustomerIdQuerySerializer(serializers.Serializer):
    """``?customer_id=`` carried by the PATCH and credit lookup endpoints."""
    customer_id = serializers.IntegerField()


class CreditCodePathSerializer(serializers.Serializer):
    credit_code = serializers.UUIDField()


# --- Responses ---

class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ['id', 'first_name', 'last_name', 'cpf', 'income', 'email', 'zip_code', 'street']


class CreditListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Credit
        fields = ['credit_code', 'credit_value', 'number_of_installments']


class CreditSerializer(serializers.ModelSerializer):
    email_customer = serializers.EmailField(source='customer.email')
    income_customer = serializers.DecimalField(
        source='customer.income', max_digits=12, decimal_places=2
    )

    class Meta:
        model = Credit
        fields = [
            'credit_code',
            'credit_value',
            'number_of_installments',
            'status',
            'email_customer',
            'income_customer',
        ]
