from django.core.exceptions import ValidationError


def _check_digit(digits):
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    rest = total % 11
    return '0' if rest < 2 else str(11 - rest)


def is_valid_cpf(value):
    """Brazilian CPF: 11 digits, the last two being mod-11 check digits."""
    if not isinstance(value, str) or len(value) != 11 or not value.isdigit():
        return False
    # 000.000.000-00, 111.111.111-11 ... pass the checksum but are not issued
    if value == value[0] * 11:
        return False
    first = _check_digit(value[:9])
    second = _check_digit(value[:9] + first)
    return value[9:] == first + second


def validate_cpf(value):
    if not is_valid_cpf(value):
        raise ValidationError('Invalid CPF', code='invalid_cpf')
