# marketplace/utils/validators.py
import re
from decimal import Decimal, InvalidOperation
from flask import current_app
from marketplace.errors import ValidationError
from marketplace.models import Role

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')


def require_fields(data, fields):
    if not data:
        raise ValidationError('data', 'No data provided')
    for field in fields:
        if data.get(field) is None:
            raise ValidationError(field, 'Field is required')


def parse_role(value):
    """Map a role value onto the Role enum; values are case-sensitive."""
    if value is None:
        raise ValidationError('role', 'Role is required')
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise ValidationError('role', f'Invalid role {value!r}. Valid roles: {[r.value for r in Role]}')


def validate_email(email):
    if not isinstance(email, str) or not EMAIL_REGEX.match(email):
        raise ValidationError('email', 'Invalid email format')
    return email


def validate_username(username):
    if not isinstance(username, str) or not username.strip():
        raise ValidationError('username', 'Username must be a non-empty string')
    return username


def validate_password(password):
    min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
    if not isinstance(password, str) or len(password) < min_length:
        raise ValidationError('password', f'Password must be at least {min_length} characters')
    return password


def validate_price(value):
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError('price', f'Invalid price {value!r}')
    if not price.is_finite():
        raise ValidationError('price', f'Invalid price {value!r}')
    if price < 0:
        raise ValidationError('price', 'Price cannot be negative')
    return price


def validate_stock(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError('stock', 'Stock must be an integer')
    if value < 0:
        raise ValidationError('stock', 'Stock cannot be negative')
    return value
