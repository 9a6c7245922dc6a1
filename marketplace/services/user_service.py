# User service module for business logic
from flask import current_app
from marketplace import db, bcrypt
from marketplace.errors import ConstraintViolationError, DataAccessError, RecordNotFoundError, ValidationError
from marketplace.models import User, Role, Client, Seller
from marketplace.utils.db_utils import commit
from marketplace.utils.validators import (
    require_fields, parse_role, validate_email, validate_password, validate_username
)

UPDATABLE_FIELDS = {'email', 'username', 'password', 'profile_picture'}
CLIENT_FIELDS = {'firstname', 'lastname'}
SELLER_FIELDS = {'business_name'}


def format_client(client):
    if client is None:
        return None
    return {
        'id': client.id,
        'firstname': client.firstname,
        'lastname': client.lastname
    }


def format_seller(seller):
    if seller is None:
        return None
    return {
        'id': seller.id,
        'business_name': seller.business_name
    }


def format_user(user, include=()):
    """Serialise a user; profile relations are added only when listed in ``include``."""
    data = {
        'id': user.id,
        'email': user.email,
        'username': user.username,
        'role': user.role.value,
        'profile_picture': user.profile_picture,
        'created_at': user.created_at.isoformat() if user.created_at else None,
        'updated_at': user.updated_at.isoformat() if user.updated_at else None
    }
    if 'client' in include:
        data['client'] = format_client(user.client)
    if 'seller' in include:
        data['seller'] = format_seller(user.seller)
    return data


def _check_unique(field, value, exclude_id=None):
    query = User.query.filter(getattr(User, field) == value)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise ConstraintViolationError(field, value)


def _only_fields(data, allowed, name):
    if not isinstance(data, dict):
        raise ValidationError(name, 'Profile data must be a mapping')
    unknown = set(data) - allowed
    if unknown:
        raise ValidationError(name, f'Unknown fields: {sorted(unknown)}')
    return data


def _build_profile(role, data):
    client_data = data.get('client')
    seller_data = data.get('seller')
    if client_data is not None and seller_data is not None:
        raise ValidationError('role', 'A user has either a client or a seller profile, not both')
    if role == Role.CLIENT:
        if seller_data is not None:
            raise ValidationError('seller', 'A CLIENT user cannot have a seller profile')
        return 'client', Client(**_only_fields(client_data or {}, CLIENT_FIELDS, 'client'))
    if client_data is not None:
        raise ValidationError('client', 'A SELLER user cannot have a client profile')
    return 'seller', Seller(**_only_fields(seller_data or {}, SELLER_FIELDS, 'seller'))


def _profile_of(user):
    """Return the user's profile, creating an empty one if it is missing."""
    if user.role == Role.CLIENT:
        if user.client is None:
            user.client = Client()
        return user.client
    if user.seller is None:
        user.seller = Seller()
    return user.seller


def create_user(data):
    require_fields(data, ['email', 'username', 'password', 'role'])
    role = parse_role(data['role'])
    email = validate_email(data['email'])
    password = validate_password(data['password'])
    username = validate_username(data['username'])

    _check_unique('email', email)
    _check_unique('username', username)

    new_user = User(
        email=email,
        username=username,
        password=bcrypt.generate_password_hash(password).decode('utf-8'),
        role=role,
        profile_picture=data.get('profile_picture')
    )
    relation, profile = _build_profile(role, data)
    setattr(new_user, relation, profile)

    db.session.add(new_user)
    commit()
    current_app.logger.info('Created %s user %s', role.value, new_user.id)
    return new_user


def get_user(user_id):
    return db.session.get(User, user_id)


def get_user_by_email(email):
    return User.query.filter_by(email=email).first()


def get_user_by_username(username):
    return User.query.filter_by(username=username).first()


def find_user(**where):
    """Find a single user by exactly one of ``id``, ``email`` or ``username``."""
    if len(where) != 1:
        raise ValidationError('where', 'Exactly one of id, email or username is required')
    (field, value), = where.items()
    if field == 'id':
        return get_user(value)
    if field == 'email':
        return get_user_by_email(value)
    if field == 'username':
        return get_user_by_username(value)
    raise ValidationError('where', f'Cannot look users up by {field!r}')


def get_user_or_raise(user_id):
    user = get_user(user_id)
    if not user:
        raise RecordNotFoundError('User', f'id={user_id}')
    return user


def get_all_users(role=None):
    query = User.query
    if role is not None:
        query = query.filter_by(role=parse_role(role))
    return query.order_by(User.id).all()


def get_client(client_id):
    return db.session.get(Client, client_id)


def get_seller(seller_id):
    return db.session.get(Seller, seller_id)


def update_user(user_id, data):
    user = get_user_or_raise(user_id)
    if not data:
        raise ValidationError('data', 'No data provided')

    profile_fields = CLIENT_FIELDS if user.role == Role.CLIENT else SELLER_FIELDS
    unknown = set(data) - UPDATABLE_FIELDS - profile_fields
    if unknown:
        raise ValidationError('data', f'Fields cannot be updated: {sorted(unknown)}')

    # Validate the whole payload before touching the user
    changes = {}
    try:
        if 'email' in data:
            email = validate_email(data['email'])
            # Only check if email is actually changing
            if email != user.email:
                _check_unique('email', email, exclude_id=user.id)
            changes['email'] = email

        if 'username' in data:
            username = validate_username(data['username'])
            if username != user.username:
                _check_unique('username', username, exclude_id=user.id)
            changes['username'] = username

        if 'password' in data:
            password = validate_password(data['password'])
            changes['password'] = bcrypt.generate_password_hash(password).decode('utf-8')
    except DataAccessError:
        db.session.rollback()
        current_app.logger.warning('Rejected update of user %s', user_id)
        raise

    for field, value in changes.items():
        setattr(user, field, value)

    # An explicit None clears the picture
    if 'profile_picture' in data:
        user.profile_picture = data['profile_picture']

    profile_data = {field: data[field] for field in profile_fields & set(data)}
    if profile_data:
        profile = _profile_of(user)
        for field, value in profile_data.items():
            setattr(profile, field, value)

    commit()
    return user


def delete_user(user_id):
    """Delete a user together with its profile, products, messages and notifications."""
    user = get_user_or_raise(user_id)
    db.session.delete(user)
    commit()
    current_app.logger.info('Deleted user %s', user_id)
    return user_id


def delete_all_users():
    count = User.query.delete()
    commit()
    return count


def check_password(user, password):
    return bcrypt.check_password_hash(user.password, password)
