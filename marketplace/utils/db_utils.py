# marketplace/utils/db_utils.py
from flask import current_app
from sqlalchemy.exc import IntegrityError
from marketplace import db
from marketplace.errors import ConstraintViolationError, DataAccessError

UNIQUE_FIELDS = ('email', 'username')


def unique_field_from_error(error):
    """Find which unique column an IntegrityError complains about."""
    text = str(error.orig)
    # NOT NULL and foreign key failures name columns too
    if 'unique constraint' not in text.lower():
        return None
    for field in UNIQUE_FIELDS:
        # sqlite: "UNIQUE constraint failed: user.email"
        # postgres: 'Key (email)=(...) already exists' / '"user_email_key"'
        if f'.{field}' in text or f'({field})' in text or f'_{field}_key' in text:
            return field
    return None


def commit():
    """Commit the session, rolling back and translating integrity errors."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        field = unique_field_from_error(e)
        current_app.logger.warning('Commit rejected by the database: %s', e.orig)
        if field:
            raise ConstraintViolationError(field) from e
        raise DataAccessError(f'Database integrity error: {e.orig}') from e
    except Exception:
        db.session.rollback()
        raise
