# Notification service module for business logic
from marketplace import db
from marketplace.errors import RecordNotFoundError, ValidationError
from marketplace.models import Notification
from marketplace.services.user_service import get_user_or_raise
from marketplace.utils.db_utils import commit


def format_notification(notification):
    return {
        'id': notification.id,
        'content': notification.content,
        'user_id': notification.user_id,
        'is_read': notification.is_read,
        'created_at': notification.created_at.isoformat() if notification.created_at else None
    }


def create_notification(user_id, content):
    if not content:
        raise ValidationError('content', 'Notification content cannot be empty')
    user = get_user_or_raise(user_id)
    notification = Notification(content=content, user=user)
    db.session.add(notification)
    commit()
    return notification


def get_notification(notification_id):
    return db.session.get(Notification, notification_id)


def get_notifications(user_id, unread_only=False):
    query = Notification.query.filter_by(user_id=user_id)
    if unread_only:
        query = query.filter_by(is_read=False)
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


def mark_as_read(notification_id):
    notification = get_notification(notification_id)
    if not notification:
        raise RecordNotFoundError('Notification', f'id={notification_id}')
    notification.is_read = True
    commit()
    return notification


def delete_notification(notification_id):
    notification = get_notification(notification_id)
    if not notification:
        raise RecordNotFoundError('Notification', f'id={notification_id}')
    db.session.delete(notification)
    commit()
    return notification_id


def delete_all_notifications():
    count = Notification.query.delete()
    commit()
    return count
