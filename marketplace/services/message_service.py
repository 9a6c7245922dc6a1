# Message service module for business logic
from sqlalchemy import and_, or_
from marketplace import db
from marketplace.errors import RecordNotFoundError, ValidationError
from marketplace.models import Message
from marketplace.services.user_service import get_user_or_raise
from marketplace.utils.db_utils import commit


def format_message(message):
    return {
        'id': message.id,
        'content': message.content,
        'sender_id': message.sender_id,
        'recipient_id': message.recipient_id,
        'created_at': message.created_at.isoformat() if message.created_at else None
    }


def send_message(sender_id, recipient_id, content):
    if not content:
        raise ValidationError('content', 'Message content cannot be empty')
    sender = get_user_or_raise(sender_id)
    recipient = get_user_or_raise(recipient_id)
    new_message = Message(content=content, sender=sender, recipient=recipient)
    db.session.add(new_message)
    commit()
    return new_message


def get_message(message_id):
    return db.session.get(Message, message_id)


def get_messages_for_user(user_id):
    """All messages sent or received by the user, oldest first."""
    return Message.query.filter(
        or_(Message.sender_id == user_id, Message.recipient_id == user_id)
    ).order_by(Message.created_at, Message.id).all()


def get_conversation(user_id, other_user_id):
    return Message.query.filter(
        or_(
            and_(Message.sender_id == user_id, Message.recipient_id == other_user_id),
            and_(Message.sender_id == other_user_id, Message.recipient_id == user_id)
        )
    ).order_by(Message.created_at, Message.id).all()


def delete_message(message_id):
    message = get_message(message_id)
    if not message:
        raise RecordNotFoundError('Message', f'id={message_id}')
    db.session.delete(message)
    commit()
    return message_id


def delete_all_messages():
    count = Message.query.delete()
    commit()
    return count
