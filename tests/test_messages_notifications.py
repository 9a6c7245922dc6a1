"""
Message and Notification Tests
"""
import pytest

from marketplace.errors import RecordNotFoundError, ValidationError


class TestMessages:

    def test_send_message(self, client, client_user, seller_user):
        message = client.message.send_message(client_user.id, seller_user.id, 'Is this in stock?')

        assert message.id is not None
        assert message.sender.id == client_user.id
        assert message.recipient.id == seller_user.id
        assert client.message.format_message(message)['content'] == 'Is this in stock?'

    def test_send_to_unknown_user_fails(self, client, client_user):
        with pytest.raises(RecordNotFoundError):
            client.message.send_message(client_user.id, 999, 'Hello?')

    def test_empty_message_fails(self, client, client_user, seller_user):
        with pytest.raises(ValidationError):
            client.message.send_message(client_user.id, seller_user.id, '')

    def test_messages_for_user_include_sent_and_received(self, client, client_user, seller_user):
        first = client.message.send_message(client_user.id, seller_user.id, 'Hi')
        second = client.message.send_message(seller_user.id, client_user.id, 'Hello')

        ids = [m.id for m in client.message.get_messages_for_user(client_user.id)]

        assert ids == [first.id, second.id]

    def test_conversation_excludes_other_users(self, client, client_user, seller_user):
        outsider = client.user.create_user({
            'email': 'outsider@example.com',
            'username': 'outsider',
            'password': 'securepassword',
            'role': 'CLIENT',
        })
        kept = client.message.send_message(client_user.id, seller_user.id, 'Hi')
        client.message.send_message(outsider.id, seller_user.id, 'Hi too')

        conversation = client.message.get_conversation(seller_user.id, client_user.id)

        assert [m.id for m in conversation] == [kept.id]

    def test_delete_message(self, client, client_user, seller_user):
        message = client.message.send_message(client_user.id, seller_user.id, 'Oops')
        message_id = message.id

        client.message.delete_message(message_id)

        assert client.message.get_message(message_id) is None
        assert client.user.get_user(client_user.id) is not None


class TestNotifications:

    def test_create_and_list_notifications(self, client, client_user):
        older = client.notification.create_notification(client_user.id, 'Welcome!')
        newer = client.notification.create_notification(client_user.id, 'Your order shipped')

        notifications = client.notification.get_notifications(client_user.id)

        assert [n.id for n in notifications] == [newer.id, older.id]
        assert all(not n.is_read for n in notifications)

    def test_mark_as_read(self, client, client_user):
        read = client.notification.create_notification(client_user.id, 'Welcome!')
        unread = client.notification.create_notification(client_user.id, 'New message')

        client.notification.mark_as_read(read.id)

        unread_ids = [n.id for n in client.notification.get_notifications(client_user.id, unread_only=True)]
        assert unread_ids == [unread.id]
        assert client.notification.format_notification(read)['is_read'] is True

    def test_notification_for_unknown_user_fails(self, client):
        with pytest.raises(RecordNotFoundError):
            client.notification.create_notification(999, 'Nobody home')

    def test_delete_notification(self, client, client_user):
        notification = client.notification.create_notification(client_user.id, 'Welcome!')
        notification_id = notification.id

        client.notification.delete_notification(notification_id)

        assert client.notification.get_notification(notification_id) is None
        with pytest.raises(RecordNotFoundError):
            client.notification.mark_as_read(notification_id)
