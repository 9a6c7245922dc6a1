from marketplace import db
from marketplace.services import user_service, product_service, message_service, notification_service


class DataClient:
    """Single entry point to the data layer, one service per entity.

    Must be used inside an application context.
    """

    def __init__(self):
        self.user = user_service
        self.product = product_service
        self.message = message_service
        self.notification = notification_service

    def delete_all(self):
        # Children first so nothing depends on the database cascading
        self.notification.delete_all_notifications()
        self.message.delete_all_messages()
        self.product.delete_all_products()
        self.user.delete_all_users()

    def disconnect(self):
        db.session.remove()
