from .user_model import Role, User
from .profile_model import Client, Seller
from .product_model import Product
from .message_model import Message
from .notification_model import Notification

__all__ = ['Role', 'User', 'Client', 'Seller', 'Product', 'Message', 'Notification']
