import enum
from datetime import datetime
from marketplace import db


class Role(enum.Enum):
    CLIENT = 'CLIENT'
    SELLER = 'SELLER'


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    # Required and without a default: the caller must choose
    role = db.Column(db.Enum(Role, name='role', create_constraint=True, validate_strings=True), nullable=False)
    profile_picture = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = db.relationship('Client', back_populates='user', uselist=False,
                             cascade='all, delete-orphan')
    seller = db.relationship('Seller', back_populates='user', uselist=False,
                             cascade='all, delete-orphan')
    sent_messages = db.relationship('Message', back_populates='sender', lazy=True,
                                    foreign_keys='Message.sender_id',
                                    cascade='all, delete')
    received_messages = db.relationship('Message', back_populates='recipient', lazy=True,
                                        foreign_keys='Message.recipient_id',
                                        cascade='all, delete')
    notifications = db.relationship('Notification', back_populates='user', lazy=True,
                                    cascade='all, delete-orphan')

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'
