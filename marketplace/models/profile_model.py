from marketplace import db


# Profiles share the owning user's primary key
class Client(db.Model):
    __tablename__ = 'client'
    id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), primary_key=True, autoincrement=False)
    firstname = db.Column(db.String(100))
    lastname = db.Column(db.String(100))
    user = db.relationship('User', back_populates='client')

    def __repr__(self):
        return f'<Client {self.firstname} {self.lastname}>'


class Seller(db.Model):
    __tablename__ = 'seller'
    id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), primary_key=True, autoincrement=False)
    business_name = db.Column(db.String(150))
    user = db.relationship('User', back_populates='seller')
    products = db.relationship('Product', back_populates='seller', lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Seller {self.business_name}>'
