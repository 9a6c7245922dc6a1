# Product service module for business logic
from flask import current_app
from marketplace import db
from marketplace.errors import DataAccessError, RecordNotFoundError, ValidationError
from marketplace.models import Product, Seller
from marketplace.services.user_service import format_seller
from marketplace.utils.db_utils import commit
from marketplace.utils.validators import require_fields, validate_price, validate_stock

UPDATABLE_FIELDS = {'name', 'description', 'price', 'stock'}


def format_product(product, include=()):
    data = {
        'id': product.id,
        'name': product.name,
        'description': product.description,
        'price': product.price,
        'stock': product.stock,
        'seller_id': product.seller_id,
        'created_at': product.created_at.isoformat() if product.created_at else None
    }
    if 'seller' in include:
        data['seller'] = format_seller(product.seller)
    return data


def _seller_reference(data):
    """Accept either ``seller_id`` or ``seller={'connect': {'id': ...}}``."""
    if data.get('seller_id') is not None:
        return data['seller_id']
    seller = data.get('seller')
    if isinstance(seller, dict):
        connect = seller.get('connect')
        if isinstance(connect, dict) and connect.get('id') is not None:
            return connect['id']
        raise ValidationError('seller', "Expected {'connect': {'id': <seller id>}}")
    raise ValidationError('seller', 'Field is required')


def resolve_seller(seller_id):
    # Looked up by Seller primary key, so a client's id never resolves
    seller = db.session.get(Seller, seller_id)
    if not seller:
        raise RecordNotFoundError('Seller', f'id={seller_id}')
    return seller


def create_product(data):
    require_fields(data, ['name', 'price', 'stock'])
    seller = resolve_seller(_seller_reference(data))

    new_product = Product(
        name=data['name'],
        description=data.get('description'),
        price=validate_price(data['price']),
        stock=validate_stock(data['stock']),
        seller=seller
    )
    db.session.add(new_product)
    commit()
    current_app.logger.info('Created product %s for seller %s', new_product.id, seller.id)
    return new_product


def get_product(product_id):
    return db.session.get(Product, product_id)


def get_product_or_raise(product_id):
    product = get_product(product_id)
    if not product:
        raise RecordNotFoundError('Product', f'id={product_id}')
    return product


def get_all_products(seller_id=None):
    query = Product.query
    if seller_id is not None:
        query = query.filter_by(seller_id=seller_id)
    return query.order_by(Product.id).all()


def update_product(product_id, data):
    product = get_product_or_raise(product_id)
    if not data:
        raise ValidationError('data', 'No data provided')
    unknown = set(data) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError('data', f'Fields cannot be updated: {sorted(unknown)}')

    # Validate the whole payload before touching the product
    changes = {}
    try:
        if 'name' in data:
            if not data['name']:
                raise ValidationError('name', 'Field is required')
            changes['name'] = data['name']
        if 'description' in data:
            changes['description'] = data['description']
        if 'price' in data:
            changes['price'] = validate_price(data['price'])
        if 'stock' in data:
            changes['stock'] = validate_stock(data['stock'])
    except DataAccessError:
        db.session.rollback()
        current_app.logger.warning('Rejected update of product %s', product_id)
        raise

    for field, value in changes.items():
        setattr(product, field, value)
    commit()
    return product


def delete_product(product_id):
    product = get_product_or_raise(product_id)
    db.session.delete(product)
    commit()
    return product_id


def delete_all_products():
    count = Product.query.delete()
    commit()
    return count
