"""
Order and Product collections as seen by the admin.

Orders are soft-deleted; every admin query is restricted to
``deleted: False``.
"""

import re

from ...core import Config, Database
from .status import DEFAULT_STATUS


class Order:
    COLLECTION = Config.ORDERS_COLLECTION

    @classmethod
    def collection(cls):
        return Database.collection(cls.COLLECTION)

    @staticmethod
    def build_list_query(keyword='', status=''):
        """Query for the admin order list"""
        query = {'deleted': False}

        if keyword:
            query['userInfor.fullName'] = re.compile(re.escape(keyword), re.IGNORECASE)

        if status:
            if status == DEFAULT_STATUS:
                query['$or'] = [
                    {'status': status},
                    {'status': {'$exists': False}},
                    {'status': None},
                    {'status': ''},
                ]
            else:
                query['status'] = status

        return query

    @classmethod
    def list_for_admin(cls, keyword='', status=''):
        """Matching orders, newest first"""
        return cls.collection().find(
            cls.build_list_query(keyword, status),
            sort=[('createdAt', -1)]
        )

    @classmethod
    def get_active(cls, order_id):
        return cls.collection().find_one({'_id': str(order_id), 'deleted': False})

    @classmethod
    def set_status(cls, order_id, status):
        return cls.collection().update_one(
            {'_id': str(order_id), 'deleted': False},
            {'$set': {'status': status}}
        )


class Product:
    COLLECTION = Config.PRODUCTS_COLLECTION

    @classmethod
    def collection(cls):
        return Database.collection(cls.COLLECTION)

    @classmethod
    def get_display_info(cls, product_ids):
        """Map of product id -> {_id, title, thumbnail} in one lookup"""
        ids = sorted({str(product_id) for product_id in product_ids if product_id})
        if not ids:
            return {}

        products = cls.collection().find(
            {'_id': {'$in': ids}},
            projection=['title', 'thumbnail']
        )
        return {product['_id']: product for product in products}
