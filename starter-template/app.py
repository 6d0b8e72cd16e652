"""
shopadmin Starter Template
==========================

A ready-to-run Flask application with the order admin enabled.

Run with:
    flask --app app seed-demo
    flask --app app run --debug

Visit:
    http://localhost:5000/dev-login    - Sign in with the demo admin role (debug only)
    http://localhost:5000/admin/orders - Order management
"""

from datetime import datetime, timedelta

from flask import Flask, abort, redirect, session

from config import Config
from shopadmin import ShopAdmin
from shopadmin.core import Database

# Create Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Session security
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Initialize shopadmin - this registers the admin modules
shopadmin = ShopAdmin(app, {'brand_name': Config.BRAND_NAME})

DEMO_ROLE_ID = 'demo-admin'


@app.cli.command('seed-demo')
def seed_demo():
    """Insert a demo role, products and orders"""
    with app.app_context():
        Database.collection('roles').insert_one({
            '_id': DEMO_ROLE_ID,
            'title': 'Quản trị viên',
            'permissions': ['orders_view'],
            'deleted': False,
        })
        products = Database.collection('products')
        shirt = products.insert_one({'title': 'Áo thun basic', 'thumbnail': '', 'price': 150000}).inserted_id
        jeans = products.insert_one({'title': 'Quần jean', 'thumbnail': '', 'price': 420000}).inserted_id

        orders = Database.collection('orders')
        now = datetime.now()
        orders.insert_one({
            'userInfor': {'fullName': 'Trần Văn An', 'phone': '0901234567', 'address': 'Hà Nội'},
            'products': [
                {'product_id': shirt, 'price': 150000, 'discountPercentage': 10, 'quantity': 2},
                {'product_id': jeans, 'price': 420000, 'discountPercentage': 5, 'quantity': 1},
            ],
            'deleted': False,
            'createdAt': now - timedelta(days=1),
        })
        orders.insert_one({
            'userInfor': {'fullName': 'Lê Thị Bình'},
            'products': [{'product_id': jeans, 'price': 420000, 'discountPercentage': 0, 'quantity': 1}],
            'status': 'shipping',
            'deleted': False,
            'createdAt': now,
        })
    print("Demo data inserted")


@app.route('/dev-login')
def dev_login():
    """Attach the demo role to the session (debug mode only)"""
    if not app.debug:
        abort(404)
    session['role_id'] = DEMO_ROLE_ID
    return redirect(f"{app.config['PREFIX_ADMIN']}/orders")


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("shopadmin Starter Template")
    print("=" * 60)
    print("Dev login:       http://localhost:5000/dev-login")
    print(f"Orders:          http://localhost:5000{app.config['PREFIX_ADMIN']}/orders")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=5000, debug=True)
