import os
from dotenv import load_dotenv

load_dotenv()

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database paths
    DB_DIR = DB_DIR
    SHOP_DB = os.path.join(DB_DIR, 'shop.db')
    LOGS_DB = os.path.join(DB_DIR, 'logs.db')

    PREFIX_ADMIN = os.getenv('PREFIX_ADMIN', '/admin')
    BRAND_NAME = 'My Shop Admin'
