# Models package
from catalog_api.models.user import User, UserRole
from catalog_api.models.product import Product
