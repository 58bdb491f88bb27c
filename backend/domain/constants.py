"""
Domain constants used across services/routers.
"""

# Product field rules
PRODUCT_NAME_MIN_LENGTH = 3
PRODUCT_NAME_MAX_LENGTH = 80
PRODUCT_DESCRIPTION_MIN_LENGTH = 5

# Order rules
ORDER_ITEM_MIN_QUANTITY = 1
