"""Field limits shared by the model, the DTOs and the client-side checks."""

NAME_MAX_LENGTH = 100
BRAND_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2

FIELD_LABELS = {
    "id": "Product ID",
    "name": "Name",
    "brand": "Brand",
    "price": "Price",
    "description": "Description",
    "stock": "Stock",
}

PRODUCT_FIELDS = tuple(FIELD_LABELS)

# Upper bound of the ``id`` and ``stock`` columns (32-bit IntegerField).
INTEGER_MAX = 2**31 - 1
