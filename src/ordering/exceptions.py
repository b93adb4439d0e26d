"""Checkout failures that callers need to tell apart from plain validation errors.

Both are ValidationError subclasses, so anything that already handles
ValidationError (API error mapping, tests) keeps working.
"""

from protean.exceptions import ValidationError


class OutOfStock(ValidationError):
    """A product in the cart is flagged out of stock; the whole checkout is rejected."""

    def __init__(self, product_id: str, product_name: str):
        self.product_id = product_id
        self.product_name = product_name
        super().__init__({"cart_items": [f'Product "{product_name}" is out of stock']})


class EmptyCart(ValidationError):
    """No purchasable lines remained after unknown products were dropped."""

    def __init__(self):
        super().__init__({"cart_items": ["No valid items in cart"]})
