"""
Order pricing helpers.

Line items carry the price, discount and quantity captured at checkout.
The discounted unit price is rounded to whole currency units before it
is multiplied by the quantity.
"""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR

from .status import get_status_meta

_HALF = Decimal('0.5')


def to_number(value):
    """Coerce a stored value to a Decimal, 0 when it is not numeric"""
    if value is None:
        return Decimal(0)
    if isinstance(value, bool):
        return Decimal(int(value))
    try:
        number = Decimal(str(value).strip() or '0')
    except InvalidOperation:
        return Decimal(0)
    return number if number.is_finite() else Decimal(0)


def _plain(number):
    """int for whole numbers, float otherwise"""
    if number == number.to_integral_value():
        return int(number)
    return float(number)


def round_half_up(number):
    """Nearest integer, halves rounded toward positive infinity (-0.5 gives 0)"""
    return int((Decimal(number) + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def final_unit_price(price, discount_percentage):
    price = to_number(price)
    discount = to_number(discount_percentage)
    return round_half_up(price * (100 - discount) / 100)


def format_vnd(amount):
    """Thousands grouped with '.', no decimals (vi-VN)"""
    return f"{round_half_up(to_number(amount)):,}".replace(',', '.')


def order_code(order_id):
    """Short display code: last 6 characters of the id, uppercased"""
    if not order_id:
        return ''
    return str(order_id)[-6:].upper()


def price_line_item(item):
    """Computed price fields for one line item"""
    quantity = to_number(item.get('quantity'))
    final_price = final_unit_price(item.get('price'), item.get('discountPercentage'))
    total = _plain(final_price * quantity)

    return {
        'finalPrice': final_price,
        'finalPriceDisplay': format_vnd(final_price),
        'totalPrice': total,
        'totalPriceDisplay': format_vnd(total),
    }


def summarize_order(order):
    """
    Return a copy of the order with totals, display code and status badge.

    Orders without a ``products`` list total to zero.
    """
    total_quantity = Decimal(0)
    total_price = Decimal(0)

    products = order.get('products')
    if isinstance(products, list):
        for item in products:
            quantity = to_number(item.get('quantity'))
            total_quantity += quantity
            total_price += final_unit_price(item.get('price'), item.get('discountPercentage')) * quantity

    summary = dict(order)
    summary['totalQuantity'] = _plain(total_quantity)
    summary['totalPrice'] = _plain(total_price)
    summary['totalPriceDisplay'] = format_vnd(total_price)
    summary['code'] = order_code(order.get('_id'))
    summary['statusMeta'] = get_status_meta(order.get('status'))
    return summary
