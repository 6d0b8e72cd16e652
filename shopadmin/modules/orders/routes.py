"""
Orders Admin Routes
===================

Server-rendered order management: list, detail and status changes.
Every failure ends in a flash notice and a redirect; nothing raw is
shown to the admin.
"""

from urllib.parse import urlparse

from flask import render_template, request, redirect, url_for, flash, g

from . import orders_bp
from .models import Order, Product
from .pricing import summarize_order, price_line_item
from .status import is_valid_status, status_options
from ..roles import permission_required, dashboard_url
from ...core import LoggingService

ACCESS_DENIED = 'Bạn không có quyền truy cập đơn hàng'
CHANGE_DENIED = 'Bạn không có quyền thay đổi trạng thái đơn hàng'


def _redirect_back():
    """Redirect to the referring page, or the order list when there is none"""
    referrer = request.referrer
    if referrer and urlparse(referrer).netloc in ('', request.host):
        return redirect(referrer)
    return redirect(url_for('orders.index'))


def _detail_lines(order):
    items = order.get('products')
    if not isinstance(items, list):
        return []

    product_info = Product.get_display_info(item.get('product_id') for item in items)

    lines = []
    for item in items:
        line = dict(item)
        line['productInfor'] = product_info.get(str(item.get('product_id')))
        line.update(price_line_item(item))
        lines.append(line)
    return lines


@orders_bp.route('')
@permission_required('ORDERS_VIEW_PERMISSION', ACCESS_DENIED)
def index():
    """Order list with keyword and status filters"""
    keyword = request.args.get('keyword', '').strip()
    status_filter = request.args.get('status', '')

    try:
        orders = Order.list_for_admin(keyword, status_filter)
        render_orders = [summarize_order(order) for order in orders]
    except Exception as e:
        LoggingService.log_error_with_traceback('orders', e, {
            'keyword': keyword,
            'status': status_filter,
        })
        flash('Không thể tải danh sách đơn hàng', 'error')
        return redirect(dashboard_url())

    return render_template(
        'orders/index.html',
        pageTitle='Quản lý đơn hàng',
        orders=render_orders,
        keyword=keyword,
        statuses=status_options(),
        statusFilter=status_filter,
    )


@orders_bp.route('/<order_id>')
@permission_required('ORDERS_VIEW_PERMISSION', ACCESS_DENIED)
def detail(order_id):
    """Order detail with line items and product info"""
    try:
        order = Order.get_active(order_id)
        if not order:
            flash('Đơn hàng không tồn tại', 'error')
            return redirect(url_for('orders.index'))

        view_order = summarize_order(order)
        view_order['products'] = _detail_lines(order)
    except Exception as e:
        LoggingService.log_error_with_traceback('orders', e, {'order_id': order_id})
        flash('Không thể xem chi tiết đơn hàng', 'error')
        return redirect(url_for('orders.index'))

    return render_template(
        'orders/detail.html',
        pageTitle=f"Đơn hàng {view_order['code'] or view_order.get('_id')}",
        order=view_order,
        statuses=status_options(),
    )


@orders_bp.route('/<order_id>/status', methods=['POST'])
@permission_required('ORDERS_STATUS_PERMISSION', CHANGE_DENIED)
def change_status(order_id):
    """Move an order to another status"""
    status = request.form.get('status')

    if not is_valid_status(status):
        flash('Trạng thái không hợp lệ', 'error')
        return _redirect_back()

    try:
        result = Order.set_status(order_id, status)

        if result.modified_count == 0:
            flash('Không thể cập nhật trạng thái đơn hàng', 'error')
        else:
            LoggingService.log_user_action(
                'orders',
                f"Changed order {order_id} status to {status}",
                details={'role': (g.get('role') or {}).get('title')}
            )
            flash('Cập nhật trạng thái đơn hàng thành công', 'success')
    except Exception as e:
        LoggingService.log_error_with_traceback('orders', e, {
            'order_id': order_id,
            'status': status,
        })
        flash('Cập nhật trạng thái thất bại', 'error')

    return _redirect_back()
