"""Order reads and admin operations, each checked against the calling principal."""

from protean.utils.globals import current_domain

from storefront.exceptions import AccessDeniedError
from storefront.identity.tokens import Principal
from storefront.order.order import Order, OrderStatus
from storefront.order.status import UpdateOrderStatus

DEFAULT_PAGE_SIZE = 10


def _require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise AccessDeniedError({"principal": ["Administrator role required"]})


def get_order(principal: Principal, order_id: str) -> Order:
    """Owners and administrators may read an order; anyone else is denied."""
    order = current_domain.repository_for(Order).get(order_id)
    if not (principal.owns(order.user_id) or principal.is_admin):
        raise AccessDeniedError({"order": ["You do not have permission to view this order"]})
    return order


def list_orders(principal: Principal, page: int = 0, size: int = DEFAULT_PAGE_SIZE):
    return current_domain.repository_for(Order).find_for_user(principal.user_id, page=page, size=size)


def list_orders_by_status(principal: Principal, status: str) -> list[Order]:
    _require_admin(principal)
    return current_domain.repository_for(Order).find_by_status(OrderStatus.parse(status).value)


def change_order_status(principal: Principal, order_id: str, status: str) -> Order:
    _require_admin(principal)
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
    return current_domain.repository_for(Order).get(order_id)
