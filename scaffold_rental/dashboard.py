from dataclasses import dataclass, field

from scaffold_rental.schemas.customer import Customer
from scaffold_rental.schemas.inventory import InventoryItem
from scaffold_rental.schemas.rental_order import RentalOrder, RentalOrderStatus

ACTIVE_STATUSES = (RentalOrderStatus.ACTIVE, RentalOrderStatus.DELIVERED)
RECENT_LIMIT = 5


@dataclass
class Dashboard:
    total_customers: int
    total_inventory_items: int
    active_orders: int
    inventory_value: int
    inventory_summary: list[InventoryItem] = field(default_factory=list)
    recent_orders: list[RentalOrder] = field(default_factory=list)


def build_dashboard(customers: list[Customer], inventory: list[InventoryItem], orders: list[RentalOrder]) -> Dashboard:
    return Dashboard(
        total_customers=len(customers),
        total_inventory_items=sum(item.quantity for item in inventory),
        active_orders=sum(1 for order in orders if order.status in ACTIVE_STATUSES),
        inventory_value=sum(item.acquisition_cost * item.quantity for item in inventory),
        inventory_summary=inventory[:RECENT_LIMIT],
        recent_orders=orders[:RECENT_LIMIT],
    )
