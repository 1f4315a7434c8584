# schemas/dashboard.py
from typing import Dict

from schemas.common import Money, ORMBase


# Headline numbers for the dashboard page
class DashboardSummary(ORMBase):
    inventory_items: int
    low_stock_items: int
    inventory_value: Money
    sales_orders_by_status: Dict[str, int]
    purchase_orders_by_status: Dict[str, int]
    overdue_purchase_orders: int
    sales_revenue: Money
