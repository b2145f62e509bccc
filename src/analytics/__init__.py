"""
Customer Analytics Module
"""
from .engine import AnalyticsEngine
from .frequency import active_customers, customer_tenure_months, next_order_prediction, order_frequency
from .models import (
    BuyingPatterns,
    Customer,
    CustomerInsights,
    CustomerRevenue,
    CustomerTotals,
    DashboardSummary,
    DraftOrderLine,
    Order,
    OrderItem,
    Product,
    ProductTotal,
    RankedProduct,
    RecentOrder,
)
from .patterns import classify_buying_patterns, products_by_category, purchase_history
from .ranking import recent_order_totals, recent_orders, top_customers, top_products
from .revenue import (
    customer_revenue,
    customer_totals,
    draft_order_lines,
    draft_order_totals,
    monthly_revenue,
    order_total,
    product_monthly_revenue,
    product_totals,
)

__all__ = [
    "AnalyticsEngine",
    "BuyingPatterns",
    "Customer",
    "CustomerInsights",
    "CustomerRevenue",
    "CustomerTotals",
    "DashboardSummary",
    "DraftOrderLine",
    "Order",
    "OrderItem",
    "Product",
    "ProductTotal",
    "RankedProduct",
    "RecentOrder",
    "active_customers",
    "classify_buying_patterns",
    "customer_revenue",
    "customer_tenure_months",
    "customer_totals",
    "draft_order_lines",
    "draft_order_totals",
    "monthly_revenue",
    "next_order_prediction",
    "order_frequency",
    "order_total",
    "product_monthly_revenue",
    "product_totals",
    "products_by_category",
    "purchase_history",
    "recent_order_totals",
    "recent_orders",
    "top_customers",
    "top_products",
]
