"""
Chart Frames

Polars DataFrame views of engine results for the chart and export
collaborators. Money is converted to Float64 here and only here; the
engine itself stays in Decimal.
"""

from decimal import Decimal
from typing import Iterable, List, Mapping, Sequence, Type

import polars as pl
from pydantic import BaseModel

from src.analytics.models import CustomerRevenue, ProductTotal


def records_frame(records: Iterable[BaseModel], model: Type[BaseModel]) -> pl.DataFrame:
    """One row per record, one column per model field; Decimal becomes Float64"""
    rows = [
        {k: float(v) if isinstance(v, Decimal) else v for k, v in r.model_dump().items()}
        for r in records
    ]
    if not rows:
        return pl.DataFrame(schema=list(model.model_fields))
    return pl.DataFrame(rows, infer_schema_length=None)


def monthly_revenue_frame(revenue: Mapping[str, Decimal]) -> pl.DataFrame:
    """Columns month, revenue; ascending by month"""
    months = sorted(revenue)
    return pl.DataFrame(
        {
            "month": months,
            "revenue": [float(revenue[m]) for m in months],
        },
        schema={"month": pl.Utf8, "revenue": pl.Float64},
    )


def product_totals_frame(totals: Sequence[ProductTotal]) -> pl.DataFrame:
    """Columns item_code, description, category, units, revenue; input order kept"""
    return pl.DataFrame(
        {
            "item_code": [t.product.item_code for t in totals],
            "description": [t.product.description for t in totals],
            "category": [t.product.category for t in totals],
            "units": [t.units for t in totals],
            "revenue": [float(t.revenue) for t in totals],
        },
        schema={
            "item_code": pl.Utf8,
            "description": pl.Utf8,
            "category": pl.Utf8,
            "units": pl.Int64,
            "revenue": pl.Float64,
        },
    )


def customer_revenue_frame(rows: List[CustomerRevenue]) -> pl.DataFrame:
    """Columns customer_id, customer_name, units, revenue; input order kept"""
    return pl.DataFrame(
        {
            "customer_id": [str(r.customer_id) for r in rows],
            "customer_name": [r.customer_name for r in rows],
            "units": [r.units for r in rows],
            "revenue": [float(r.revenue) for r in rows],
        },
        schema={
            "customer_id": pl.Utf8,
            "customer_name": pl.Utf8,
            "units": pl.Int64,
            "revenue": pl.Float64,
        },
    )
