"""
Snapshot Validation Module

Rule-based quality checks over the records handed to the analytics engine.
Implements validation patterns inspired by Great Expectations.

Features:
- Null checks
- Uniqueness checks
- Range checks
- Referential integrity checks

The engine tolerates orphan order items, so broken references are reported
as warnings; duplicate or missing identifiers are errors.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

import polars as pl
import structlog

from src.analytics.frames import records_frame
from src.analytics.models import Order, OrderItem, Product

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ValidationSeverity(str, Enum):
    """Severity levels for validation failures"""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationStatus(str, Enum):
    """Overall validation status"""
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class ValidationCheck:
    """Single validation check result"""
    name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    details: Optional[Dict[str, Any]] = None
    failed_rows: int = 0
    total_rows: int = 0


@dataclass
class ValidationResult:
    """Complete validation suite result"""
    status: ValidationStatus
    total_checks: int
    passed_checks: int
    failed_checks: int
    warning_count: int
    checks: List[ValidationCheck] = field(default_factory=list)
    started_at: datetime = field(default_factory=_now)
    completed_at: Optional[datetime] = None

    @property
    def success_rate(self) -> float:
        """Percentage of passed checks"""
        if self.total_checks == 0:
            return 100.0
        return (self.passed_checks / self.total_checks) * 100


Check = Callable[[pl.DataFrame], ValidationCheck]


class DataValidator:
    """
    Validator for one record type of a snapshot.

    Example:
        validator = DataValidator()
        validator.add_not_null_check("id")
        validator.add_reference_check("order_id", order_ids)
        result = validator.validate(df)
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode  # Fail on any warning
        self._checks: List[Check] = []

    def reset(self) -> None:
        """Reset validator state"""
        self._checks = []

    @staticmethod
    def _missing(name: str, column: str, severity: ValidationSeverity) -> ValidationCheck:
        return ValidationCheck(
            name=name,
            passed=False,
            severity=severity,
            message=f"Column '{column}' not found",
        )

    @staticmethod
    def _empty(name: str, severity: ValidationSeverity) -> ValidationCheck:
        return ValidationCheck(name=name, passed=True, severity=severity, message="No rows to check")

    def add_not_null_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for null values in column"""
        name = f"not_null_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return self._missing(name, column, severity)
            if df.height == 0:
                return self._empty(name, severity)

            null_count = df[column].null_count()
            total = df.height
            passed = null_count == 0

            return ValidationCheck(
                name=name,
                passed=passed,
                severity=severity,
                message=f"Column '{column}' has {null_count} null values" if not passed else f"Column '{column}' has no null values",
                details={"null_count": null_count, "null_percentage": (null_count / total) * 100},
                failed_rows=null_count,
                total_rows=total,
            )

        self._checks.append(check)
        return self

    def add_unique_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for uniqueness of column values"""
        name = f"unique_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return self._missing(name, column, severity)
            if df.height == 0:
                return self._empty(name, severity)

            total = df.height
            unique_count = df[column].n_unique()
            duplicate_count = total - unique_count
            passed = duplicate_count == 0

            return ValidationCheck(
                name=name,
                passed=passed,
                severity=severity,
                message=f"Column '{column}' has {duplicate_count} duplicate values" if not passed else f"Column '{column}' values are unique",
                details={"unique_count": unique_count, "duplicate_count": duplicate_count},
                failed_rows=duplicate_count,
                total_rows=total,
            )

        self._checks.append(check)
        return self

    def add_range_check(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Add check for values within specified range"""
        name = f"range_{column}"

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return self._missing(name, column, severity)
            if df.height == 0:
                return self._empty(name, severity)

            conditions = []
            if min_value is not None:
                conditions.append(pl.col(column) < min_value)
            if max_value is not None:
                conditions.append(pl.col(column) > max_value)

            if not conditions:
                return ValidationCheck(
                    name=name,
                    passed=True,
                    severity=severity,
                    message="No range specified",
                )

            combined = conditions[0]
            for cond in conditions[1:]:
                combined = combined | cond

            out_of_range = df.filter(combined).height
            passed = out_of_range == 0

            return ValidationCheck(
                name=name,
                passed=passed,
                severity=severity,
                message=f"Column '{column}' has {out_of_range} values outside range [{min_value}, {max_value}]" if not passed else "All values in range",
                details={"min": min_value, "max": max_value, "out_of_range_count": out_of_range},
                failed_rows=out_of_range,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def add_reference_check(
        self,
        column: str,
        valid_ids: Iterable[Any],
        severity: ValidationSeverity = ValidationSeverity.WARNING,
    ) -> "DataValidator":
        """Add check that every value in column names a known record"""
        name = f"reference_{column}"
        known = pl.Series(sorted({str(v) for v in valid_ids}), dtype=pl.Utf8)

        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return self._missing(name, column, severity)
            if df.height == 0:
                return self._empty(name, severity)

            orphans = df.filter(
                ~pl.col(column).cast(pl.Utf8).is_in(known) & pl.col(column).is_not_null()
            )[column]
            passed = orphans.len() == 0

            return ValidationCheck(
                name=name,
                passed=passed,
                severity=severity,
                message=f"Column '{column}' has {orphans.len()} unresolved references" if not passed else f"All '{column}' references resolve",
                details={"orphan_ids": sorted({str(v) for v in orphans.to_list()})},
                failed_rows=orphans.len(),
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def validate(self, df: pl.DataFrame) -> ValidationResult:
        """
        Run every registered check against df.

        Returns:
            ValidationResult; never raises on bad data
        """
        started_at = _now()
        results = [check(df) for check in self._checks]
        completed_at = _now()

        passed_checks = sum(1 for r in results if r.passed)
        failed_checks = sum(1 for r in results if not r.passed and r.severity == ValidationSeverity.ERROR)
        warning_count = sum(1 for r in results if not r.passed and r.severity == ValidationSeverity.WARNING)

        if failed_checks > 0:
            status = ValidationStatus.FAILED
        elif warning_count > 0 and self.strict_mode:
            status = ValidationStatus.FAILED
        elif warning_count > 0:
            status = ValidationStatus.PARTIAL
        else:
            status = ValidationStatus.PASSED

        validation_result = ValidationResult(
            status=status,
            total_checks=len(results),
            passed_checks=passed_checks,
            failed_checks=failed_checks,
            warning_count=warning_count,
            checks=results,
            started_at=started_at,
            completed_at=completed_at,
        )

        logger.info(
            f"Validation complete: {status.value}",
            passed=passed_checks,
            failed=failed_checks,
            warnings=warning_count,
        )

        return validation_result


# Pre-built validators for snapshot record types
def create_products_validator() -> DataValidator:
    """Create pre-configured validator for the product catalog"""
    return (
        DataValidator()
        .add_not_null_check("id")
        .add_unique_check("id")
        .add_unique_check("item_code", severity=ValidationSeverity.WARNING)
        .add_range_check("unit_price", min_value=0)
    )


def create_orders_validator() -> DataValidator:
    """Create pre-configured validator for orders"""
    return (
        DataValidator()
        .add_not_null_check("id")
        .add_unique_check("id")
        .add_not_null_check("customer_id")
        .add_not_null_check("order_date")
    )


def create_order_items_validator(order_ids: Iterable[Any], product_ids: Iterable[Any]) -> DataValidator:
    """Create pre-configured validator for order items of a snapshot"""
    return (
        DataValidator()
        .add_unique_check("id")
        .add_range_check("quantity", min_value=1)
        .add_reference_check("order_id", set(order_ids))
        .add_reference_check("product_id", set(product_ids))
    )


def validate_snapshot(
    products: List[Product],
    orders: List[Order],
    items: List[OrderItem],
) -> Dict[str, ValidationResult]:
    """Validate a full snapshot; keys are products, orders, order_items"""
    return {
        "products": create_products_validator().validate(records_frame(products, Product)),
        "orders": create_orders_validator().validate(records_frame(orders, Order)),
        "order_items": create_order_items_validator(
            (o.id for o in orders), (p.id for p in products)
        ).validate(records_frame(items, OrderItem)),
    }
