"""Payments analytics tools exposed to the agent runtime."""

from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Optional

from smire.analytics.aggregate import (
    count_distinct,
    distinct_values,
    group_by,
    growth_percentage,
    percentage_of,
    sum_field,
    tally,
    tpv_tpt_breakdown,
)
from smire.analytics.filters import FilterCriteria, filter_records
from smire.common.errors import InvalidArgumentError, UnknownToolError
from smire.data.normalize import is_blank, resolve_month, validate_month_format
from smire.data.store import RecordStore
from smire.observability.logging import get_logger

logger = get_logger("tools")

CRITICAL_RISK = "Critical Risk"
CHURN_RISK_STATUS = "RISK"
PROFIT_TYPE = "PROFIT"
TOP_CRITICAL_MERCHANTS = 5

WELCOME_MESSAGE = (
    "Hello! Welcome to SMIRE (Smart Merchant Insight & Recommendation Engine).\n\n"
    "I can help you get insight into how your merchants are performing:\n"
    "- total TPV and TPT for a month, pillar, product type or merchant\n"
    "- month-over-month growth between two months\n"
    "- product mix and pillar breakdowns\n"
    "- churn risk analysis and churn candidates\n\n"
    "Ask a question to get started. Months look like 'Oct-24' (or '2024-10')."
)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    method: str
    description: str


TOOL_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        "get_welcome_message",
        "welcome_message",
        "Return the greeting shown when the user says hello or asks for help.",
    ),
    ToolSpec(
        "get_summary",
        "summary",
        "Total TPV and TPT for a month (latest when omitted); "
        "filters: pillar, product_type, brand_id, merchant_name.",
    ),
    ToolSpec(
        "get_monthly_growth",
        "monthly_growth",
        "TPV/TPT growth percentage from month_a to month_b; "
        "filters: pillar, product_type, brand_id, merchant_name.",
    ),
    ToolSpec(
        "get_product_mix",
        "product_mix",
        "TPV and TPT contribution of each product_type in a month; "
        "filters: pillar, brand_id, merchant_name.",
    ),
    ToolSpec(
        "get_data_by_pillar",
        "data_by_pillar",
        "TPV and TPT per pillar in a month; filters: brand_id, product_type, merchant_name.",
    ),
    ToolSpec(
        "get_data_by_product_type",
        "data_by_product_type",
        "TPV and TPT per product_type in a month; filters: pillar, brand_id, merchant_name.",
    ),
    ToolSpec(
        "get_churn_prediction_analysis",
        "churn_prediction_analysis",
        "Merchant churn potential for a month: count per churn category and "
        "the merchants at critical risk.",
    ),
    ToolSpec(
        "get_churn_candidates",
        "churn_candidates",
        "brand_ids of merchants flagged as churn risk; filters: month, product.",
    ),
    ToolSpec(
        "calculate_profit_total",
        "profit_total",
        "Total TPV of transactions labelled as profit; filters: month, product_type, brand_id.",
    ),
)


class PaymentsAnalyticsTools:
    """Filter, aggregate and shape answers over an injected record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    def _resolve(self, month: Optional[str]) -> str:
        if is_blank(month):
            return self.store.latest_month
        return resolve_month(month, self.store)

    def _select(self, criteria: FilterCriteria) -> list[Mapping[str, Any]]:
        return filter_records(self.store, criteria)

    @staticmethod
    def _log(tool: str, criteria: FilterCriteria, rows: Sequence[Mapping[str, Any]]) -> None:
        logger.info("tool_invoked", tool=tool, filters=criteria.active(), matched=len(rows))

    def welcome_message(self) -> str:
        return WELCOME_MESSAGE

    def summary(
        self,
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        criteria = FilterCriteria(
            month=self._resolve(month),
            pillar=pillar,
            product_type=product_type,
            brand_id=brand_id,
            merchant_name=merchant_name,
        )
        rows = self._select(criteria)
        self._log("summary", criteria, rows)
        return {
            "metric": "Summary",
            "filters": criteria.as_dict(),
            "Total_TPV": sum_field(rows, "tpv"),
            "Total_TPT": sum_field(rows, "tpt"),
        }

    def monthly_growth(
        self,
        month_a: Optional[str],
        month_b: Optional[str],
        pillar: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        for label, value in (("month_a", month_a), ("month_b", month_b)):
            if is_blank(value):
                raise InvalidArgumentError(f"{label} is required")
            validate_month_format(value)

        base = FilterCriteria(
            pillar=pillar,
            product_type=product_type,
            brand_id=brand_id,
            merchant_name=merchant_name,
        )
        rows_a = self._select(replace(base, month=month_a))
        rows_b = self._select(replace(base, month=month_b))
        self._log("monthly_growth", base, rows_a + rows_b)

        tpv_a, tpv_b = sum_field(rows_a, "tpv"), sum_field(rows_b, "tpv")
        tpt_a, tpt_b = sum_field(rows_a, "tpt"), sum_field(rows_b, "tpt")
        filters = {"month_a": month_a, "month_b": month_b, **_dimensions(base)}
        return {
            "metric": f"Monthly Growth ({month_a} -> {month_b})",
            "filters": filters,
            "TPV_A": tpv_a,
            "TPV_B": tpv_b,
            "TpvGrowthPct": growth_percentage(tpv_a, tpv_b),
            "TPT_A": tpt_a,
            "TPT_B": tpt_b,
            "TptGrowthPct": growth_percentage(tpt_a, tpt_b),
        }

    def product_mix(
        self,
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        criteria = FilterCriteria(
            month=self._resolve(month),
            pillar=pillar,
            brand_id=brand_id,
            merchant_name=merchant_name,
        )
        rows = self._select(criteria)
        self._log("product_mix", criteria, rows)

        total_tpv = sum_field(rows, "tpv")
        total_tpt = sum_field(rows, "tpt")
        mix: dict[str, dict[str, Any]] = {}
        for product, values in tpv_tpt_breakdown(group_by(rows, "product_type")).items():
            mix[product] = {
                **values,
                "TPV_Contribution_Pct": percentage_of(values["TPV_Value"], total_tpv),
                "TPT_Contribution_Pct": percentage_of(values["TPT_Value"], total_tpt),
            }
        return {
            "metric": "Product Mix Contribution",
            "filters": _without(criteria, "product_type"),
            "Total_TPV_All": total_tpv,
            "Total_TPT_All": total_tpt,
            "Product_Mix": mix,
        }

    def data_by_pillar(
        self,
        month: Optional[str] = None,
        brand_id: Optional[str] = None,
        product_type: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        criteria = FilterCriteria(
            month=self._resolve(month),
            brand_id=brand_id,
            product_type=product_type,
            merchant_name=merchant_name,
        )
        rows = self._select(criteria)
        self._log("data_by_pillar", criteria, rows)
        return {
            "metric": "Data By Pillar",
            "filters": _without(criteria, "pillar"),
            "Data_By_Pillar": tpv_tpt_breakdown(group_by(rows, "pillar")),
        }

    def data_by_product_type(
        self,
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        criteria = FilterCriteria(
            month=self._resolve(month),
            pillar=pillar,
            brand_id=brand_id,
            merchant_name=merchant_name,
        )
        rows = self._select(criteria)
        self._log("data_by_product_type", criteria, rows)
        return {
            "metric": "Data By Product Type",
            "filters": _without(criteria, "product_type"),
            "Data_By_Product_Type": tpv_tpt_breakdown(group_by(rows, "product_type")),
        }

    def churn_prediction_analysis(self, month: Optional[str] = None) -> dict[str, Any]:
        criteria = FilterCriteria(month=self._resolve(month))
        rows = self._select(criteria)
        self._log("churn_prediction_analysis", criteria, rows)

        critical = [row for row in rows if row.get("Churn_Prediction") == CRITICAL_RISK]
        merchants = [
            {"brand_id": brand_id, "Churn_Prediction": CRITICAL_RISK}
            for brand_id in distinct_values(critical, "brand_id")[:TOP_CRITICAL_MERCHANTS]
        ]
        return {
            "metric": "Merchant Churn Potential Analysis",
            "filters": {"month": criteria.month},
            "Total_Merchant_Count": count_distinct(rows, "brand_id"),
            "Summary": tally(rows, "Churn_Prediction"),
            "Potentially_Churning_Merchants": merchants,
        }

    def churn_candidates(
        self,
        month: Optional[str] = None,
        product: Optional[str] = None,
    ) -> dict[str, Any]:
        # "product" is the product_type dimension under its older argument name.
        criteria = FilterCriteria(month=self._resolve(month), product_type=product)
        rows = self._select(criteria)
        self._log("churn_candidates", criteria, rows)

        at_risk = [
            row
            for row in rows
            if str(row.get("Churn_Status") or "").strip().upper() == CHURN_RISK_STATUS
        ]
        brand_ids = distinct_values(at_risk, "brand_id")
        return {
            "metric": "Churn Candidates",
            "filters": {"month": criteria.month, "product": product},
            "total_candidates": len(brand_ids),
            "brand_ids": brand_ids,
        }

    def profit_total(
        self,
        month: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
    ) -> dict[str, Any]:
        criteria = FilterCriteria(
            month=self._resolve(month),
            product_type=product_type,
            brand_id=brand_id,
        )
        rows = self._select(criteria)
        self._log("profit_total", criteria, rows)

        profit_rows = [
            row
            for row in rows
            if str(row.get("Transaction_Type") or "").strip().upper() == PROFIT_TYPE
        ]
        return {
            "metric": "Profit TPV",
            "filters": {"month": criteria.month, "product_type": product_type, "brand_id": brand_id},
            "grand_total": sum_field(profit_rows, "tpv"),
        }

    def call(self, tool_name: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """Dispatch a catalog tool by its agent-facing name."""
        spec = find_tool(tool_name)
        method = getattr(self, spec.method)
        kwargs = dict(arguments or {})
        try:
            signature = inspect.signature(method)
            unexpected = sorted(set(kwargs) - set(signature.parameters))
            if unexpected:
                raise InvalidArgumentError(
                    f"{spec.name} does not accept: {', '.join(unexpected)}"
                )
            try:
                signature.bind(**kwargs)
            except TypeError as exc:
                raise InvalidArgumentError(f"{spec.name}: {exc}") from exc
            return method(**kwargs)
        except InvalidArgumentError as exc:
            logger.warning("tool_rejected", tool=spec.name, error=str(exc))
            raise


def find_tool(tool_name: str) -> ToolSpec:
    for spec in TOOL_CATALOG:
        if tool_name in (spec.name, spec.method):
            return spec
    raise UnknownToolError(f"Unknown tool: {tool_name}")


def _dimensions(criteria: FilterCriteria) -> dict[str, Optional[str]]:
    return _without(criteria, "month")


def _without(criteria: FilterCriteria, field: str) -> dict[str, Optional[str]]:
    return {name: value for name, value in criteria.as_dict().items() if name != field}
