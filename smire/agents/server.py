"""MCP server that publishes the payments analytics tools to agent runtimes."""

from __future__ import annotations

from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from smire.agents.tools import TOOL_CATALOG, PaymentsAnalyticsTools
from smire.common.settings import Settings
from smire.data.store import RecordStore
from smire.observability.logging import configure_logging, get_logger

logger = get_logger("server")

INSTRUCTIONS = """
SMIRE payments analytics tools.

Every metric tool works on one month of merchant data. Months are written
'Oct-24' (Mon-YY) or '2024-10' (YYYY-MM); when a month is omitted the latest
month in the dataset is used. Filters are exact, case-insensitive matches and
can be combined. Answers are JSON with a 'metric', the 'filters' applied and
the computed values. TPV is total payment value, TPT total payment transactions.
"""

_DESCRIPTIONS = {spec.method: spec.description for spec in TOOL_CATALOG}
_NAMES = {spec.method: spec.name for spec in TOOL_CATALOG}


def build_server(tools: PaymentsAnalyticsTools, settings: Settings | None = None) -> FastMCP:
    settings = settings or Settings()
    app = FastMCP(
        settings.server_name,
        instructions=INSTRUCTIONS,
        host=settings.host,
        port=settings.port,
    )

    def register(method: str):
        return app.tool(name=_NAMES[method], description=_DESCRIPTIONS[method])

    @register("welcome_message")
    def get_welcome_message() -> str:
        return tools.welcome_message()

    @register("summary")
    def get_summary(
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.summary(month, pillar, product_type, brand_id, merchant_name)

    @register("monthly_growth")
    def get_monthly_growth(
        month_a: str,
        month_b: str,
        pillar: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.monthly_growth(month_a, month_b, pillar, product_type, brand_id, merchant_name)

    @register("product_mix")
    def get_product_mix(
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.product_mix(month, pillar, brand_id, merchant_name)

    @register("data_by_pillar")
    def get_data_by_pillar(
        month: Optional[str] = None,
        brand_id: Optional[str] = None,
        product_type: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.data_by_pillar(month, brand_id, product_type, merchant_name)

    @register("data_by_product_type")
    def get_data_by_product_type(
        month: Optional[str] = None,
        pillar: Optional[str] = None,
        brand_id: Optional[str] = None,
        merchant_name: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.data_by_product_type(month, pillar, brand_id, merchant_name)

    @register("churn_prediction_analysis")
    def get_churn_prediction_analysis(month: Optional[str] = None) -> dict[str, Any]:
        return tools.churn_prediction_analysis(month)

    @register("churn_candidates")
    def get_churn_candidates(
        month: Optional[str] = None,
        product: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.churn_candidates(month, product)

    @register("profit_total")
    def calculate_profit_total(
        month: Optional[str] = None,
        product_type: Optional[str] = None,
        brand_id: Optional[str] = None,
    ) -> dict[str, Any]:
        return tools.profit_total(month, product_type, brand_id)

    return app


def serve(settings: Settings) -> None:
    configure_logging(settings.log_level, settings.log_json)
    store = RecordStore.from_path(settings.data_path)
    app = build_server(PaymentsAnalyticsTools(store), settings)
    logger.info(
        "mcp_server_starting",
        server=settings.server_name,
        transport=settings.transport,
        rows=len(store),
        latest_month=store.latest_month,
    )
    app.run(transport=settings.transport)
