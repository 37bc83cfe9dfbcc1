"""RuneMetrics profile provider (guest activity)."""

from clanbingo.providers.runemetrics.client import RuneMetricsClient
from clanbingo.providers.runemetrics.provider import RuneMetricsProvider, parse_runemetrics_date

__all__ = ["RuneMetricsClient", "RuneMetricsProvider", "parse_runemetrics_date"]
