"""Chart output module."""
from .emitter import ChartEmitter, to_chart_json, from_chart_json, dumps_charts

__all__ = ["ChartEmitter", "to_chart_json", "from_chart_json", "dumps_charts"]
