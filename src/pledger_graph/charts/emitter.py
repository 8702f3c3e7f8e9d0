"""Chart.js data serialization and HTML page generation."""
import html
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from string import Template
from typing import Any, Dict, Optional

from pledger_graph.ledger.models import ChartData, Dataset
from pledger_graph.utils.logger import get_logger
from pledger_graph.utils.exceptions import TemplateError, ValidationError

logger = get_logger()

DEFAULT_TEMPLATE_PATH = Path(__file__).parent.parent / "resources" / "chart.html"


def to_chart_json(chart: ChartData) -> Dict[str, Any]:
    """Convert ChartData to the Chart.js `data` object."""
    return {
        "labels": list(chart.categories),
        "datasets": [
            {
                "label": dataset.label,
                # Chart.js wants plain numbers
                "data": [float(value) for value in dataset.values]
            }
            for dataset in chart.datasets
        ]
    }


def from_chart_json(payload: Dict[str, Any]) -> ChartData:
    """Parse a Chart.js `data` object back into ChartData."""
    try:
        categories = tuple(str(label) for label in payload["labels"])
        datasets = tuple(
            Dataset(
                label=str(dataset["label"]),
                values=tuple(Decimal(str(value)) for value in dataset["data"])
            )
            for dataset in payload["datasets"]
        )
    except (KeyError, TypeError, InvalidOperation) as e:
        raise ValidationError(f"Malformed chart data: {e}")

    for dataset in datasets:
        if len(dataset.values) != len(categories):
            raise ValidationError(
                f"Dataset {dataset.label} has {len(dataset.values)} values "
                f"for {len(categories)} labels"
            )

    return ChartData(categories=categories, datasets=datasets)


def dumps_charts(net: ChartData, tags: ChartData, indent: Optional[int] = 2) -> str:
    """Serialize both charts as one JSON document."""
    return json.dumps(
        {"net": to_chart_json(net), "tags": to_chart_json(tags)},
        indent=indent,
        ensure_ascii=False
    )


def _script_json(chart: ChartData) -> str:
    # Keep a tag like "</script>" from closing the script element
    return json.dumps(to_chart_json(chart), ensure_ascii=False).replace("</", "<\\/")


class ChartEmitter:
    """Renders charts into the static HTML page."""

    def __init__(self, template_path: Optional[Path] = None, title: str = "Ledger overview"):
        self.template_path = Path(template_path) if template_path else DEFAULT_TEMPLATE_PATH
        self.title = title
        self._template: Optional[Template] = None

    @property
    def template(self) -> Template:
        # Read on first use; JSON and summary runs never need it
        if self._template is None:
            self._template = self._load_template(self.template_path)
        return self._template

    @staticmethod
    def _load_template(template_path: Path) -> Template:
        try:
            with open(template_path, "r", encoding="utf-8") as f:
                return Template(f.read())
        except OSError as e:
            raise TemplateError(f"Failed to load chart template {template_path}: {e}")

    def render_html(self, net: ChartData, tags: ChartData) -> str:
        """Fill the template with both charts."""
        try:
            return self.template.substitute(
                title=html.escape(self.title),
                net_data=_script_json(net),
                tag_data=_script_json(tags)
            )
        except (KeyError, ValueError) as e:
            raise TemplateError(f"Bad placeholder in chart template {self.template_path}: {e}")

    def write(self, output_path: Path, page: str) -> None:
        """Write the rendered page to disk."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(page)
        logger.info(f"Wrote charts to {output_path}")
