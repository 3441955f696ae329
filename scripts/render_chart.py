# stdlib
import argparse
from pathlib import Path
# projectlib
from turnip_chart.config.env import CHART_WIDTH, CHART_OUTPUT_DIR
from turnip_chart.data.loaders import load_possibilities, parse_prices
from turnip_chart.geometry.transform import GeometryTransform
from turnip_chart.visualization.chart import ChartPlot

def parse_args() -> argparse.Namespace:
    """Parse input arguments for chart rendering."""
    parser = argparse.ArgumentParser(
        description="Render a price forecast chart to PNG",
    )
    parser.add_argument(
        "--possibilities",
        type=Path,
        required=True,
        help="JSON array of possibility records, baseline first.",
    )
    parser.add_argument(
        "--prices",
        type=str,
        default="",
        help=(
            "Observed prices, comma separated, Sunday first. Leave "
            "entries empty for slots not observed yet."
        ),
    )
    parser.add_argument(
        "--width",
        type=float,
        default=CHART_WIDTH,
        help="Pixel width of the chart.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=CHART_OUTPUT_DIR,
        help="PNG file to write, or a directory to write chart.png into.",
    )
    parser.add_argument(
        "--verbosity",
        type=int,
        default=1,
        choices=[0, 1, 2],
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--write_log",
        action="store_true",
        help="Append log messages to log.txt instead of printing.",
    )
    return parser.parse_args()

def main() -> None:
    """
    Entry point for rendering a chart from the command line.

    Loads the predictor output and the observed prices, computes the
    chart geometry and writes the rendered chart.
    """
    args = parse_args()
    transform = GeometryTransform(
        verbosity=args.verbosity, write_log=args.write_log
    )
    geometry = transform.transform(
        parse_prices(args.prices),
        load_possibilities(args.possibilities),
        width=args.width,
    )
    address = ChartPlot().save(geometry, args.output)
    transform.log(f"Saved chart to: {address}", verbosity=1)

if __name__=="__main__":
    main()
