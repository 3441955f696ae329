# stdlib
from pathlib import Path
from typing import Optional, Tuple
# thirdpartylib
import matplotlib as mpl
import matplotlib.pyplot as plt
from cycler import cycler
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Patch, Rectangle
# projectlib
from turnip_chart.config.env import CHART_FONT_FAMILY, CHART_OUTPUT_DIR
from turnip_chart.data.schemas import DRAW_ORDER
from turnip_chart.geometry.transform import ChartGeometry
from turnip_chart.utils.paths import validate_address
from turnip_chart.utils.typing import Address
from turnip_chart.visualization.primitives import (
    BAR_STROKE,
    LINE_STROKE,
    bar_rects,
    extent_segments,
    input_segments,
)

# Figure resolution; the chart itself is laid out in pixels
DPI = 100
# File written when the output address is a directory
CHART_FILENAME = "chart.png"
Y_TICKS = 5


def use_chart_theme(font_family: str = CHART_FONT_FAMILY) -> None:
    """
    Apply the chart's light theme to Matplotlib.

    Updates the global rcParams with the configured font family, a white
    background without axis frames, and a color cycle matching the
    pattern palette in draw order.

    Parameters
    ----------
    font_family : str, default ``CHART_FONT_FAMILY``
        Comma-separated font family preference list.
    """
    mpl.rcParams.update({
        "font.family": [f.strip() for f in font_family.split(",")],
        "figure.facecolor": "#ffffff",
        "axes.facecolor": "#ffffff",
        "text.color": "#000000",
        "legend.frameon": False,
        "legend.fontsize": 9,
        "axes.prop_cycle": cycler(
            color=[pattern.color for pattern in DRAW_ORDER]
        ),
    })

def _points(pixels: float) -> float:
    """Convert a pixel stroke width to Matplotlib points."""
    return pixels * 72 / DPI


class ChartPlot(object):
    """
    Draw a ``ChartGeometry`` with Matplotlib.

    The axes are set up in pixel space with the origin at the top-left
    corner, matching the coordinates produced by the scales, so every
    primitive is drawn exactly where the geometry puts it.
    """

    def __init__(self) -> None:
        use_chart_theme()

    def _new_axes(self, geometry: ChartGeometry) -> Tuple[Figure, Axes]:
        layout = geometry.layout
        fig = plt.figure(  # pyright: ignore[reportUnknownMemberType]
            figsize=(layout.width / DPI, layout.height / DPI), dpi=DPI
        )
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        return fig, ax

    def _draw_axes(self, geometry: ChartGeometry, ax: Axes) -> None:
        layout, x, y = geometry.layout, geometry.x, geometry.y
        margin = layout.margin
        # Slot labels under each band, rotated to fit
        baseline = layout.height - margin["bottom"]
        for slot, label in enumerate(geometry.labels):
            ax.text(  # pyright: ignore[reportUnknownMemberType]
                x.center(slot),
                baseline + 4,
                label,
                rotation=45,
                ha="right",
                va="top",
                fontsize=8,
            )
        # Price ticks with faint gridlines across the plot
        for tick in y.ticks(Y_TICKS):
            row = y(tick)
            ax.text(  # pyright: ignore[reportUnknownMemberType]
                margin["left"] - 4,
                row,
                f"{tick:g}",
                ha="right",
                va="center",
                fontsize=8,
            )
            ax.hlines(  # pyright: ignore[reportUnknownMemberType]
                row,
                margin["left"],
                layout.width - margin["right"],
                colors=LINE_STROKE,
                alpha=0.2,
                linewidth=_points(1),
            )

    def _draw_bars(self, geometry: ChartGeometry, ax: Axes) -> None:
        for rect in bar_rects(geometry):
            ax.add_patch(
                Rectangle(
                    (rect.x, rect.y),
                    rect.width,
                    rect.height,
                    facecolor=rect.color,
                    edgecolor=BAR_STROKE,
                    linewidth=_points(2),
                )
            )

    def _draw_lines(self, geometry: ChartGeometry, ax: Axes) -> None:
        linewidth = _points(geometry.layout.line_width)
        for seg in extent_segments(geometry) + input_segments(geometry):
            ax.hlines(  # pyright: ignore[reportUnknownMemberType]
                seg.y,
                seg.x1,
                seg.x2,
                colors=LINE_STROKE,
                linewidth=linewidth,
            )

    def _draw_legend(self, geometry: ChartGeometry, ax: Axes) -> None:
        if not geometry.legend:
            return
        handles = [
            Patch(
                facecolor=entry.color,
                edgecolor=BAR_STROKE,
                label=f"{entry.label} {entry.description}",
            )
            for entry in geometry.legend
        ]
        ax.legend(  # pyright: ignore[reportUnknownMemberType]
            handles=handles, loc="upper right"
        )

    def plot(
            self,
            geometry: ChartGeometry,
            ax: Optional[Axes] = None,
        ) -> Axes:
        """
        Draw the chart, replacing anything previously drawn on ``ax``.

        Parameters
        ----------
        geometry : ChartGeometry
            Output of the geometry transform.
        ax : matplotlib.axes.Axes, optional
            Axes to draw on. If None, a new figure sized to the layout
            is created.

        Returns
        -------
        matplotlib.axes.Axes
            The Axes object containing the rendered chart.
        """
        if ax is None:
            _, ax = self._new_axes(geometry)
        else:
            ax.clear()
        layout = geometry.layout
        ax.set_xlim(0, layout.width)
        # Pixel rows grow downwards
        ax.set_ylim(layout.height, 0)
        ax.set_axis_off()
        self._draw_axes(geometry, ax)
        self._draw_bars(geometry, ax)
        self._draw_lines(geometry, ax)
        self._draw_legend(geometry, ax)
        return ax

    def save(
            self,
            geometry: ChartGeometry,
            output: Address = CHART_OUTPUT_DIR,
        ) -> Path:
        """
        Render the chart to a PNG file.

        Parameters
        ----------
        geometry : ChartGeometry
            Output of the geometry transform.
        output : Address, default ``CHART_OUTPUT_DIR``
            Target file, or a directory to write ``chart.png`` into.
            An existing file is not overwritten; a timestamped name is
            used instead.

        Returns
        -------
        pathlib.Path
            The file written.

        Raises
        ------
        NotADirectoryError
            If the target directory does not exist.
        """
        address = validate_address(
            output, extension=".png", mode="w", filename=CHART_FILENAME
        )
        ax = self.plot(geometry)
        fig = ax.get_figure()
        assert fig is not None
        try:
            fig.savefig(  # pyright: ignore[reportUnknownMemberType]
                address, dpi=DPI
            )
        finally:
            plt.close(fig)  # pyright: ignore[reportArgumentType]
        return address
