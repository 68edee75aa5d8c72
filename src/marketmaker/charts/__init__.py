"""Text depth charts of order books for human monitoring."""

from marketmaker.charts.depth import (
    DepthChartData,
    plot_depth,
    prepare_depth_chart,
    render_depth_chart,
)
from marketmaker.charts.outliers import FilteredSide, filter_outliers

__all__ = [
    "DepthChartData",
    "FilteredSide",
    "filter_outliers",
    "plot_depth",
    "prepare_depth_chart",
    "render_depth_chart",
]
