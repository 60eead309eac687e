import plotly.graph_objects as go
import numpy as np
from typing import Optional
from tileyield.core.config import PlotTheme, DEFAULT_THEME
from tileyield.core.models import WaferMap
from tileyield.plotting.utils import apply_panel_theme, hex_to_rgba

def create_wafer_map_figure(
    wafer: WaferMap,
    window_mask: Optional[np.ndarray] = None,
    segments_per_chip: Optional[int] = None,
    theme_config: Optional[PlotTheme] = None
) -> go.Figure:
    """
    Heatmap of one wafer yield map: segments as rows, tiles as columns.

    With `window_mask` and `segments_per_chip`, each acceptable chip placement
    is outlined to the right of the map as a bracket spanning its segments.
    """
    theme = theme_config or DEFAULT_THEME
    z = wafer.grid.astype(int)

    hover = np.where(wafer.grid, "Functional", "Faulty")
    fig = go.Figure(go.Heatmap(
        z=z,
        x=list(range(wafer.tiles_per_segment)),
        y=list(range(wafer.num_segments)),
        zmin=0, zmax=1,
        colorscale=[[0.0, theme.faulty_color], [0.5, theme.faulty_color],
                    [0.5, theme.functional_color], [1.0, theme.functional_color]],
        showscale=False,
        text=hover,
        xgap=2, ygap=2,
        hovertemplate="Segment %{y}, Tile %{x}: %{text}<extra></extra>"
    ))

    shapes = []
    if window_mask is not None and segments_per_chip is not None:
        for offset, ok in enumerate(window_mask):
            if not ok:
                continue
            # Stagger brackets so overlapping windows stay distinguishable
            x = wafer.tiles_per_segment - 0.5 + 0.4 * (offset + 1)
            shapes.append(dict(
                type='rect', xref='x', yref='y',
                x0=x - 0.15, x1=x + 0.15,
                y0=offset - 0.45, y1=offset + segments_per_chip - 0.55,
                line=dict(color=theme.functional_color, width=2),
                fillcolor=hex_to_rgba(theme.functional_color, 0.3)
            ))

    title = f"Wafer Yield Map ({wafer.fault_count} Faulty Tiles)"
    if window_mask is not None:
        title += f", {int(np.count_nonzero(window_mask))} Good Chips"
    apply_panel_theme(fig, title, height=400, theme_config=theme_config)

    fig.update_layout(
        xaxis=dict(title="Tile", dtick=1),
        yaxis=dict(title="Segment", dtick=1, autorange='reversed'),
        shapes=shapes,
        margin=dict(l=20, r=20, t=80, b=20),
    )
    return fig
