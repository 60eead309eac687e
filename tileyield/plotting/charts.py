import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional
from tileyield.core.config import DEFAULT_CONFIG, DEVICE_CLASS_COLORS, PlotTheme, WaferConfig
from tileyield.enums import DeviceClass
from tileyield.analytics.yield_analysis import count_distribution
from tileyield.plotting.utils import apply_panel_theme

def create_distribution_traces(results_df: pd.DataFrame, config: WaferConfig = DEFAULT_CONFIG) -> List[go.Bar]:
    """One bar trace per device class: wafers per good-chip count."""
    if results_df.empty: return []

    distribution = count_distribution(results_df, config)
    traces = []
    for dc in DeviceClass:
        # Counts above the class bound cannot occur; leave them off the axis
        counts = distribution[dc.value].iloc[:config.max_chips(dc) + 1]
        traces.append(go.Bar(
            name=f"{dc.value} ({config.segments_for(dc)} seg)",
            x=counts.index.tolist(),
            y=counts.values.tolist(),
            marker_color=DEVICE_CLASS_COLORS.get(dc, '#4682B4'),
            hovertemplate=f"{dc.value}<br>Good chips: %{{x}}<br>Wafers: %{{y}}<extra></extra>"
        ))
    return traces

def create_distribution_figure(results_df: pd.DataFrame, config: WaferConfig = DEFAULT_CONFIG, theme_config: Optional[PlotTheme] = None) -> go.Figure:
    """
    Grouped bar chart of how many wafers yielded 0, 1, 2, ... good chips per class.
    """
    fig = go.Figure(data=create_distribution_traces(results_df, config))
    if not fig.data:
        return fig

    apply_panel_theme(fig, f"Good Chips per Wafer ({len(results_df)} Wafers)", theme_config=theme_config)
    fig.update_layout(
        barmode='group',
        xaxis=dict(title="Good Chips on Wafer", dtick=1),
        yaxis=dict(title="Wafers"),
    )
    return fig

def create_trend_figure(results_df: pd.DataFrame, theme_config: Optional[PlotTheme] = None) -> go.Figure:
    """Good-chip counts per wafer in trial order."""
    fig = go.Figure()
    if results_df.empty:
        return fig

    for dc in DeviceClass:
        fig.add_trace(go.Scatter(
            x=results_df['Wafer'], y=results_df[dc.value],
            mode='lines+markers', name=dc.value,
            line=dict(color=DEVICE_CLASS_COLORS.get(dc, '#4682B4'))
        ))

    apply_panel_theme(fig, "Good Chips by Wafer", theme_config=theme_config)
    fig.update_layout(xaxis=dict(title="Wafer"), yaxis=dict(title="Good Chips", dtick=1))
    return fig
