import plotly.graph_objects as go
from typing import Optional
from tileyield.core.config import PlotTheme, DEFAULT_THEME

def apply_panel_theme(fig: go.Figure, title: str = "", height: int = 500, theme_config: Optional[PlotTheme] = None) -> go.Figure:
    """
    Applies the standard engineering styling to any figure.
    """
    theme = theme_config or DEFAULT_THEME

    fig.update_layout(
        title=dict(text=title, font=dict(color=theme.text_color, size=18), x=0.5, xanchor='center'),
        plot_bgcolor=theme.plot_area_color,
        paper_bgcolor=theme.background_color,
        height=height,
        font=dict(color=theme.text_color),
        xaxis=dict(
            showgrid=False, zeroline=False, showline=True,
            linewidth=2, linecolor=theme.axis_color, mirror=True,
            title_font=dict(color=theme.text_color), tickfont=dict(color=theme.text_color)
        ),
        yaxis=dict(
            showgrid=False, zeroline=False, showline=True,
            linewidth=2, linecolor=theme.axis_color, mirror=True,
            title_font=dict(color=theme.text_color), tickfont=dict(color=theme.text_color)
        ),
        legend=dict(
            title_font=dict(color=theme.text_color), font=dict(color=theme.text_color),
            bgcolor=theme.background_color, bordercolor=theme.axis_color, borderwidth=1,
            x=1.02, y=1, xanchor='left', yanchor='top'
        ),
        hoverlabel=dict(bgcolor="#4A4A4A", font_size=14, font_family="sans-serif")
    )
    return fig

def hex_to_rgba(hex_color: str, opacity: float = 0.5) -> str:
    """Helper to convert hex color to rgba string for Plotly."""
    try:
        hex_color = hex_color.lstrip('#')
        if len(hex_color) == 6:
            r = int(hex_color[0:2], 16)
            g = int(hex_color[2:4], 16)
            b = int(hex_color[4:6], 16)
            return f'rgba({r}, {g}, {b}, {opacity})'
        return f'rgba(128, 128, 128, {opacity})'
    except ValueError:
        return f'rgba(128, 128, 128, {opacity})' # Fallback grey
