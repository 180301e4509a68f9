"""
Factor Breakdown — bar charts of how each environmental factor feeds the HSI.
"""

import plotly.graph_objects as go

from models.hsi_model import FACTORS, limiting_factor


def _theme(dark: bool):
    bg = "#1a1a2e" if dark else "white"
    grid = "#2a2a4a" if dark else "#f0f0f0"
    font_color = "#e0e0e0" if dark else None
    return bg, grid, font_color


def build_factor_bar(hsi_result, dark: bool = False) -> go.Figure:
    """
    Horizontal bars of weighted contribution per factor, with the unweighted
    suitability in the hover. The limiting factor is drawn in red.
    """
    _bg, _grid, _font_color = _theme(dark)
    worst = limiting_factor(hsi_result)

    names, values, colors, hover = [], [], [], []
    for f in hsi_result.factors:
        fdef = FACTORS.get(f.factor)
        label = fdef.label if fdef else f.factor
        unit = fdef.unit if fdef else ""
        names.append(label)
        values.append(f.contribution * 100)
        hover.append(f"{f.raw_value:.2f} {unit} · suitability {f.suitability:.2f} · weight {f.weight:.2f}")
        if f.factor == worst:
            colors.append("#e74c3c")
        elif f.suitability > 0.7:
            colors.append("#2ecc71")
        elif f.suitability > 0.4:
            colors.append("#f1c40f")
        else:
            colors.append("#e67e22")

    fig = go.Figure(go.Bar(
        x=values,
        y=names,
        orientation="h",
        marker_color=colors,
        text=[f"{v:.0f}" for v in values],
        textposition="outside",
        customdata=hover,
        hovertemplate="<b>%{y}</b>: %{x:.1f} pts<br>%{customdata}<extra></extra>",
    ))
    fig.update_layout(
        title=f"HSI {hsi_result.total_hsi * 100:.0f}% — factor contributions",
        xaxis=dict(range=[0, 60], title="Contribution (HSI points)", gridcolor=_grid),
        yaxis=dict(autorange="reversed"),
        height=240,
        margin=dict(l=10, r=40, t=40, b=10),
        paper_bgcolor=_bg,
        plot_bgcolor=_bg,
        font=dict(family="Inter, sans-serif", size=11, color=_font_color),
    )
    return fig


def build_species_comparison_bar(comparison: dict, dark: bool = False) -> go.Figure:
    """Grouped bars of best HSI and coverage per species from compare_species()."""
    _bg, _grid, _font_color = _theme(dark)
    rows = comparison.get("species", [])

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[r["name"] for r in rows],
        y=[r["best_hsi"] * 100 for r in rows],
        name="Best HSI (%)",
        marker_color=[r["color"] for r in rows],
    ))
    fig.add_trace(go.Bar(
        x=[r["name"] for r in rows],
        y=[r["coverage"] for r in rows],
        name="High-potential coverage (%)",
        marker_color="#95a5a6",
    ))
    fig.update_layout(
        barmode="group",
        yaxis=dict(range=[0, 105], gridcolor=_grid),
        height=300,
        margin=dict(l=10, r=10, t=30, b=10),
        paper_bgcolor=_bg,
        plot_bgcolor=_bg,
        font=dict(family="Inter, sans-serif", size=11, color=_font_color),
    )
    return fig
