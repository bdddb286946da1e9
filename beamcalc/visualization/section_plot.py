"""
Beam cross-section and strain diagrams using Plotly.

Depths are measured downward from the compression face (y axis reversed).
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go

from ..design.models import BeamInput, BeamResults


def _bar_count(As: float) -> int:
    """Number of bar symbols drawn for a steel area (2 to 5)."""
    if not np.isfinite(As):
        return 2
    return int(min(5, max(2, np.floor(As / 0.5 + 0.5))))


def _within_section(depth: float, h: float) -> bool:
    return bool(np.isfinite(depth)) and 0 < depth <= h


def _add_dimension(fig: go.Figure, x0: float, y0: float, x1: float, y1: float, text: str, **label):
    """Dimension line with end ticks and a label at its midpoint."""
    line = dict(color='#2d3748', width=1)
    fig.add_shape(type='line', x0=x0, y0=y0, x1=x1, y1=y1, line=line)

    tick = 0.02 * max(abs(x1 - x0), abs(y1 - y0), 1.0)
    for x, y in [(x0, y0), (x1, y1)]:
        if x0 == x1:
            fig.add_shape(type='line', x0=x - tick, y0=y, x1=x + tick, y1=y, line=line)
        else:
            fig.add_shape(type='line', x0=x, y0=y - tick, x1=x, y1=y + tick, line=line)

    fig.add_annotation(x=(x0 + x1) / 2, y=(y0 + y1) / 2, text=text, showarrow=False,
                       bgcolor='white', font=dict(size=11), **label)


def plot_cross_section(beam: BeamInput, results: Optional[BeamResults] = None) -> go.Figure:
    """
    Plot the scaled cross-section with reinforcement and stress block.

    The stress block is drawn only for 0 < a ≤ h and the neutral axis only
    for 0 < c ≤ h; other values (including inf/nan) are skipped.

    Args:
        beam: Section geometry and reinforcement
        results: Analysis results, or None to draw geometry only

    Returns:
        plotly Figure object

    Example:
        >>> fig = plot_cross_section(beam, analyze_beam(beam))
        >>> st.plotly_chart(fig, use_container_width=True)
    """
    b, h, d = beam.b, beam.h, beam.d
    fig = go.Figure()

    # Concrete outline
    fig.add_trace(go.Scatter(
        x=[0, b, b, 0, 0],
        y=[0, 0, h, h, 0],
        mode='lines',
        fill='toself',
        fillcolor='rgba(226, 232, 240, 0.8)',
        line=dict(color='#4a5568', width=2),
        name='Concrete',
        hoverinfo='skip'
    ))

    if results is not None and _within_section(results.a, h):
        fig.add_trace(go.Scatter(
            x=[0, b, b, 0, 0],
            y=[0, 0, results.a, results.a, 0],
            mode='lines',
            fill='toself',
            fillcolor='rgba(245, 101, 101, 0.6)',
            line=dict(color='#e53e3e', width=1, dash='dash'),
            name=f'Stress Block (a = {results.a:.2f}")',
            hoverinfo='skip'
        ))
        fig.add_annotation(x=b / 2, y=results.a / 2, text=f'a = {results.a:.2f}"', showarrow=False,
                           font=dict(color='#9b2c2c', size=11))

    if results is not None and _within_section(results.c, h):
        fig.add_trace(go.Scatter(
            x=[-0.1 * b, 1.1 * b],
            y=[results.c, results.c],
            mode='lines',
            line=dict(color='#805ad5', width=2, dash='dash'),
            name=f'Neutral Axis (c = {results.c:.2f}")'
        ))

    # Effective depth line
    fig.add_trace(go.Scatter(
        x=[0, b],
        y=[d, d],
        mode='lines',
        line=dict(color='#38a169', width=1, dash='dot'),
        name=f'd = {d:g}"',
        hoverinfo='skip'
    ))

    # Tension bars
    n_bars = _bar_count(beam.As)
    edge = 0.15 * b
    fig.add_trace(go.Scatter(
        x=np.linspace(edge, b - edge, n_bars).tolist(),
        y=[d] * n_bars,
        mode='markers',
        marker=dict(size=14, color='#2b6cb0', line=dict(color='#1a365d', width=1.5)),
        name=f'As = {beam.As:g} sq.in.'
    ))

    if beam.As_prime > 0:
        fig.add_trace(go.Scatter(
            x=[edge, b - edge],
            y=[beam.d_prime, beam.d_prime],
            mode='markers',
            marker=dict(size=10, color='#2b6cb0', line=dict(color='#1a365d', width=1)),
            name=f"A's = {beam.As_prime:g} sq.in."
        ))

    # Dimensions: b above the section, h on the left, d on the right
    offset = 0.1 * max(b, h)
    _add_dimension(fig, 0, -offset, b, -offset, f'b = {b:g}"')
    _add_dimension(fig, -offset - 0.1 * b, 0, -offset - 0.1 * b, h, f'h = {h:g}"', textangle=-90)
    _add_dimension(fig, b + offset, 0, b + offset, d, f'd = {d:g}"', textangle=-90)

    fig.update_layout(
        title=f'Cross-Section {b:g}" x {h:g}"',
        xaxis=dict(title='Width (in)', scaleanchor='y', scaleratio=1, zeroline=False),
        yaxis=dict(title='Depth (in)', autorange='reversed', zeroline=False),
        showlegend=True,
        width=450,
        height=600
    )

    return fig


def plot_strain_diagram(beam: BeamInput, results: BeamResults) -> go.Figure:
    """
    Plot the linear strain distribution at ultimate.

    Compression strain εcu at the top face, zero at the neutral axis and εt
    at the tension steel. Returns an annotated empty figure when c or εt is
    not finite.

    Args:
        beam: Section geometry
        results: Analysis results

    Returns:
        plotly Figure object
    """
    fig = go.Figure()

    if not (np.isfinite(results.c) and np.isfinite(results.epsilon_t)):
        fig.add_annotation(
            text="Strain diagram unavailable for this section.",
            xref="paper", yref="paper",
            x=0.5, y=0.5, showarrow=False,
            font=dict(size=16)
        )
        return fig

    # Compression negative, tension positive
    fig.add_trace(go.Scatter(
        x=[-results.epsilon_cu, 0.0, results.epsilon_t],
        y=[0.0, results.c, beam.d],
        mode='lines+markers',
        fill='tozerox',
        line=dict(color='#4299e1', width=2),
        name='Strain',
        hovertemplate='ε = %{x:.5f}<br>depth = %{y:.2f} in<extra></extra>'
    ))

    if _within_section(results.c, beam.h):
        fig.add_trace(go.Scatter(
            x=[-results.epsilon_cu, max(results.epsilon_t, 0.0)],
            y=[results.c, results.c],
            mode='lines',
            line=dict(color='#805ad5', width=1, dash='dash'),
            name='Neutral Axis'
        ))

    fig.add_annotation(x=-results.epsilon_cu, y=0.0, text=f"εcu = {results.epsilon_cu}", showarrow=False,
                       yshift=12)
    fig.add_annotation(x=results.epsilon_t, y=beam.d, text=f"εt = {results.epsilon_t:.5f}", showarrow=False,
                       yshift=-12)

    fig.update_layout(
        title='Strain Distribution',
        xaxis=dict(title='Strain', zeroline=True, zerolinewidth=2, zerolinecolor='gray'),
        yaxis=dict(title='Depth (in)', autorange='reversed'),
        showlegend=False,
        width=350,
        height=600
    )

    return fig
