"""
Comparison visualization.

Builds plotly figures for the series, its decomposition, ACF/PACF,
forecasts against the holdout, and residual diagnostics, and assembles
them into a standalone HTML report.
"""
import html
import json
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import plotly.utils
from plotly.subplots import make_subplots
from scipy.stats import norm
from statsmodels.tsa.seasonal import seasonal_decompose
from statsmodels.tsa.stattools import acf, pacf

from ..pipeline.engine import ComparisonResult

logger = logging.getLogger(__name__)

STRATEGY_COLORS = {
    'naive': '#8b949e',
    'holt_winters': '#1f6feb',
    'sarima': '#d29922',
}
ACTUAL_COLOR = '#3fb950'


def _apply_layout(fig: go.Figure, title: str, height: int = 450) -> go.Figure:
    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        title=title,
        hovermode='x unified',
        height=height,
        legend=dict(
            bgcolor="rgba(22, 27, 34, 0.8)",
            bordercolor="#30363d",
            borderwidth=1
        )
    )
    return fig


def _rgba(hex_color: str, alpha: float) -> str:
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f'rgba({r}, {g}, {b}, {alpha})'


def plot_series(series: pd.Series, test_start: Optional[pd.Timestamp] = None) -> go.Figure:
    """Line plot of the full series, with the holdout boundary marked."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series.index.tolist(),
        y=series.tolist(),
        mode='lines',
        name=series.name or 'value',
        line=dict(color=ACTUAL_COLOR, width=2)
    ))
    if test_start is not None:
        fig.add_vline(x=test_start, line_width=1, line_dash="dash",
                      line_color="#8b949e")
    return _apply_layout(fig, f"Monthly series: {series.name}")


def plot_decomposition(
    series: pd.Series,
    seasonal_period: int = 12,
    model: str = 'additive'
) -> go.Figure:
    """Observed, trend, seasonal and residual components stacked vertically."""
    decomposition = seasonal_decompose(series, model=model, period=seasonal_period)
    components = [
        ('Observed', decomposition.observed),
        ('Trend', decomposition.trend),
        ('Seasonal', decomposition.seasonal),
        ('Residual', decomposition.resid),
    ]

    fig = make_subplots(rows=4, cols=1, shared_xaxes=True,
                        subplot_titles=[name for name, _ in components])
    for row, (name, component) in enumerate(components, start=1):
        fig.add_trace(go.Scatter(
            x=component.index.tolist(),
            y=component.tolist(),
            mode='lines' if name != 'Residual' else 'markers',
            name=name,
            showlegend=False,
            line=dict(color='#1f6feb', width=1.5),
            marker=dict(size=3)
        ), row=row, col=1)
    return _apply_layout(fig, f"{model.capitalize()} decomposition", height=800)


def plot_acf_pacf(
    series: pd.Series,
    nlags: Optional[int] = None,
    alpha: float = 0.05
) -> go.Figure:
    """Side-by-side ACF and PACF bars with white-noise confidence bounds."""
    values = series.dropna()
    n = len(values)
    if nlags is None:
        nlags = min(36, n // 2 - 1)

    acf_values = acf(values, nlags=nlags, fft=False)
    pacf_values = pacf(values, nlags=nlags, method='ywm')
    bound = norm.ppf(1 - alpha / 2) / np.sqrt(n)
    lags = list(range(1, nlags + 1))

    fig = make_subplots(rows=1, cols=2, subplot_titles=['ACF', 'PACF'])
    for col, coefficients in ((1, acf_values), (2, pacf_values)):
        fig.add_trace(go.Bar(
            x=lags,
            y=coefficients[1:].tolist(),
            marker=dict(color='#1f6feb'),
            showlegend=False
        ), row=1, col=col)
        for level in (bound, -bound):
            fig.add_hline(y=level, line_dash="dash", line_color="#da3633",
                          row=1, col=col)
    return _apply_layout(fig, "Autocorrelation", height=400)


def plot_forecasts(result: ComparisonResult, show_intervals: bool = True) -> go.Figure:
    """Training tail, holdout actuals, and every successful strategy's forecast."""
    train = result.split.train
    test = result.split.test
    tail = train.iloc[-3 * result.config.seasonal_period:]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=tail.index.tolist(), y=tail.tolist(),
        mode='lines', name='Train',
        line=dict(color='#e6edf3', width=1.5)
    ))

    for outcome in result.successful():
        forecast = outcome.forecast
        color = STRATEGY_COLORS.get(outcome.name, '#a371f7')
        dates = forecast.mean.index.tolist()

        # Band first so it's in the background
        if show_intervals and forecast.has_interval:
            fig.add_trace(go.Scatter(
                x=dates, y=forecast.upper.tolist(),
                mode='lines', line=dict(width=0),
                showlegend=False, hoverinfo='skip'
            ))
            fig.add_trace(go.Scatter(
                x=dates, y=forecast.lower.tolist(),
                mode='lines', line=dict(width=0),
                fill='tonexty', fillcolor=_rgba(color, 0.15),
                name=f'{outcome.name} {forecast.interval_level:.0%}',
                hoverinfo='skip'
            ))

        fig.add_trace(go.Scatter(
            x=dates, y=forecast.mean.tolist(),
            mode='lines+markers', name=outcome.name,
            line=dict(color=color, width=2, dash='dash'),
            marker=dict(size=4)
        ))

    fig.add_trace(go.Scatter(
        x=test.index.tolist(), y=test.tolist(),
        mode='lines+markers', name='Actual',
        line=dict(color=ACTUAL_COLOR, width=3),
        marker=dict(size=6, color=ACTUAL_COLOR)
    ))
    return _apply_layout(fig, "Forecast vs actual", height=500)


def plot_residuals(result: ComparisonResult) -> go.Figure:
    """In-sample residuals of each successful strategy over time."""
    fig = go.Figure()
    for outcome in result.successful():
        if outcome.residuals is None:
            continue
        fig.add_trace(go.Scatter(
            x=outcome.residuals.index.tolist(),
            y=outcome.residuals.tolist(),
            mode='lines',
            name=outcome.name,
            line=dict(color=STRATEGY_COLORS.get(outcome.name, '#a371f7'), width=1)
        ))
    fig.add_hline(y=0, line_width=1, line_dash="dash", line_color="#8b949e")
    return _apply_layout(fig, "In-sample residuals")


class ComparisonReportBuilder:
    """Assembles figures and accuracy tables into one HTML page."""

    def __init__(self, result: ComparisonResult):
        self.result = result

    def figures(self) -> List[go.Figure]:
        result = self.result
        series = result.series
        figures = [
            plot_series(series, result.split.test_start),
            plot_acf_pacf(series),
            plot_forecasts(result),
            plot_residuals(result),
        ]
        if len(series) >= 2 * result.config.seasonal_period:
            figures.insert(1, plot_decomposition(series, result.config.seasonal_period))
        return figures

    def generate_report(self) -> str:
        """Generate the full HTML report."""
        html_parts = [self._generate_header(), self._generate_tables()]
        for i, fig in enumerate(self.figures()):
            html_parts.append(self._embed(fig, f'chart_{i}'))
        html_parts.append("</div></body></html>")
        return "".join(html_parts)

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generate_report(), encoding='utf-8')
        logger.info("HTML report written to %s", path)
        return path

    def _generate_header(self) -> str:
        name = html.escape(str(self.result.series.name))
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>Forecast Comparison: {name}</title>
            <script src="https://cdn.plot.ly/plotly-2.35.2.min.js"></script>
            <style>
                body {{ background: #0d1117; color: #e6edf3; font-family: sans-serif;
                        margin: 0; padding: 30px; }}
                .container {{ max-width: 1400px; margin: 0 auto; }}
                .card {{ background: #161b22; border: 1px solid #30363d;
                         border-radius: 8px; padding: 20px; margin-bottom: 20px; }}
                table {{ border-collapse: collapse; }}
                th, td {{ border: 1px solid #30363d; padding: 6px 12px; text-align: right; }}
            </style>
        </head>
        <body><div class="container">
        <h1>Forecast Comparison: {name}</h1>
        """

    def _generate_tables(self) -> str:
        parts = []
        for sample, title in (('test', 'Holdout accuracy'), ('train', 'In-sample fit')):
            table_html = self.result.accuracy_table(sample).to_html(
                float_format=lambda v: f"{v:,.3f}", na_rep="-"
            )
            parts.append(f'<div class="card"><h2>{title}</h2>{table_html}</div>')
        failures = self.result.failed()
        if failures:
            items = "".join(
                f"<li>{html.escape(o.name)}: failed during {o.failure.stage} "
                f"({html.escape(o.failure.error_type)}: "
                f"{html.escape(o.failure.message)})</li>"
                for o in failures
            )
            parts.append(f'<div class="card"><h2>Failures</h2><ul>{items}</ul></div>')
        return "".join(parts)

    def _embed(self, fig: go.Figure, div_id: str) -> str:
        plot_json = json.dumps(fig.to_dict(), cls=plotly.utils.PlotlyJSONEncoder)
        return f"""
        <div class="card">
            <div id="{div_id}"></div>
            <script>
                var {div_id}_data = {plot_json};
                Plotly.newPlot('{div_id}', {div_id}_data.data, {div_id}_data.layout, {{responsive: true}});
            </script>
        </div>
        """
