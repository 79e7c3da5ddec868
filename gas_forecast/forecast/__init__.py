"""Forecast result containers."""
from .result import ForecastResult, ModelParameters, ResidualDiagnostics

__all__ = ['ForecastResult', 'ModelParameters', 'ResidualDiagnostics']
