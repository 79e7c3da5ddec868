"""Configuration for the forecast comparison pipeline."""
from dataclasses import dataclass
from typing import Optional, Tuple

SUPPORTED_METRICS = ('MSE', 'MAE', 'RMSE', 'MAPE', 'ME', 'MASE')
SUPPORTED_CRITERIA = ('aicc', 'aic', 'bic')


@dataclass
class PipelineConfig:
    """
    Explicit configuration for a comparison run.

    Passed down to every component that needs it; nothing reads
    module-level defaults at runtime.
    """
    dataset: str = 'gas'
    horizon: int = 12
    seasonal_period: int = 12
    max_differencing_order: int = 2
    accuracy_metrics: Tuple[str, ...] = ('MSE', 'MAE', 'RMSE', 'MAPE')
    mape_zero_policy: str = 'exclude'  # 'exclude' or 'raise'

    # Statistical tests
    significance_level: float = 0.05
    interval_level: float = 0.95

    # SARIMA order search grid
    information_criterion: str = 'aicc'
    max_p: int = 2
    max_q: int = 2
    max_P: int = 1
    max_Q: int = 1
    max_iterations: int = 200

    # Holt-Winters
    hw_trend: Optional[str] = 'add'
    hw_seasonal: Optional[str] = 'add'
    hw_damped_trend: bool = False

    # Naive
    naive_method: str = 'mean'

    n_simulations: int = 500
    random_seed: Optional[int] = 42
    max_workers: int = 1

    def __post_init__(self):
        if self.horizon < 1:
            raise ValueError(f"horizon must be >= 1, got {self.horizon}")
        if self.seasonal_period < 2:
            raise ValueError(
                f"seasonal_period must be >= 2, got {self.seasonal_period}"
            )
        if self.max_differencing_order < 0:
            raise ValueError("max_differencing_order must be >= 0")

        self.accuracy_metrics = tuple(m.upper() for m in self.accuracy_metrics)
        unknown = [m for m in self.accuracy_metrics if m not in SUPPORTED_METRICS]
        if unknown:
            raise ValueError(f"Unknown accuracy metrics: {unknown}")

        if self.mape_zero_policy not in ('exclude', 'raise'):
            raise ValueError(f"Unknown mape_zero_policy: {self.mape_zero_policy}")
        if not 0 < self.significance_level < 1:
            raise ValueError("significance_level must be in (0, 1)")
        if not 0 < self.interval_level < 1:
            raise ValueError("interval_level must be in (0, 1)")

        self.information_criterion = self.information_criterion.lower()
        if self.information_criterion not in SUPPORTED_CRITERIA:
            raise ValueError(
                f"Unknown information criterion: {self.information_criterion}"
            )
        for name in ('max_p', 'max_q', 'max_P', 'max_Q'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

        for name in ('hw_trend', 'hw_seasonal'):
            if getattr(self, name) not in (None, 'add', 'mul'):
                raise ValueError(f"{name} must be None, 'add' or 'mul'")
        if self.naive_method not in ('mean', 'last'):
            raise ValueError(f"Unknown naive_method: {self.naive_method}")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @property
    def alpha(self) -> float:
        """Tail probability matching interval_level (0.05 for 95%)."""
        return 1.0 - self.interval_level
