"""
Side-by-side comparison of forecasting strategies.

For each strategy, independently:
1. Fit on the training prefix
2. Forecast the holdout horizon
3. Score in-sample fit and out-of-sample forecast
4. Run residual diagnostics

A failure in one strategy is recorded with the stage that raised it; the
remaining strategies still run. Diagnostics errors are recorded apart from
failures and never discard a forecast.
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from ..config import PipelineConfig
from ..forecast.result import ForecastResult, ModelParameters, ResidualDiagnostics
from ..models.arima import SeasonalArimaModel
from ..models.base import ForecastModel
from ..models.baseline import NaiveModel
from ..models.diagnostics import residual_diagnostics
from ..models.evaluator import AccuracyReport, evaluate, evaluate_in_sample
from ..models.holt_winters import HoltWintersModel
from .splits import TrainTestSplit, split

logger = logging.getLogger(__name__)


@dataclass
class StrategyFailure:
    """Where and why a strategy stopped."""
    stage: str
    error_type: str
    message: str


@dataclass
class StrategyOutcome:
    """Everything one strategy produced, or its failure."""
    name: str
    parameters: Optional[ModelParameters] = None
    forecast: Optional[ForecastResult] = None
    in_sample: Optional[AccuracyReport] = None
    out_of_sample: Optional[AccuracyReport] = None
    fitted_values: Optional[pd.Series] = None
    residuals: Optional[pd.Series] = None
    diagnostics: Optional[ResidualDiagnostics] = None
    failure: Optional[StrategyFailure] = None
    diagnostics_error: Optional[StrategyFailure] = None
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class ComparisonResult:
    """Outcomes of every strategy on one split, in registration order."""
    series: pd.Series
    split: TrainTestSplit
    config: PipelineConfig
    outcomes: Dict[str, StrategyOutcome] = field(default_factory=dict)

    def successful(self) -> List[StrategyOutcome]:
        return [o for o in self.outcomes.values() if o.succeeded]

    def failed(self) -> List[StrategyOutcome]:
        return [o for o in self.outcomes.values() if not o.succeeded]

    def accuracy_table(self, sample: str = 'test') -> pd.DataFrame:
        """
        Strategy x metric table.

        Args:
            sample: 'test' for the holdout, 'train' for the in-sample fit
        """
        if sample not in ('test', 'train'):
            raise ValueError(f"Unknown sample: {sample}")

        rows = {}
        for name, outcome in self.outcomes.items():
            report = outcome.out_of_sample if sample == 'test' else outcome.in_sample
            rows[name] = report.to_dict() if report is not None else {}
        table = pd.DataFrame.from_dict(rows, orient='index')
        return table.reindex(
            index=list(self.outcomes), columns=list(self.config.accuracy_metrics)
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Long table: one row per strategy, sample and metric."""
        records = []
        for name, outcome in self.outcomes.items():
            for sample, report in (('train', outcome.in_sample),
                                   ('test', outcome.out_of_sample)):
                if report is None:
                    continue
                for metric, value in report.metrics.items():
                    records.append({
                        'strategy': name,
                        'sample': sample,
                        'metric': metric,
                        'value': value,
                    })
        return pd.DataFrame(records, columns=['strategy', 'sample', 'metric', 'value'])

    def best_strategy(self, metric: str = 'RMSE') -> Optional[str]:
        """Name of the successful strategy with the lowest holdout metric."""
        table = self.accuracy_table('test')
        if metric not in table.columns:
            return None
        scores = table[metric].dropna()
        return scores.idxmin() if not scores.empty else None


def build_strategies(config: PipelineConfig) -> Dict[str, ForecastModel]:
    """Instantiate the naive, Holt-Winters and SARIMA strategies from config."""
    return {
        'naive': NaiveModel(
            method=config.naive_method,
            interval_level=config.interval_level,
        ),
        'holt_winters': HoltWintersModel(
            seasonal_period=config.seasonal_period,
            trend=config.hw_trend,
            seasonal=config.hw_seasonal,
            damped_trend=config.hw_damped_trend,
            interval_level=config.interval_level,
            n_simulations=config.n_simulations,
            random_seed=config.random_seed,
            max_iterations=config.max_iterations,
        ),
        'sarima': SeasonalArimaModel(
            seasonal_period=config.seasonal_period,
            max_differencing_order=config.max_differencing_order,
            significance_level=config.significance_level,
            criterion=config.information_criterion,
            max_p=config.max_p,
            max_q=config.max_q,
            max_P=config.max_P,
            max_Q=config.max_Q,
            interval_level=config.interval_level,
            max_iterations=config.max_iterations,
        ),
    }


class ComparisonEngine:
    """Runs interchangeable strategies against the same train/test split."""

    def __init__(
        self,
        config: PipelineConfig,
        strategies: Optional[Dict[str, ForecastModel]] = None
    ):
        """
        Initialize the engine.

        Args:
            config: Pipeline configuration
            strategies: Name -> model; defaults to build_strategies(config)
        """
        self.config = config
        self.strategies = strategies if strategies is not None else build_strategies(config)

    def run(self, series: pd.Series, verbose: bool = False) -> ComparisonResult:
        """
        Split the series and evaluate every strategy.

        Args:
            series: Validated monthly series
            verbose: Print progress

        Returns:
            ComparisonResult with one outcome per strategy
        """
        data_split = split(series, self.config.horizon)
        logger.info(
            "Split '%s': train %d months to %s, test %d months",
            series.name, len(data_split.train), data_split.train_end.date(),
            len(data_split.test)
        )
        if verbose:
            print(f"Running comparison: {len(self.strategies)} strategies")
            print(f"Train: {len(data_split.train)} months, "
                  f"test: {len(data_split.test)} months")

        names = list(self.strategies)
        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                futures = [
                    pool.submit(self._run_strategy, name, self.strategies[name], data_split)
                    for name in names
                ]
                outcomes = [f.result() for f in futures]
        else:
            outcomes = [
                self._run_strategy(name, self.strategies[name], data_split)
                for name in names
            ]

        if verbose:
            for outcome in outcomes:
                status = 'ok' if outcome.succeeded else f'FAILED ({outcome.failure.stage})'
                print(f"  {outcome.name}: {status} in {outcome.elapsed_seconds:.1f}s")

        return ComparisonResult(
            series=series,
            split=data_split,
            config=self.config,
            outcomes={o.name: o for o in outcomes},
        )

    def _run_strategy(
        self,
        name: str,
        model: ForecastModel,
        data_split: TrainTestSplit
    ) -> StrategyOutcome:
        """Fit, forecast and evaluate one strategy in isolation."""
        cfg = self.config
        outcome = StrategyOutcome(name=name)
        started = time.perf_counter()
        stage = 'fit'

        try:
            model.fit(data_split.train)
            outcome.parameters = model.parameters()

            stage = 'forecast'
            outcome.forecast = model.forecast(data_split.horizon)

            stage = 'evaluate'
            outcome.out_of_sample = evaluate(
                outcome.forecast,
                data_split.test,
                metrics=cfg.accuracy_metrics,
                zero_policy=cfg.mape_zero_policy,
                train=data_split.train,
                seasonal_period=cfg.seasonal_period,
            )
            outcome.fitted_values = model.fitted_values()
            outcome.in_sample = evaluate_in_sample(
                outcome.fitted_values,
                data_split.train,
                metrics=cfg.accuracy_metrics,
                zero_policy=cfg.mape_zero_policy,
                seasonal_period=cfg.seasonal_period,
            )
        except Exception as exc:
            outcome.failure = StrategyFailure(
                stage=stage, error_type=type(exc).__name__, message=str(exc)
            )
            logger.warning(
                "Strategy '%s' failed during %s: %s: %s",
                name, stage, type(exc).__name__, exc
            )
        else:
            self._diagnose(outcome, model)
            logger.info("Strategy '%s' completed", name)
        finally:
            outcome.elapsed_seconds = time.perf_counter() - started

        return outcome

    def _diagnose(self, outcome: StrategyOutcome, model: ForecastModel) -> None:
        """Residual diagnostics; an error here leaves the forecast standing."""
        try:
            outcome.residuals = model.residuals()
            outcome.diagnostics = residual_diagnostics(
                outcome.residuals,
                seasonal_period=self.config.seasonal_period,
                significance_level=self.config.significance_level,
            )
        except Exception as exc:
            outcome.diagnostics_error = StrategyFailure(
                stage='diagnostics', error_type=type(exc).__name__, message=str(exc)
            )
            logger.warning(
                "Diagnostics for '%s' failed: %s: %s",
                outcome.name, type(exc).__name__, exc
            )
