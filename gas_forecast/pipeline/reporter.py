"""
Comparison reporting.

Generates console summaries and CSV exports for comparison results.
"""
import logging
from pathlib import Path

import pandas as pd

from .engine import ComparisonResult

logger = logging.getLogger(__name__)


class ComparisonReporter:
    """Generates comparison reports and exports."""

    def __init__(self, result: ComparisonResult):
        """
        Initialize reporter.

        Args:
            result: Output of ComparisonEngine.run()
        """
        self.result = result

    def summary_table(self) -> pd.DataFrame:
        """Holdout accuracy plus status and chosen model per strategy."""
        table = self.result.accuracy_table('test')
        status, detail = {}, {}
        for name, outcome in self.result.outcomes.items():
            if outcome.succeeded:
                status[name] = 'ok'
                params = outcome.parameters
                detail[name] = params['label'] if 'label' in params else ''
            else:
                status[name] = f'failed ({outcome.failure.stage})'
                detail[name] = f'{outcome.failure.error_type}: {outcome.failure.message}'
        table.insert(0, 'status', pd.Series(status))
        table['detail'] = pd.Series(detail)
        return table

    def print_summary(self) -> None:
        """Print formatted comparison summary."""
        result = self.result
        data_split = result.split

        print("=" * 70)
        print(f"FORECAST COMPARISON: {result.series.name}")
        print("=" * 70)
        print(f"Train: {data_split.train.index[0].date()} to {data_split.train_end.date()} "
              f"({len(data_split.train)} months)")
        print(f"Test:  {data_split.test_start.date()} to {data_split.test.index[-1].date()} "
              f"({len(data_split.test)} months)")
        print()

        for sample, title in (('train', 'IN-SAMPLE FIT'), ('test', 'HOLDOUT ACCURACY')):
            print(f"{title}:")
            table = result.accuracy_table(sample)
            if 'MAPE' in table.columns:
                table = table.assign(MAPE=table['MAPE'] * 100).rename(
                    columns={'MAPE': 'MAPE (%)'}
                )
            print(table.to_string(float_format=lambda v: f"{v:,.3f}"))
            print()

        for outcome in result.outcomes.values():
            if not outcome.succeeded:
                f = outcome.failure
                print(f"  {outcome.name}: FAILED during {f.stage} "
                      f"({f.error_type}: {f.message})")
            elif outcome.diagnostics is not None:
                d = outcome.diagnostics
                verdict = "white noise" if d.passed else "autocorrelated"
                print(f"  {outcome.name}: Ljung-Box Q({d.lags})={d.ljung_box_stat:.2f}, "
                      f"p={d.ljung_box_pvalue:.4f} -> residuals {verdict}")
            elif outcome.diagnostics_error is not None:
                e = outcome.diagnostics_error
                print(f"  {outcome.name}: diagnostics unavailable "
                      f"({e.error_type}: {e.message})")

        best = result.best_strategy('RMSE')
        if best is not None:
            print()
            print(f"Lowest holdout RMSE: {best}")
        print("=" * 70)

    def print_parameters(self) -> None:
        """Print fitted parameters of each successful strategy."""
        for outcome in self.result.successful():
            print(f"\n{outcome.name.upper()} PARAMETERS:")
            for key, value in outcome.parameters.values.items():
                if isinstance(value, float):
                    print(f"  {key:<22} {value:,.4f}")
                elif isinstance(value, dict):
                    print(f"  {key}:")
                    for sub_key, sub_value in value.items():
                        print(f"    {sub_key:<20} {sub_value:,.4f}")
                else:
                    print(f"  {key:<22} {value}")

    def forecast_table(self) -> pd.DataFrame:
        """Actual holdout values next to each strategy's point forecast."""
        table = pd.DataFrame({'actual': self.result.split.test})
        for outcome in self.result.successful():
            table[outcome.name] = outcome.forecast.mean
        return table

    def to_csv(self, path: Path) -> None:
        """
        Export the long-format accuracy table to CSV.

        Args:
            path: Output file path
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.result.to_dataframe().to_csv(path, index=False)
        logger.info("Accuracy table written to %s", path)
        print(f"Results saved to {path}")
