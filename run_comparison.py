#!/usr/bin/env python3
"""
Compare naive, Holt-Winters and SARIMA forecasts on a monthly series.

Usage:
    python run_comparison.py
    python run_comparison.py --dataset co2 --horizon 24 --report outputs/co2.html
"""
import argparse
import logging
from pathlib import Path

from gas_forecast.config import PipelineConfig
from gas_forecast.data import DataLoader
from gas_forecast.pipeline import ComparisonEngine, ComparisonReporter
from gas_forecast.reporting import ComparisonReportBuilder


def main():
    parser = argparse.ArgumentParser(description='Run forecast comparison')
    parser.add_argument('--dataset', type=str, default='gas',
                        help='Bundled dataset name or CSV stem in --data-dir')
    parser.add_argument('--data-dir', type=str, default=None,
                        help='Directory with additional <name>.csv files')
    parser.add_argument('--horizon', type=int, default=12,
                        help='Holdout size in months')
    parser.add_argument('--seasonal-period', type=int, default=12,
                        help='Observations per seasonal cycle')
    parser.add_argument('--criterion', type=str, default='aicc',
                        choices=['aicc', 'aic', 'bic'],
                        help='Information criterion for the SARIMA order search')
    parser.add_argument('--workers', type=int, default=1,
                        help='Run strategies concurrently with this many threads')
    parser.add_argument('--output', type=str, default='outputs/accuracy.csv',
                        help='Output CSV path')
    parser.add_argument('--report', type=str, default=None,
                        help='Optional HTML report path')
    parser.add_argument('--params', action='store_true',
                        help='Show fitted parameters')
    parser.add_argument('--verbose', action='store_true',
                        help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)-8s %(name)s: %(message)s',
    )

    config = PipelineConfig(
        dataset=args.dataset,
        horizon=args.horizon,
        seasonal_period=args.seasonal_period,
        information_criterion=args.criterion,
        max_workers=args.workers,
    )

    # Load data
    loader = DataLoader(Path(args.data_dir) if args.data_dir else None)
    series = loader.load(config.dataset)

    # Run comparison
    engine = ComparisonEngine(config)
    result = engine.run(series, verbose=True)

    # Generate report
    print()
    reporter = ComparisonReporter(result)
    reporter.print_summary()

    if args.params:
        reporter.print_parameters()

    print('\nHOLDOUT FORECASTS:')
    print(reporter.forecast_table().to_string(float_format=lambda v: f"{v:,.1f}"))

    reporter.to_csv(Path(args.output))

    if args.report:
        path = ComparisonReportBuilder(result).save(Path(args.report))
        print(f"Report saved to {path}")


if __name__ == '__main__':
    main()
