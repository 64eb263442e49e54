"""Trade export pipeline."""

from vdbexport.export.completion import CompletionSignal
from vdbexport.export.stats import AtomicCounter, ExportResult, ExportStats
from vdbexport.export.trades import PipelineConfig, export_trades, trades_csv_path

__all__ = [
    "AtomicCounter",
    "CompletionSignal",
    "ExportResult",
    "ExportStats",
    "PipelineConfig",
    "export_trades",
    "trades_csv_path",
]
