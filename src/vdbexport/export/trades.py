"""Trades exporter: prefix scan -> decode -> classify -> scale -> CSV."""

from __future__ import annotations

from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, AbstractSet, Any, Callable, Mapping

import duckdb
import structlog

from vdbexport.codec import decode_trade
from vdbexport.errors import RecordDecodeError, StoreOpenError
from vdbexport.export.classifier import classify
from vdbexport.export.formatter import DEFAULT_TIMESTAMP_FORMAT, TRADE_HEADER, trade_to_csv_row
from vdbexport.export.markets import MarketLookup
from vdbexport.export.sink import CsvSink
from vdbexport.export.stats import ExportResult, ExportStats
from vdbexport.export.throttle import BatchThrottle, pause
from vdbexport.storage.db import get_connection, has_schema
from vdbexport.storage.kv import iter_prefix

if TYPE_CHECKING:
    from duckdb import DuckDBPyConnection

    from vdbexport.config import Settings
    from vdbexport.export.completion import CompletionSignal
    from vdbexport.models import Market

log = structlog.get_logger(__name__)

TRADE_PREFIX = b"T:"


@dataclass
class PipelineConfig:
    """Per-run exporter settings. stats is owned by the caller and only incremented here."""

    chain_id: str
    batch_size: int = 1000
    wait_sec: float = 0.0
    exclude: bool = False
    whitelist: AbstractSet[str] = frozenset()
    stats: ExportStats = field(default_factory=ExportStats)
    prefix: bytes = TRADE_PREFIX
    fetch_size: int = 1000
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        if self.wait_sec < 0:
            raise ValueError("wait_sec must be >= 0")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        whitelist: AbstractSet[str] = frozenset(),
        stats: ExportStats | None = None,
        **overrides: Any,
    ) -> PipelineConfig:
        """Build from config; non-None overrides (e.g. CLI options) take precedence."""
        values: dict[str, Any] = {
            "chain_id": settings.chain_id,
            "batch_size": settings.batch_size,
            "wait_sec": settings.wait_sec,
            "exclude": settings.exclude_bots,
            "prefix": settings.trade_prefix,
            "fetch_size": settings.fetch_size,
            "timestamp_format": settings.timestamp_format,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(whitelist=whitelist, stats=stats or ExportStats(), **values)


def trades_csv_path(chain_id: str, output_dir: str | Path = ".") -> Path:
    return Path(output_dir) / f"trades-{chain_id}.csv"


def open_store(db_path: str | Path) -> DuckDBPyConnection:
    """Open the store read-only. Raises StoreOpenError if it is missing or not a kv store."""
    try:
        conn = get_connection(db_path, read_only=True)
    except duckdb.Error as e:
        raise StoreOpenError(f"cannot open store {db_path}: {e}") from e
    if not has_schema(conn):
        conn.close()
        raise StoreOpenError(f"store {db_path} has no kv table")
    return conn


def export_trades(
    db_path: str | Path,
    config: PipelineConfig,
    markets: Mapping[str, Market],
    completion: CompletionSignal | None = None,
    output_dir: str | Path = ".",
    sleep: Callable[[float], None] = pause,
) -> ExportResult:
    """
    Write trades-<chain_id>.csv from all trade records in the store.

    StoreOpenError / OutputCreateError propagate (fatal for the run). A bad record or a
    failed write stops the scan; rows already written stay in the flushed file and the
    error is returned in ExportResult.error. completion.done() is called on every path.
    """
    log.info("trades_export_started", chain_id=config.chain_id, db_path=str(db_path))
    try:
        conn = open_store(db_path)
        try:
            path = trades_csv_path(config.chain_id, output_dir)
            result = ExportResult(output_path=str(path))
            try:
                with CsvSink(path, TRADE_HEADER) as sink:
                    _scan_trades(conn, sink, config, MarketLookup(markets), sleep, result)
            except OSError as e:
                # Buffered rows that could not be written when the file was closed
                if result.error is None:
                    _abort(result, config, b"", e)
        finally:
            conn.close()
    finally:
        if completion is not None:
            completion.done()
    log.info(
        "trades_export_completed",
        chain_id=config.chain_id,
        rows_written=result.rows_written,
        aborted=not result.completed,
        **config.stats.as_dict(),
    )
    return result


def _abort(result: ExportResult, config: PipelineConfig, key: bytes, error: Exception) -> None:
    log.error("trades_export_aborted", chain_id=config.chain_id, key=key.hex(), error=str(error))
    result.error = str(error)


def _scan_trades(
    conn: DuckDBPyConnection,
    sink: CsvSink,
    config: PipelineConfig,
    lookup: MarketLookup,
    sleep: Callable[[float], None],
    result: ExportResult,
) -> None:
    throttle = BatchThrottle(config.batch_size, config.wait_sec, sleep=sleep, name="trades")
    key = b""
    try:
        with closing(iter_prefix(conn, config.prefix, config.fetch_size)) as records:
            for key, value in records:
                trade = decode_trade(value)
                config.stats.total_trades.inc()
                verdict = classify(trade, config.whitelist, config.exclude, config.stats.excluded_trades)
                if verdict.keep:
                    dp = lookup.decimal_places(trade.market_id)
                    sink.write_row(
                        trade_to_csv_row(trade, dp, verdict.is_bot, config.chain_id, config.timestamp_format)
                    )
                throttle.tick()
        sink.flush()
    except (RecordDecodeError, OSError, duckdb.Error) as e:
        _abort(result, config, key, e)
    result.rows_written = sink.rows_written
