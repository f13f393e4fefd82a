"""Flask CLI commands for Pantagon."""

from __future__ import annotations

from pathlib import Path

import click

from .errors import PantagonError
from .logging_config import get_logger

logger = get_logger("cli")


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    from .extensions import get_state

    @app.cli.command("pantagon-import-trades")
    @click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def pantagon_import_trades(file: Path) -> None:
        """Import a JSON batch of stock trades (all or nothing)."""

        from .services.trade_import import import_trade_batch

        state = get_state(app)
        text = file.read_text(encoding="utf-8")
        try:
            created = import_trade_batch(state.trades, text, currency=state.config.TRADE_CURRENCY)
        except PantagonError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Imported {len(created)} trades.")

    @app.cli.command("pantagon-import-assets")
    @click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def pantagon_import_assets(file: Path) -> None:
        """Import asset transactions from CSV (all or nothing)."""

        from .services.import_csv import import_asset_csv

        try:
            created = import_asset_csv(get_state(app).assets, file)
        except PantagonError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Imported {len(created)} asset transactions.")

    @app.cli.command("pantagon-export-assets")
    @click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
    def pantagon_export_assets(file: Path) -> None:
        """Export every asset transaction to CSV."""

        from .services.export_csv import export_asset_transactions_csv
        from .services.snapshots import load_asset_snapshot

        snapshot = load_asset_snapshot(get_state(app).assets)
        path = export_asset_transactions_csv(transactions=snapshot, output_path=file)
        logger.info("Assets exported", extra={"path": str(path), "count": len(snapshot)})
        click.echo(f"Export written: {path}")

    @app.cli.command("pantagon-summary")
    def pantagon_summary() -> None:
        """Print net worth, FX and stock totals."""

        from .services.fx import summarize
        from .services.ledger import net_worth_view
        from .services.positions import portfolio_overview
        from .services.snapshots import (
            load_asset_snapshot,
            load_fx_snapshot,
            load_trade_snapshot,
        )

        state = get_state(app)
        config = state.config
        worth = net_worth_view(load_asset_snapshot(state.assets), config.ACCOUNT_PRIORITY)
        fx = summarize(load_fx_snapshot(state.fx), config.HOME_CURRENCY)
        stocks = portfolio_overview(load_trade_snapshot(state.trades))

        click.echo(f"Net worth: {worth.total:,.2f} {config.HOME_CURRENCY}")
        for account in worth.accounts:
            click.echo(f"  {account.name}: {account.balance:,.2f} ({account.transaction_count} tx)")
        click.echo(
            f"FX: in {fx.inflow:,.2f} / out {fx.outflow:,.2f} {config.HOME_CURRENCY}, "
            f"avg rate {fx.average_rate:.4f} over {fx.count} conversions"
        )
        click.echo(
            f"Stocks: invested {stocks.total_invested:,.2f} {config.TRADE_CURRENCY}, "
            f"sold {stocks.total_sold:,.2f}, realized P&L {stocks.realized_pnl:,.2f} "
            f"across {stocks.symbol_count} symbols"
        )
