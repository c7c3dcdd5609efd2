"""
Command line entry point - Main Layer

Usage:
    python -m src.main service web --tag v2 --passing
    python -m src.main addresses web
    python -m src.main node node-1
    python -m src.main state critical
"""

import asyncio
import json
from typing import Any, List, Optional

import typer

from src.domain.entities.errors import DomainError
from src.domain.entities.health import HealthCheck
from src.domain.entities.query import HealthVariant
from src.domain.services.status_aggregator import aggregate_status
from src.main.config import get_settings
from src.main.container import AppContainer, init_container
from src.shared import configure_logging, get_logger, update_logging_from_settings

app = typer.Typer(help="Read service and node health from a Consul agent")

logger = get_logger(__name__)


def _container() -> AppContainer:
    settings = get_settings()
    update_logging_from_settings(settings)
    return init_container(settings)


def _run(coro: Any) -> Any:
    try:
        return asyncio.run(coro)
    except DomainError as exc:
        logger.error("cli.failed", error=exc.message, details=exc.details)
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(code=1) from exc


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


def _checks_payload(checks: List[HealthCheck]) -> dict:
    return {
        "status": aggregate_status(checks),
        "checks": [
            {
                "node": check.node,
                "check_id": check.check_id,
                "name": check.name,
                "status": check.status,
                "service_name": check.service_name,
            }
            for check in checks
        ],
    }


@app.command()
def service(
    name: str = typer.Argument(..., help="Service name"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag filter"),
    passing: bool = typer.Option(False, "--passing", help="Only passing instances"),
    variant: HealthVariant = typer.Option(
        HealthVariant.PLAIN, "--variant", help="Catalog view to query"
    ),
) -> None:
    """Show the aggregated health of every instance of a service."""

    use_case = _container().get_service_health_summary_use_case()
    summary = _run(use_case.execute(name, tag or [], passing, variant))
    _echo(summary.model_dump())


@app.command()
def addresses(
    name: str = typer.Argument(..., help="Service name"),
    tag: str = typer.Option("", "--tag", "-t", help="Tag filter"),
    passing: bool = typer.Option(False, "--passing", help="Only passing instances"),
) -> None:
    """List host:port of the connect-enabled instances of a service."""

    use_case = _container().get_service_addresses_use_case()
    _echo(_run(use_case.execute(name, tag, passing)))


@app.command()
def node(name: str = typer.Argument(..., help="Node name")) -> None:
    """Show the checks registered on a node."""

    result = _run(_container().health().node(name))
    _echo(_checks_payload(result.items))


@app.command()
def state(
    status: str = typer.Argument(..., help="any, passing, warning or critical"),
) -> None:
    """Show every check currently in the given state."""

    health = _container().health()
    try:
        result = _run(health.state(status))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="STATUS") from exc
    _echo(_checks_payload(result.items))


def main() -> None:
    """Console script entry point."""

    configure_logging()
    app()
