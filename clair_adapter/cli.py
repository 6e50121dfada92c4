"""CLI interface for the Clair scanner adapter."""

import asyncio
import json

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from clair_adapter.clair.client import ClairClient
from clair_adapter.config import AdapterSettings, configure_logging
from clair_adapter.exceptions import AdapterError, ReportNotFoundError
from clair_adapter.models.model_harbor import (
    Artifact,
    Registry,
    ScanRequest,
    Severity,
    VulnerabilityReport,
)
from clair_adapter.scanner.image_scanner import ImageScanner
from clair_adapter.scanner.layer_chain import LayerChainBuilder

app = typer.Typer(
    name="clair-adapter",
    help="Harbor scanner adapter for Clair - scan images and translate reports",
)

console = Console()

SEVERITY_COLORS = {
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
    Severity.UNKNOWN: "magenta",
    Severity.NONE: "green",
}


def _build_scanner(settings: AdapterSettings) -> ImageScanner:
    return ImageScanner(
        ClairClient(settings.clair_url, timeout=settings.clair_timeout),
        chain_builder=LayerChainBuilder(
            registry_timeout=settings.registry_timeout,
            registry_tls_verify=settings.registry_tls_verify,
        ),
    )


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _print_report(report: VulnerabilityReport) -> None:
    color = SEVERITY_COLORS[report.severity]
    console.print(f"\n[bold]Overall severity:[/bold] [{color}]{report.severity.value}[/{color}]")

    if not report.vulnerabilities:
        console.print("[green]No vulnerabilities found.[/green]")
        return

    table = Table(title=f"Vulnerabilities ({len(report.vulnerabilities)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Package", style="blue")
    table.add_column("Version")
    table.add_column("Fixed By", style="green")
    table.add_column("Severity")
    table.add_column("Description", style="dim")

    for item in report.vulnerabilities:
        sev_color = SEVERITY_COLORS[item.severity]
        table.add_row(
            item.id,
            item.package,
            item.version,
            item.fix_version or "-",
            f"[{sev_color}]{item.severity.value}[/{sev_color}]",
            _truncate(item.description),
        )

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind host (default: from SCANNER_API_SERVER_ADDR)"),
    port: int = typer.Option(None, "--port", help="Bind port (default: from SCANNER_API_SERVER_ADDR)"),
) -> None:
    """Run the scanner adapter API server."""
    import uvicorn

    from clair_adapter.api.app import create_app

    settings = AdapterSettings.from_env()
    configure_logging(settings.log_level)

    uvicorn.run(
        create_app(settings),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def scan(
    registry_url: str = typer.Option(..., "--registry-url", help="Registry base URL"),
    repository: str = typer.Option(..., "--repository", "-r", help="Repository, e.g. library/mongo"),
    digest: str = typer.Option(..., "--digest", "-d", help="Manifest digest (sha256:...)"),
    token: str = typer.Option(
        "", "--token", envvar="SCANNER_REGISTRY_TOKEN", help="Registry bearer token"
    ),
) -> None:
    """Submit an image to Clair and print the scan handle."""
    settings = AdapterSettings.from_env()
    configure_logging(settings.log_level)

    try:
        request = ScanRequest(
            registry=Registry(url=registry_url, authorization=token),
            artifact=Artifact(repository=repository, digest=digest),
        )
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        console.print(f"[red]Invalid scan request:[/red] {fields}")
        raise typer.Exit(1)

    async def run_scan():
        scanner = _build_scanner(settings)
        try:
            return await scanner.scan(request)
        finally:
            await scanner.aclose()

    try:
        response = asyncio.run(run_scan())
    except AdapterError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Scan submitted.[/green] Scan ID: [bold]{response.id}[/bold]", soft_wrap=True
    )


@app.command()
def report(
    scan_id: str = typer.Argument(..., help="Scan ID returned by 'scan'"),
    as_json: bool = typer.Option(False, "--json", help="Print the Harbor report as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Print Clair's raw result as JSON"),
) -> None:
    """Fetch and display the vulnerability report for a scan."""
    settings = AdapterSettings.from_env()
    configure_logging(settings.log_level)

    async def fetch():
        scanner = _build_scanner(settings)
        try:
            if raw:
                return await scanner.get_raw_report(scan_id)
            return await scanner.get_report(scan_id)
        finally:
            await scanner.aclose()

    try:
        result = asyncio.run(fetch())
    except ReportNotFoundError:
        console.print(f"[yellow]No report found for scan '{scan_id}'[/yellow]")
        raise typer.Exit(1)
    except AdapterError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if raw:
        print(json.dumps(result.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2))
    elif as_json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _print_report(result)


if __name__ == "__main__":
    app()
