"""
Command-line interface for OSS Hunter.

Provides the hunt command plus configuration helpers.
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich import box

from osshunter import __version__
from osshunter.config import HunterConfig, set_config
from osshunter.core.orchestrator import Orchestrator
from osshunter.core.models import ProbeLevel, ScanSession, TargetResult
from osshunter.reporting.exporters import (
    export_bucket_list,
    export_csv,
    export_json,
    export_markdown,
)
from osshunter.utils.validators import is_valid_url, load_targets

# Initialize Typer app
app = typer.Typer(
    name="osshunter",
    help="OSS Hunter - Aliyun OSS bucket discovery",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


class WriteMethod(str, Enum):
    """Write-test methods."""
    PUT = "PUT"


LEVEL_NAMES = {
    ProbeLevel.STATIC: "HTTP only",
    ProbeLevel.SMART: "Smart (render fallback)",
    ProbeLevel.RENDER: "Render only",
}


def print_banner():
    """Print the OSS Hunter banner."""
    banner = """
    ╔═══════════════════════════════════════════════╗
    ║   OSS Hunter                                  ║
    ║   Aliyun OSS bucket discovery     v{version:<10} ║
    ╚═══════════════════════════════════════════════╝
    """.format(version=__version__)
    console.print(banner, style="bold cyan")


def _build_orchestrator(config: HunterConfig, log_console: Console) -> Orchestrator:
    return Orchestrator(config=config, console=log_console)


@app.command()
def hunt(
    url: Optional[str] = typer.Option(
        None, "--url", "-u",
        help="Single target URL"
    ),
    url_list: Optional[Path] = typer.Option(
        None, "--list", "-l",
        help="File with target URLs, one per line"
    ),
    level: Optional[int] = typer.Option(
        None, "--level", "-L", min=1, max=3,
        help="Probe level: 1=HTTP only, 2=Smart (default), 3=Render only"
    ),
    method: Optional[WriteMethod] = typer.Option(
        None, "--method", "-X", case_sensitive=False,
        help="Write-test method (PUT) run against every discovered bucket"
    ),
    pipe: bool = typer.Option(
        False, "--pipe",
        help="Only print bucket URLs to stdout, for piping into other tools"
    ),
    output_buckets: Optional[Path] = typer.Option(
        None, "--ob",
        help="Write the bucket list (plain text)"
    ),
    output_csv: Optional[Path] = typer.Option(
        None, "--csv",
        help="Write results as CSV"
    ),
    output_md: Optional[Path] = typer.Option(
        None, "--md",
        help="Write results as a Markdown table"
    ),
    output_json: Optional[Path] = typer.Option(
        None, "--oj",
        help="Write results as JSON"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-C",
        help="Path to configuration file"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Hide the banner"
    ),
):
    """
    Discover OSS buckets referenced by target websites.

    Examples:
        osshunter hunt -u http://example.com -L 2
        osshunter hunt -l urls.txt --ob buckets.txt
        osshunter hunt -l urls.txt -X PUT --oj result.json
        osshunter hunt -l urls.txt --pipe | httpx -mc 200
    """
    # Pipe mode keeps stdout clean: every log line goes to a silenced console
    log_console = Console(stderr=True, quiet=True) if pipe else console

    if not pipe and not quiet:
        print_banner()

    # Validate inputs
    try:
        targets = load_targets(url, url_list)
    except OSError as e:
        err_console.print(f"[red][!] Cannot read file: {escape(str(url_list))} ({escape(str(e))})[/red]")
        raise typer.Exit(1)

    if not targets:
        err_console.print("[red]Error: No target URLs. Use --url or --list (see --help)[/red]")
        raise typer.Exit(1)

    # Load configuration
    config = HunterConfig.load(config_file)
    set_config(config)

    probe_level = ProbeLevel(level or config.scan.level)
    write_test = method is not None and not pipe

    orchestrator = _build_orchestrator(config, log_console)
    session = orchestrator.create_session(targets, level=probe_level, write_test=write_test)

    if pipe:
        orchestrator.on_bucket(typer.echo)
        try:
            asyncio.run(orchestrator.run())
        except KeyboardInterrupt:
            raise typer.Exit(130)
        return

    for target in targets:
        if not is_valid_url(target):
            console.print(f"[yellow][!] Not an http(s) URL, probing anyway: {escape(target)}[/yellow]")

    _display_target_info(session, config)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            main_task = progress.add_task("[cyan]Hunting buckets...", total=len(targets))

            def on_target_complete(result: TargetResult):
                _print_target_result(result, session)
                progress.advance(main_task)

            orchestrator.on_target_complete(on_target_complete)

            asyncio.run(orchestrator.run())

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user[/yellow]")
        raise typer.Exit(130)

    _display_results_summary(session)
    _export_results(session, output_buckets, output_csv, output_md, output_json)


@app.command()
def config(
    init: bool = typer.Option(False, "--init", help="Initialize a new config file"),
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    path: Path = typer.Option(
        Path("./osshunter.yaml"), "--path", "-p",
        help="Config file path"
    ),
):
    """Manage configuration."""
    if init:
        if path.exists():
            console.print(f"[yellow]Config file already exists: {escape(str(path))}[/yellow]")
            raise typer.Exit(1)
        HunterConfig().save(path)
        console.print(f"[green]Config file created: {escape(str(path))}[/green]")
        return

    if show:
        _display_config(HunterConfig.load(path))
        return

    console.print("Use --init to create a config file or --show to display it")


@app.command()
def version():
    """Show OSS Hunter version."""
    console.print(f"OSS Hunter version {__version__}")


def _display_config(cfg: HunterConfig):
    """Display the effective configuration."""
    table = Table(title="Configuration", box=box.ROUNDED)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Level", str(cfg.scan.level))
    table.add_row("Concurrency", str(cfg.scan.concurrency))
    table.add_row("HTTP timeout", f"{cfg.scan.timeout}s")
    table.add_row("Render timeout", f"{cfg.render.timeout}s")
    table.add_row("Verify TLS", "Yes" if cfg.scan.verify_tls else "No")
    table.add_row("PUT object suffix", cfg.probe.object_suffix)

    console.print(table)


def _display_target_info(session: ScanSession, cfg: HunterConfig):
    """Display run parameters."""
    table = Table(title="Target Information", box=box.ROUNDED)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Targets", str(len(session.targets)))
    table.add_row("Level", f"{session.level.value} - {LEVEL_NAMES[session.level]}")
    table.add_row("Write test", "PUT" if session.write_test else "Off")
    table.add_row("Workers", str(cfg.scan.concurrency))
    table.add_row("Session ID", session.id)

    console.print(table)
    console.print()


def _print_target_result(result: TargetResult, session: ScanSession):
    """Print one finished target as a single block."""
    console.print(f"[bold]\\[*] {escape(result.target)}[/bold]")

    if result.error:
        console.print(f"    [red]\\[error] {escape(result.error)}[/red]")
        return

    if result.rendered and session.level == ProbeLevel.SMART:
        console.print("    [dim]\\[smart] fallback to render[/dim]")

    probes = {probe.bucket: probe for probe in result.probes}
    for record in result.records:
        console.print(f"    [green]- {escape(record.bucket)}[/green]")

        probe = probes.get(record.bucket)
        if probe is None:
            continue
        if probe.writable:
            console.print(f"        [red]\\[PUT OK] {escape(probe.object_url)}[/red]")
        else:
            console.print(f"        \\[PUT FAIL] {escape(record.bucket)}")


def _display_results_summary(session: ScanSession):
    """Display a summary of scan results."""
    session.update_statistics()

    console.print()

    summary = Table(box=box.ROUNDED, show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Count", justify="right", style="bold")

    summary.add_row("Targets", str(session.total_targets))
    summary.add_row("Unique buckets", str(session.total_buckets))
    summary.add_row("Bucket references", str(session.total_records))
    if session.write_test:
        summary.add_row("[red]Writable (PUT)[/red]", str(session.writable_records))
    if session.failed_targets:
        summary.add_row("[yellow]Failed targets[/yellow]", str(session.failed_targets))

    console.print(Panel(summary, title="Discovery Summary", border_style="green"))


def _export_results(
    session: ScanSession,
    output_buckets: Optional[Path],
    output_csv: Optional[Path],
    output_md: Optional[Path],
    output_json: Optional[Path],
):
    """Write every requested export file."""
    if output_buckets:
        count = export_bucket_list(session, output_buckets)
        console.print(f"\n\\[+] Exported {count} buckets to {escape(str(output_buckets))}")

    if output_csv:
        export_csv(session, output_csv)
        console.print(f"\\[+] Exported CSV to {escape(str(output_csv))}")

    if output_md:
        export_markdown(session, output_md)
        console.print(f"\\[+] Exported Markdown to {escape(str(output_md))}")

    if output_json:
        export_json(session, output_json)
        console.print(f"\\[+] Exported JSON to {escape(str(output_json))}")


def main():
    app()


if __name__ == "__main__":
    main()
