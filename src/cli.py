"""CLI interface for Sonic Guardian."""
import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from src import __version__
from src.agents.composer import ComposerAgent
from src.agents.templates import mock_generate, template_vibe
from src.commitment import commit, generate_blinding, verify
from src.dna.digest import generate_salt
from src.dna.pipeline import compute_sonic_dna
from src.errors import DNAError
from src.logging_setup import setup_logging
from src.models.sonic import HashScheme, SonicDNA
from src.orchestrator.guardian import Guardian


console = Console()


def _build_agent(real_ai: bool, studio: bool) -> ComposerAgent:
    return ComposerAgent(
        use_real_ai=real_ai,
        template=template_vibe if studio else mock_generate,
    )


def _display_dna(dna: SonicDNA, show_salt: bool = True) -> None:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("DNA", dna.dna or "[dim](empty)[/dim]")
    table.add_row("Hash", dna.hash)
    if show_salt:
        table.add_row("Salt", dna.salt)
    if dna.timestamp:
        table.add_row("Timestamp", str(dna.timestamp))
    table.add_row("Features", ", ".join(dna.features) or "-")
    if dna.rhythmic_features is not None:
        table.add_row("Rhythmic", ", ".join(dna.rhythmic_features) or "-")
        table.add_row("Harmonic", ", ".join(dna.harmonic_features or ()) or "-")
        table.add_row("Temporal", ", ".join(dna.temporal_features or ()) or "-")

    color = "cyan" if dna.is_commitment_safe else "yellow"
    console.print(Panel(
        table,
        title=f"[bold]Sonic DNA ({dna.scheme.value})[/bold]",
        border_style=color,
        padding=(1, 2),
    ))
    if not dna.is_commitment_safe:
        console.print("[yellow]Demo hash: do not use this value for a commitment.[/yellow]")


@click.group()
@click.version_option(version=__version__, prog_name="sonic")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v or -vv)")
def cli(verbose: int):
    """Sonic Guardian - recoverable secrets from musical vibes.

    Describe a vibe, turn it into a Strudel pattern, and derive a stable
    Sonic DNA hash from the pattern. The same vibe, re-expressed, hashes
    the same; a different vibe does not.
    """
    setup_logging(verbose)


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True))
@click.option("--code", "-c", help="Extract from an inline pattern instead of a file")
@click.option("--salt", help="Reuse a salt (for comparison with a stored hash)")
@click.option("--timestamp", "-t", is_flag=True, help="Record the capture time")
@click.option("--semantics", is_flag=True, help="Also show rhythmic/harmonic/temporal features")
@click.option("--demo", is_flag=True, help="Use the non-cryptographic demo hash")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON")
def extract(file: Optional[str], code: Optional[str], salt: Optional[str], timestamp: bool,
            semantics: bool, demo: bool, as_json: bool):
    """Extract the Sonic DNA of a Strudel pattern.

    From a file:
        sonic extract pattern.js

    Inline:
        sonic extract --code 's("bass").slow(2).lpf(500)'
    """
    if file:
        try:
            source = Path(file).read_text()
        except OSError as e:
            console.print(f"[red]Error reading file: {e}[/red]")
            sys.exit(1)
    elif code:
        source = code
    else:
        console.print("[red]Error: Provide either a file path or --code option[/red]")
        console.print("Run 'sonic extract --help' for usage.")
        sys.exit(1)

    try:
        dna = compute_sonic_dna(
            source,
            salt=salt,
            include_timestamp=timestamp,
            scheme=HashScheme.DEMO if demo else HashScheme.SHA256,
            capture_semantics=semantics,
        )
    except DNAError as e:
        if as_json:
            click.echo(json.dumps(e.to_dict()))
        else:
            console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"success": True, "data": dna.to_dict()}))
    else:
        _display_dna(dna)


@cli.command()
@click.argument("code_a")
@click.argument("code_b")
def compare(code_a: str, code_b: str):
    """Check whether two patterns share the same Sonic DNA.

    Both patterns are hashed with one shared salt, so equal DNA means equal
    hashes.
    """
    salt = generate_salt()
    try:
        first = compute_sonic_dna(code_a, salt=salt)
        second = compute_sonic_dna(code_b, salt=salt)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    table = Table(title="DNA Comparison", show_header=True, header_style="bold")
    table.add_column("Pattern", style="cyan")
    table.add_column("DNA", overflow="fold")
    table.add_row("A", first.dna or "-")
    table.add_row("B", second.dna or "-")
    console.print(table)

    if first.matches(second.hash):
        console.print("[green]✓ Same Sonic DNA[/green]")
    else:
        console.print("[red]✗ Different Sonic DNA[/red]")
        sys.exit(1)


@cli.command()
@click.argument("prompt")
@click.option("--real-ai/--mock", default=False, help="Call the model instead of templates")
@click.option("--studio", is_flag=True, help="Use the richer genre templates as fallback")
def generate(prompt: str, real_ai: bool, studio: bool):
    """Generate a Strudel pattern from a vibe."""
    agent = _build_agent(real_ai, studio)
    try:
        with console.status("[bold cyan]Composing pattern...[/bold cyan]"):
            response = agent.generate(prompt)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    console.print(Panel(
        Syntax(response.code, "javascript", theme="monokai", word_wrap=True),
        title=f"[bold cyan]{response.prompt}[/bold cyan]",
        subtitle=f"[dim]{response.source} · confidence {response.confidence:.0%}[/dim]",
        border_style="cyan",
    ))


@cli.command()
@click.argument("vibe")
@click.option("--real-ai/--mock", default=False, help="Call the model instead of templates")
@click.option("--studio", is_flag=True, help="Use the richer genre templates as fallback")
def register(vibe: str, real_ai: bool, studio: bool):
    """Register a secret vibe and print the hash and salt to keep."""
    guardian = Guardian(agent=_build_agent(real_ai, studio), console=console)
    try:
        registration = guardian.register(vibe)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    console.print(f"[bold]Hash:[/bold] {registration.dna.hash}")
    console.print(f"[bold]Salt:[/bold] {registration.dna.salt}")
    console.print(
        f"[dim]Recover with: sonic recover '<vibe>' --hash {registration.dna.hash} "
        f"--salt {registration.dna.salt}[/dim]"
    )


@cli.command()
@click.argument("vibes", nargs=-1, required=True)
@click.option("--hash", "stored_hash", required=True, help="Hash saved at registration")
@click.option("--salt", required=True, help="Salt saved at registration")
@click.option("--real-ai/--mock", default=False, help="Call the model instead of templates")
@click.option("--studio", is_flag=True, help="Use the richer genre templates as fallback")
def recover(vibes: Tuple[str, ...], stored_hash: str, salt: str, real_ai: bool, studio: bool):
    """Recover with one or more candidate vibes.

    Exits with status 0 when any candidate matches the stored hash.
    """
    guardian = Guardian(agent=_build_agent(real_ai, studio), console=console)
    try:
        if len(vibes) == 1:
            results = [guardian.recover(vibes[0], stored_hash, salt)]
        else:
            results = guardian.recover_any(list(vibes), stored_hash, salt)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    if not any(r.matched for r in results):
        sys.exit(1)


@cli.command("commit")
@click.argument("dna_hash")
@click.option("--blinding", help="Blinding factor (hex). Generated if omitted.")
def commit_cmd(dna_hash: str, blinding: Optional[str]):
    """Build the commitment H(hash, blinding) for the external commitment layer."""
    try:
        blinding = blinding or generate_blinding()
        commitment = commit(dna_hash, blinding)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    console.print(Panel(
        f"[bold]Commitment:[/bold] {commitment}\n"
        f"[bold]Blinding:[/bold] {blinding}",
        title="[bold cyan]Commitment[/bold cyan]",
        border_style="cyan",
    ))
    console.print("[dim]Keep the blinding factor secret until you open the commitment.[/dim]")


@cli.command("verify-commit")
@click.argument("dna_hash")
@click.argument("blinding")
@click.argument("commitment")
def verify_commit(dna_hash: str, blinding: str, commitment: str):
    """Check a revealed hash and blinding against a commitment."""
    try:
        ok = verify(dna_hash, blinding, commitment)
    except DNAError as e:
        console.print(f"[red]Error [{e.code}]: {e.message}[/red]")
        sys.exit(1)

    if ok:
        console.print("[green]✓ Commitment opens[/green]")
    else:
        console.print("[red]✗ Commitment does not match[/red]")
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
