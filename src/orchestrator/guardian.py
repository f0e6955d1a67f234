"""Registration and recovery flows built on Sonic DNA."""
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from src.agents.composer import ComposerAgent
from src.dna.pipeline import compute_sonic_dna
from src.errors import DNAError, InvalidInputError
from src.models.sonic import SonicDNA


@dataclass
class Registration:
    """What a persistence layer would store after registering a vibe.

    Only ``dna.hash`` and ``dna.salt`` need to be kept; the vibe itself is
    the secret and should not be stored.
    """
    vibe: str
    code: str
    dna: SonicDNA


@dataclass
class RecoveryResult:
    """Outcome of one recovery attempt."""
    vibe: str
    code: str
    dna: SonicDNA
    matched: bool


class Guardian:
    """Runs registration and recovery of a vibe-derived secret.

    Registration generates a pattern for the vibe and extracts its DNA with a
    fresh salt. Recovery regenerates a pattern for a candidate vibe, extracts
    it with the registered salt and compares hashes.
    """

    def __init__(
        self,
        agent: Optional[ComposerAgent] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the guardian.

        Args:
            agent: Pattern generator. A template-backed agent is created if not provided.
            console: Rich console for output. Created if not provided.
        """
        self.agent = agent or ComposerAgent()
        self.console = console or Console()

    def _display_dna(self, title: str, code: str, dna: SonicDNA, color: str) -> None:
        """Display a pattern and its DNA in a formatted panel.

        Args:
            title: Panel title
            code: Pattern source
            dna: Extracted DNA
            color: Border color
        """
        self.console.print(Panel(
            Syntax(code, "javascript", theme="monokai", word_wrap=True),
            title="[bold]Pattern[/bold]",
            border_style="dim",
        ))

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value", overflow="fold")
        table.add_row("DNA", dna.dna or "[dim](empty)[/dim]")
        table.add_row("Hash", dna.hash)
        table.add_row("Scheme", dna.scheme.value)
        table.add_row("Policy", dna.policy)

        self.console.print(Panel(
            table,
            title=f"[bold]{title}[/bold]",
            border_style=color,
            padding=(1, 2),
        ))
        self.console.print()

    def register(self, vibe: str) -> Registration:
        """Register a vibe.

        Args:
            vibe: Free-text description of the secret vibe

        Returns:
            Registration holding the generated code and its DNA

        Raises:
            DNAError: If generation or extraction fails
        """
        response = self.agent.generate(vibe)
        dna = compute_sonic_dna(response.code, include_timestamp=True)
        registration = Registration(vibe=vibe.strip(), code=response.code, dna=dna)

        self._display_dna("Registered Sonic DNA", response.code, dna, "cyan")
        return registration

    def recover(self, vibe: str, stored_hash: str, salt: str, display: bool = True) -> RecoveryResult:
        """Attempt recovery with a candidate vibe.

        Args:
            vibe: Candidate vibe
            stored_hash: Hash saved at registration
            salt: Salt saved at registration
            display: Print the attempt

        Returns:
            RecoveryResult; ``matched`` is True when the hashes agree
        """
        if not salt:
            raise InvalidInputError("Recovery needs the registration salt", "MISSING_SALT")

        response = self.agent.generate(vibe)
        dna = compute_sonic_dna(response.code, salt=salt, include_timestamp=True)
        matched = dna.matches(stored_hash)

        if display:
            if matched:
                self._display_dna("[green]✓ Vibe recognized[/green]", response.code, dna, "green")
            else:
                self._display_dna("[red]✗ Vibe does not match[/red]", response.code, dna, "red")

        return RecoveryResult(vibe=vibe.strip(), code=response.code, dna=dna, matched=matched)

    def recover_any(self, vibes: List[str], stored_hash: str, salt: str) -> List[RecoveryResult]:
        """Try several candidate vibes in parallel.

        Extractions share no state, so candidates run concurrently. Results
        keep the order of ``vibes``; candidates that fail to generate or
        parse are reported and skipped.
        """
        results: Dict[int, RecoveryResult] = {}
        with ThreadPoolExecutor(max_workers=max(1, min(len(vibes), 8))) as executor:
            future_to_index = {
                executor.submit(self.recover, vibe, stored_hash, salt, False): i
                for i, vibe in enumerate(vibes)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except DNAError as e:
                    self.console.print(f"[red]Candidate {index + 1} failed: {e.message}[/red]")

        ordered = [results[i] for i in sorted(results)]

        table = Table(title="Recovery Attempts", show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Vibe", style="cyan", max_width=40)
        table.add_column("Match", justify="center")
        for i in sorted(results):
            result = results[i]
            mark = "[green]✓[/green]" if result.matched else "[red]✗[/red]"
            table.add_row(str(i + 1), result.vibe, mark)
        self.console.print(table)

        return ordered
