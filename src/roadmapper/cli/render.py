"""Terminal rendering of roadmaps with rich."""

from __future__ import annotations

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from roadmapper.models.roadmap import Roadmap, RoadmapNode


def make_console(stderr: bool = False) -> Console:
    """Console for command output; model text is never highlighted."""
    return Console(stderr=stderr, highlight=False)


def progress_summary(roadmap: Roadmap) -> str:
    """One-line completion summary, e.g. ``2/5 complete (40%)``."""
    return (
        f"{roadmap.completed_count}/{len(roadmap.nodes)} complete "
        f"({roadmap.progress:.0f}%)"
    )


def _node_panel(index: int, node: RoadmapNode) -> Panel:
    mark = ("✓", "green") if node.completed else ("○", "dim")
    parts: list[Markdown | Text] = [Markdown(node.content)]
    if node.references:
        refs = Text("References: ", style="bold")
        refs.append(", ".join(node.references), style="cyan")
        parts.append(refs)
    if node.connections:
        links = Text("Leads to: ", style="bold")
        links.append(", ".join(node.connections), style="magenta")
        parts.append(links)
    return Panel(
        Group(*parts),
        title=Text.assemble(mark, f" {index}. {node.title}"),
        title_align="left",
        subtitle=Text(node.id),
        subtitle_align="right",
        border_style="green" if node.completed else "blue",
    )


def render_roadmap(console: Console, roadmap: Roadmap, saved: bool = False) -> None:
    """Print a roadmap: header, progress, nodes and sources."""
    console.print(Text(roadmap.title, style="bold underline"))
    if roadmap.description:
        console.print(Markdown(roadmap.description))
    status = "saved" if saved else "not saved"
    console.print(
        Text(
            f"{roadmap.id} | {roadmap.generated_at:%Y-%m-%d %H:%M} | {status}",
            style="dim",
        ),
        soft_wrap=True,
    )

    if roadmap.nodes:
        console.print(
            ProgressBar(total=len(roadmap.nodes), completed=roadmap.completed_count)
        )
    console.print(progress_summary(roadmap), soft_wrap=True)

    for index, node in enumerate(roadmap.nodes, start=1):
        console.print(_node_panel(index, node))

    unresolved = roadmap.unresolved_connections()
    if unresolved:
        targets = ", ".join(f"{src} -> {dst}" for src, dst in unresolved)
        console.print(Text(f"Unresolved connections: {targets}", style="yellow"))

    if roadmap.sources:
        console.print(Text("Sources", style="bold"))
        for source in roadmap.sources:
            console.print(
                Text(f"  • {source.title} ({source.uri})"), soft_wrap=True
            )


def render_history(console: Console, roadmaps: list[Roadmap]) -> None:
    """Print the saved roadmaps as a table."""
    table = Table(title="Saved roadmaps")
    table.add_column("ID", no_wrap=True)
    table.add_column("Title")
    table.add_column("Generated", no_wrap=True)
    table.add_column("Progress", justify="right", no_wrap=True)
    for roadmap in roadmaps:
        table.add_row(
            roadmap.id,
            Text(roadmap.title),
            f"{roadmap.generated_at:%Y-%m-%d %H:%M}",
            f"{roadmap.progress:.0f}%",
        )
    console.print(table)
