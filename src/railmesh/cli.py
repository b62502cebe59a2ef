from __future__ import annotations

import pathlib

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from railmesh._config import CONFIG_FILE, TrackSettings, ensure_user_config, load_settings
from railmesh.mesh import analyze_mesh
from railmesh.modeling import make_rail
from railmesh.preview import PreviewBackendError, RailPreviewer
from railmesh.scene import MeshRegistry, default_layout
from railmesh.validation import ValidationError

console = Console()
app = typer.Typer(help="Generate rail track meshes and preview them.")


def _log_active_units(settings: TrackSettings) -> None:
    if abs(settings.scale_to_cm - 1.0) < 1e-9:
        console.print(f"[magenta]Units: {settings.units} ({settings.label}).[/magenta]")
    else:
        console.print(
            f"[magenta]Units: {settings.units} ({settings.label}); 1 {settings.label} = {settings.scale_to_cm:.4g} cm.[/magenta]"
        )


def _resolve_settings(config: pathlib.Path | None) -> TrackSettings:
    if config is not None and not config.exists():
        raise typer.BadParameter(f"Config path {config} does not exist.")
    try:
        return load_settings(config)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc


def build_registry(settings: TrackSettings, segments: int | None = None) -> MeshRegistry:
    """Build the ``curve`` and ``straight`` pieces described by ``settings``."""

    count = settings.segments if segments is None else segments
    profile = settings.profile()
    registry = MeshRegistry()
    registry.add("curve", make_rail(settings.arc(), profile, count))
    registry.add("straight", make_rail(settings.straight(), profile, count))
    return registry


def _build_or_fail(settings: TrackSettings, segments: int | None) -> MeshRegistry:
    try:
        return build_registry(settings, segments)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def info(
    segments: int | None = typer.Option(None, "--segments", "-n", help="Segments per piece (default from config)."),
    config: pathlib.Path | None = typer.Option(None, "--config", help="Path to a railmesh.cfg file."),
) -> None:
    """
    Build the track pieces and report their mesh statistics.
    """

    settings = _resolve_settings(config)
    _log_active_units(settings)
    registry = _build_or_fail(settings, segments)

    table = Table(title="Track pieces")
    table.add_column("Piece")
    table.add_column("Vertices", justify="right")
    table.add_column("Triangles", justify="right")
    table.add_column("Boundary edges", justify="right")
    table.add_column("Non-manifold edges", justify="right")
    for name in registry.names():
        analysis = analyze_mesh(registry.get(name))
        table.add_row(
            name,
            str(analysis.n_vertices),
            str(analysis.n_faces),
            str(analysis.boundary_edges),
            str(analysis.nonmanifold_edges),
        )
    console.print(table)


@app.command()
def preview(
    segments: int | None = typer.Option(None, "--segments", "-n", help="Segments per piece (default from config)."),
    config: pathlib.Path | None = typer.Option(None, "--config", help="Path to a railmesh.cfg file."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Save a screenshot instead of opening an interactive window."
    ),
    show_edges: bool = typer.Option(False, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
) -> None:
    """
    Lay out a straight and two curved pieces and open a preview window.
    """

    settings = _resolve_settings(config)
    registry = _build_or_fail(settings, segments)
    arc = settings.arc()
    scene = default_layout(
        registry,
        color=settings.color,
        arc_span=arc.angular_span,
        radius=arc.radius,
        straight_length=settings.straight().length,
    )

    console.rule("railmesh preview")
    _log_active_units(settings)
    console.print(f"Rendering [green]{len(scene.nodes)}[/green] pieces from {len(registry)} meshes.")
    try:
        RailPreviewer(console=console).show(scene, screenshot_path=screenshot, show_edges=show_edges)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("init-config")
def init_config(
    path: pathlib.Path = typer.Option(CONFIG_FILE, "--path", help="Where to write the default configuration."),
) -> None:
    """
    Write a default railmesh.cfg if one does not exist yet.
    """

    existed = path.exists()
    ensure_user_config(path)
    if existed:
        console.print(f"[yellow]{path} already exists; left unchanged.[/yellow]")
    elif path.exists():
        console.print(Panel(f"Wrote defaults to [green]{path}[/green].", title="Config", border_style="green"))
    else:
        raise typer.BadParameter(f"Unable to write {path}.")


if __name__ == "__main__":  # pragma: no cover
    app()
