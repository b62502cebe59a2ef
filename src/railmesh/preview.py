from __future__ import annotations

from pathlib import Path

from rich.console import Console

from railmesh.mesh import mesh_to_pyvista
from railmesh.scene import Scene

# Eye above the track looking down at the origin, +y up on screen.
CAMERA_POSITION = [(0.0, 0.0, 4.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


class RailPreviewer:
    """Render a Scene of rail pieces with PyVista."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._pv = None

    def show(
        self,
        scene: Scene,
        screenshot_path: Path | None = None,
        show_edges: bool = False,
        title: str = "railmesh preview",
    ) -> None:
        pv = self._ensure_backend()
        if not scene.nodes:
            raise PreviewBackendError("Scene does not contain any instances.")

        try:
            plotter = pv.Plotter(window_size=(1280, 800), lighting="none", off_screen=screenshot_path is not None)
            # headlight: the light sticks to the camera.
            plotter.add_light(pv.Light(light_type="headlight"))
            self.add_scene(plotter, scene, show_edges=show_edges)
            plotter.camera_position = CAMERA_POSITION

            if screenshot_path is not None:
                screenshot_path.parent.mkdir(parents=True, exist_ok=True)
                plotter.show(title=title, auto_close=True, screenshot=str(screenshot_path))
                self.console.print(f"[green]Saved screenshot to {screenshot_path}[/green]")
                return

            plotter.show(title=title)
            plotter.close()
        except (RuntimeError, ValueError) as exc:
            raise PreviewBackendError(f"PyVista preview failed: {exc}") from exc

    def add_scene(self, plotter, scene: Scene, show_edges: bool = False) -> None:
        for mesh, color in scene.world_meshes():
            plotter.add_mesh(
                mesh_to_pyvista(mesh),
                color=color[:3],
                opacity=color[3],
                show_edges=show_edges,
            )

    def _ensure_backend(self):
        if self._pv is not None:
            return self._pv
        try:
            import pyvista as pv
        except ImportError as exc:  # pragma: no cover - depends on installation
            raise PreviewBackendError("PyVista is required for previews. Install the 'pyvista' package.") from exc
        self._pv = pv
        return pv
