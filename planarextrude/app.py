import os
import tempfile
from typing import TYPE_CHECKING, List, Optional

from planarextrude.tolerances import Tolerances

if TYPE_CHECKING:
    from planarextrude.shape import Brep


class App:
    """
    The document an extrusion runs in.

    Holds the model tolerances that every solve reads fresh, and tracks the
    breps produced so far.
    """

    def __init__(self, tolerances: Optional[Tolerances] = None):
        self.tolerances = tolerances or Tolerances()
        self._shapes: List["Brep"] = []

    def set_tolerances(
        self, absolute: Optional[float] = None, angle: Optional[float] = None
    ) -> Tolerances:
        """Replace the document tolerances; unspecified values are kept."""
        self.tolerances = self.tolerances.replace(absolute=absolute, angle=angle)
        return self.tolerances

    def register_shape(self, shape: "Brep") -> None:
        """Register a shape with this app for tracking."""
        if shape not in self._shapes:
            self._shapes.append(shape)

    def get_shapes(self) -> List["Brep"]:
        """Get all shapes registered with this app."""
        return self._shapes.copy()

    def clear_shapes(self) -> None:
        self._shapes = []

    def volume(self) -> float:
        """Get the total volume of all solid shapes registered with this app."""
        total_volume = 0.0
        for shape in self._shapes:
            if shape.is_solid:
                total_volume += shape.volume()
        return total_volume

    def shape_count(self) -> int:
        """Get the number of shapes registered with this app."""
        return len(self._shapes)

    def show_3d(
        self,
        width: int = 1200,
        height: int = 800,
        show_axes: bool = True,
        shape_opacity: float = 0.8,
        screenshot: Optional[str] = None,
        show_edges: bool = False,
    ) -> None:
        """
        Visualize all shapes in 3D space using PyVista.

        Args:
            width: Window width in pixels (default: 1200)
            height: Window height in pixels (default: 800)
            show_axes: Whether to show coordinate axes (default: True)
            shape_opacity: Opacity of 3D shapes (0-1, default: 0.8)
            screenshot: Optional path to save screenshot instead of showing interactively
            show_edges: Whether to show mesh edges/tessellation lines (default: False)

        Raises:
            ImportError: If PyVista is not installed
            ValueError: If no shapes to display
        """
        try:
            import pyvista as pv
        except ImportError:
            raise ImportError(
                "PyVista is required for 3D visualization. Install with: pip install pyvista"
            )

        shapes = self.get_shapes()
        if not shapes:
            raise ValueError("No shapes to display")

        plotter = pv.Plotter(
            window_size=[width, height], off_screen=(screenshot is not None)
        )
        plotter.set_background("white")

        shape_colors = [
            "lightblue",
            "lightgreen",
            "lightyellow",
            "lightcoral",
            "lightpink",
            "lightgray",
            "lavender",
            "peachpuff",
        ]

        for idx, shape in enumerate(shapes):
            color = shape_colors[idx % len(shape_colors)]

            with tempfile.NamedTemporaryFile(suffix=".stl", delete=False) as tmp:
                tmp_stl = tmp.name

            try:
                shape.to_stl(tmp_stl)
                mesh = pv.read(tmp_stl)
                plotter.add_mesh(
                    mesh,
                    color=color,
                    opacity=shape_opacity,
                    show_edges=show_edges,
                    edge_color="black" if show_edges else None,
                    label=f"Shape {idx + 1}",
                )
            finally:
                if os.path.exists(tmp_stl):
                    os.remove(tmp_stl)

        if show_axes:
            plotter.add_axes()
        plotter.add_legend()
        plotter.camera_position = "iso"

        if screenshot:
            plotter.show(screenshot=screenshot)
        else:
            plotter.show()
