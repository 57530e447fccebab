"""Grid raycaster that validates .cub scene files and renders a first-person view."""

__version__ = "0.1.0"
__all__ = ["scene", "raycast", "events", "app"]