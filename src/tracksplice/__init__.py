"""tracksplice - drag-and-drop reordering for paginated playlists."""

__version__ = "0.1.0"
