"""Movie Shelf - personal movie collection tracker."""

__version__ = "0.1.0"
