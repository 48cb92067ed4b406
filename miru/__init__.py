"""miru - personal anime collection manager."""

__version__ = "0.1.0"
__logo__ = "見"
