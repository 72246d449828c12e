"""Container option composition."""

from .lib import CONTAINER_SPACING_CLASS, compose_container

__all__ = ["CONTAINER_SPACING_CLASS", "compose_container"]
