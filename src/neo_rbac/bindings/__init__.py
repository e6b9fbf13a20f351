"""UI bindings driven by the permission resolver."""

from .allow_binding import AllowBinding

__all__ = ["AllowBinding"]
