"""civicfix - file-backed lifecycle tracking for citizen-reported municipal issues."""

from civicfix._version import version as __version__

__all__ = ["__version__"]
