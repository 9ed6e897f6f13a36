"""hypewaves: parallel hype-cycle timelines with user-drawn causal connections.

The engine lives in :mod:`hypewaves.core`; :mod:`hypewaves.cli` and
:mod:`hypewaves.api` are thin hosts around it.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
