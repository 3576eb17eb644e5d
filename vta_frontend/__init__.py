"""Chat workspace and admin document dashboard for the VTA retrieval backend."""
from __future__ import annotations

__version__ = "0.1.0"
