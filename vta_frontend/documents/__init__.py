"""Admin document dashboard exports."""
from __future__ import annotations

from .registry import DocumentRegistry
from .service import DocumentDashboard

__all__ = ["DocumentDashboard", "DocumentRegistry"]
