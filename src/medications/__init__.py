"""
Medications subgraph
Prescription records served as an Apollo Federation subgraph
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
