"""
Viewer Package

ARCHITECTURAL BOUNDARY:
=======================
Owns the state a catalog table needs: the page on screen and the
selection that outlives it. Rendering is reduced to frozen view models.

DIRECTION OF DEPENDENCY:
========================
frontend → catalog
"""

from .session import CatalogViewSession

__all__ = ['CatalogViewSession']
