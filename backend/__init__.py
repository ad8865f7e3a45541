"""
Art Catalog Viewer Backend

HTTP surface over a single catalog viewer session.

LAYER STRUCTURE:
================

1. CATALOG (catalog/)
   - Responsibility: Fetch artwork pages from the remote catalog
   - Outputs: CatalogPage, CatalogFetchError

2. VIEWER STATE (frontend/)
   - Responsibility: Current page, cross-page selection, view models
   - MUST NOT: Perform I/O other than through a RecordProvider

3. API (backend/api/)
   - Responsibility: Translate HTTP requests into session events
   - MUST NOT: Edit page or selection state directly
"""
