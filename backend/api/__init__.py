"""HTTP endpoints for the catalog viewer."""
