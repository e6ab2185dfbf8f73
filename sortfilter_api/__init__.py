"""HTTP adapter for the sort & filter engine."""
