"""Graph construction and analysis."""
