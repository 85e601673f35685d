"""Console entry points for kebab-tools."""
