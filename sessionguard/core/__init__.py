"""Core package: result types, configuration, errors, and the composition root."""
