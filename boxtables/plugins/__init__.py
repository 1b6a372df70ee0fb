"""Output formatter plugins run by boxtables.pipeline."""
