"""Test tree, result model, context resolution and observers."""
