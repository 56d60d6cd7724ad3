"""Report writers for finished test trees."""
