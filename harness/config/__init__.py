"""Configuration of the test harness."""
