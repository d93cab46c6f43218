"""Command-line tools: human play and benchmarks."""
