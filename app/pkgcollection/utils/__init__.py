"""Console output, logging and subprocess helpers shared by the CLI and the core."""
