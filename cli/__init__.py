"""Command line subcommands for ocrx."""
