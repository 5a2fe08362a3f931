"""Click subcommands for the newsbrief CLI."""
