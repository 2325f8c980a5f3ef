"""Click commands for the gitopolis CLI."""
