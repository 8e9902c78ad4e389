"""depmirror subcommands, registered on the root group in depmirror.cli."""
