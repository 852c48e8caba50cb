from checkignore.commands.check_ignore import check_ignore

# check-ignore is a single command, not a group of subcommands
cli = check_ignore
