# Entry point for the `check-ignore` console script and `python -m checkignore`.
# The click command installs its own error handling (see
# checkignore.commands.wrapper), so this module only has to hand over to it.


def main() -> None:
    """
    The entrypoint for `check-ignore`.

    The import is done lazily so `python -m checkignore` and the console
    script share one code path.
    """
    from checkignore.cli import cli

    cli(prog_name="check-ignore")
