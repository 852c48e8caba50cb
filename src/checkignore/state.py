import click
from attrs import Factory
from attrs import frozen

from checkignore.env import Env
from checkignore.terminal import Terminal


@frozen
class CheckIgnoreState:
    """
    An object click keeps around as custom global state for the current CLI invocation.

    Run options are not kept here; see checkignore.config.RunConfig.
    """

    env: Env = Factory(Env)
    terminal: Terminal = Factory(Terminal)


def get_context() -> click.Context:
    """
    Get the current CLI invocation's click context.
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        # create a dummy context that will never be torn down
        from checkignore.cli import cli  # avoiding circular import

        ctx = click.Context(command=cli).scope().__enter__()

    return ctx


def get_state() -> CheckIgnoreState:
    """
    Get the current CLI invocation's global state.
    """
    ctx = get_context()
    return ctx.ensure_object(CheckIgnoreState)
