#!/usr/bin/env python3

import argparse
import argcomplete
import logging
import sys

from dataclasses import dataclass
from functools import wraps
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .alias import AliasStatus, install_alias, uninstall_alias, shim_filename
from .ai.generator import generate_script
from .ai.models import fallback_model, select_best_model
from .ai.types import ModelSelectionError, PleaseError, ScriptRequest
from .config import (
    Config,
    config_path,
    create_default_config,
    determine_provider,
    determine_script_type,
    load_config,
    save_config,
)
from .display import (
    ask_task,
    main_menu,
    script_menu,
    show_help,
    show_installation_success,
    show_script,
)

logger = logging.getLogger(__name__)

_available_actions: List["Action"] = []


@dataclass
class Action:
    flag: str
    dest: str
    func: Callable
    help: str


def action(func):
    """
    Registers a `handle_<name>` function as a standalone `--<name>` flag.
    The first line of the docstring becomes the flag's help text.
    """
    if not func.__name__.startswith("handle_"):
        raise ValueError("Action handler must start with 'handle_'.")

    if not func.__doc__:
        raise ValueError(
            f"Action handler '{func.__name__}' must have a docstring for its help text."
        )

    @wraps(func)
    def wrapper(console: Console):
        try:
            func(console)
        except PleaseError as e:
            console.print(f"[red]❌ {escape(str(e))}[/]")
            sys.exit(1)

    dest = func.__name__[len("handle_"):]
    flag = "--" + dest.replace("_", "-")
    help_text = func.__doc__.strip().split("\n")[0]
    _available_actions.append(Action(flag, dest, wrapper, help_text))
    return wrapper


##############################################################################


@action
def handle_install_alias(console: Console):
    """Create the 'pls' shortcut (and the legacy 'ol') next to the executable."""
    console.print("\n[bold yellow]🔧 Installing 'pls' alias (with 'ol' for backwards compatibility)...[/]\n")
    statuses = install_alias()

    for alias, status in statuses.items():
        name = shim_filename(alias)
        if status is AliasStatus.CREATED:
            console.print(f"[green]✅ Successfully created {name}![/]")
        else:
            console.print(f"[yellow]⚠️ Warning: Failed to create {name}[/]")
    console.print()
    show_installation_success(console)


@action
def handle_uninstall_alias(console: Console):
    """Remove the 'pls' and 'ol' shortcuts."""
    console.print("\n[bold yellow]🗑️  Removing aliases...[/]\n")
    statuses = uninstall_alias()

    for alias, status in statuses.items():
        name = shim_filename(alias)
        if status is AliasStatus.REMOVED:
            console.print(f"[green]✅ Successfully removed {name}[/]")
        else:
            console.print(f"[yellow]💭 {name} not found[/]")


##############################################################################


def _load_config() -> Config:
    """Loads the config file, creating it with defaults the first time."""
    try:
        return load_config()
    except FileNotFoundError:
        config = create_default_config()
        try:
            save_config(config)
        except OSError as e:
            # The defaults still work for the local Ollama provider.
            logger.warning("Could not save default configuration to %s: %s", config_path(), e)
        return config


def build_request(config: Config, task_description: str) -> ScriptRequest:
    provider = determine_provider(config)
    script_type = determine_script_type(config)

    try:
        model = select_best_model(config, task_description, provider)
    except ModelSelectionError as e:
        print(
            f"Warning: Could not auto-select model ({e}), using fallback",
            file=sys.stderr,
        )
        model = fallback_model(provider)

    return ScriptRequest(
        task_description=task_description,
        script_type=script_type,
        provider=provider,
        model=model,
    )


def run_task(task_description: str, console: Console):
    try:
        config = _load_config()
        request = build_request(config, task_description)
        response = generate_script(config, request)
    except PleaseError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    show_script(response, console)
    script_menu(response, console)


def run_menu(console: Console):
    selected = main_menu(console)
    if selected == "generate":
        task = ask_task(console)
        if task:
            run_task(task, console)
    elif selected == "help":
        show_help(console)
    elif selected == "install-alias":
        handle_install_alias(console)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="please",
        description="Turn a natural language task description into a script you can review and run.",
        epilog="Example: pls create a hello world script",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Print debug logs to stderr."
    )

    for registered in _available_actions:
        parser.add_argument(registered.flag, dest=registered.dest, action="store_true", help=registered.help)

    parser.add_argument(
        "task",
        nargs=argparse.REMAINDER,
        help="What you want the script to do, in plain English. No quotes needed.",
    )
    return parser


def run_cli(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments and runs the matching flow.

    Args:
        argv: A list of strings representing the command-line arguments.
              If None, `sys.argv[1:]` is used automatically by `parse_args`.
    """
    parser = build_parser()

    # Enable argument auto-completion.
    argcomplete.autocomplete(parser)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    console = Console()

    for registered in _available_actions:
        if getattr(args, registered.dest):
            registered.func(console)
            return

    task_description = " ".join(args.task).strip()
    if not task_description:
        run_menu(console)
        return

    run_task(task_description, console)


def main():
    """The entry point of the `please` script and its `pls` alias."""
    run_cli()


if __name__ == "__main__":
    main()
