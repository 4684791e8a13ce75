import os
import platform
import subprocess
import tempfile

from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from . import __version__
from .ai.types import ScriptResponse


@dataclass(frozen=True)
class Dialect:
    extension: str
    lexer: str
    interpreter: List[str]


DIALECTS: Dict[str, Dialect] = {
    "bash": Dialect(".sh", "bash", ["bash"]),
    "zsh": Dialect(".zsh", "zsh", ["zsh"]),
    "sh": Dialect(".sh", "sh", ["sh"]),
    "powershell": Dialect(
        ".ps1",
        "powershell",
        ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File"],
    ),
    "batch": Dialect(".bat", "batch", ["cmd", "/c"]),
}


HELP_TEXT = """
# please

Turn a plain English description into a script you can review, run or save.

## Usage

    please <what you want to do>
    pls <what you want to do>

## Examples

    pls create a hello world script
    pls find all files larger than 100MB in my home directory
    pls back up my documents folder to a zip file

## Options

- `--install-alias`    create the `pls` (and legacy `ol`) shortcut next to the executable
- `--uninstall-alias`  remove the shortcuts
- `-v`, `--verbose`    print debug logs to stderr
- `--version`          show the version
- `-h`, `--help`       show this help

## Providers

Set `PLEASE_PROVIDER` to `ollama` (default), `openai` or `anthropic`.
API keys are read from `~/.please/config.json`, `OPENAI_API_KEY` or `ANTHROPIC_API_KEY`.
"""


MAIN_MENU_CHOICES = {
    "1": "generate",
    "2": "help",
    "3": "install-alias",
    "4": "quit",
    "q": "quit",
}


def dialect_for(script_type: str) -> Dialect:
    return DIALECTS.get(script_type, DIALECTS["bash"])


def interpreter_command(script_type: str, script_path: str) -> List[str]:
    command = list(dialect_for(script_type).interpreter)
    if script_type == "powershell" and platform.system() != "Windows":
        command[0] = "pwsh"
    return command + [script_path]


def _ask(question: str) -> Optional[str]:
    try:
        return input(question).strip()
    except (KeyboardInterrupt, EOFError):
        return None


def _confirm(question: str) -> bool:
    answer = _ask(f"{question} [y/N] ")
    return bool(answer) and answer.lower() in ("y", "yes")


def show_script(response: ScriptResponse, console: Console):
    """Renders the generated script with its metadata and explanation."""
    console.print(Panel("🤖 Please Script Generator", style="bold cyan", expand=True))
    console.print(f"📝 [bold]Task:[/] {escape(response.task_description)}")
    console.print(f"🧠 [bold]Model:[/] {escape(response.model)} ({response.provider})")
    console.print(f"🖥️  [bold]Platform:[/] {response.script_type} script")
    console.print()
    console.print(Panel("📋 Generated Script", style="bold cyan", expand=True))

    syntax = Syntax(
        response.script,
        dialect_for(response.script_type).lexer,
        line_numbers=True,
        word_wrap=True,
    )
    console.print(syntax)

    if response.explanation:
        console.print()
        console.print(Markdown(response.explanation))

    console.print("\n[green]✅ Script generated successfully![/]")


def run_script(response: ScriptResponse, console: Console) -> Optional[int]:
    """Runs the script after an explicit confirmation. Returns its exit code."""
    if not _confirm("Are you sure you want to run this script?"):
        console.print("[yellow]Script not executed.[/]")
        return None

    extension = dialect_for(response.script_type).extension
    fd, script_path = tempfile.mkstemp(prefix="please-", suffix=extension)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as script_file:
            script_file.write(response.script)
            script_file.write("\n")

        command = interpreter_command(response.script_type, script_path)
        console.print(f"[green]▶ Running:[/] {escape(' '.join(command))}")
        try:
            result = subprocess.run(command)
        except FileNotFoundError:
            console.print(f"[red]❌ Interpreter '{command[0]}' was not found in your PATH.[/]")
            return None

        style = "green" if result.returncode == 0 else "red"
        console.print(f"[{style}]Script finished with exit code {result.returncode}.[/]")
        return result.returncode
    finally:
        os.remove(script_path)


def save_script(
    response: ScriptResponse, console: Console, filename: Optional[str] = None
) -> Optional[str]:
    """Writes the script to a new file. Existing files are never overwritten."""
    extension = dialect_for(response.script_type).extension
    default_name = f"script{extension}"
    if filename is None:
        filename = _ask(f"Save as [{default_name}]: ")
        if filename is None:
            return None
    filename = filename or default_name

    if os.path.exists(filename):
        console.print(f"[red]❌ '{escape(filename)}' already exists, not overwriting it.[/]")
        return None

    try:
        with open(filename, "w", encoding="utf-8") as f:
            f.write(response.script)
            f.write("\n")
        if response.script_type in ("bash", "zsh", "sh"):
            os.chmod(filename, 0o755)
    except OSError as e:
        console.print(f"[red]❌ Could not save the script: {escape(str(e))}[/]")
        return None

    console.print(f"[green]💾 Saved to {escape(filename)}[/]")
    return filename


def script_menu(response: ScriptResponse, console: Console) -> str:
    """
    Asks the user what to do with the generated script and does it.

    Returns the chosen action: "run", "save" or "quit".
    """
    while True:
        choice = _ask("\nWhat next? [r]un / [s]ave / [q]uit: ")
        if choice is None:
            return "quit"

        choice = choice.lower()
        if choice in ("r", "run"):
            run_script(response, console)
            return "run"
        if choice in ("s", "save"):
            save_script(response, console)
            return "save"
        if choice in ("", "q", "quit"):
            console.print("👋 Bye!")
            return "quit"
        console.print(f"[yellow]Unknown option '{escape(choice)}'.[/]")


def main_menu(console: Console) -> str:
    """Shown when no arguments are given. Returns the selected action."""
    console.print(Panel(f"🤖 please {__version__}", style="bold magenta", expand=True))
    console.print("  [bold]1[/]  Generate a script")
    console.print("  [bold]2[/]  Show help")
    console.print("  [bold]3[/]  Install the 'pls' alias")
    console.print("  [bold]4[/]  Quit")

    while True:
        choice = _ask("\nChoose an option: ")
        if choice is None:
            return "quit"
        action = MAIN_MENU_CHOICES.get(choice.lower())
        if action:
            return action
        console.print(f"[yellow]Unknown option '{escape(choice)}'.[/]")


def ask_task(console: Console) -> str:
    task = _ask("Describe the task: ")
    return task or ""


def show_help(console: Console):
    console.print(Markdown(HELP_TEXT))
    show_footer(console)


def show_footer(console: Console):
    console.print("\n[bold yellow]💡 Tips:[/]")
    console.print("  [cyan]• Use natural language - no quotes needed![/]")
    console.print("  [cyan]• Be specific for better results[/]")
    console.print("  [cyan]• Always review scripts before execution[/]")
    console.print("  [cyan]• Set PLEASE_PROVIDER=openai for OpenAI[/]")
    console.print("  [cyan]• Set PLEASE_PROVIDER=anthropic for Claude[/]")
    console.print("\n[bold magenta]🌟 Happy scripting! 🌟[/]")


def show_installation_success(console: Console):
    console.print("[bold green]🎉 Installation complete! 🎉[/]\n")
    console.print("[bold cyan]🚀 Try it out:[/]")
    console.print("  [yellow]pls create a hello world script[/]")
    console.print("  [yellow]ol create a hello world script[/] (legacy)")
    console.print("\n[bold magenta]    ✨ Magic happens with just 3 letters: 'pls' ✨[/]")
