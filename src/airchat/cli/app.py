"""Main CLI application using Typer."""
from contextlib import ExitStack
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..credentials import DEFAULT_PROFILE
from ..llm import Message, ProviderError, UnsupportedOperation
from ..session import Client, ClientConfig
from ..transcript import Transcript, TranscriptError, load
from .console import DEFAULT_DELAY, setup_logging, typewrite
from .providers import Host, get_credentials, get_provider

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="airchat",
    help="Chat with a language model from the terminal, with optional transcripts",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

PROMPT = ">> "

# REPL commands
CMD_CLEAR = "/clear"
CMD_USAGE = "/usage"
CMD_QUIT = "/quit"


def _version_callback(value: bool):
    if value:
        console.print(f"airchat v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit"
    )
):
    """Chat with a language model from the terminal."""


def _read_transcript(path: Path) -> list[Message]:
    """Load a transcript file, exiting with an error message on failure."""
    try:
        with open(path, encoding="utf-8") as f:
            return load(f)
    except (OSError, TranscriptError) as e:
        console.print(f"[red]Error: could not load transcript {path}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _needs_newline(path: Path) -> bool:
    """True if an existing, non-empty file does not end with a newline."""
    try:
        with open(path, "rb") as f:
            if f.seek(0, 2) == 0:
                return False
            f.seek(-1, 2)
            return f.read(1) != b"\n"
    except FileNotFoundError:
        return False


def _enable_line_editing() -> bool:
    """Load readline so the prompt gets line editing and history, where available."""
    try:
        import readline  # noqa: F401
    except ImportError:
        return False
    return True


def _record(transcript: Transcript, *messages: Message) -> None:
    """Persist messages; a failed write is reported but does not end the chat."""
    try:
        for message in messages:
            transcript.record(message)
    except OSError as e:
        console.print(f"[yellow]Warning: transcript write failed: {escape(str(e))}[/yellow]")


def _format_usage(tokens: int | None) -> str:
    return "unknown" if tokens is None else str(tokens)


@app.command()
def chat(
    host: Host = typer.Option(
        None,
        "--host",
        help="Host for the model (default: $AIRCHAT_HOST or openai)"
    ),
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Name of host model, if applicable"
    ),
    max_tokens: int = typer.Option(
        None,
        "--max-tokens",
        "-m",
        min=1,
        help="Maximum tokens per reply; useful for billing purposes"
    ),
    url: str = typer.Option(
        None,
        "--url",
        help="Endpoint for the custom host (default: $AIRCHAT_URL)"
    ),
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="Credential profile holding the API key (default: $AIRCHAT_PROFILE)"
    ),
    transcript_path: Path = typer.Option(
        None,
        "--transcript",
        "-t",
        dir_okay=False,
        help="Append the conversation to this transcript file"
    ),
    load_path: Path = typer.Option(
        None,
        "--load",
        "-l",
        exists=True,
        dir_okay=False,
        help="Resume the conversation stored in this transcript"
    ),
    system: str = typer.Option(
        None,
        "--system",
        "-s",
        help="System message to start the conversation with"
    ),
    delay: float = typer.Option(
        DEFAULT_DELAY,
        "--delay",
        min=0.0,
        help="Seconds between words when printing replies (0 prints at once)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log requests and per-turn token usage"
    )
):
    """Start an interactive conversation.

    Type a message and press Enter. /clear forgets the conversation,
    /usage shows tokens used so far, /quit (or Ctrl-D) exits.
    """
    setup_logging(verbose)
    _enable_line_editing()

    loaded = _read_transcript(load_path) if load_path else []
    context = list(loaded)
    if system:
        context.append(Message.system(system))

    provider = get_provider(host=host, name=name, url=url, profile=profile, console=console)
    config = ClientConfig(model_name=name, max_tokens=max_tokens, verbose=verbose)

    with ExitStack() as stack:
        client = stack.enter_context(Client(provider, config=config, context=context))

        sink = None
        if transcript_path:
            try:
                needs_newline = _needs_newline(transcript_path)
                sink = stack.enter_context(open(transcript_path, "a", encoding="utf-8"))
                if needs_newline:
                    # Keep the next marker off the last line of a hand-edited file
                    sink.write("\n")
            except OSError as e:
                console.print(f"[red]Error: could not open transcript {transcript_path}: {escape(str(e))}[/red]")
                raise typer.Exit(code=1)
        transcript = Transcript(sink)

        # Appending to the transcript we resumed from: its messages are already there
        resuming_in_place = (
            load_path is not None
            and transcript_path is not None
            and load_path.resolve() == transcript_path.resolve()
        )
        _record(transcript, *(context[len(loaded):] if resuming_in_place else context))

        console.print(f"[bold]airchat v{__version__}[/bold] [dim]({client})[/dim]")
        if loaded:
            console.print(f"[dim]Resumed {len(loaded)} message(s)[/dim]")

        while True:
            try:
                line = console.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                console.print()
                break

            text = line.strip()
            if not text:
                continue
            if text == CMD_QUIT:
                break
            if text == CMD_CLEAR:
                client.clear()
                console.print("[dim]Context cleared[/dim]")
                continue
            if text == CMD_USAGE:
                console.print(f"[dim]Tokens used: {_format_usage(client.tokens_used)}[/dim]")
                continue

            message = Message.user(text)
            try:
                reply = client.send(message)
            except ProviderError as e:
                # The failed turn stays in the context, so it is recorded too
                _record(transcript, message)
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                continue

            _record(transcript, message, reply)
            typewrite(console, reply.content, delay)

    if verbose:
        console.print(f"[dim]Tokens used: {_format_usage(client.tokens_used)}[/dim]")


@app.command()
def models(
    host: Host = typer.Option(
        None,
        "--host",
        help="Host for the model (default: $AIRCHAT_HOST or openai)"
    ),
    url: str = typer.Option(
        None,
        "--url",
        help="Endpoint for the custom host (default: $AIRCHAT_URL)"
    ),
    profile: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="Credential profile holding the API key (default: $AIRCHAT_PROFILE)"
    )
):
    """List the models offered by the host."""
    with get_provider(host=host, url=url, profile=profile, console=console) as provider:
        try:
            available = provider.models()
        except UnsupportedOperation as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
            raise typer.Exit(code=1)
        except ProviderError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)

    if not available:
        console.print("[yellow]No models found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Model", style="cyan")
    for model_id in sorted(available):
        table.add_row(model_id)

    console.print(table)


@app.command()
def show(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Transcript file to display"
    )
):
    """Pretty-print a transcript."""
    messages = _read_transcript(path)

    if not messages:
        console.print("[yellow]Transcript is empty[/yellow]")
        return

    styles = {"system": "magenta", "user": "cyan", "assistant": "green"}
    for message in messages:
        console.print(Panel(
            Text(message.content),
            title=message.role.value.upper(),
            title_align="left",
            border_style=styles[message.role.value]
        ))


profile_app = typer.Typer(
    help="Manage stored API keys",
    no_args_is_help=True,
)
app.add_typer(profile_app, name="profile")


@profile_app.command("set")
def profile_set(
    name: str = typer.Argument(
        DEFAULT_PROFILE,
        help="Profile to store the key under"
    ),
    key: str = typer.Option(
        ...,
        "--key",
        prompt="API key",
        hide_input=True,
        help="API key to store (prompted for when omitted)"
    )
):
    """Store an API key for a profile, replacing any previous one."""
    store = get_credentials()
    try:
        store.set(name, key)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Saved API key for profile {escape(name)}[/green]")


@profile_app.command("delete")
def profile_delete(
    name: str = typer.Argument(..., help="Profile to forget")
):
    """Delete a stored profile."""
    try:
        get_credentials().delete(name)
    except KeyError as e:
        console.print(f"[red]Error: {escape(str(e.args[0]))}[/red]")
        raise typer.Exit(code=1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Deleted profile {escape(name)}[/green]")


@profile_app.command("list")
def profile_list():
    """List stored profiles."""
    try:
        names = get_credentials().list()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if not names:
        console.print("[yellow]No stored profiles[/yellow]")
        return

    for name in names:
        console.print(escape(name))


if __name__ == "__main__":
    app()
