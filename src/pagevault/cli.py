"""CLI entry point for pagevault."""

import logging
import sys
from pathlib import Path

import click
import pyperclip

from . import __version__
from .assistant import PageAssistant
from .chat import ChatSession
from .config import Settings, default_settings_path, load_settings, save_settings
from .exceptions import ConfigError, PageVaultError
from .extractor import PageExtractor
from .formatter import format_summary_note
from .llm import get_llm_provider
from .models import PageCapture
from .notify import show_error, show_info, show_success
from .prompts import SUMMARY_TEMPLATES
from .writer import VaultWriter

CHAT_HELP = "Commands: /reload (re-extract the page), /clear, /save (Q&A note), /quit"


@click.group()
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: PAGEVAULT_SETTINGS or the user config directory)",
)
@click.option(
    "--vault-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Path to Obsidian vault (default: ./vault_output or OBSIDIAN_VAULT_PATH env var)",
)
@click.option("--model", type=str, default=None, help="Model name to request")
@click.option("--base-url", type=str, default=None, help="OpenAI-compatible API base URL")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.version_option(__version__, prog_name="pagevault")
@click.pass_context
def main(ctx, settings_path, vault_path, model, base_url, verbose):
    """Summarize web pages and chat about them, saving notes to an Obsidian vault.

    Example: pagevault summarize https://en.wikipedia.org/wiki/Bessie_Coleman
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = settings_path
    ctx.obj["overrides"] = {"vault_path": vault_path, "model": model, "base_url": base_url}
    ctx.obj["verbose"] = verbose


def _load(ctx) -> Settings:
    try:
        return load_settings(ctx.obj["settings_path"], **ctx.obj["overrides"])
    except ConfigError as e:
        show_error("Configuration error", e)
        sys.exit(2)


def _prepare(ctx, template=None):
    """Load and validate settings, then build the assistant and vault writer."""
    settings = _load(ctx)
    if template:
        settings.summary_template = template
    try:
        settings.validate()
        llm = get_llm_provider(settings)
    except ConfigError as e:
        show_error("Configuration error", e)
        sys.exit(2)

    if ctx.obj["verbose"]:
        click.echo(f"Model: {settings.model} ({settings.base_url})")
        click.echo(f"Vault path: {settings.vault_path}")

    return settings, PageAssistant(llm, settings), VaultWriter(settings.vault_path)


def _summarize_and_save(settings, assistant, writer, page: PageCapture, open_note: bool) -> None:
    try:
        show_info("Generating summary...")
        summary = assistant.summarize(page)
        content = format_summary_note(page, summary, settings.include_frontmatter)
        path = writer.save_note(content, page, settings)
    except PageVaultError as e:
        show_error("Summarization failed", e)
        sys.exit(1)

    show_success(f"Note saved: {writer.relative_path(path)}")
    if open_note:
        writer.open_note(path)


_template_option = click.option(
    "--template",
    type=click.Choice(list(SUMMARY_TEMPLATES)),
    default=None,
    help="Summary template (default: the summary_template setting)",
)
_open_option = click.option(
    "--open", "open_note",
    is_flag=True,
    default=False,
    help="Open the saved note afterwards",
)


@main.command()
@click.argument("url")
@_template_option
@_open_option
@click.pass_context
def summarize(ctx, url, template, open_note):
    """Summarize the page at URL into a new note."""
    settings, assistant, writer = _prepare(ctx, template)

    show_info("Extracting page content...")
    try:
        page = PageExtractor(settings).extract(url)
    except PageVaultError as e:
        show_error("Could not extract the page, try 'pagevault clipboard' instead", e)
        sys.exit(1)

    if ctx.obj["verbose"]:
        click.echo(f"  Title: {page.title}")
        click.echo(f"  Content length: {len(page.content)} chars")

    _summarize_and_save(settings, assistant, writer, page, open_note)


main.add_command(summarize, name="note")


@main.command()
@click.option("--url", type=str, default=None, help="Source URL of the copied text")
@click.option("--title", type=str, default=None, help="Page title")
@click.option(
    "--input", "input_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read the page text from a file instead of the clipboard ('-' for stdin)",
)
@_template_option
@_open_option
@click.pass_context
def clipboard(ctx, url, title, input_file, template, open_note):
    """Summarize page text copied to the clipboard."""
    settings, assistant, writer = _prepare(ctx, template)

    if input_file is not None:
        text = input_file.read()
    else:
        show_info("Reading clipboard...")
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            show_error("Could not read the clipboard", e)
            sys.exit(1)

    if not text or not text.strip():
        show_error("The clipboard is empty, copy the page content first")
        sys.exit(1)

    if url is None:
        url = click.prompt("URL")
    if title is None:
        title = click.prompt("Title", default="", show_default=False)

    try:
        page = PageExtractor(settings).from_text(text, url, title)
    except PageVaultError as e:
        show_error("Could not use the clipboard text", e)
        sys.exit(1)

    _summarize_and_save(settings, assistant, writer, page, open_note)


def _load_chat_page(session: ChatSession, url: str) -> None:
    show_info("Loading page context...")
    try:
        page = session.load_page(url)
    except PageVaultError as e:
        show_error("Could not load the page", e)
        return
    show_success("Page context loaded")
    click.echo(f"  Title: {page.title}")
    click.echo(f"  URL: {page.url}")
    click.echo(f"  Content length: {len(page.content)} chars")


@main.command()
@click.argument("url")
@_open_option
@click.pass_context
def chat(ctx, url, open_note):
    """Chat interactively about the page at URL."""
    settings, assistant, writer = _prepare(ctx)
    session = ChatSession(assistant, PageExtractor(settings))

    _load_chat_page(session, url)
    show_info(CHAT_HELP)

    while True:
        try:
            text = click.prompt("You", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            click.echo()
            break

        command = text.strip()
        if not command:
            continue
        if command in ("/quit", "/exit"):
            break
        if command == "/help":
            show_info(CHAT_HELP)
            continue
        if command == "/reload":
            _load_chat_page(session, url)
            continue
        if command == "/clear":
            if session.clear():
                show_success("Conversation cleared")
            else:
                show_info("The conversation is already empty")
            continue
        if command == "/save":
            try:
                path = session.save_qa_note(writer, settings)
            except PageVaultError as e:
                show_error("Could not save the Q&A note", e)
                continue
            show_success(f"Q&A note saved: {writer.relative_path(path)}")
            if open_note:
                writer.open_note(path)
            continue

        show_info("Thinking...")
        try:
            reply = session.send(text)
        except PageVaultError as e:
            show_error("AI reply failed", e)
            continue
        if reply is not None:
            click.echo(f"\nAI> {reply}\n")


@main.command()
def templates():
    """List the available summary templates."""
    for key, template in SUMMARY_TEMPLATES.items():
        click.echo(f"{key:<10} {template['name']}")


@main.group()
def config():
    """Show or change stored settings."""


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show the effective settings (API keys masked)."""
    settings = _load(ctx)
    for key, value in settings.redacted().items():
        if isinstance(value, str) and "\n" in value:
            value = value.replace("\n", "\\n")
        click.echo(f"{key} = {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key, value):
    """Store a setting, e.g. 'pagevault config set model gpt-4o'."""
    path = ctx.obj["settings_path"]
    try:
        settings = load_settings(path, apply_env=False)
        settings.set_value(key, value)
        saved = save_settings(settings, path)
    except ConfigError as e:
        show_error("Configuration error", e)
        sys.exit(2)
    show_success(f"Saved {key} to {saved}")


@config.command("path")
@click.pass_context
def config_path(ctx):
    """Print the settings file location."""
    click.echo(ctx.obj["settings_path"] or default_settings_path())
