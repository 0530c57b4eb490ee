"""CLI commands for the repository's commitmend configuration."""

import os
from typing import Optional

import typer

from commitmend.config import AVAILABLE_MODELS, CommitMode, LLMProvider, get_api_key_env_var
from commitmend.configure import ConfigureLLM
from commitmend.git import GitError, get_repo_root
from commitmend.interaction import CliInterface
from commitmend.llm.configuration import ApiKey
from commitmend.store import ConfigStore, ConfigStoreError

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage commitmend configuration in <repo>/.commitmend/",
    add_completion=False,
)


def _store() -> ConfigStore:
    try:
        return ConfigStore(get_repo_root())
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show the stored configuration."""
    store = _store()
    try:
        config = store.get()
    except ConfigStoreError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    if config is None:
        typer.echo("No configuration found. Run 'commitmend' to set it up.")
        return

    typer.echo(f"Current commitmend configuration ({store.config_file}):")
    typer.echo()
    typer.echo(f"  Mode: {config.mode.value}")
    typer.echo(f"  Provider: {config.provider.value}")
    typer.echo(f"  Model: {config.model or 'provider default'}")
    typer.echo(f"  Max Retries: {config.max_retries}")
    typer.echo(f"  Validation Max Retries: {config.validation_max_retries}")
    typer.echo()

    env_var = get_api_key_env_var(config.provider)
    value = os.environ.get(env_var, "").strip()
    if value:
        typer.echo(f"  API Key ({env_var}): {ApiKey(value).masked()}")
    else:
        typer.echo(f"  API Key ({env_var}): not set")


@config_app.command("set-mode")
def config_set_mode(
    mode: CommitMode = typer.Argument(..., help="Commit mode: auto or manual"),
) -> None:
    """Switch between AI-powered and manual commit mode."""
    try:
        ConfigureLLM(_store(), CliInterface()).update_mode(mode)
    except ConfigStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Mode set to {mode.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: LLMProvider = typer.Argument(..., help="Provider name (anthropic, openai, google, ollama, azure-openai, aws-bedrock)"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model to use with this provider"),
) -> None:
    """Set the LLM provider and, optionally, its model."""
    if model and model not in AVAILABLE_MODELS[provider]:
        typer.echo(f"Warning: {model} is not a known {provider.value} model", err=True)

    store = _store()
    try:
        store.set_property("provider", provider.value)
        store.set_property("model", model)
    except ConfigStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Provider set to {provider.value}" + (f" with model {model}" if model else ""))


@config_app.command("reset")
def config_reset() -> None:
    """Delete the stored configuration."""
    try:
        removed = _store().reset()
    except ConfigStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("Configuration removed." if removed else "No configuration to remove.")
