import click
from registrymirror.config import load_config, get_config_path, get_default_config, save_config
from registrymirror.cli_utils import handle_errors
import json


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("generate")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@handle_errors
def generate_config(force):
    """Write a default configuration file."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        click.echo(f"Configuration already exists at {config_path}. Use --force to overwrite.")
        return
    saved = save_config(get_default_config())
    click.echo(f"Configuration written to {saved}")


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@handle_errors
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))
