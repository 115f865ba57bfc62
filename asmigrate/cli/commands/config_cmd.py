"""Config command for viewing and managing asmigrate configuration."""

import typer

from ..app import app, console


VALID_KEYS = {
    "defaults.output_path",
    "defaults.worker_count",
    "defaults.worker_size",
    "azure.credential",
    "telemetry.enabled",
    "telemetry.ledger_path",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. defaults.worker_size, azure.credential)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify asmigrate configuration.

    Examples:
        asmigrate config show
        asmigrate config set defaults.worker_size Medium
        asmigrate config set azure.credential cli
        asmigrate config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] asmigrate config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    from ... import config as config_module

    config = config_module.get_config()

    console.print()
    console.print("[bold]asmigrate Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan] (applied to every plan)")
    console.print(f"  output_path  = {config.defaults.output_path}")
    console.print(f"  worker_count = {config.defaults.worker_count}")
    console.print(f"  worker_size  = {config.defaults.worker_size}")

    console.print()
    console.print("[bold cyan]Azure[/bold cyan]")
    console.print(f"  credential   = {config.azure.credential}")

    console.print()
    console.print("[bold cyan]Telemetry[/bold cyan] (local ledger)")
    console.print(f"  enabled      = {config.telemetry.enabled}")
    console.print(f"  ledger_path  = {config.ledger_path_resolved}")

    console.print()
    if config_module.CONFIG_FILE.exists():
        console.print(f"Config file: {config_module.CONFIG_FILE}")
    else:
        console.print(
            f"Config file: [dim]not created yet[/dim] ({config_module.CONFIG_FILE})"
        )
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    from ... import config as config_module

    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    if key == "azure.credential" and value not in config_module.CREDENTIAL_MODES:
        console.print(f"[red]Invalid credential mode:[/red] {value}")
        console.print(f"Valid modes: {', '.join(config_module.CREDENTIAL_MODES)}")
        raise typer.Exit(1)

    config = config_module.get_config()
    zone, field_name = key.split(".", 1)
    target = getattr(config, zone)

    if field_name in config_module.INT_FIELDS:
        try:
            int(value)
        except ValueError:
            console.print(f"[red]Invalid integer value:[/red] {value}")
            raise typer.Exit(1)
    try:
        coerced = config_module.coerce_value(field_name, value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    setattr(target, field_name, coerced)

    config.save()
    config_module.reset_config()  # Clear cached instance so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {config_module.CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    from ... import config as config_module

    if config_module.CONFIG_FILE.exists():
        config_module.CONFIG_FILE.unlink()
        config_module.reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {config_module.CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
