"""Config commands -- view and modify global configuration.

Provides the ``hierli config`` sub-command group for reading, updating, and
resetting the user's global configuration file
(:class:`~hierli.models.GlobalConfig`). Settings stored there are the lowest
precedence layer for the path prefix, the seed verbs and the output format.
"""

from __future__ import annotations

import typer

from hierli.exceptions import InvalidUsageError
from hierli.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        "-e",
        help="Show the resolved config (project, env and defaults applied).",
    ),
) -> None:
    """Show current configuration.

    Example::

        hierli config show
        hierli --json config show --effective
    """
    from hierli.config import get_config_dir, load_global_config, resolve_config

    config = resolve_config() if effective else load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'hierarchy.prefix')."
    ),
    value: str = typer.Argument(help="Value to set. Lists are comma-separated."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. List fields such as
    ``hierarchy.seed_verbs`` take a comma-separated value. The updated config
    is validated against :class:`~hierli.models.GlobalConfig` before saving.

    Raises:
        typer.Exit: With code 2 if the key path is invalid or validation
            fails.

    Example::

        hierli config set hierarchy.prefix /api/atlas/v2/
        hierli config set hierarchy.seed_verbs get,list,create,pause
        hierli config set output.format plain
    """
    from hierli.config import load_global_config, save_global_config
    from hierli.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=InvalidUsageError.exit_code)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=InvalidUsageError.exit_code)

    if isinstance(target[final_key], list):
        coerced: object = [item.strip() for item in value.split(",") if item.strip()]
    else:
        coerced = value
    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=InvalidUsageError.exit_code) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip the confirmation prompt."
    ),
) -> None:
    """Reset configuration to defaults.

    Example::

        hierli config reset
        hierli config reset --force
    """
    from hierli.config import save_global_config
    from hierli.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
