"""Generate command: write default migration settings for packaged sites."""

import uuid
from pathlib import Path

import typer

from ...azure import get_resource_lookup
from ...config import CREDENTIAL_MODES, get_config
from ...core.errors import MigrationSettingsError
from ...core.pipeline import MigrationRequest, generate_migration_settings
from ...telemetry import LedgerTelemetrySink
from ..app import app, console, get_json_mode, setup_logging
from ..utils import ExitCode, Output, exit_code_for


@app.command("generate")
def generate_command(
    input_path: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Package results file written by the packaging step",
    ),
    region: str = typer.Option(
        ..., "--region", "-r", help="Azure region to migrate to (e.g. eastus)"
    ),
    subscription_id: str = typer.Option(
        ...,
        "--subscription-id",
        "-s",
        envvar="AZURE_SUBSCRIPTION_ID",
        help="Target subscription ID",
    ),
    resource_group: str = typer.Option(
        ..., "--resource-group", "-g", help="Target resource group"
    ),
    app_service_environment: str | None = typer.Option(
        None,
        "--ase",
        "--app-service-environment",
        help="App Service Environment to host the plans in",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Settings file to write (default from config: MigrationSettings.json)",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite the settings file if it exists"
    ),
    credential: str | None = typer.Option(
        None,
        "--credential",
        help="Azure credential: 'default' or 'cli' (default from config)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress logs"),
):
    """
    Generate default App Service migration settings.

    Picks a hosting tier for the target region (or App Service Environment),
    splits the packaged sites across App Service Plans, and writes a settings
    file for the migration step.

    Example:
        asmigrate generate -i PackageResults.json -r eastus -s <sub-id> -g my-rg
        asmigrate generate -i PackageResults.json -r eastus -s <sub-id> -g my-rg --ase my-ase -f
    """
    setup_logging(verbose=verbose)
    out = Output(console=console, json_mode=get_json_mode())

    config = get_config()
    credential_mode = credential or config.azure.credential
    if credential_mode not in CREDENTIAL_MODES:
        out.error(
            f"Unknown credential mode: {credential_mode}",
            suggestion=f"Use one of: {', '.join(CREDENTIAL_MODES)}",
        )
        raise typer.Exit(out.finish())

    telemetry = None
    if config.telemetry.enabled:
        telemetry = LedgerTelemetrySink(
            config.ledger_path_resolved, run_id=uuid.uuid4().hex[:12]
        )

    request = MigrationRequest(
        input_path=input_path,
        region=region,
        subscription_id=subscription_id,
        resource_group=resource_group,
        app_service_environment=app_service_environment,
        output_path=output,
        overwrite=force,
    )

    try:
        lookup = get_resource_lookup(subscription_id, credential_mode)
        result = generate_migration_settings(request, lookup, config, telemetry=telemetry)
    except MigrationSettingsError as e:
        out.error(str(e), category=type(e).__name__, exit_code=exit_code_for(e))
        raise typer.Exit(out.finish())
    except KeyboardInterrupt:
        out.error("Cancelled", exit_code=ExitCode.USER_CANCELLED)
        raise typer.Exit(out.finish())

    for warning in result.warnings:
        out.warning(warning)

    out.table(
        "App Service Plans",
        ["Plan", "Tier", "Region", "Sites"],
        [
            [plan.app_service_plan, str(plan.tier), plan.region, str(len(plan.sites))]
            for plan in result.plans
        ],
        data_key="plans",
    )
    out.success(
        f"Wrote {len(result.plans)} plan(s) for {result.site_count} site(s) "
        f"to {result.output_path}",
        output_path=str(result.output_path),
        tier=result.decision.tier.value,
        sites_per_plan=result.decision.sites_per_plan,
        region=result.region,
        site_count=result.site_count,
    )
    out.text(str(result.output_path))
    raise typer.Exit(out.finish())
