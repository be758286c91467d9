"""Credential status command."""

import typer

from ghgate.auth import DEFAULT_ENDPOINTS, TokenStore
from ghgate.cli.progress import console, print_error, print_success, print_warning
from ghgate.config import get_settings
from ghgate.host import build_default_registry


def status():
    """Show whether a token is stored and which login providers are installed."""
    settings = get_settings()
    store = TokenStore(settings.target, settings.credential_namespace)
    registry = build_default_registry(settings)

    console.print(f"Target: [cyan]{store.target}[/cyan]")
    console.print(f"[dim]Credential entry: {store.service_name}[/dim]")

    providers = [
        provider
        for provider, endpoint in zip(settings.reauth_providers, DEFAULT_ENDPOINTS)
        if registry.is_registered(endpoint.namespace, endpoint.command_id)
    ]
    if providers:
        console.print(f"Login providers: [green]{', '.join(providers)}[/green]")
    else:
        print_warning("Login providers: none installed")

    if store.lookup_token() is None:
        print_error("No token stored")
        raise typer.Exit(1)

    print_success("Token stored")
