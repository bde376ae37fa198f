#!/usr/bin/env python3
"""Establishments CLI for browsing and housekeeping."""

import argparse

import questionary
from rich.console import Console
from rich.table import Table

from establishments.aggregate import EstablishmentService
from establishments.attraction import AttractionService
from establishments.entity import Category
from establishments.errors import EstablishmentError
from establishments.hotel import HotelService
from establishments.restaurant import RestaurantService

console = Console()

SERVICES = {
    Category.ATTRACTION: AttractionService,
    Category.HOTEL: HotelService,
    Category.RESTAURANT: RestaurantService,
}


def get_service(kind: str) -> EstablishmentService:
    return SERVICES[Category.parse(kind)]()


def render(service: EstablishmentService, establishments: list, count: int) -> None:
    """Print establishments as a table followed by the total count."""
    repository = service.repository
    table = Table(title=f"{service.kind.capitalize()}s")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Rating", justify="right")
    table.add_column("City")
    table.add_column("Country")
    table.add_column("Images", justify="right")

    for establishment in establishments:
        location = establishment.location
        table.add_row(
            getattr(establishment, repository.id_column),
            getattr(establishment, repository.name_column),
            f"{establishment.rating:.1f}",
            location.city,
            location.country,
            str(len(establishment.images)),
        )

    console.print(table)
    console.print(f"Showing {len(establishments)} of {count}")


def list_establishments(kind: str, offset: int, limit: int) -> None:
    service = get_service(kind)
    render(service, *service.list(offset, limit))


def search(kind: str, name: str) -> None:
    service = get_service(kind)
    render(service, *service.find_by_name(name))


def by_location(kind: str, country: str, city: str, state_province: str, offset: int, limit: int) -> None:
    service = get_service(kind)
    render(service, *service.list_by_location(offset, limit, country, city, state_province))


def delete(kind: str) -> None:
    """Pick an establishment and delete it after confirmation."""
    service = get_service(kind)
    establishments, _ = service.list()
    if not establishments:
        console.print(f"[red]No {service.kind}s found.[/]")
        return

    repository = service.repository
    selected = questionary.select(
        f"Select a {service.kind}:",
        choices=[
            questionary.Choice(
                title=f"{getattr(e, repository.name_column)} ({e.location.city})",
                value=getattr(e, repository.id_column),
            )
            for e in establishments
        ],
    ).ask()

    # User pressed Ctrl+C or Escape
    if selected is None:
        console.print("[dim]Cancelled.[/]")
        return

    console.print(f"[yellow]Will delete {service.kind} [bold]{selected}[/] ({repository.delete_mode} delete).[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    service.delete(selected)
    console.print(f"[green]Deleted {service.kind} {selected}.[/]")


def main():
    parser = argparse.ArgumentParser(description="Establishments CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)
    kinds = [c.value for c in Category]

    list_parser = subparsers.add_parser("list", help="List establishments by rating")
    list_parser.add_argument("kind", choices=kinds)
    list_parser.add_argument("--offset", type=int, default=0)
    list_parser.add_argument("--limit", type=int, default=20)

    search_parser = subparsers.add_parser("search", help="Find establishments by name")
    search_parser.add_argument("kind", choices=kinds)
    search_parser.add_argument("name")

    location_parser = subparsers.add_parser("by-location", help="Filter establishments by location")
    location_parser.add_argument("kind", choices=kinds)
    location_parser.add_argument("--country", default="")
    location_parser.add_argument("--city", default="")
    location_parser.add_argument("--state-province", default="")
    location_parser.add_argument("--offset", type=int, default=0)
    location_parser.add_argument("--limit", type=int, default=20)

    delete_parser = subparsers.add_parser("delete", help="Delete an establishment")
    delete_parser.add_argument("kind", choices=kinds)

    args = parser.parse_args()

    try:
        if args.command == "list":
            list_establishments(args.kind, args.offset, args.limit)
        elif args.command == "search":
            search(args.kind, args.name)
        elif args.command == "by-location":
            by_location(args.kind, args.country, args.city, args.state_province, args.offset, args.limit)
        elif args.command == "delete":
            delete(args.kind)
    except EstablishmentError as e:
        console.print(f"[red]{e}[/]")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
