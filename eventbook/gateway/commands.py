"""
Flask CLI commands:

    flask --app eventbook.gateway.server init-db
    flask --app eventbook.gateway.server seed
    flask --app eventbook.gateway.server registration-stats --top 5 --recent 5
"""

import click
from flask import Flask

from eventbook.database.db_connection import get_database
from eventbook.database.init_db import DEMO_PASSWORD, seed_demo_data
from eventbook.stats_service.aggregates import registration_stats


def _amount(value) -> str:
    return f"{value:,.2f}"


def register_cli_commands(app: Flask) -> None:
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        get_database().init_db()
        click.echo("Initialized the database.")

    @app.cli.command("seed")
    def seed_command():
        """Creates tables and loads demo users, events and orders."""
        database = get_database()
        database.init_db()
        with database.session() as db:
            created = seed_demo_data(db)

        if not created["users"]:
            click.echo("Demo data already present, nothing to do.")
            return
        click.echo(
            f"Database seeded: {created['users']} users, "
            f"{created['events']} events, {created['orders']} orders."
        )
        click.echo("Test credentials:")
        click.echo(f"  User: user@example.com / {DEMO_PASSWORD}")
        click.echo(f"  Organizer: organizer@example.com / {DEMO_PASSWORD}")

    @app.cli.command("registration-stats")
    @click.option("--top", default=5, show_default=True, help="Number of top events to list.")
    @click.option("--recent", default=5, show_default=True, help="Number of recent registrations to list.")
    def registration_stats_command(top, recent):
        """Prints registration statistics."""
        with get_database().session() as db:
            stats = registration_stats(db, top=top, recent=recent)

        click.echo("Registration Statistics\n")
        click.echo(f"Total Registrations: {stats['totalRegistrations']}")

        click.echo("\nRegistrations by Payment Status:")
        for row in stats["registrationsByStatus"]:
            click.echo(f"  {row['paymentStatus']}: {row['count']}")

        click.echo(f"\nTotal Revenue: {_amount(stats['totalRevenue'])}")

        click.echo(f"\nTop {top} Events by Registrations:")
        for index, event in enumerate(stats["topEvents"], start=1):
            click.echo(f"  {index}. {event['title']} ({event['type']}) - {event['orderCount']} registrations")

        click.echo(f"\nRecent {recent} Registrations:")
        for index, reg in enumerate(stats["recentRegistrations"], start=1):
            who = reg["user"]["name"] or reg["user"]["email"]
            click.echo(f"  {index}. {who} - {reg['event']['title']}")
            click.echo(f"     Status: {reg['paymentStatus']}, Amount: {_amount(reg['finalCost'])}")
            click.echo(f"     Date: {reg['bookingDate'][:10]}")

        click.echo("\nEvent Type Distribution:")
        for type_, count in stats["registrationsByEventType"].items():
            click.echo(f"  {type_}: {count}")
