"""Administration commands for the dashboard database.

Run with ``ngo-api <command>`` or ``python -m ngo_api.cli <command>``.
"""

from contextlib import contextmanager
from typing import Iterator

import click
from sqlalchemy.orm import Session

from ngo_api.db.enums import Role
from ngo_api.db.session import SessionLocal
from ngo_api.services import auth_service, question_type_service, user_service


@contextmanager
def _session() -> Iterator[Session]:
    """Open a session that rolls back and reports on unexpected errors."""
    db = SessionLocal()
    try:
        yield db
    except Exception as exc:
        db.rollback()
        click.echo(f"❌ Error: {exc}")
        raise
    finally:
        db.close()


@click.group()
def cli():
    """NGO dashboard administration."""


@cli.command()
def seed_roles():
    """Create the admin, editor and viewer roles if they are missing."""
    with _session() as db:
        roles = auth_service.ensure_roles(db)
        db.commit()
        click.echo(f"✓ Roles available: {', '.join(sorted(roles))}")


@cli.command()
def seed_question_types():
    """Insert missing question types; existing codes are left as they are."""
    with _session() as db:
        created = question_type_service.seed_question_types(db)
        if created:
            click.echo(f"✓ Created {created} question type(s)")
        else:
            click.echo("✓ All question types already present")


@cli.command()
@click.option("--email", required=True, help="Admin email address")
@click.option("--name", required=True, help="Display name")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def create_admin(email: str, name: str, password: str):
    """Bootstrap an admin account on a fresh database."""
    if len(password) < 6:
        click.echo("❌ Password must be at least 6 characters")
        return

    with _session() as db:
        try:
            user = user_service.create_user(
                db, email=email, password=password, name=name, role=Role.ADMIN
            )
        except ValueError as exc:
            db.rollback()
            click.echo(f"❌ {exc}")
            return
        click.echo(f"✓ Created admin: {user.email}")
        click.echo(f"  ID: {user.id}")


@cli.command()
@click.option("--email", required=True, help="User whose sessions are revoked")
def revoke_sessions(email: str):
    """Invalidate every issued token for a user by bumping token_version."""
    with _session() as db:
        user = user_service.get_user_by_email(db, email)
        if not user:
            click.echo(f"❌ User not found: {email}")
            return

        previous = user.token_version
        user_service.revoke_all_sessions(db, user.id)
        click.echo(f"✓ Revoked all sessions for {email}")
        click.echo(f"  Token version: {previous} → {user.token_version}")


if __name__ == "__main__":
    cli()
