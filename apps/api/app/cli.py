"""CLI tools for form builder administration."""

import click

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services import auth_service

DEMO_USERS = [
    ("user1", "user1@webtech.id", "password1"),
    ("user2", "user2@webtech.id", "password2"),
    ("user3", "user3@webtech.id", "password3"),
]


@click.group()
def cli():
    """Form builder CLI tools."""
    pass


@cli.command()
def init_db():
    """
    Create all tables directly from the models.

    Meant for local SQLite databases; use `alembic upgrade head` elsewhere.
    """
    import app.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    click.echo("✓ Tables created")


@cli.command()
@click.option("--name", required=True, help="Display name")
@click.option("--email", required=True, help="Login email")
@click.option("--password", required=True, help="Login password")
def create_user(name: str, email: str, password: str):
    """
    Create a user account.

    Example:
        formbuilder create-user --name "Ana" --email "ana@corp.com" --password "secret"
    """
    db = SessionLocal()
    try:
        user = auth_service.register_user(db, name, email, password)
        click.echo(f"✓ Created user: {user.email}")
        click.echo(f"  ID: {user.id}")
    except auth_service.EmailAlreadyRegisteredError:
        click.echo(f"❌ User with email '{email}' already exists")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
def seed():
    """Create the demo users (user{n}@webtech.id / password{n}); existing ones are skipped."""
    db = SessionLocal()
    try:
        for name, email, password in DEMO_USERS:
            if auth_service.get_user_by_email(db, email):
                click.echo(f"→ Skipped {email} (exists)")
                continue
            auth_service.register_user(db, name, email, password)
            click.echo(f"✓ Created {email}")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
