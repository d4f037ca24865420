#!/usr/bin/env python3
"""
Posts API CLI - Command-line interface for common operations.

Usage:
    python cli.py serve                # Connect to the database and serve HTTP
    python cli.py health               # Check configuration and database health
    python cli.py tables               # List public tables
    python cli.py posts                # List all posts
"""
import sys

import uvicorn

from posts_api.config import get_settings
from posts_api.db.engine import check_db_health
from posts_api.db.store import SQLPostStore
from posts_api.errors import ConfigurationError, DatabaseConnectionError, StoreError
from posts_api.log import configure_logging
from posts_api.main import create_app


def print_header(text: str):
    """Print formatted header."""
    print(f"\n{'=' * 60}")
    print(f"  {text}")
    print(f"{'=' * 60}\n")


def print_status(key: str, value, indent: int = 0):
    """Print formatted status line."""
    spaces = "  " * indent
    print(f"{spaces}{key:30s}: {value}")


def connect_store() -> SQLPostStore:
    """Load settings and connect; exits the process on failure."""
    try:
        settings = get_settings()
        store = SQLPostStore.connect(settings)
    except (ConfigurationError, DatabaseConnectionError) as e:
        print(f"✗ {e}", file=sys.stderr)
        sys.exit(1)
    print("Successfully connected to the database!")
    return store


def cmd_serve():
    """Serve the HTTP API until interrupted."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    store = connect_store()
    try:
        print(f"Server is running at http://localhost:{settings.PORT}")
        uvicorn.run(create_app(store), host=settings.HOST, port=settings.PORT)
    finally:
        store.close()


def cmd_health():
    """Check configuration and database health."""
    print_header("System Health Check")

    settings = get_settings()
    print("Configuration:")
    print_status("Connection string", "✓ Set", 1)
    print_status("Listen port", settings.PORT, 1)
    print_status("Log level", settings.LOG_LEVEL, 1)

    print("\nDatabase:")
    store = connect_store()
    try:
        db_health = check_db_health(store.engine)
    finally:
        store.close()

    if db_health.get("status") == "healthy":
        print_status("Status", "✓ Healthy", 1)
        print_status("Posts", db_health["counts"].get("posts", 0), 1)
    else:
        print_status("Status", f"✗ Unhealthy: {db_health.get('error')}", 1)

    print()


def cmd_tables():
    """List public tables."""
    print_header("Public Tables in the Database")

    store = connect_store()
    try:
        for name in store.list_table_names():
            print(f"  - {name}")
    finally:
        store.close()

    print()


def cmd_posts():
    """List all posts."""
    print_header("Posts")

    store = connect_store()
    try:
        posts = store.list_posts()
    finally:
        store.close()

    if not posts:
        print("No posts yet.")
    for post in posts:
        print_status(f"#{post.id}", post.title)

    print()


def print_help():
    """Print help message."""
    print("""
Posts API CLI

Usage:
    python cli.py <command>

Commands:
    serve                Connect to the database and serve HTTP
    health               Check configuration and database health
    tables               List public tables
    posts                List all posts
    help                 Show this help message

Environment:
    DB_CONNECTION_STRING (required), HOST, PORT, LOG_LEVEL, DB_ECHO
""")


COMMANDS = {
    "serve": cmd_serve,
    "health": cmd_health,
    "tables": cmd_tables,
    "posts": cmd_posts,
    "help": print_help,
}


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1].lower()
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}")
        print_help()
        sys.exit(1)

    try:
        handler()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except (ConfigurationError, StoreError) as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
