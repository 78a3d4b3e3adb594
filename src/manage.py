"""Raffle database and admin management CLI.

Reuses the setup_db/drop_db utilities of the raffle domain.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db                        # Drop all tables
    python src/manage.py grant-admin USER_ID [--email]  # Give a user the admin role
"""

import argparse
import sys


def setup_database():
    """Create the database schema of the raffle domain."""
    from raffle.domain import raffle
    from raffle.utils.db import setup_db

    print("Initializing raffle domain...")
    raffle.init()
    print("Creating raffle database schema...")
    setup_db(raffle)
    print("Done.")


def drop_database():
    """Drop the database schema of the raffle domain."""
    from raffle.domain import raffle
    from raffle.utils.db import drop_db

    print("Initializing raffle domain...")
    raffle.init()
    print("Dropping raffle database schema...")
    drop_db(raffle)
    print("Done.")


def grant_admin(user_id, email=None):
    """Create or update the user's profile with the admin role."""
    from raffle.auth.profile import RegisterUserProfile
    from raffle.domain import raffle

    raffle.init()
    with raffle.domain_context():
        raffle.process(
            RegisterUserProfile(user_id=user_id, email=email, role="admin"),
            asynchronous=False,
        )
    print(f"{user_id} is now an admin.")


def main():
    parser = argparse.ArgumentParser(description="Fundraising Raffle management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("grant-admin", help="Give a user the admin role")
    admin_parser.add_argument("user_id")
    admin_parser.add_argument("--email", default=None)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-admin":
        grant_admin(args.user_id, args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
