#!/usr/bin/env python3
"""
Create Author Script.

Creates an author directly in the database and prints an access token for
the blog endpoints that require authentication.

Usage:
    python auto/create_author.py --email jane@example.com --first-name Jane --last-name Doe
    python auto/create_author.py --email jane@example.com --token-minutes 1440

Environment Variables:
    AUTHOR_EMAIL: Author email (default: author@example.com)
    AUTHOR_FIRST_NAME: First name (default: Blog)
    AUTHOR_LAST_NAME: Last name (default: Author)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from datetime import timedelta
from os import environ
from sys import exit as sys_exit
from typing import cast

from sqlmodel import Column, select

from blogapi.configs import settings
from blogapi.db.database import close_db, transaction
from blogapi.managers import create_access_token
from blogapi.models import UserDB


@dataclass(frozen=True)
class AuthorData:
    """
    Author creation data.

    Attributes
    ----------
    email : str
        Author email address.
    first_name : str
        Author first name.
    last_name : str
        Author last name.
    """

    email: str
    first_name: str
    last_name: str


async def create_author(author_data: AuthorData) -> UserDB:
    """
    Create an author in the database.

    Raises
    ------
    ValueError
        If a user with the same email already exists.
    """
    async with transaction() as session:
        email_clause = cast(Column[bool], UserDB.email == author_data.email)
        existing = await session.execute(select(UserDB).where(email_clause))
        if existing.scalar_one_or_none():
            msg = f"User with email '{author_data.email}' already exists"
            raise ValueError(msg)

        author = UserDB(
            email=author_data.email,
            first_name=author_data.first_name,
            last_name=author_data.last_name,
        )
        session.add(author)
        await session.flush()
        await session.refresh(author)
        return author


def display_success(author: UserDB, token: str) -> None:
    print("\n✅ Author created successfully!")
    print(f"   ID:    {author.id}")
    print(f"   Email: {author.email}")
    print("\nCreate a post with:")
    print(f"  curl -X POST 'http://{settings.HOST}:{settings.PORT}/blogs' \\")
    print(f"    -H 'Authorization: Bearer {token}' \\")
    print("    -H 'Content-Type: application/json' \\")
    print('    -d \'{"title": "Hello", "body": "First post"}\'')


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description="Create a blog author and print an access token",
        formatter_class=RawDescriptionHelpFormatter,
    )
    parser.add_argument("--email", default=environ.get("AUTHOR_EMAIL", "author@example.com"))
    parser.add_argument("--first-name", default=environ.get("AUTHOR_FIRST_NAME", "Blog"))
    parser.add_argument("--last-name", default=environ.get("AUTHOR_LAST_NAME", "Author"))
    parser.add_argument(
        "--token-minutes",
        type=int,
        default=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        help="Access token lifetime in minutes",
    )
    return parser.parse_args()


async def main() -> int:
    args = parse_args()
    author_data = AuthorData(
        email=args.email,
        first_name=args.first_name,
        last_name=args.last_name,
    )

    try:
        author = await create_author(author_data)
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    finally:
        await close_db()

    token = create_access_token(author.id, timedelta(minutes=args.token_minutes))
    display_success(author, token)
    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main()))
