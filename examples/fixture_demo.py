#!/usr/bin/env python3
"""
Fixture Building Demonstration

Builds a chain of blog posts from a handful of declared facts, checks it,
then breaks one post and shows the failure report.

Demonstrates:
1. Declaring facts about fields with lenses
2. Stateful facts carried across a sequence
3. Facts about one variant of a tagged union with prisms
4. Reading check failures
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from factkit import (
    Entropy,
    GenerationConfig,
    Rules,
    build_seq,
    check_seq,
    consecutive_int,
    eq,
    in_iter,
    lens_attr,
    prism,
    variant,
)
from factkit.generators.shapes import U32, OneOf, Text

console = Console()


class Status(enum.Enum):
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"
    DELETED = "deleted"


@dataclass
class Published:
    views: int

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(U32))


@dataclass
class Unpublished:
    reason: str

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(Text(12)))


@dataclass
class Post:
    seq: int
    author: str
    status: Status
    state: Published | Unpublished

    @classmethod
    def arbitrary(cls, entropy):
        return cls(
            entropy.arbitrary(U32),
            entropy.arbitrary(Text(8)),
            entropy.arbitrary(Status),
            entropy.arbitrary(OneOf(Published, Unpublished)),
        )


def post_rules(author: str) -> Rules:
    """Posts by one author, numbered from 1, never deleted, with unseen publications."""
    return (
        Rules()
        .forbid(lens_attr("status", eq(Status.DELETED)), "deleted")
        .enforce(lens_attr("author", eq(author, "author"), label="Post.author"))
        .enforce(lens_attr("seq", consecutive_int(1, "numbered"), label="Post.seq"))
        .enforce(
            lens_attr(
                "status",
                in_iter([Status.DRAFT, Status.REVIEW, Status.PUBLISHED], "live"),
                label="Post.status",
            )
        )
        .enforce(
            lens_attr(
                "state",
                prism("Published.views", *variant(Published, "views"), eq(0, "unseen")),
                label="Post.state",
            )
        )
    )


def demonstrate_building(entropy: Entropy) -> list[Post]:
    """Build a sequence of posts and print them."""
    console.print("\n[bold cyan]Building posts[/bold cyan]\n")

    posts = build_seq(entropy, 8, post_rules("ada"), Post)

    table = Table(title="Generated posts")
    table.add_column("seq", justify="right")
    table.add_column("author")
    table.add_column("status")
    table.add_column("state")
    for post in posts:
        table.add_row(str(post.seq), post.author, post.status.value, repr(post.state))
    console.print(table)
    return posts


def demonstrate_checking(posts: list[Post]) -> None:
    """Check the built posts, then break one and check again."""
    console.print("\n[bold cyan]Checking posts[/bold cyan]\n")

    check = check_seq(posts, post_rules("ada"))
    console.print(f"Built posts pass: [green]{check.is_ok()}[/green]")

    posts[3].author = "mallory"
    posts[5].seq = 42
    check = check_seq(posts, post_rules("ada"))
    console.print(f"Tampered posts pass: [red]{check.is_ok()}[/red]")
    for error in check:
        console.print(f"  [yellow]{error}[/yellow]")


def main() -> None:
    """Run the demonstration."""
    entropy = Entropy.from_config(GenerationConfig(seed=2024))
    posts = demonstrate_building(entropy)
    demonstrate_checking(posts)


if __name__ == "__main__":
    main()
