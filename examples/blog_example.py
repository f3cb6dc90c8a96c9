"""
Blog Example

Creates a few posts, lists them page by page, edits one and deletes another.
Edit and delete are only offered when the session is logged in.
"""

import asyncio

from examples.db_setup import (
    cleanup_example_data,
    close_connections,
    setup_postgres_connection,
)
from blogpost.auth import is_logged_in
from blogpost.db_context import DatabaseManager
from blogpost.entities import Post
from blogpost.post_repository import PostRepository


async def main():
    await setup_postgres_connection()
    await cleanup_example_data()

    post_repo = PostRepository()
    session = {"is_logged_in": True}

    async with DatabaseManager.connection():
        for day in range(1, 6):
            post = Post(
                title=f"Day {day}",
                content=f"Notes for day {day}",
                published_at=f"2024-05-0{day} 08:00:00",
            )
            await post_repo.create(post)

        draft = Post(title="", content="Unfinished")
        if not await post_repo.create(draft):
            print(f"Draft rejected: {[e.value for e in draft.errors]}")

        posts, paginator = await post_repo.get_paginated(1, per_page=2)
        print(f"Page {paginator.page} of {paginator.page_count}:")
        for post in posts:
            print(f"  [{post.id}] {post.title} ({post.published_at})")

        first = await post_repo.get_post_by_id(1)
        if first is None:
            print("No posts found.")
        elif is_logged_in(session):
            first.title = "Day 1 (edited)"
            await post_repo.update(first)
            await post_repo.delete(Post(id=2))

        print(f"Total posts: {await post_repo.get_total()}")

    await close_connections()


if __name__ == "__main__":
    asyncio.run(main())
