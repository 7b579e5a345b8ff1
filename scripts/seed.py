"""Database seeder: rebuilds the schema and fills it with sample social data."""
import argparse
import asyncio
import logging
import random
import time

from socialnet.config import configure_logging
from socialnet.database import drop_models, init_models, session_scope
from socialnet.services import ServiceRegistry

logger = logging.getLogger("scripts.seed")

PERMISSIONS = {
    "post:create": "Publish new posts",
    "post:delete": "Remove any post",
    "comment:create": "Comment on posts",
    "comment:delete": "Remove any comment",
    "user:manage": "Edit or remove other users",
}

ROLES = {
    "member": ["post:create", "comment:create"],
    "moderator": ["post:create", "comment:create", "post:delete", "comment:delete"],
    "admin": list(PERMISSIONS),
}

FIRST_NAMES = ["An", "Binh", "Chi", "Dung", "Hoa", "Khanh", "Linh", "Minh", "Nam", "Trang"]
LAST_NAMES = ["Nguyen", "Tran", "Le", "Pham", "Hoang", "Vu", "Dang", "Bui"]


async def seed(small: bool = False):
    num_users = 5 if small else 20
    posts_per_user = 2 if small else 5
    comments_per_post = 1 if small else 3

    logger.info(
        "Seeding: %d users, %d posts, ~%d comments",
        num_users,
        num_users * posts_per_user,
        num_users * posts_per_user * comments_per_post,
    )
    start = time.perf_counter()

    await drop_models()
    await init_models()

    async with session_scope() as session:
        services = ServiceRegistry(session)

        permission_ids = {}
        for name, description in PERMISSIONS.items():
            permission = await services.permissions.create({"name": name, "description": description})
            permission_ids[name] = permission.id
        for name, granted in ROLES.items():
            await services.roles.create(
                {"name": name, "permission_ids": [permission_ids[p] for p in granted]}
            )
        logger.info("  Created %d permissions, %d roles", len(PERMISSIONS), len(ROLES))

        users = []
        for i in range(num_users):
            first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
            avatar = await services.images.create(
                {"url": f"https://i.pravatar.cc/300?u={i}", "width": 300, "height": 300}
            )
            user = await services.users.create(
                {
                    "email": f"user_{i:04d}@example.com",
                    "password": f"password{i:04d}",
                    "name": f"{first} {last}",
                    "bio": f"I am sample user number {i}.",
                    "image_id": avatar.id,
                }
            )
            users.append(user)
        logger.info("  Created %d users", len(users))

        total_posts = 0
        total_comments = 0
        for user in users:
            for j in range(posts_per_user):
                post = await services.posts.create(
                    {"user_id": user.id, "description": f"Post {j} by {user.name}"}
                )
                total_posts += 1
                for _ in range(random.randint(1, comments_per_post)):
                    commenter = random.choice(users)
                    await services.comments.create(
                        {
                            "user_id": commenter.id,
                            "post_id": post.id,
                            "description": f"Nice one! ({commenter.name})",
                        }
                    )
                    total_comments += 1

    elapsed = time.perf_counter() - start
    logger.info("Seeding complete in %.1fs", elapsed)
    logger.info("  Users: %d  Posts: %d  Comments: %d", len(users), total_posts, total_comments)


def main():
    parser = argparse.ArgumentParser(description="Seed the social database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
