import asyncio

from rolegate.core.access import PrincipalAccess
from rolegate.core.db import init_db
from rolegate.core.specials import Special
from rolegate.core.store import SQLAuthorizationStore


async def seed_data():
    await init_db()
    store = SQLAuthorizationStore()

    if await store.list_roles():
        print("Roles already exist. Skipping seed.")
        return

    # Roles
    admin = await store.create_role("Admin", special=Special.ALL_ACCESS)
    await store.create_role("Banned", special=Special.NO_ACCESS)
    moderator = await store.create_role("Moderator", special=Special.LEVEL_ACCESS)
    editor = await store.create_role("Editor")

    # Permissions
    edit_article = await store.create_permission("Edit Article", slug="edit.article")
    publish_article = await store.create_permission("Publish Article", slug="publish.article")
    await store.grant_permission_to_role(editor.id, edit_article.id)

    # Users
    root = await store.create_user("admin")
    alice = await store.create_user("alice")
    await PrincipalAccess(store, root.id).assign_role(admin.id)
    await PrincipalAccess(store, alice.id).assign_role(editor.id)
    await PrincipalAccess(store, alice.id).assign_role(moderator.id, on="site:1")
    await PrincipalAccess(store, alice.id).assign_permission(publish_article.id, on="site:1")

    print(
        "Seeded roles: admin, banned, moderator, editor. "
        "Users: admin (all-access), alice (editor, moderator on site:1)."
    )


if __name__ == "__main__":
    asyncio.run(seed_data())
