import argparse
import asyncio
import os
import sys

# Ensure we can import from rolegate
sys.path.append(os.getcwd())

from rolegate.core.access import PrincipalAccess
from rolegate.core.config import settings
from rolegate.core.db import init_db
from rolegate.core.errors import RolegateError
from rolegate.core.store import SQLAuthorizationStore


async def _resolve_user(store: SQLAuthorizationStore, username: str):
    user = await store.get_user_by_username(username)
    if not user:
        print(f"❌ Error: User '{username}' not found.")
    return user


async def _resolve_role(store: SQLAuthorizationStore, slug: str):
    role = await store.get_role_by_slug(slug)
    if not role:
        print(f"❌ Error: Role '{slug}' not found.")
    return role


async def list_roles(store: SQLAuthorizationStore, username: str):
    user = await _resolve_user(store, username)
    if not user:
        return

    assignments = await store.fetch_roles_of(user.id)

    print("\n" + "=" * 60)
    print(f"{'Role':<25} | {'Special':<14} | {'On'}")
    print("-" * 60)
    for a in assignments:
        print(f"{a.role.slug:<25} | {a.role.special.value:<14} | {a.scope or '-'}")
    print("=" * 60 + "\n")


async def create_user(store: SQLAuthorizationStore, username: str, email=None):
    user = await store.create_user(username, email)
    print(f"✅ Created user '{username}' (id={user.id})")

    if settings.DEFAULT_ROLE_SLUG:
        role = await _resolve_role(store, settings.DEFAULT_ROLE_SLUG)
        if role:
            await PrincipalAccess(store, user.id).assign_role(role.id)
            print(f"✅ Assigned default role '{role.slug}'")


async def assign_role(store: SQLAuthorizationStore, username: str, slug: str, on=None):
    user = await _resolve_user(store, username)
    role = await _resolve_role(store, slug)
    if not user or not role:
        return

    if await PrincipalAccess(store, user.id).assign_role(role.id, on):
        print(f"✅ '{username}' is now '{role.slug}'" + (f" on '{on}'" if on else ""))
    else:
        print(f"ℹ️ '{username}' already holds '{role.slug}'" + (f" on '{on}'" if on else ""))


async def revoke_role(store: SQLAuthorizationStore, username: str, slug: str, on=None):
    user = await _resolve_user(store, username)
    role = await _resolve_role(store, slug)
    if not user or not role:
        return

    removed = await PrincipalAccess(store, user.id).revoke_role(role.id, on)
    print(f"✅ Removed {removed} assignment(s) of '{role.slug}' from '{username}'")


async def check(store: SQLAuthorizationStore, username: str, predicate: str, args):
    user = await _resolve_user(store, username)
    if not user:
        return

    try:
        allowed = await PrincipalAccess(store, user.id).check(predicate, *args)
    except RolegateError as e:
        print(f"❌ Error: {e}")
        return
    print(f"{'✅ ALLOW' if allowed else '⛔ DENY'}: {username} {predicate}({', '.join(args)})")


async def main():
    parser = argparse.ArgumentParser(description="Rolegate Access Management CLI")
    parser.add_argument("--list", type=str, metavar="USERNAME", help="List roles assigned to a user")
    parser.add_argument("--create-user", type=str, metavar="USERNAME", help="Create a user")
    parser.add_argument("--email", type=str, help="Email for --create-user")
    parser.add_argument("--assign", nargs=2, metavar=("USERNAME", "ROLE"), help="Assign a role to a user")
    parser.add_argument("--revoke", nargs=2, metavar=("USERNAME", "ROLE"), help="Revoke a role from a user")
    parser.add_argument("--on", type=str, help="Scope for --assign / --revoke")
    parser.add_argument(
        "--check",
        nargs="+",
        metavar="ARG",
        help="USERNAME PREDICATE [SCOPE], e.g. --check alice can_edit_post_on doc:42",
    )

    args = parser.parse_args()

    await init_db()
    store = SQLAuthorizationStore()

    if args.list:
        await list_roles(store, args.list)
    elif args.create_user:
        await create_user(store, args.create_user, args.email)
    elif args.assign:
        await assign_role(store, *args.assign, on=args.on)
    elif args.revoke:
        await revoke_role(store, *args.revoke, on=args.on)
    elif args.check and len(args.check) >= 2:
        await check(store, args.check[0], args.check[1], args.check[2:])
    else:
        parser.print_help()


if __name__ == "__main__":
    asyncio.run(main())
