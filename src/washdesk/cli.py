from __future__ import annotations

import argparse
import asyncio

import washdesk.db as db
from washdesk.db.models import AdminRole
from washdesk.db.repos import UserRepository, UserRoleRepository


class UnknownUserError(LookupError):
    pass


async def _init_db() -> None:
    await db.create_schema()


async def grant_role(email: str, role: AdminRole) -> None:
    async with db.SessionMaker() as session:
        user = await UserRepository(session).get_by_email(email)
        if user is None:
            raise UnknownUserError(email)

        roles = UserRoleRepository(session)
        await roles.assign(user.id, role)
        await roles.commit()


async def revoke_role(email: str) -> bool:
    async with db.SessionMaker() as session:
        user = await UserRepository(session).get_by_email(email)
        if user is None:
            raise UnknownUserError(email)

        roles = UserRoleRepository(session)
        removed = await roles.revoke(user.id)
        await roles.commit()
        return removed


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="washdesk")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init-db")
    grant = sub.add_parser("grant-role")
    grant.add_argument("--email", required=True)
    grant.add_argument("--role", choices=[role.value for role in AdminRole], required=True)
    revoke = sub.add_parser("revoke-role")
    revoke.add_argument("--email", required=True)

    args = parser.parse_args(argv)

    try:
        if args.cmd == "init-db":
            asyncio.run(_init_db())
        elif args.cmd == "grant-role":
            asyncio.run(grant_role(args.email, AdminRole(args.role)))
            print(f"Granted {args.role} to {args.email}")
        elif args.cmd == "revoke-role":
            removed = asyncio.run(revoke_role(args.email))
            print(f"Revoked role from {args.email}" if removed else f"{args.email} had no role")
        else:
            raise SystemExit(2)
    except UnknownUserError as exc:
        parser.exit(1, f"washdesk: no user with email {exc}\n")
