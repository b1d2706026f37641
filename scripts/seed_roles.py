#!/usr/bin/env python3
"""Seed the default roles (Admin, Manager, User).

Idempotent: roles that already exist (compared case-insensitively) are
left alone. Safe to run on every container start.

Usage:
    python scripts/seed_roles.py [--role NAME ...]
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

from usermanagement.config import Settings
from usermanagement.core.logging import get_logger, setup_logging
from usermanagement.core.types import DEFAULT_ROLES
from usermanagement.database import get_session_factory
from usermanagement.repositories.role import RoleRepository

log = get_logger(__name__)


async def seed_roles(settings: Settings, role_names: Sequence[str] = DEFAULT_ROLES) -> int:
    """Insert missing roles and return how many were created."""
    session_factory = get_session_factory(settings)
    created = 0

    async with session_factory() as session:
        async with session.begin():
            for name in role_names:
                if await RoleRepository.get_by_name(session, name) is not None:
                    log.info("role_exists", role_name=name)
                    continue
                await RoleRepository.create(session, role_name=name)
                created += 1
                log.info("role_seeded", role_name=name)

    log.info("seed_roles_complete", created=created)
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed default roles")
    parser.add_argument(
        "--role",
        action="append",
        dest="roles",
        help="Role to seed; repeat for several (default: Admin, Manager, User)",
    )
    args = parser.parse_args()

    settings = Settings.from_yaml()
    setup_logging(settings.log_level)
    asyncio.run(seed_roles(settings, args.roles or DEFAULT_ROLES))


if __name__ == "__main__":
    main()
