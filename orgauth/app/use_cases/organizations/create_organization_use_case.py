"""
Create Organization Use Case

Creates an organization owned by the caller, then tags the caller's
sessions with it.
"""

import re
import secrets
from typing import Optional
from uuid import UUID

from orgauth.app.hooks import OrganizationCreated
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import Membership, MembershipRole, Organization
from orgauth.result import Error, Result, Return

from .dtos import OrganizationInfo

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or secrets.token_hex(4)


class CreateOrganizationUseCase:
    """
    Use case for creating an organization.

    Business Rules:
    - Slug is derived from the name when not given; must be unique
    - Creator becomes owner
    - After commit, the after-create hook points the creator's sessions at
      the new organization; its failure does not undo the creation
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self, user_id: UUID, name: str, slug: Optional[str] = None
    ) -> Result[OrganizationInfo]:
        name = name.strip()
        if not name:
            return Return.err(Error("INVALID_NAME", "Organization name is required"))

        slug = slug.strip().lower() if slug else slugify(name)
        if not _SLUG_PATTERN.match(slug):
            return Return.err(
                Error(
                    "INVALID_SLUG",
                    "Slug may only contain lowercase letters, digits and dashes",
                )
            )

        async with self.uow:
            if await self.uow.organizations.get_by_slug(slug):
                return Return.err(
                    Error("SLUG_TAKEN", "Organization slug is already taken")
                )

            organization = await self.uow.organizations.create(
                Organization(name=name, slug=slug)
            )
            await self.uow.memberships.create(
                Membership(
                    user_id=user_id,
                    organization_id=organization.id,
                    role=MembershipRole.owner,
                )
            )

            await self.uow.commit()

            response = OrganizationInfo(
                id=str(organization.id),
                name=organization.name,
                slug=organization.slug,
                role=MembershipRole.owner.value,
            )

            hook = self.config.hooks.after_organization_create
            if hook is not None:
                await hook(
                    OrganizationCreated(organization_id=organization.id, user_id=user_id),
                    self.uow,
                )

            return Return.ok(response)
