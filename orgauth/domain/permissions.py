"""
Organization Access Control

Statement-based policy: each role grants a set of actions per resource.
Permission checks in the organization use cases go through has_permission.
"""

from typing import Dict, FrozenSet, Mapping

from orgauth.domain.entities.enums import MembershipRole

STATEMENTS: Dict[str, FrozenSet[str]] = {
    "organization": frozenset({"update", "delete"}),
    "member": frozenset({"create", "update", "delete"}),
    "invitation": frozenset({"create", "cancel"}),
}


class Role:
    """Set of granted actions per resource"""

    def __init__(self, grants: Mapping[str, FrozenSet[str]]):
        for resource, actions in grants.items():
            unknown = actions - STATEMENTS.get(resource, frozenset())
            if unknown:
                raise ValueError(f"Unknown actions for {resource}: {sorted(unknown)}")
        self.grants = dict(grants)

    def allows(self, resource: str, action: str) -> bool:
        return action in self.grants.get(resource, frozenset())


owner = Role(STATEMENTS)

admin = Role(
    {
        "organization": frozenset({"update"}),
        "member": STATEMENTS["member"],
        "invitation": STATEMENTS["invitation"],
    }
)

member = Role({})

ROLES: Dict[MembershipRole, Role] = {
    MembershipRole.owner: owner,
    MembershipRole.admin: admin,
    MembershipRole.member: member,
}


def has_permission(role: MembershipRole, resource: str, action: str) -> bool:
    """Return True when role may perform action on resource"""
    granted = ROLES.get(role)
    return granted is not None and granted.allows(resource, action)


def can_assign_role(inviter_role: MembershipRole, target_role: MembershipRole) -> bool:
    """Only owners may hand out the owner role"""
    if target_role == MembershipRole.owner:
        return inviter_role == MembershipRole.owner
    return True
