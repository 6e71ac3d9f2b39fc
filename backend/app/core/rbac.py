"""Role-Based Access Control (RBAC) utilities.

Roles form a closed set (``StaffRole``) and are normalized in one place;
permissions are explicit role sets per operation rather than a hierarchy.
"""

from typing import Annotated, Iterable

from fastapi import Depends, HTTPException, Request, status

from app.core.security import decode_access_token
from app.models.enums import StaffRole
from app.schemas.staff import Staff
from app.services.app_state import AppStateDep

MANAGEMENT_ROLES = frozenset({StaffRole.MANAGER, StaffRole.ADMIN})
KITCHEN_ROLES = frozenset({StaffRole.MANAGER, StaffRole.ADMIN, StaffRole.CHEF})
POS_ROLES = frozenset({StaffRole.MANAGER, StaffRole.ADMIN, StaffRole.WAITER, StaffRole.BARTENDER})
ADMIN_ROLES = frozenset({StaffRole.ADMIN})


def has_role(staff: Staff, roles: Iterable[StaffRole]) -> bool:
    return StaffRole.normalize(staff.role) in set(roles)


async def get_current_staff(request: Request, state: AppStateDep) -> Staff:
    """Get the signed-in staff member from the JWT token.

    Checks in order:
    1. Authorization: Bearer <token> header
    2. access_token cookie (HttpOnly)

    The token subject must also be the terminal's current session user, so an
    idle or explicit logout invalidates tokens issued earlier.
    """
    payload = None

    # Try Authorization header first
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1]
        if token:
            payload = decode_access_token(token)

    # Fall back to cookie if no Bearer or Bearer was invalid
    if payload is None:
        cookie_token = request.cookies.get("access_token")
        if cookie_token:
            payload = decode_access_token(cookie_token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    current = state.session.current_user
    if current is None or current.id != payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not current.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Staff account is not active",
        )
    return current


def require_roles(*roles: StaffRole):
    """Dependency factory: allow only the given roles."""
    allowed = frozenset(StaffRole.normalize(r) for r in roles)

    async def role_checker(
        current_staff: Annotated[Staff, Depends(get_current_staff)]
    ) -> Staff:
        if not has_role(current_staff, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role {' or '.join(sorted(r.value for r in allowed))}",
            )
        return current_staff

    return role_checker


# Common role dependencies
CurrentStaff = Annotated[Staff, Depends(get_current_staff)]
RequireManager = Annotated[Staff, Depends(require_roles(*MANAGEMENT_ROLES))]
RequireAdmin = Annotated[Staff, Depends(require_roles(*ADMIN_ROLES))]
RequireKitchen = Annotated[Staff, Depends(require_roles(*KITCHEN_ROLES))]
RequirePos = Annotated[Staff, Depends(require_roles(*POS_ROLES))]
