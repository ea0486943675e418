"""
Restaurant Ops — Profiles, staff administration and access bootstrap
"""
from fastapi import APIRouter, Depends, HTTPException, status

from restopos.api.deps import get_caller, get_restaurant
from restopos.models.user import UserProfile
from restopos.ops.restaurant import RestaurantOperations
from restopos.schemas.restaurant import (
    CallerRole,
    ProfileUpdate,
    StaffCreate,
    StaffMember,
    StaffUpdate,
    SystemRoleUpdate,
)

profile_router = APIRouter(prefix="/profile", tags=["profile"])
staff_router = APIRouter(prefix="/staff", tags=["staff"])
access_router = APIRouter(prefix="/access", tags=["access"])


def _member(principal: str, profile: UserProfile) -> StaffMember:
    return StaffMember(principal=principal, name=profile.name, restaurant_role=profile.restaurant_role)


# ─── Profiles ─────────────────────────────────────────────────────────────────

@profile_router.get("/me", response_model=UserProfile | None)
async def get_caller_profile(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """The caller's profile, or null before it has been set up."""
    return ops.get_caller_profile(caller)


@profile_router.put("/me", response_model=UserProfile)
async def save_caller_profile(
    payload: ProfileUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    if "restaurant_role" in payload.model_fields_set:
        return ops.save_caller_profile(caller, payload.name, payload.restaurant_role)
    return ops.save_caller_profile(caller, payload.name)


@profile_router.get("/{principal}", response_model=UserProfile)
async def get_user_profile(
    principal: str,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    profile = ops.get_user_profile(caller, principal)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found.")
    return profile


# ─── Staff administration (system admins) ─────────────────────────────────────

@staff_router.get("", response_model=list[StaffMember])
async def list_staff_members(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return [_member(principal, profile) for principal, profile in ops.list_staff_members(caller)]


@staff_router.post("", response_model=StaffMember, status_code=status.HTTP_201_CREATED)
async def add_staff_member(
    payload: StaffCreate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    profile = ops.add_staff_member(caller, payload.name, payload.role, payload.principal)
    return _member(payload.principal, profile)


@staff_router.put("/{principal}", response_model=StaffMember)
async def update_staff_member(
    principal: str,
    payload: StaffUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    profile = ops.update_staff_member(caller, principal, payload.name, payload.role)
    return _member(principal, profile)


@staff_router.put("/{principal}/system-role", status_code=status.HTTP_204_NO_CONTENT)
async def assign_user_role(
    principal: str,
    payload: SystemRoleUpdate,
    caller: str = Depends(get_caller),
    ops: RestaurantOperations = Depends(get_restaurant),
):
    ops.assign_user_role(caller, principal, payload.role)


# ─── Access bootstrap and role queries ────────────────────────────────────────

@access_router.post("/initialize", response_model=CallerRole)
async def initialize_access_control(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """First caller ever becomes admin; everyone after registers as a user."""
    role = ops.initialize_access_control(caller)
    return CallerRole(principal=caller, role=role, is_admin=ops.is_caller_admin(caller))


@access_router.get("/role", response_model=CallerRole)
async def get_caller_role(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return CallerRole(
        principal=caller, role=ops.get_caller_role(caller), is_admin=ops.is_caller_admin(caller)
    )


@access_router.get("/is-admin", response_model=bool)
async def is_caller_admin(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    return ops.is_caller_admin(caller)


@access_router.get("/sections", response_model=list[str])
async def visible_sections(
    caller: str = Depends(get_caller), ops: RestaurantOperations = Depends(get_restaurant)
):
    """Dashboard sections the caller's restaurant role may open."""
    return ops.visible_sections(caller)
