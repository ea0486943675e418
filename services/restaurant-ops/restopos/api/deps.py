"""
Restaurant Ops — Request dependencies
"""
from fastapi import Request

from restopos.ops.restaurant import RestaurantOperations


def get_caller(request: Request) -> str:
    """Caller identity, set by JWTAuthMiddleware from the token subject."""
    return request.state.user["sub"]


def get_restaurant(request: Request) -> RestaurantOperations:
    return request.app.state.restaurant
