"""
API v1 router - REST endpoints next to the GraphQL endpoint.
"""

from fastapi import APIRouter

from catalog_graphql.api.v1.endpoints import health

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
