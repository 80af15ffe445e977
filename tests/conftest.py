"""Pytest configuration and fixtures for neo-rbac tests."""

import pytest
import pytest_asyncio

from neo_rbac import RBAC, MemoryStorage, RBACOptions


@pytest.fixture
def rbac():
    """Empty engine on memory storage."""
    return RBAC()


@pytest.fixture
def sample_options():
    """Small hierarchy: superadmin > admin > user, guest on its own."""
    return RBACOptions(
        roles=["superadmin", "admin", "user", "guest"],
        permissions={
            "user": ["create", "delete"],
            "password": ["change", "forgot"],
            "article": ["create"],
            "rbac": ["update"],
        },
        grants={
            "guest": [],
            "user": ["create_article", "change_password"],
            "admin": ["user", "delete_user"],
            "superadmin": ["admin", "update_rbac"],
        },
        storage=MemoryStorage(),
    )


@pytest_asyncio.fixture
async def initialized_rbac(sample_options):
    """Engine with the sample hierarchy applied."""
    rbac = RBAC(sample_options)
    await rbac.init()
    return rbac


@pytest_asyncio.fixture
async def page_rbac():
    """Roles admin and user over create_page and delete_user."""
    rbac = RBAC()
    await rbac.create(
        ["admin", "user"],
        {"page": ["create"], "user": ["delete"]},
        {"user": ["create_page"], "admin": ["user", "delete_user"]},
    )
    return rbac
