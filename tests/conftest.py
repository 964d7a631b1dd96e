"""Global test fixtures and utilities for glossary-reminders tests"""
import os

# Configuration is read at import time; pin what the tests rely on
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
import random

import httpx

from glossary_reminders.api.middleware import limiter
from glossary_reminders.db.memory_store import InMemoryUserStore, InMemoryWordStore
from glossary_reminders.services.container import ServiceContainer
from glossary_reminders.services.glossary import GlossaryProvider
from glossary_reminders.utils.auth import TokenIssuer

SAMPLE_GLOSSARY = {
    "Sabr": {"definition": "Patience", "arabic": "صبر"},
    "Shukr": {"definition": "Gratitude", "arabic": "شكر"},
    "Tawakkul": {"definition": "Reliance on God", "arabic": "توكل"},
    "Ihsan": {"definition": "Excellence", "arabic": "إحسان"},
    "Taqwa": {"definition": "God-consciousness", "arabic": "تقوى"},
    "Dhikr": "Remembrance",
}


# ============================================================================
# Rate Limiting
# ============================================================================

@pytest.fixture(autouse=True)
def disable_rate_limiting():
    """Rate limits are global; keep them out of tests that don't ask for them"""
    limiter.enabled = False
    limiter.reset()
    yield
    limiter.enabled = False
    limiter.reset()


# ============================================================================
# Store & Glossary Fixtures
# ============================================================================

@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def word_store():
    return InMemoryWordStore()


@pytest.fixture
def glossary():
    return GlossaryProvider.from_mapping(SAMPLE_GLOSSARY)


@pytest.fixture
def token_issuer():
    return TokenIssuer("test-secret", "HS256", 168)


@pytest.fixture
def rng():
    return random.Random(1234)


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def container(user_store, word_store, glossary, token_issuer):
    return ServiceContainer(
        user_store=user_store,
        word_store=word_store,
        glossary=glossary,
        token_issuer=token_issuer,
        word_lookback=10,
        utc_offset_hours=-5,
    )


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
def app(container):
    from glossary_reminders.api.server import create_api_application
    return create_api_application(container=container)


@pytest.fixture
async def client(app):
    """In-process HTTP client against the FastAPI app"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
async def auth_headers(client):
    """Sign up and log in a standard test user"""
    await client.post("/signup", json={"username": "amina", "password": "correct-horse"})
    response = await client.post("/login", json={"username": "amina", "password": "correct-horse"})
    return {"x-access-token": response.json()["token"]}
