import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api.routes import auth_router, cart_router, order_router, product_router, user_router
from storefront.domain import storefront
from storefront.identity.user import Role


@pytest.fixture()
def client():
    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with storefront.domain_context():
            return await call_next(request)

    register_exception_handlers(app)
    for router in (auth_router, user_router, product_router, cart_router, order_router):
        app.include_router(router, prefix=storefront.API_BASE_PATH)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def admin_auth(register_user):
    register_user(email="admin@example.com", password="admin-pw", name="Admin", role=Role.ADMIN)
    return ("admin@example.com", "admin-pw")


@pytest.fixture()
def user_auth(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Jane Doe", "email": "jane@example.com", "password": "s3cret"},
    )
    assert response.status_code == 201
    return ("jane@example.com", "s3cret")
