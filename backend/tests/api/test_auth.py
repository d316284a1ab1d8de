"""Tests for signup and signin endpoints."""
from httpx import AsyncClient

from core.context import AppContext


SIGNUP = {"name": "Ada Lovelace", "email": "ada@example.com", "password": "s3cret"}


class TestSignup:
    async def test__signup__201_with_token(
        self, client: AsyncClient, app_context: AppContext, user_repository,
    ) -> None:
        response = await client.post("/signup", json=SIGNUP)

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["name"] == "Ada Lovelace"
        assert data["user"]["email"] == "ada@example.com"
        assert set(data["user"]) == {"id", "name", "email", "created_at"}
        assert app_context.tokens.verify(data["accessToken"]).id == data["user"]["id"]
        stored = user_repository.users[data["user"]["id"]]
        assert stored.password_hash != "s3cret"

    async def test__signup__duplicate_email_409(
        self, client: AsyncClient, user_repository,
    ) -> None:
        await client.post("/signup", json=SIGNUP)

        response = await client.post("/signup", json={**SIGNUP, "name": "Impostor"})

        assert response.status_code == 409
        assert response.json() == {"error": "Email já cadastrado"}
        assert len(user_repository.users) == 1

    async def test__signup__missing_field_400(self, client: AsyncClient) -> None:
        response = await client.post("/signup", json={"email": "x@example.com", "password": "p"})
        assert response.status_code == 400
        assert response.json() == {"error": "Nome obrigatório"}

    async def test__signup__empty_password_400(self, client: AsyncClient) -> None:
        response = await client.post("/signup", json={**SIGNUP, "password": ""})
        assert response.status_code == 400
        assert response.json() == {"error": "Senha obrigatória"}

    async def test__signup__password_over_bcrypt_limit_400(
        self, client: AsyncClient, user_repository,
    ) -> None:
        response = await client.post("/signup", json={**SIGNUP, "password": "x" * 80})

        assert response.status_code == 400
        assert response.json() == {"error": "Senha muito longa"}
        assert user_repository.users == {}

    async def test__signup__no_body_400(self, client: AsyncClient) -> None:
        response = await client.post("/signup")
        assert response.status_code == 400


class TestSignin:
    async def test__signin__200_with_token(
        self, client: AsyncClient, app_context: AppContext,
    ) -> None:
        signup = await client.post("/signup", json=SIGNUP)

        response = await client.post(
            "/signin", json={"email": "ada@example.com", "password": "s3cret"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == signup.json()["user"]["id"]
        assert app_context.tokens.verify(data["accessToken"]).email == "ada@example.com"

    async def test__signin__wrong_password_401(self, client: AsyncClient) -> None:
        await client.post("/signup", json=SIGNUP)

        response = await client.post(
            "/signin", json={"email": "ada@example.com", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Credenciais inválidas"}

    async def test__signin__unknown_email_same_response(self, client: AsyncClient) -> None:
        await client.post("/signup", json=SIGNUP)

        wrong_password = await client.post(
            "/signin", json={"email": "ada@example.com", "password": "wrong"},
        )
        unknown_email = await client.post(
            "/signin", json={"email": "nobody@example.com", "password": "s3cret"},
        )

        assert unknown_email.status_code == wrong_password.status_code == 401
        assert unknown_email.json() == wrong_password.json()

    async def test__signup_token_opens_tasks(self, client: AsyncClient) -> None:
        signup = await client.post("/signup", json=SIGNUP)
        token = signup.json()["accessToken"]

        response = await client.get("/tasks", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
