from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.backend.api.routers.foods import router as foods_router
from app.backend.api.routers.users import router as users_router
from app.backend.database import Base, enable_sqlite_foreign_keys, get_db
from app.backend.models import User
from app.backend.services.passwords import verify_password


def _build_test_app():
    app = FastAPI()
    app.include_router(users_router, prefix="/api/v1/users")
    app.include_router(foods_router, prefix="/api/v1/foods")
    return app


def _setup_database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine, TestingSessionLocal


def _client(SessionLocal):
    app = _build_test_app()

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


ALICE = {"user_id": "u1", "user_name": "Alice", "mail": "a@x.com", "password": "secret"}


def test_create_read_update_user():
    engine, SessionLocal = _setup_database()
    try:
        with _client(SessionLocal) as client:
            create_resp = client.post("/api/v1/users/", json=ALICE)
            assert create_resp.status_code == 201
            created = create_resp.json()
            assert created["user_id"] == "u1"
            assert created["user_name"] == "Alice"
            assert "password" not in created

            with SessionLocal() as session:
                stored = session.query(User).filter(User.user_id == "u1").one()
                assert stored.password != "secret"
                assert verify_password("secret", stored.password)

            read_resp = client.get("/api/v1/users/u1")
            assert read_resp.status_code == 200
            assert read_resp.json() == created

            update_resp = client.patch(
                "/api/v1/users/u1", json={"user_name": "Alicia"}
            )
            assert update_resp.status_code == 200
            assert update_resp.json()["user_name"] == "Alicia"
            assert update_resp.json()["mail"] == "a@x.com"

            missing = client.get("/api/v1/users/ghost")
            assert missing.status_code == 404
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_duplicate_and_invalid_users():
    engine, SessionLocal = _setup_database()
    try:
        with _client(SessionLocal) as client:
            assert client.post("/api/v1/users/", json=ALICE).status_code == 201
            duplicate = client.post("/api/v1/users/", json=ALICE)
            assert duplicate.status_code == 409

            too_long = client.post(
                "/api/v1/users/", json={**ALICE, "user_id": "x" * 41}
            )
            assert too_long.status_code == 422

            generated = client.post(
                "/api/v1/users/",
                json={"user_name": "Anon", "mail": "n@x.com", "password": "pw"},
            )
            assert generated.status_code == 201
            assert len(generated.json()["user_id"]) == 36
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_rename_moves_food_rows():
    engine, SessionLocal = _setup_database()
    try:
        with _client(SessionLocal) as client:
            client.post("/api/v1/users/", json=ALICE)
            client.post("/api/v1/users/", json={**ALICE, "user_id": "u2"})
            client.post(
                "/api/v1/foods/",
                json={"food_id": "f1", "food_name": "Milk", "exp": "2024-01-01", "user_id": "u1"},
            )

            conflict = client.patch("/api/v1/users/u1", json={"user_id": "u2"})
            assert conflict.status_code == 409

            rename = client.patch("/api/v1/users/u1", json={"user_id": "B"})
            assert rename.status_code == 200
            assert rename.json()["user_id"] == "B"

            assert client.get("/api/v1/users/u1").status_code == 404
            foods = client.get("/api/v1/users/B/foods").json()
            assert foods["total"] == 1
            assert foods["foods"][0]["user_id"] == "B"
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_delete_user_cascades():
    engine, SessionLocal = _setup_database()
    try:
        with _client(SessionLocal) as client:
            client.post("/api/v1/users/", json=ALICE)
            food = client.post(
                "/api/v1/foods/",
                json={"food_id": "f1", "food_name": "Milk", "exp": "2024-01-01", "user_id": "u1"},
            ).json()

            delete_resp = client.delete("/api/v1/users/u1")
            assert delete_resp.status_code == 204

            assert client.get("/api/v1/users/u1/foods").status_code == 404
            assert client.get(f"/api/v1/foods/{food['id']}").status_code == 404

            second_delete = client.delete("/api/v1/users/u1")
            assert second_delete.status_code == 404
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_update_user_validation():
    engine, SessionLocal = _setup_database()
    try:
        with _client(SessionLocal) as client:
            client.post("/api/v1/users/", json={**ALICE, "user_name": "  Alice  "})
            assert client.get("/api/v1/users/u1").json()["user_name"] == "  Alice  "

            unknown = client.patch(
                "/api/v1/users/u1", json={"user_name": "Bob", "bogus": 1}
            )
            assert unknown.status_code == 422

            for field in ("mail", "user_name", "user_id", "password"):
                null_resp = client.patch("/api/v1/users/u1", json={field: None})
                assert null_resp.status_code == 422

            padded = client.patch("/api/v1/users/u1", json={"user_name": "  Bob  "})
            assert padded.status_code == 200
            assert padded.json()["user_name"] == "  Bob  "
            assert padded.json()["mail"] == "a@x.com"
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
