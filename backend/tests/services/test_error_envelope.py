"""Error envelope — every failure leaves the API in the same JSON shape.

Invariants:
    - Unknown routes keep their 404 and use the error envelope
    - SQLAlchemy failures map to ConflictError (integrity) or DatabaseError
"""

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from meedle.core.errors import ConflictError, DatabaseError
from meedle.infrastructure.database import map_db_error


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/api/v1/does-not-exist")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "HTTP_404"
    assert error["category"] == "resource_not_found"


async def test_validation_details_name_the_field(client):
    res = await client.post("/api/v1/auth/login", json={"login": "student1"})
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert "body.password" in fields


def test_integrity_error_maps_to_conflict():
    mapped = map_db_error(IntegrityError("INSERT", {}, Exception("duplicate login")))
    assert isinstance(mapped, ConflictError)
    assert mapped.http_status == 409


def test_operational_error_maps_to_database_error():
    mapped = map_db_error(OperationalError("SELECT 1", {}, Exception("down")))
    assert isinstance(mapped, DatabaseError)
    assert mapped.http_status == 503


def test_other_orm_failure_maps_to_database_error():
    assert isinstance(map_db_error(SQLAlchemyError("boom")), DatabaseError)
