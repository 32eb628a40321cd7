"""
Integration tests for the /api/users endpoints.
"""

import json
import uuid

import pytest
from fastapi.testclient import TestClient

from usersapi.app import create_app
from usersapi.models import UserEntity
from usersapi.services import InMemoryUserRepository, get_user_repository
from usersapi.services.validation import (
    FIRST_NAME_EMPTY,
    LAST_NAME_EMPTY,
    LOGIN_NOT_ALPHANUMERIC,
    LOGIN_REQUIRED,
)

USERS = "/api/users"


def create(client, **body):
    return client.post(USERS, json=body)


class TestGetUser:
    """Tests for GET and HEAD by id."""

    def test_get_existing(self, client, make_user):
        user = make_user(login="johndoe", first_name="John", last_name="Doe")
        response = client.get(f"{USERS}/{user.id}")
        assert response.status_code == 200
        assert response.json() == {
            "id": str(user.id),
            "login": "johndoe",
            "fullName": "Doe John",
            "gamesPlayed": 0,
            "currentGameId": None,
        }

    def test_get_missing(self, client):
        assert client.get(f"{USERS}/{uuid.uuid4()}").status_code == 404

    @pytest.mark.parametrize("raw_id", ["not-a-guid", str(uuid.UUID(int=0))])
    def test_get_bad_or_empty_id(self, client, raw_id):
        assert client.get(f"{USERS}/{raw_id}").status_code == 404

    def test_head_existing(self, client, make_user):
        user = make_user()
        response = client.head(f"{USERS}/{user.id}")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.content == b""

    def test_head_missing(self, client):
        assert client.head(f"{USERS}/{uuid.uuid4()}").status_code == 404

    def test_get_as_xml(self, client, make_user):
        user = make_user(login="johndoe")
        response = client.get(f"{USERS}/{user.id}", headers={"Accept": "application/xml"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert b"<UserDto>" in response.content
        assert b"<Login>johndoe</Login>" in response.content
        assert b"<FullName>Doe John</FullName>" in response.content

    def test_unacceptable_media_type(self, client, make_user):
        user = make_user()
        response = client.get(f"{USERS}/{user.id}", headers={"Accept": "text/html"})
        assert response.status_code == 406


class TestCreateUser:
    """Tests for POST."""

    def test_create_and_fetch(self, client):
        response = create(client, login="johndoe", firstName="John", lastName="Doe")
        assert response.status_code == 201
        user_id = response.json()
        assert response.headers["location"].endswith(f"{USERS}/{user_id}")

        fetched = client.get(response.headers["location"]).json()
        assert fetched["login"] == "johndoe"
        assert fetched["fullName"] == "Doe John"

    def test_create_without_first_name(self, client):
        response = create(client, login="johndoe", lastName="Doe")
        assert response.status_code == 201
        fetched = client.get(f"{USERS}/{response.json()}").json()
        assert fetched["fullName"] == "Doe "

    def test_null_body(self, client):
        response = client.post(
            USERS, content="null", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_missing_body(self, client):
        assert client.post(USERS).status_code == 400

    def test_non_alphanumeric_login(self, client):
        response = create(client, login="ab!cd", lastName="Doe")
        assert response.status_code == 422
        assert response.json() == {"login": [LOGIN_NOT_ALPHANUMERIC]}

    @pytest.mark.parametrize("body", [{"lastName": "Doe"}, {"login": "", "lastName": "Doe"}])
    def test_login_required(self, client, body):
        response = client.post(USERS, json=body)
        assert response.status_code == 422
        assert response.json() == {"login": [LOGIN_REQUIRED]}

    def test_all_errors_returned(self, client):
        response = create(client, login="a b", firstName="", lastName="")
        assert response.status_code == 422
        assert response.json() == {
            "login": [LOGIN_NOT_ALPHANUMERIC],
            "firstName": [FIRST_NAME_EMPTY],
            "lastName": [LAST_NAME_EMPTY],
        }

    def test_rejected_create_stores_nothing(self, client, repository):
        create(client, login="ab!cd", lastName="Doe")
        assert repository.count() == 0

    def test_wrong_field_type(self, client):
        response = create(client, login=123, lastName="Doe")
        assert response.status_code == 422
        assert "login" in response.json()

    def test_malformed_json(self, client):
        response = client.post(
            USERS, content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_non_json_body(self, client):
        response = client.post(
            USERS, content="login=john", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 415


class TestReplaceUser:
    """Tests for PUT."""

    def test_put_new_id_creates(self, client):
        user_id = uuid.uuid4()
        response = client.put(
            f"{USERS}/{user_id}", json={"login": "jane", "firstName": "Jane", "lastName": "Roe"}
        )
        assert response.status_code == 201
        assert response.json() == str(user_id)
        assert response.headers["location"].endswith(f"{USERS}/{user_id}")
        assert client.get(f"{USERS}/{user_id}").json()["fullName"] == "Roe Jane"

    def test_put_existing_overwrites(self, client, repository, make_user):
        user = make_user(games_played=3, current_game_id=uuid.uuid4())
        response = client.put(f"{USERS}/{user.id}", json={"login": "renamed", "lastName": "Smith"})
        assert response.status_code == 204

        stored = repository.find_by_id(user.id)
        assert stored.login == "renamed"
        assert stored.last_name == "Smith"
        assert stored.first_name is None
        assert stored.games_played == 0
        assert stored.current_game_id is None

    @pytest.mark.parametrize("raw_id", [str(uuid.UUID(int=0)), "not-a-guid"])
    def test_put_empty_id(self, client, raw_id):
        response = client.put(f"{USERS}/{raw_id}", json={"login": "jane", "lastName": "Roe"})
        assert response.status_code == 400

    def test_put_null_body(self, client):
        response = client.put(
            f"{USERS}/{uuid.uuid4()}", content="null", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_put_invalid(self, client, repository, make_user):
        user = make_user()
        response = client.put(f"{USERS}/{user.id}", json={"login": "x y", "lastName": "Doe"})
        assert response.status_code == 422
        assert repository.find_by_id(user.id).login == "johndoe"


class TestPatchUser:
    """Tests for PATCH."""

    def test_patch_first_name_only(self, client, repository, make_user):
        user = make_user(login="johndoe", first_name="John", last_name="Doe", games_played=4)
        response = client.patch(f"{USERS}/{user.id}", json={"firstName": "Johnny"})
        assert response.status_code == 204

        stored = repository.find_by_id(user.id)
        assert stored.first_name == "Johnny"
        assert stored.login == "johndoe"
        assert stored.last_name == "Doe"
        assert stored.games_played == 4

    def test_patch_empty_last_name_rejected(self, client, repository, make_user):
        user = make_user()
        response = client.patch(f"{USERS}/{user.id}", json={"lastName": ""})
        assert response.status_code == 422
        assert response.json() == {"lastName": [LAST_NAME_EMPTY]}

        stored = repository.find_by_id(user.id)
        assert stored.last_name == "Doe"

    def test_patch_validates_whole_record(self, client, make_user):
        """A stored record that violates the rules still fails on any patch."""
        user = make_user(login="bad login")
        response = client.patch(f"{USERS}/{user.id}", json={"firstName": "Johnny"})
        assert response.status_code == 422
        assert response.json() == {"login": [LOGIN_NOT_ALPHANUMERIC]}

    def test_patch_null_clears_first_name(self, client, repository, make_user):
        user = make_user()
        response = client.patch(f"{USERS}/{user.id}", json={"firstName": None})
        assert response.status_code == 204
        assert repository.find_by_id(user.id).first_name is None

    def test_patch_null_body(self, client, make_user):
        user = make_user()
        response = client.patch(
            f"{USERS}/{user.id}", content="null", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    def test_patch_missing_user(self, client):
        response = client.patch(f"{USERS}/{uuid.uuid4()}", json={"firstName": "X"})
        assert response.status_code == 404

    def test_patch_empty_id(self, client):
        response = client.patch(f"{USERS}/{uuid.UUID(int=0)}", json={"firstName": "X"})
        assert response.status_code == 404

    def test_patch_accepts_merge_patch_media_type(self, client, repository, make_user):
        user = make_user()
        response = client.patch(
            f"{USERS}/{user.id}",
            content=json.dumps({"lastName": "Smith"}),
            headers={"Content-Type": "application/merge-patch+json"},
        )
        assert response.status_code == 204
        assert repository.find_by_id(user.id).last_name == "Smith"

    def test_patch_keeps_concurrent_replace(self):
        """A replace landing just before the patch write is not undone."""

        class RacingRepository(InMemoryUserRepository):
            def patch(self, user_id, changes, check=None):
                self.update_or_insert(
                    UserEntity(id=user_id, login="renamed", last_name="Smith", games_played=7)
                )
                return super().patch(user_id, changes, check=check)

        repository = RacingRepository()
        user = repository.insert(UserEntity(login="john", first_name="John", last_name="Doe"))
        app = create_app()
        app.dependency_overrides[get_user_repository] = lambda: repository
        with TestClient(app) as racing_client:
            response = racing_client.patch(f"{USERS}/{user.id}", json={"firstName": "Johnny"})
        assert response.status_code == 204

        stored = repository.find_by_id(user.id)
        assert stored.first_name == "Johnny"
        assert stored.login == "renamed"
        assert stored.last_name == "Smith"
        assert stored.games_played == 7


class TestDeleteUser:
    """Tests for DELETE."""

    def test_delete_then_get(self, client, make_user):
        user = make_user()
        assert client.delete(f"{USERS}/{user.id}").status_code == 204
        assert client.get(f"{USERS}/{user.id}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete(f"{USERS}/{uuid.uuid4()}").status_code == 404

    def test_delete_empty_id(self, client):
        assert client.delete(f"{USERS}/{uuid.UUID(int=0)}").status_code == 404


class TestListUsers:
    """Tests for the paginated list."""

    @pytest.fixture
    def twenty_five(self, make_user):
        return [make_user(login=f"user{i}") for i in range(25)]

    def test_first_page(self, client, twenty_five):
        response = client.get(USERS, params={"pageNumber": 1, "pageSize": 10})
        assert response.status_code == 200
        body = response.json()
        assert [item["login"] for item in body] == [f"user{i}" for i in range(10)]

        pagination = json.loads(response.headers["x-pagination"])
        assert pagination["totalCount"] == 25
        assert pagination["pageSize"] == 10
        assert pagination["currentPage"] == 1
        assert pagination["totalPages"] == 3
        assert pagination["previousPageLink"] is None
        assert "pageNumber=2" in pagination["nextPageLink"]
        assert "pageSize=10" in pagination["nextPageLink"]

    def test_last_page(self, client, twenty_five):
        response = client.get(USERS, params={"pageNumber": 3, "pageSize": 10})
        assert len(response.json()) == 5
        pagination = json.loads(response.headers["x-pagination"])
        assert pagination["nextPageLink"] is None
        assert "pageNumber=2" in pagination["previousPageLink"]

    def test_defaults(self, client, twenty_five):
        response = client.get(USERS)
        pagination = json.loads(response.headers["x-pagination"])
        assert pagination["currentPage"] == 1
        assert pagination["pageSize"] == 10

    def test_page_size_clamped(self, client, twenty_five):
        response = client.get(USERS, params={"pageSize": 1000})
        assert len(response.json()) == 20
        assert json.loads(response.headers["x-pagination"])["pageSize"] == 20

    @pytest.mark.parametrize("page_number", [0, -4])
    def test_page_number_clamped(self, client, twenty_five, page_number):
        response = client.get(USERS, params={"pageNumber": page_number})
        assert json.loads(response.headers["x-pagination"])["currentPage"] == 1

    def test_empty_store(self, client):
        response = client.get(USERS)
        assert response.json() == []
        pagination = json.loads(response.headers["x-pagination"])
        assert pagination["totalPages"] == 0
        assert pagination["nextPageLink"] is None

    def test_list_as_xml(self, client, make_user):
        make_user(login="alpha")
        response = client.get(USERS, headers={"Accept": "application/xml"})
        assert response.status_code == 200
        assert response.content.count(b"<UserDto>") == 1
        assert b"<ArrayOfUserDto>" in response.content

    def test_bad_page_number(self, client):
        response = client.get(USERS, params={"pageNumber": "abc"})
        assert response.status_code == 422
        assert "pageNumber" in response.json()

    def test_huge_page_number(self, client, make_user):
        """The largest accepted page number answers with an empty page."""
        make_user()
        response = client.get(USERS, params={"pageNumber": 2**31 - 1, "pageSize": 20})
        assert response.status_code == 200
        assert response.json() == []
        assert json.loads(response.headers["x-pagination"])["currentPage"] == 2**31 - 1

    def test_page_number_out_of_range(self, client):
        response = client.get(USERS, params={"pageNumber": 4611686018427387904, "pageSize": 20})
        assert response.status_code == 422
        assert "pageNumber" in response.json()


class TestOptions:
    """Tests for OPTIONS on the collection."""

    def test_allow_header(self, client):
        response = client.options(USERS)
        assert response.status_code == 200
        assert response.headers["allow"] == "GET, POST, OPTIONS"


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}
