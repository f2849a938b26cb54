"""Tests for the composition root."""

import pytest

from pos.domain.exceptions import UnauthenticatedError
from pos.domain.model.user import AuthProvider, UserIdentity
from pos.infrastructure.bootstrap import Container
from pos.infrastructure.config import parse_settings, read_config
from pos.infrastructure.persistence.json_document_store import JsonDocumentStore


class SwitchableAuth(AuthProvider):
    """Signs in whichever known user is asked for."""

    def __init__(self, *users: UserIdentity) -> None:
        self._users = {u.email: u for u in users}
        self._current: UserIdentity | None = users[0] if users else None

    def current_user(self) -> UserIdentity | None:
        return self._current

    def sign_in(self, email: str, password: str) -> UserIdentity:
        if email not in self._users:
            raise UnauthenticatedError(email)
        self._current = self._users[email]
        return self._current

    def sign_out(self) -> None:
        self._current = None


MEERA = UserIdentity(uid="shop-meera", email="meera@pottery.in")
RAVI = UserIdentity(uid="shop-ravi", email="ravi@pottery.in")


@pytest.fixture
def container(tmp_path) -> Container:
    settings = parse_settings(read_config(None), base_path=tmp_path)
    return Container(settings, store=JsonDocumentStore(tmp_path / "data"), auth=SwitchableAuth(MEERA, RAVI))


class TestContainer:

    def test_repositories_follow_the_signed_in_user(self, container):
        container.add_product().handle(name="Vase", price="100", stock=2)
        assert [p.name for p in container.list_products().handle()] == ["Vase"]

        container.auth.sign_out()
        container.auth.sign_in(RAVI.email, "x")
        assert container.owner_id == "shop-ravi"
        assert container.list_products().handle() == []

        container.add_product().handle(name="Jug", price="80")
        container.auth.sign_in(MEERA.email, "x")
        assert [p.name for p in container.list_products().handle()] == ["Vase"]

    def test_signed_out_container_refuses_data_access(self, container):
        container.product_repo.list_all()
        container.auth.sign_out()
        with pytest.raises(UnauthenticatedError):
            container.product_repo.list_all()
