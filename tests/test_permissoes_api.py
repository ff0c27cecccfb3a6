# tests/test_permissoes_api.py

"""
Tests for the /permissoes endpoints.
"""

from fastapi.testclient import TestClient


def test_catalogs_require_auth(client: TestClient):
    response = client.get("/permissoes/roles")
    assert response.status_code in (401, 403)


def test_list_catalogs(client: TestClient, login_as, viewer_user):
    login_as(viewer_user)

    roles = client.get("/permissoes/roles").json()
    modules = client.get("/permissoes/modulos").json()
    actions = client.get("/permissoes/acoes").json()

    assert [r["id"] for r in roles] == ["admin", "membro", "visualizador"]
    assert len(modules) == 11
    assert modules[-1] == {
        "id": "configuracoes",
        "label": "Configurações",
        "description": "Configurações e usuários da empresa",
    }
    assert [a["id"] for a in actions] == ["ver", "criar", "editar", "excluir"]


def test_role_defaults(client: TestClient, login_as, member_user):
    login_as(member_user)

    response = client.get("/permissoes/defaults/visualizador")
    assert response.status_code == 200
    data = response.json()
    assert data["medicoes"] == {"ver": True, "criar": False, "editar": False, "excluir": False}


def test_role_defaults_unknown_role(client: TestClient, login_as, member_user):
    login_as(member_user)

    response = client.get("/permissoes/defaults/gerente")
    assert response.status_code == 400
    assert "gerente" in response.json()["detail"]


def test_my_permissions(client: TestClient, login_as, member_user):
    member_user.permissoes = {"financeiro": {"excluir": True}}
    login_as(member_user)

    response = client.get("/permissoes/me")
    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "membro"
    assert data["role_label"] == "Membro"
    assert data["personalizado"] is True
    assert data["efetivas"]["financeiro"]["excluir"] is True
    assert data["efetivas"]["compras"]["excluir"] is False


def test_check_my_permission(client: TestClient, login_as, viewer_user):
    login_as(viewer_user)

    allowed = client.get("/permissoes/me/compras/ver").json()
    denied = client.get("/permissoes/me/purchasing/create").json()

    assert allowed == {"modulo": "compras", "acao": "ver", "permitido": True}
    assert denied == {"modulo": "compras", "acao": "criar", "permitido": False}


def test_check_my_permission_unknown_module(client: TestClient, login_as, admin_user):
    login_as(admin_user)

    response = client.get("/permissoes/me/obras/ver")
    assert response.status_code == 400
