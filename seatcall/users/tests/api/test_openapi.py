from http import HTTPStatus

import pytest
from django.urls import reverse

from config.schema import assign_group_tag


def test_api_v1_docs_accessible_by_admin(admin_client):
    url = reverse("api-docs-v1")
    response = admin_client.get(url)
    assert response.status_code == HTTPStatus.OK


@pytest.mark.django_db
def test_api_v1_docs_not_accessible_by_anonymous_users(client):
    url = reverse("api-docs-v1")
    response = client.get(url)
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_api_v1_schema_generated_successfully(admin_client):
    url = reverse("api-schema-v1")
    response = admin_client.get(url, {"format": "json"})
    assert response.status_code == HTTPStatus.OK
    schema = response.json()
    assert "/api/v1/seats/{id}/claim/" in schema["paths"]
    claim = schema["paths"]["/api/v1/seats/{id}/claim/"]["post"]
    assert claim["tags"] == ["Seats"]


@pytest.mark.parametrize(
    ("path", "tag"),
    [
        ("/api/v1/auth/jwt/create/", "Authentication"),
        ("/api/v1/calls/{id}/end/", "Calls"),
        ("/api/v1/messages/", "Messages"),
        ("/api/v1/users/me/", "Users"),
        ("/health/", None),
    ],
)
def test_assign_group_tag(path, tag):
    assert assign_group_tag(path) == tag
