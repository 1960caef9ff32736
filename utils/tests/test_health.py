from unittest.mock import patch

import pytest
from django.db import OperationalError


@pytest.mark.django_db
def test_health_check_ok(client):
    response = client.get("/health/")
    assert response.status_code == 200
    assert response.content == b"OK"
    assert response["Content-Type"].startswith("text/plain")


@pytest.mark.django_db
def test_health_check_head(client):
    response = client.head("/health/")
    assert response.status_code == 200


@pytest.mark.django_db
def test_health_check_database_down(client):
    with patch("utils.health.connection.cursor", side_effect=OperationalError("down")):
        response = client.get("/health/")
    assert response.status_code == 503
