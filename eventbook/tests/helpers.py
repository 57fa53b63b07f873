"""
Request helpers shared by the route tests.
"""


def register(client, email, password="pw123456", role="USER", name=None):
    response = client.post("/auth/register", json={
        "email": email, "password": password, "role": role, "name": name,
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()["user"]


def login(client, email, password="pw123456", role="USER"):
    response = client.post("/auth/login", json={"email": email, "password": password, "role": role})
    assert response.status_code == 200, response.get_json()
    return response.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
