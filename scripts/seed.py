"""Seed script: creates demo users and documents with some history via the REST API.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL
"""

import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

USERS = [
    {"name": "Alice Smith", "email": "alice@example.com", "password": "password123"},
    {"name": "Bob Jones", "email": "bob@example.com", "password": "password123"},
]

DOCUMENTS = [
    {
        "title": "Getting Started Guide",
        "owner": "alice@example.com",
        "revisions": [
            "# Getting Started\n\nInstall the app.",
            "# Getting Started\n\nInstall the app.\nCreate your first document.",
            "# Getting Started\n\nDownload and install the app.\nCreate your first document.",
        ],
    },
    {
        "title": "Architecture Notes",
        "owner": "bob@example.com",
        "revisions": [
            "Services talk over HTTP.",
            "Services talk over HTTP.\nVersions are immutable snapshots.",
        ],
    },
]


def register(client: httpx.Client, user: dict) -> None:
    resp = client.post(f"{BASE_URL}/api/auth/register", json=user)
    if resp.status_code == 201:
        print(f"  Registered {user['email']}")
    elif resp.status_code == 409:
        print(f"  {user['email']} already exists, skipping")
    else:
        resp.raise_for_status()


def login(client: httpx.Client, email: str, password: str) -> str:
    resp = client.post(
        f"{BASE_URL}/api/auth/login",
        json={"email": email, "password": password},
    )
    resp.raise_for_status()
    return resp.json()["access_token"]


def create_document(client: httpx.Client, token: str, doc: dict) -> None:
    headers = {"Authorization": f"Bearer {token}"}
    first, *rest = doc["revisions"]

    resp = client.post(
        f"{BASE_URL}/api/documents/",
        json={"title": doc["title"], "content": first},
        headers=headers,
    )
    resp.raise_for_status()
    doc_id = resp.json()["id"]

    for i, content in enumerate(rest, start=1):
        resp = client.patch(
            f"{BASE_URL}/api/documents/{doc_id}",
            json={"content": content, "change_summary": f"Revision {i}"},
            headers=headers,
        )
        resp.raise_for_status()

    if rest:
        resp = client.post(f"{BASE_URL}/api/documents/{doc_id}/versions/1/restore", headers=headers)
        resp.raise_for_status()

    version = resp.json()["version_number"]
    print(f"  Created '{doc['title']}' ({doc_id}) at version {version}")


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    with httpx.Client(timeout=10) as client:
        print("Users:")
        for user in USERS:
            register(client, user)

        tokens: dict[str, str] = {}
        for user in USERS:
            tokens[user["email"]] = login(client, user["email"], user["password"])

        print("\nDocuments:")
        for doc in DOCUMENTS:
            create_document(client, tokens[doc["owner"]], doc)

    print("\nDone!")


if __name__ == "__main__":
    main()
