"""
Orchestrate Quickstart Example

Walks through the main parts of the API with one small collection:

1. Storing and reading versioned documents
2. Conditional updates with refs
3. Events and graph relations
4. Listing and searching page by page

Set ORCHESTRATE_API_KEY before running. ORCHESTRATE_HOST is optional.
"""

import logging
import os
import time

from pydantic import BaseModel

from orchestrate import Client, PreconditionFailedError


class User(BaseModel):
    name: str
    email: str


class Login(BaseModel):
    ip: str


def main():
    logging.basicConfig(level=logging.INFO)

    client = Client(
        token=os.environ["ORCHESTRATE_API_KEY"],
        host=os.environ.get("ORCHESTRATE_HOST"),
        timeout=10,
    )
    client.ping()

    print("=" * 60)
    print("Orchestrate Quickstart")
    print("=" * 60)

    # ==========================================================================
    # Documents
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 1: Documents")
    print("-" * 40)

    chad = client.update("users", "chad", User(name="chad", email="chad@example.com")).exec()
    ann = client.create("users", User(name="ann", email="ann@example.com")).exec()
    print(f"Stored: {chad}")
    print(f"Stored under generated key: {ann}")

    current = client.get("users", "chad").exec(User)
    print(f"Read back: {current.value} at ref {current.path.ref}")

    # ==========================================================================
    # Conditional writes
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 2: Conditional updates")
    print("-" * 40)

    moved = User(name="chad", email="chad@elsewhere.com")
    newer = client.update("users", "chad", moved).if_match(chad.ref).exec()
    print(f"Updated from {chad.ref} to {newer.ref}")

    try:
        client.update("users", "chad", moved).if_match(chad.ref).exec()
    except PreconditionFailedError as e:
        print(f"Stale ref rejected: {e.message}")

    old = client.get("users", "chad").ref(chad.ref).exec(User)
    print(f"Previous version is still readable: {old.value.email}")

    # ==========================================================================
    # Events and relations
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 3: Events and relations")
    print("-" * 40)

    now = int(time.time() * 1000)
    client.create_event("users", "chad", "login", Login(ip="10.0.0.1")).timestamp(now).exec()
    logins = client.events("users", "chad", "login").start(now - 60_000).exec(Login)
    for event in logins.results:
        print(f"login at {event.timestamp}/{event.ordinal} from {event.value.ip}")

    client.put_relation("users", "chad", "friends", "users", ann.key).exec()
    friends = client.relations("users", "chad", "friends").exec(User)
    print(f"chad has {friends.count} friend(s): {[r.value.name for r in friends.results]}")

    # ==========================================================================
    # Listing and search
    # ==========================================================================
    print("\n" + "-" * 40)
    print("Step 4: Listing and search")
    print("-" * 40)

    first = client.list("users").limit(1).exec(User)
    for page in client.iter_pages(first, User):
        for item in page.results:
            print(f"  {item.path.key}: {item.value.name}")

    hits = client.search("users").query("name:chad").sort("email").exec(User)
    print(f"Search matched {hits.total_count} document(s)")

    # ==========================================================================
    # Cleanup
    # ==========================================================================
    client.delete_relation("users", "chad", "friends", "users", ann.key).exec()
    client.delete("users", ann.key).purge().exec()
    client.delete("users", "chad").purge().exec()
    print("\nDone.")


if __name__ == "__main__":
    main()
