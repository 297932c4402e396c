"""Create tables and seed two demo users (alice / bob)."""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chatapi.db.session import SessionLocal, engine, Base
from chatapi.models import User  # noqa: F401
from chatapi.core.exceptions import ConflictError
from chatapi.services.identity import register
from chatapi.store import SqlStore

Base.metadata.create_all(bind=engine)
store = SqlStore(SessionLocal())

# Demo users: alice / pw1, bob / pw2
for username, password in [("alice", "pw1"), ("bob", "pw2")]:
    try:
        user = register(store, username, password)
        print(f"Created user: {username} / {password} ({user['id']})")
    except ConflictError:
        print(f"User {username} already exists")

store.close()
print("Init complete.")
