from chatapi.store.base import ChatStore, collection_lock
from chatapi.store.json_store import JsonStore
from chatapi.store.sql import SqlStore

__all__ = ["ChatStore", "JsonStore", "SqlStore", "collection_lock"]
