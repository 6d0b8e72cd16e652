"""
Document collections on SQLite
==============================

Stores JSON documents per collection and evaluates a small subset of
document-store predicates in Python:

- equality on dotted paths (``{'userInfor.fullName': 'An'}``)
- compiled regular expressions, or ``{'$regex': ..., '$options': 'i'}``
- ``$exists``, ``$in``, ``$ne``
- ``$or`` / ``$and`` at the top level

``{'field': None}`` matches documents where the field is null or missing.
"""

import json
import os
import re
import sqlite3
import uuid
from collections import namedtuple
from datetime import date, datetime

from .config import Config, get_config_value


UpdateResult = namedtuple('UpdateResult', ['matched_count', 'modified_count'])
InsertResult = namedtuple('InsertResult', ['inserted_id'])

_MISSING = object()

# Compare-and-swap retries before update_one gives up
UPDATE_ATTEMPTS = 3


class DocumentStoreError(Exception):
    """Raised when a collection cannot be read or written"""


def new_object_id():
    """24 hex characters, the same shape as a document-store object id"""
    return uuid.uuid4().hex[:24]


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _resolve(document, path):
    value = document
    for part in path.split('.'):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return _MISSING
    return value


def _match_value(value, condition):
    if isinstance(condition, re.Pattern):
        return isinstance(value, str) and condition.search(value) is not None

    if isinstance(condition, dict) and condition and all(k.startswith('$') for k in condition):
        for op, arg in condition.items():
            if op == '$exists':
                if (value is not _MISSING) != bool(arg):
                    return False
            elif op == '$in':
                if value is _MISSING or value not in arg:
                    return False
            elif op == '$ne':
                if value is not _MISSING and value == arg:
                    return False
            elif op == '$regex':
                flags = re.IGNORECASE if 'i' in condition.get('$options', '') else 0
                if not isinstance(value, str) or re.search(arg, value, flags) is None:
                    return False
            elif op == '$options':
                continue
            else:
                raise DocumentStoreError(f"Unsupported query operator: {op}")
        return True

    if value is _MISSING:
        return condition is None
    return value == condition


def matches(document, query):
    """Return True if the document satisfies every clause of the query"""
    for key, condition in (query or {}).items():
        if key == '$or':
            if not any(matches(document, clause) for clause in condition):
                return False
        elif key == '$and':
            if not all(matches(document, clause) for clause in condition):
                return False
        elif not _match_value(_resolve(document, key), condition):
            return False
    return True


def _project(document, projection):
    if not projection:
        return document
    fields = [k for k, v in projection.items() if v] if isinstance(projection, dict) else list(projection)
    projected = {'_id': document.get('_id')}
    for field in fields:
        if field in document:
            projected[field] = document[field]
    return projected


def _sort_documents(documents, sort):
    if not sort:
        return documents
    keys = list(sort.items()) if isinstance(sort, dict) else list(sort)

    # Stable sorts applied from the last key to the first
    for field, direction in reversed(keys):
        def sort_key(doc, field=field):
            value = _resolve(doc, field)
            if value is _MISSING or value is None:
                return (0, '')
            return (1, value)
        documents = sorted(documents, key=sort_key, reverse=direction < 0)
    return documents


def _set_path(document, path, value):
    parts = path.split('.')
    target = document
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


class Collection:
    """A named set of JSON documents inside one SQLite database file"""

    def __init__(self, name, db_path):
        self.name = name
        self.db_path = db_path

    def _ensure_table(self, conn):
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS documents (
                collection TEXT NOT NULL,
                id TEXT NOT NULL,
                body TEXT NOT NULL,
                PRIMARY KEY (collection, id)
            )
        """)
        return cursor

    def _connect(self):
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return Database.connect(self.db_path)

    def _read(self, cursor, query):
        """(stored body, document) pairs in insertion order"""
        sql = "SELECT body FROM documents WHERE collection = ?"
        params = [self.name]

        # Plain id lookups use the primary key instead of scanning the collection
        doc_id = (query or {}).get('_id')
        if isinstance(doc_id, str):
            sql += " AND id = ?"
            params.append(doc_id)

        cursor.execute(sql + " ORDER BY rowid", params)
        return [(row[0], json.loads(row[0])) for row in cursor.fetchall()]

    def _load(self, query=None):
        try:
            with self._connect() as conn:
                cursor = self._ensure_table(conn)
                return [doc for _, doc in self._read(cursor, query)]
        except (sqlite3.Error, ValueError) as e:
            raise DocumentStoreError(f"Failed to read collection '{self.name}': {e}") from e

    def find(self, query=None, sort=None, projection=None):
        """Return matching documents as plain dicts"""
        documents = [doc for doc in self._load(query) if matches(doc, query)]
        documents = _sort_documents(documents, sort)
        return [_project(doc, projection) for doc in documents]

    def find_one(self, query=None, projection=None):
        for doc in self._load(query):
            if matches(doc, query):
                return _project(doc, projection)
        return None

    def insert_one(self, document):
        document = dict(document)
        document.setdefault('_id', new_object_id())
        document['_id'] = str(document['_id'])

        try:
            body = json.dumps(document, default=_json_default)
            with self._connect() as conn:
                cursor = self._ensure_table(conn)
                cursor.execute(
                    "INSERT INTO documents (collection, id, body) VALUES (?, ?, ?)",
                    (self.name, document['_id'], body)
                )
                conn.commit()
        except (sqlite3.Error, TypeError) as e:
            raise DocumentStoreError(f"Failed to insert into '{self.name}': {e}") from e

        return InsertResult(document['_id'])

    def insert_many(self, documents):
        return [self.insert_one(doc).inserted_id for doc in documents]

    def update_one(self, query, update):
        """
        Apply a ``{'$set': {...}}`` update to the first matching document.

        The write only lands if the stored body is still the one the query
        was checked against; if another writer got there first, the query is
        evaluated again on the fresh document.

        ``modified_count`` is 0 when nothing matched or every field
        already held the requested value.
        """
        if set(update) != {'$set'}:
            raise DocumentStoreError("Only $set updates are supported")

        try:
            with self._connect() as conn:
                cursor = self._ensure_table(conn)

                for _ in range(UPDATE_ATTEMPTS):
                    current = next(
                        ((body, doc) for body, doc in self._read(cursor, query) if matches(doc, query)),
                        None
                    )
                    if current is None:
                        return UpdateResult(0, 0)
                    stored_body, document = current

                    updated = json.loads(stored_body)
                    for path, value in update['$set'].items():
                        _set_path(updated, path, value)
                    updated = json.loads(json.dumps(updated, default=_json_default))

                    if updated == document:
                        return UpdateResult(1, 0)

                    cursor.execute(
                        "UPDATE documents SET body = ? WHERE collection = ? AND id = ? AND body = ?",
                        (json.dumps(updated), self.name, document['_id'], stored_body)
                    )
                    modified = cursor.rowcount
                    conn.commit()
                    if modified:
                        return UpdateResult(1, modified)

        except (sqlite3.Error, TypeError, ValueError) as e:
            raise DocumentStoreError(f"Failed to update '{self.name}': {e}") from e

        raise DocumentStoreError(
            f"Document in '{self.name}' kept changing during update, gave up after {UPDATE_ATTEMPTS} attempts"
        )


class Database:

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @staticmethod
    def collection(name, db_path=None):
        """Collection in the shop database configured for the current app"""
        return Collection(name, db_path or get_config_value('SHOP_DB', Config.SHOP_DB))
