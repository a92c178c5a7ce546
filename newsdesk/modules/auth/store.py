"""
Admin Session Store
===================

Server-side session records keyed by an opaque random token. The session
cookie carries only the token, so deleting the row ends the session for
every copy of the cookie.
"""

import secrets

from sqlalchemy import delete, insert, select, update

from newsdesk.core.database import admin_sessions, storage_connection


class SessionStore:
    def create(self, username, now):
        """Insert a new session record and return its token"""
        token = secrets.token_urlsafe(32)
        stmt = insert(admin_sessions).values(
            token=token,
            username=username,
            authenticated_at=now,
            last_seen=now,
        )
        with storage_connection('auth') as conn:
            conn.execute(stmt)
        return token

    def get(self, token):
        stmt = select(admin_sessions).where(admin_sessions.c.token == token)
        with storage_connection('auth') as conn:
            return conn.execute(stmt).mappings().first()

    def touch(self, token, now):
        stmt = update(admin_sessions).where(admin_sessions.c.token == token).values(last_seen=now)
        with storage_connection('auth') as conn:
            conn.execute(stmt)

    def delete(self, token):
        stmt = delete(admin_sessions).where(admin_sessions.c.token == token)
        with storage_connection('auth') as conn:
            conn.execute(stmt)

    def purge_idle(self, cutoff):
        """Remove sessions last seen before ``cutoff``; returns how many went"""
        stmt = delete(admin_sessions).where(admin_sessions.c.last_seen < cutoff)
        with storage_connection('auth') as conn:
            return conn.execute(stmt).rowcount
