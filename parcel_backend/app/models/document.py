"""
Columns shared by every document-style table.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, JSON


def new_document_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentMixin:
    """
    Mixin giving a table a generated string id and a JSON payload column.

    Fields a client sends that have no column of their own are kept in
    ``details`` and merged back into the record on read.
    """
    id = Column(String(32), primary_key=True, default=new_document_id)
    details = Column(JSON, nullable=False, default=dict)
