"""Base abstract model shared by every module.

Provides ``BaseModel``: UUIDv7 primary key plus ``created_at`` /
``updated_at`` bookkeeping.  UUIDv7 keys sort by creation time, which
keeps "most recent first" listings cheap without an extra index.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Keep ``updated_at`` fresh on partial saves (``update_fields``)."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
