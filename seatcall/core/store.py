from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError
from django.db import IntegrityError

from .exceptions import Conflict
from .exceptions import NotFound
from .exceptions import StoreFailure

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def record_store(label: str) -> Iterator[None]:
    """Translate ORM errors raised inside the block into relay errors.

    - ``DoesNotExist`` -> ``NotFound``
    - ``IntegrityError`` (uniqueness, foreign keys, checks) -> ``Conflict``
    - any other ``DatabaseError`` -> ``StoreFailure``

    Wrap writes in ``transaction.atomic()`` inside this block so a failure
    leaves nothing behind.
    """

    try:
        yield
    except ObjectDoesNotExist as exc:
        msg = f"{label} not found."
        raise NotFound(msg) from exc
    except IntegrityError as exc:
        msg = f"{label} conflicts with an existing record."
        raise Conflict(msg) from exc
    except DatabaseError as exc:
        logger.exception("Record store failure while handling %s", label)
        raise StoreFailure from exc
