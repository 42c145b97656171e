from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from stockflow.utils.logs import get_logger

log = get_logger("db")


@contextmanager
def committed_unit(session: Session) -> Iterator[Session]:
    """
    Run a block as its own top-level transaction and leave it committed.

    Creation holds a per-SKU lock only for the duration of the block, so the
    block's writes must be durable by the time it exits: a SAVEPOINT inside a
    caller's transaction would release the lock on rows nobody has committed.
    Whatever the caller already has open on ``session`` is committed first;
    the block then commits on exit or rolls back entirely if it raises.

        with committed_unit(db):
            db.add(product)
            db.add(inventory)
    """
    if session.in_transaction():
        log.debug("Committing caller's open transaction before unit of work")
        session.commit()
    with session.begin():
        yield session
