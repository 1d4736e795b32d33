"""Lifecycle guard — keeps late async results away from a closed session.

An ordering session belongs to one screen. When the screen goes away while
an order submission is still awaiting the backend, the request is not
cancelled; its outcome simply must not touch the session's state any more.
Every state write that happens after an ``await`` goes through ``commit``.
"""

import structlog

logger = structlog.get_logger(__name__)


class LifecycleGuard:
    """A one-way alive flag: true from construction until ``teardown``."""

    def __init__(self, owner: str = "session") -> None:
        self.owner = owner
        self._alive = True

    @property
    def is_alive(self) -> bool:
        return self._alive

    def teardown(self) -> None:
        """Mark the owner as gone. Later calls do nothing."""
        if not self._alive:
            return
        self._alive = False
        logger.debug("lifecycle_teardown", owner=self.owner)

    def commit(self, mutation, *args, **kwargs):
        """Apply ``mutation`` if the owner is still alive, else drop it.

        Returns whatever the mutation returns, or ``None`` when dropped.
        """
        if not self._alive:
            logger.debug(
                "state_write_discarded",
                owner=self.owner,
                mutation=getattr(mutation, "__name__", repr(mutation)),
            )
            return None
        return mutation(*args, **kwargs)
