"""
State reconciliation loop.

EC2 calls return as soon as the request is accepted, with the resource in a
transient state. The poller re-reads the resource until it leaves that state
and then checks it landed where the caller expected.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional

from ..exceptions import PollTimeoutError, UnexpectedStateError

Record = Dict[str, Any]


class StatePoller:
    """
    Blocks until a resource leaves its transient states.
    """

    def __init__(
        self,
        interval: float = 1.0,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the poller.

        Args:
            interval: Seconds to sleep between two fetches
            timeout: Seconds after which to give up, None to wait forever
            sleep: Function used to sleep
            clock: Monotonic clock used to measure the timeout
            logger: Logger for progress messages
        """
        self.interval = interval
        self.timeout = timeout
        self.sleep = sleep
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def wait(
        self,
        entity_id: str,
        fetch: Callable[[], Optional[Record]],
        transient: Iterable[str],
        success: str,
        absent_ok: bool = False,
        description: str = "volume",
        on_transient: Optional[Callable[[Record], None]] = None,
        initial: Optional[Record] = None,
    ) -> Optional[Record]:
        """
        Poll a resource until its state is outside the transient set.

        Args:
            entity_id: ID of the polled resource, used in messages
            fetch: Returns the current record, or None when there is none
            transient: States during which polling continues
            success: The state expected once polling stops
            absent_ok: Whether a missing record means the operation finished
            description: What is being waited for, used in log messages
            on_transient: Called with the record on every transient iteration
            initial: Record already in hand, used instead of the first fetch

        Returns:
            The final record, or None when the record vanished and absent_ok is set

        Raises:
            UnexpectedStateError: The record ended in another state, or vanished
            PollTimeoutError: The timeout elapsed while still transient
        """
        transient = set(transient)
        started = self.clock()

        record = initial if initial is not None else fetch()
        while record is not None and record.get("State") in transient:
            state = record.get("State")
            if on_transient is not None:
                on_transient(record)
            if self.timeout is not None and self.clock() - started >= self.timeout:
                raise PollTimeoutError(entity_id, state, self.timeout)
            self.logger.debug("Waiting for %s %s %s", description, entity_id, state)
            self.sleep(self.interval)
            record = fetch()

        if record is None:
            if absent_ok:
                return None
            raise UnexpectedStateError(
                entity_id, None, f"No {description} record found for {entity_id}"
            )

        state = record.get("State")
        if state != success:
            raise UnexpectedStateError(
                entity_id,
                state,
                f"Failed waiting for {description} {entity_id}, ending state {state}",
            )
        return record
