# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Waitlist ordering waiting users by priority, then arrival order."""

import heapq
import itertools
import logging

from ..exceptions import DuplicateUserError
from ..types.user import WaitingUser

logger = logging.getLogger(__name__)

# Marker stored in the user slot of a heap entry that is no longer live
_REMOVED = None


class Waitlist:
    """
    Priority-ordered waitlist with arbitrary removal and priority updates.

    Primary storage: Dict[user_id, WaitingUser]
    Secondary index: Dict[user_id, heap entry]
    Ordering: min-heap of [-priority, arrival_order, push_seq, user_id] entries

    Removal and priority updates are O(log n) amortized through lazy
    invalidation: the live heap entry of the user is marked removed and,
    for an update, a fresh entry is pushed. Removed entries are skipped
    when popping and dropped in bulk by compact() once they make up more
    than compaction_ratio of the heap.

    push_seq is unique per heap entry, so comparisons never reach the
    user slot even when a stale and a live entry share priority and
    arrival order.
    """

    def __init__(
        self,
        compaction_ratio: float = 0.5,
        min_compaction_size: int = 64,
    ):
        """
        Initialize the Waitlist.

        Args:
            compaction_ratio: Stale entry ratio above which the heap is compacted (default: 0.5)
            min_compaction_size: Heap size below which compaction never runs (default: 64)
        """
        self._compaction_ratio = compaction_ratio
        self._min_compaction_size = min_compaction_size

        self._users: dict[int, WaitingUser] = {}
        self._entries: dict[int, list] = {}

        # May contain entries marked _REMOVED
        self._heap: list[list] = []
        self._stale_count = 0
        self._push_seq = itertools.count()

    def insert(self, user_id: int, priority: int, arrival_order: int) -> WaitingUser:
        """
        Add a user to the waitlist.

        Args:
            user_id: The waiting user
            priority: Priority (higher is served first)
            arrival_order: Tie-breaker (smaller is served first)

        Returns:
            The stored WaitingUser

        Raises:
            DuplicateUserError: If the user is already waiting
        """
        if user_id in self._users:
            raise DuplicateUserError(user_id)

        waiting = WaitingUser(user_id=user_id, priority=priority, arrival_order=arrival_order)
        self._users[user_id] = waiting
        self._push(waiting)

        logger.debug(
            "Waitlisted user %d (priority=%d, arrival=%d, waiting=%d)",
            user_id,
            priority,
            arrival_order,
            len(self._users),
        )
        return waiting

    def pop_highest(self) -> WaitingUser | None:
        """
        Remove and return the highest-priority, earliest-arrival user.

        Returns:
            The WaitingUser, or None if nobody is waiting
        """
        self._discard_stale_top()
        if not self._heap:
            return None

        user_id = heapq.heappop(self._heap)[-1]
        del self._entries[user_id]
        waiting = self._users.pop(user_id)
        logger.debug("Popped user %d from waitlist (waiting=%d)", user_id, len(self._users))
        return waiting

    def peek(self) -> WaitingUser | None:
        """Return the next user to be served without removing it."""
        self._discard_stale_top()
        if not self._heap:
            return None
        return self._users[self._heap[0][-1]]

    def remove(self, user_id: int) -> bool:
        """
        Remove a user from anywhere in the waitlist.

        Returns:
            True if the user was waiting, False otherwise
        """
        waiting = self._users.pop(user_id, None)
        if waiting is None:
            return False

        self._invalidate(user_id)
        logger.debug("Removed user %d from waitlist (waiting=%d)", user_id, len(self._users))
        self._maybe_compact()
        return True

    def update_priority(self, user_id: int, new_priority: int) -> bool:
        """
        Change a waiting user's priority, keeping its arrival order.

        Returns:
            True if the user was waiting and was updated, False otherwise
        """
        waiting = self._users.get(user_id)
        if waiting is None:
            return False

        if waiting.priority != new_priority:
            old_priority = waiting.priority
            waiting.priority = new_priority
            self._invalidate(user_id)
            self._push(waiting)
            logger.debug(
                "Updated priority of user %d from %d to %d",
                user_id,
                old_priority,
                new_priority,
            )
            self._maybe_compact()
        return True

    def contains(self, user_id: int) -> bool:
        return user_id in self._users

    def get(self, user_id: int) -> WaitingUser | None:
        return self._users.get(user_id)

    def entries(self) -> list[WaitingUser]:
        """Return all waiting users in service order."""
        return sorted(self._users.values(), key=lambda w: w.sort_key)

    def users_in_range(self, low: int, high: int) -> list[int]:
        """Return waiting user ids in [low, high], ascending."""
        if high < low:
            return []
        if high - low + 1 <= len(self._users):
            return [u for u in range(low, high + 1) if u in self._users]
        return sorted(u for u in self._users if low <= u <= high)

    @property
    def stale_entry_ratio(self) -> float:
        """Return ratio of stale entries to total heap entries."""
        if not self._heap:
            return 0.0
        return self._stale_count / len(self._heap)

    @property
    def heap_size(self) -> int:
        """Return the number of heap entries, stale ones included."""
        return len(self._heap)

    def compact(self) -> int:
        """Drop stale entries from the heap. Returns number of entries removed."""
        valid_entries = [entry for entry in self._heap if entry[-1] is not _REMOVED]
        removed = len(self._heap) - len(valid_entries)
        self._heap = valid_entries
        heapq.heapify(self._heap)
        self._stale_count = 0
        return removed

    def _push(self, waiting: WaitingUser) -> None:
        entry = [-waiting.priority, waiting.arrival_order, next(self._push_seq), waiting.user_id]
        self._entries[waiting.user_id] = entry
        heapq.heappush(self._heap, entry)

    def _invalidate(self, user_id: int) -> None:
        entry = self._entries.pop(user_id)
        entry[-1] = _REMOVED
        self._stale_count += 1

    def _discard_stale_top(self) -> None:
        while self._heap and self._heap[0][-1] is _REMOVED:
            heapq.heappop(self._heap)
            self._stale_count -= 1

    def _maybe_compact(self) -> None:
        if len(self._heap) < self._min_compaction_size:
            return
        ratio = self.stale_entry_ratio
        if ratio > self._compaction_ratio:
            logger.warning(
                "High stale entry ratio in waitlist heap: %.2f%% (%d/%d); compacting",
                ratio * 100,
                self._stale_count,
                len(self._heap),
            )
            removed = self.compact()
            logger.debug("Compacted waitlist heap: removed %d stale entries", removed)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def __bool__(self) -> bool:
        return bool(self._users)
