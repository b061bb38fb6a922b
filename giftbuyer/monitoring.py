"""Collects purchase results and reports a summary once buying is done."""

from __future__ import annotations

import queue
import threading
from collections import Counter
from typing import Mapping, Protocol, Sequence

from giftbuyer.models import GiftRequire, GiftResult, GiftSummary


class _Notifier(Protocol):
    def set_bot(self) -> bool: ...

    def send_buy_status(
        self, cancel: threading.Event, status: str, error: BaseException | None
    ) -> object: ...


class _InfoLogger(Protocol):
    def log_info(self, message: str) -> None: ...


class _ErrorLogger(Protocol):
    def log_error(self, message: str) -> None: ...


def most_frequent_error(error_counts: Mapping[str, int]) -> Exception | None:
    """Return the error message seen most often as an exception, or None."""
    if not error_counts:
        return None
    message = max(error_counts, key=error_counts.__getitem__)
    return Exception(message)


class BuyMonitor:
    """Tallies purchase results and reports the totals when buying ends.

    Results arrive on a queue; putting ``None`` on it marks the queue as
    closed. The ``done`` event is set once all purchases have finished and
    ``cancel`` is set to abandon monitoring without a report.
    """

    def __init__(
        self,
        api: object,
        notification: _Notifier,
        info_logs: _InfoLogger,
        error_logs: _ErrorLogger,
        poll_interval: float = 0.05,
    ) -> None:
        self.api = api
        self.notification = notification
        self.info_logs = info_logs
        self.error_logs = error_logs
        self.poll_interval = poll_interval

    def monitor_process(
        self,
        cancel: threading.Event,
        results: queue.Queue[GiftResult | None],
        done: threading.Event,
        gifts: Sequence[GiftRequire],
    ) -> None:
        """Consume results until done, then send or log the summary."""
        summaries = {
            require.gift.id: GiftSummary(
                gift_id=require.gift.id, requested=require.count_for_buy
            )
            for require in gifts
        }
        error_counts: Counter[str] = Counter()

        while True:
            if cancel.is_set():
                return
            try:
                result = results.get(timeout=self.poll_interval)
            except queue.Empty:
                if done.is_set():
                    self._send_notify(
                        cancel, summaries, most_frequent_error(error_counts)
                    )
                    return
                continue
            if result is None:
                return
            if result.success:
                summaries[result.gift_id].success += 1
                self.info_logs.log_info(f"Successfully purchased gift {result.gift_id}")
            elif result.error is not None:
                error_counts[str(result.error)] += 1
                self.error_logs.log_error(
                    f"Failed to purchase gift {result.gift_id}: {result.error}"
                )

    def _send_notify(
        self,
        cancel: threading.Event,
        summaries: dict[int, GiftSummary],
        frequent: Exception | None,
    ) -> None:
        total_success = sum(summary.success for summary in summaries.values())
        total_requested = sum(summary.requested for summary in summaries.values())

        if self.notification.set_bot():
            if total_success == total_requested:
                self.notification.send_buy_status(
                    cancel, f"✅ Успешно куплено {total_success} подарков", None
                )
            elif total_success > 0:
                self.notification.send_buy_status(
                    cancel,
                    f"⚠️ Частично выполнено: {total_success}/{total_requested} подарков куплено",
                    None,
                )
            else:
                self.notification.send_buy_status(
                    cancel,
                    f"❌ Не удалось купить ни одного подарка из {total_requested}",
                    frequent if frequent is not None else Exception("все покупки неудачны"),
                )
            return

        if total_success == total_requested:
            self.info_logs.log_info(f"✅ Successfully bought all {total_success} gifts")
        elif total_success > 0:
            self.info_logs.log_info(
                f"⚠️ Partially completed: {total_success}/{total_requested} gifts bought"
            )
        else:
            self.error_logs.log_error(
                f"❌ Failed to buy any gifts out of {total_requested} requested"
            )

        for summary in summaries.values():
            line = f"{summary.success}/{summary.requested} x gift {summary.gift_id}"
            if summary.success > 0:
                self.info_logs.log_info(f"Successfully bought {line}")
            else:
                self.error_logs.log_error(f"Failed to buy {line}")
        if frequent is not None:
            self.error_logs.log_error(f"Most frequent error during purchase: {frequent}")