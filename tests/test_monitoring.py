import queue
import threading

import pytest

from giftbuyer.models import GiftRequire, GiftResult, StarGift
from giftbuyer.monitoring import BuyMonitor, most_frequent_error


class FakeNotification:
    def __init__(self, bot: bool) -> None:
        self.bot = bot
        self.set_bot_calls = 0
        self.statuses = []

    def set_bot(self) -> bool:
        self.set_bot_calls += 1
        return self.bot

    def send_buy_status(self, cancel, status, error):
        self.statuses.append((status, error))


class FakeLogs:
    def __init__(self) -> None:
        self.info = []
        self.errors = []

    def log_info(self, message: str) -> None:
        self.info.append(message)

    def log_error(self, message: str) -> None:
        self.errors.append(message)


def make_gift(gift_id: int, stars: int, count: int) -> GiftRequire:
    return GiftRequire(gift=StarGift(id=gift_id, stars=stars), count_for_buy=count, receiver_type=[1])


def run_monitor(bot, gifts, results, finish=True, cancel_first=False):
    notification = FakeNotification(bot)
    logs = FakeLogs()
    monitor = BuyMonitor(None, notification, logs, logs, poll_interval=0.01)
    results_queue = queue.Queue()
    for item in results:
        results_queue.put(item)
    done = threading.Event()
    if finish:
        done.set()
    cancel = threading.Event()
    if cancel_first:
        cancel.set()
    monitor.monitor_process(cancel, results_queue, done, gifts)
    return notification, logs


def test_all_success_sends_bot_status():
    gifts = [make_gift(1, 100, 2), make_gift(2, 200, 1)]
    results = [GiftResult(1, True), GiftResult(1, True), GiftResult(2, True)]
    notification, _ = run_monitor(True, gifts, results)
    assert notification.set_bot_calls == 1
    assert notification.statuses == [("✅ Успешно куплено 3 подарков", None)]


def test_partial_success():
    gifts = [make_gift(1, 100, 2)]
    results = [GiftResult(1, True), GiftResult(1, False, RuntimeError("boom"))]
    notification, logs = run_monitor(True, gifts, results)
    assert notification.statuses == [("⚠️ Частично выполнено: 1/2 подарков куплено", None)]
    assert logs.errors == ["Failed to purchase gift 1: boom"]


def test_full_failure_reports_most_frequent_error():
    gifts = [make_gift(1, 100, 1)]
    results = [GiftResult(1, False, RuntimeError("boom"))]
    notification, _ = run_monitor(True, gifts, results)
    [(status, error)] = notification.statuses
    assert status == "❌ Не удалось купить ни одного подарка из 1"
    assert str(error) == "boom"


def test_full_failure_without_errors_uses_default_error():
    gifts = [make_gift(1, 100, 1)]
    notification, _ = run_monitor(True, gifts, [])
    [(_, error)] = notification.statuses
    assert str(error) == "все покупки неудачны"


def test_logger_used_instead_of_bot():
    gifts = [make_gift(1, 100, 1)]
    notification, logs = run_monitor(False, gifts, [GiftResult(1, True)])
    assert notification.set_bot_calls == 1
    assert notification.statuses == []
    assert "✅ Successfully bought all 1 gifts" in logs.info
    assert "Successfully bought 1/1 x gift 1" in logs.info


def test_logger_reports_failures():
    gifts = [make_gift(7, 100, 2)]
    results = [GiftResult(7, False, RuntimeError("boom")), GiftResult(7, False, RuntimeError("boom"))]
    _, logs = run_monitor(False, gifts, results)
    assert "❌ Failed to buy any gifts out of 2 requested" in logs.errors
    assert "Failed to buy 0/2 x gift 7" in logs.errors
    assert logs.errors[-1] == "Most frequent error during purchase: boom"


def test_cancel_stops_without_notification():
    gifts = [make_gift(1, 100, 1)]
    notification, _ = run_monitor(True, gifts, [], finish=False, cancel_first=True)
    assert notification.set_bot_calls == 0
    assert notification.statuses == []


def test_closed_results_stop_without_notification():
    gifts = [make_gift(1, 100, 1)]
    notification, _ = run_monitor(True, gifts, [None], finish=False)
    assert notification.set_bot_calls == 0
    assert notification.statuses == []


def test_monitor_in_thread_finishes_after_done():
    notification = FakeNotification(True)
    logs = FakeLogs()
    monitor = BuyMonitor(None, notification, logs, logs, poll_interval=0.01)
    results = queue.Queue()
    done = threading.Event()
    cancel = threading.Event()
    worker = threading.Thread(
        target=monitor.monitor_process,
        args=(cancel, results, done, [make_gift(3, 10, 1)]),
    )
    worker.start()
    results.put(GiftResult(3, True))
    done.set()
    worker.join(timeout=2)
    assert not worker.is_alive()
    assert notification.statuses == [("✅ Успешно куплено 1 подарков", None)]


def test_most_frequent_error_picks_highest_count():
    error = most_frequent_error({"error1": 5, "error2": 10, "error3": 3})
    assert str(error) == "error2"


def test_most_frequent_error_empty():
    assert most_frequent_error({}) is None


def test_most_frequent_error_tie_returns_one_of_them():
    error = most_frequent_error({"error1": 5, "error2": 5})
    assert str(error) in {"error1", "error2"}


@pytest.mark.parametrize("message", ["single error"])
def test_most_frequent_error_single(message):
    assert str(most_frequent_error({message: 1})) == message