# giftbuyer

Building blocks for buying Telegram Star Gifts: invoices addressed to your
own account, a user or a channel; payment forms obtained under a rate limit;
payment after a star balance check; caches of seen gifts and resolved
receivers; a monitor that tallies purchase results and reports a summary;
JSON-lines log files; and a check for newer released versions.

The Telegram calls themselves are made through objects you pass in. Each
class names the methods it needs from them (see below).

## Modules

### `giftbuyer.models`

Plain data classes shared by the rest of the package: `StarGift`, `User`,
`Channel`, `ResolvedPeer`, `GiftRequire` (a gift, `count_for_buy`,
`receiver_type` and `hide`), `GiftResult`, `GiftSummary`, the receivers
`InputPeerSelf`, `InputPeerUser` and `InputPeerChannel`, `InvoiceStarGift`,
and the payment forms `PaymentFormStars`, `PaymentFormStarGift` and
`PaymentForm`.

### `giftbuyer.invoice`

`InvoiceCreator(user_receiver, channel_receiver, id_cache)` builds an
`InvoiceStarGift` with `create_invoice(gift)`. It picks one of the gift's
receiver types at random: `0` is your own account, `1` a randomly chosen
user from `user_receiver`, `2` a randomly chosen channel from
`channel_receiver`. Users and channels are looked up with
`id_cache.get_user(name)` and `id_cache.get_channel(name)`. An unknown
receiver or receiver type raises `InvoiceError`.
`convert_channel_id(channel_id)` turns a supergroup-style id such as
`-100XXXXXXXXXX` into a bare channel id.

### `giftbuyer.payment`

`PaymentProcessor(api, invoice_creator, rate_limiter)`.
`create_payment_form(cancel, gift)` waits a short jitter of up to 99 ms,
creates the invoice, calls `rate_limiter.acquire(cancel)` and then
`api.get_payment_form(cancel, invoice)`. It returns `(form, invoice)`. A
failure at any step raises `PaymentError`.

### `giftbuyer.purchase`

`PurchaseProcessor(api, payment_processor)`. `purchase_gift(cancel, gift)`
first compares `api.get_stars_balance()` with the gift's price. It then
obtains a payment form and pays stars forms with
`api.send_stars_form(cancel, form_id, invoice)`. It raises `PurchaseError`
in these cases:

- the balance is too low or cannot be read;
- the form cannot be obtained;
- the form is a regular `PaymentForm` or of an unknown type;
- the payment fails.

### `giftbuyer.accounts`

`AccountManager(api, usernames, channel_names, user_cache, channel_cache)`.
`set_ids()` resolves each name through `api.resolve_username(name)`, with a
leading `@` stripped. It stores users with `user_cache.set_user` and
channels with `channel_cache.set_channel`. A missing `api` or a user that
cannot be resolved raises `AccountError`. Channels that cannot be found are
logged and skipped.

### `giftbuyer.id_cache`

`IdCache` is a thread-safe map from names to `User` and `Channel` objects.
It provides `set_user`, `get_user`, `set_channel` and `get_channel`. The
getters raise `KeyError` for unknown names, and setting `None` is ignored.

### `giftbuyer.gift_cache`

`GiftCache(path="cache.json", interval=5.0)` keeps seen gifts in memory and
loads any saved ones on start. It provides `set_gift`, `get_gift` (returns
`None` when absent), `get_all_gifts` (a copy), `has_gift`, `delete_gift` and
`clear`.

A background thread calls `save()` every `interval` seconds. `save()` adds
gifts not yet in the file and returns how many were added. `close()`, or
leaving a `with` block, stops the thread after a final save.

### `giftbuyer.monitoring`

`BuyMonitor(api, notification, info_logs, error_logs)`.
`monitor_process(cancel, results, done, gifts)` works as follows:

- It reads `GiftResult`s from a `queue.Queue` and counts successes and error
  messages per gift.
- When `done` is set and the queue is empty, it reports the totals. If
  `notification.set_bot()` is true, the report is one
  `notification.send_buy_status(...)` call. Otherwise the report goes to
  `info_logs.log_info` and `error_logs.log_error`, with a line per gift and
  the most frequent error.
- Setting `cancel` ends it without a report, and so does putting `None` on
  the queue.

`most_frequent_error(error_counts)` returns the most common message as an
exception, or `None`.

### `giftbuyer.logs`

- `LogFormatter(level)` turns a `LogEntry` into one JSON line stamped with
  the current time. An entry without a level gets the formatter's level.
- `LogFileWriter(level, formatter, directory=None)` appends entries to
  `<level>_logs.jsonl` and raises `LogWriteError` on failure.
- `LogsWriter(writer, log_flag)` writes messages with `log_info`,
  `log_error` and `log_errorf(fmt, *args)`, and ignores write errors. When
  `log_flag` is true, it also logs each message through the standard
  `logging` module.

### `giftbuyer.version`

`parse_version(text)` parses a semantic version. It accepts a leading `v`
and missing minor or patch parts, and raises `ValueError` on bad input.

`GitVersionController(owner, repo_name, api_link="", repo_path=".")` has
three methods:

- `get_latest_version()` fetches the latest release from the GitHub
  releases API as a `GitHubRelease`.
- `get_current_version()` returns the highest semantic version among the
  tags of the local git repository.
- `compare_versions(local, remote)` tells whether `remote` is newer.

## Example

```python
from giftbuyer.id_cache import IdCache
from giftbuyer.invoice import InvoiceCreator
from giftbuyer.models import GiftRequire, InputPeerUser, StarGift, User

cache = IdCache()
cache.set_user("alice", User(id=42, access_hash=7))

creator = InvoiceCreator(["alice"], [], cache)
invoice = creator.create_invoice(
    GiftRequire(StarGift(id=1, stars=100), count_for_buy=1, receiver_type=[1])
)
assert invoice.peer == InputPeerUser(user_id=42, access_hash=7)
assert invoice.gift_id == 1
```

## What this package does not do

- There is no command to run.
- It does not read a configuration file.
- It does not log in to Telegram or hold a connection of its own. Every
  network call for gifts goes through the `api`, `rate_limiter` and
  `notification` objects you supply.
- It does not schedule buying rounds, retry failed purchases or cap the
  total number of purchases. Running `PurchaseProcessor.purchase_gift` for
  each wanted copy and feeding the results to a `BuyMonitor` is left to you.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.