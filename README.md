# bitmeter

`bitmeter` keeps a record of how much data your network adapters download
and upload. A capture process polls the adapter byte counters once a
second, works out how much each adapter's counters moved since the last
poll, and writes those differences into an SQLite database.

The database does not grow without bound. Older rows are compacted at
intervals, and also every time the capture process starts:

* per-second rows older than the `cap.keep_sec_limit` setting are merged
  into per-minute rows;
* per-minute rows older than the `cap.keep_min_limit` setting are merged
  into per-hour rows.

How often the compaction runs is set by `cap.compress_interval`. How many
one-second readings are buffered before each database write is set by
`cap.write_interval`; if it is missing or less than 1, every reading is
written straight away. All of these settings are read from the database's
`config` table.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the capture process

```
bitmeter-capture
```

The process keeps running until it receives Ctrl-C (SIGINT) or SIGTERM, or
until a write to the database fails. It then writes any readings it has not
yet saved and closes the database.

Adapter counters are read from `/proc/net/dev`, with the loopback interface
`lo` ignored. Another file in the same format can be sampled instead:

```
bitmeter-capture --stats /path/to/net-dev-file
```

The database must already exist and be at the schema version the capture
process expects (version 7); otherwise the command exits with status 1.
It is found in one of these places:

* the path in the `BITMETER_DB` environment variable, if that is set;
* otherwise the platform default, for example
  `/var/lib/bitmeter/bitmeter.db` on Linux.

Warnings and errors go to a log file. By default this is
`/var/log/bitmeter/bitmeter.log` on Linux. The `cap.logpath` setting
changes the location, and `cap.loglevel` (1 debug, 2 info, 3 warn,
4 error) changes how much is logged. If the log file cannot be opened,
messages go to the console instead.

## Using the library

The capture process is built from pieces you can use on their own:

* `bitmeter.net`: `parse_proc_net_dev` and `read_adapter_data` read
  adapter counters into `Data` records.
* `bitmeter.data`: the `Data` record (`ts`, `dr`, `dl`, `ul`, `ad`, `hs`);
  the address and host are trimmed of surrounding whitespace.
* `bitmeter.capture`: `extract_diffs` computes the change between two
  readings, and `Capture` drives the poll, write and compact cycle through
  `process()` and `shutdown()`.
* `bitmeter.store`: `CaptureStore` inserts rows and compacts old ones.
* `bitmeter.db`: `open_db` and `Database` handle the connection,
  transactions, data queries and the `config` table.
* `bitmeter.paths`: `get_db_path`, `get_log_path` and `get_web_root_path`
  give the default locations on Linux, macOS and Windows.
* `bitmeter.log`: `AppLogger`, `LogLevel` and a console `StatusLine`.
* `bitmeter.timeutil`: calendar helpers such as `next_min`, `next_hour`
  and `add_to_date`.
* `bitmeter.alert`: `Alert`, `DateCriteria` and date criteria text such
  as `"1,4-6"` or `"-3"`, via `parse_date_criteria_part`,
  `date_criteria_part_to_text` and `make_date_criteria`.

`bitmeter.common` provides small helpers for showing traffic figures:

```python
from bitmeter.common import format_amount, to_date

format_amount(1024, True, True)     # '1.00 kB'        (powers of 1024)
format_amount(1024, False, False)   # '1.02 kilobytes' (powers of 1000)
to_date(0)                          # '1970-01-01' in a UTC local zone
```

## What it does not do

* It does not create or upgrade the database. The `data` and `config`
  tables must already be there, with the settings above.
* Adapter counters are only read from a `/proc/net/dev`-style file, so
  capturing works on Linux only.
* There is no web server, report or query tool. Alerts can be described
  with `bitmeter.alert`, but nothing checks them against recorded traffic.