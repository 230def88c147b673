# opstrace

opstrace is a small desktop activity tracker with a Tk interface. After you
sign in it keeps track of:

- every running process and for how many polls (one per second) it has been
  seen;
- the title of the focused window and for how many seconds each title has
  held focus;
- keyboard and mouse idle time: once more than five seconds pass without a
  key press or mouse click in the application's windows, each further second
  is added to the idle total;
- the total time of the session.

Every five seconds the latest report is sent to the session server. Selecting
a row in the active-window table flips whether that window is marked hidden;
the report then carries `"is_hidden": 1` for it. Closing the main window asks
for confirmation and, on "Yes", ends the session on the server.

## Installation

```
pip install .
```

The interface needs Tk (`tkinter`) to be available in your Python.
Process listing runs `top` on Linux and `wmic` on Windows; on other systems
the process list stays empty. The focused window title is read with
`xdotool`, which must be installed; where it cannot be run, no window is
reported.

## Usage

```
opstrace [--server URL] [--live]
```

- `--server URL` – base URL of the session service
  (default `http://localhost/remoteassistant`).
- `--live` – log in against the server. Without it, the login button opens
  a fixed session (`{"id": "12345", "token": "token"}`) without contacting
  the server for the login itself.

A login window appears. Enter a user name and password and press *Login*;
*Cancel* clears both fields. If signing in fails, a warning dialog shows the
reason ("Username & password does not match.", "Server is currently in
maintenance mode.", "Request timed out." or "Session could not be started.").
Once the session is created the main window opens with the user line, the
process table, the active-window table, a search box above each table
(case-sensitive substring match on the name), and the time counters.

The server endpoints used, relative to the base URL, are `POST /login`
(form fields `username` and `password`) and
`POST /user/<id>/session/start`, `/session/end` and `/session/load`, each
with an `Authorization: Bearer <token>` header. The report sent to
`/session/load` holds `total_mouse_freeze_time_in_seconds`,
`total_no_keyboard_store_time_in_seconds`, `process_list_history` and
`active_window_history`.

## Using the pieces from Python

```python
from opstrace.utils import format_duration
from opstrace.process import Process
from opstrace.tracker import ActivityTracker

print(format_duration(3725))   # 01:02:05

tracker = ActivityTracker({"id": "12345", "token": "token"})
tracker.on_process_arrived("editor")
tracker.on_tick()
report = tracker.build_report()
```

- `opstrace.utils` – `format_duration`, `format_hms`, `clean_string`,
  `json_to_string`, `bytes_to_json`.
- `opstrace.process.Process` – a named process or window with `uptime`,
  `blocked` and a random `process_id`.
- `opstrace.table_model.ProcessTableModel` – the three-column table (name,
  uptime, share status) behind the interface's tables.
- `opstrace.watchers` – the polling workers `ElapsedTimeWatcher`,
  `ProcessListWatcher` and `ActiveWindowTracker`, each started with `run()`
  (usually as a thread target) and stopped with `stop()`, plus
  `list_processes()`, `parse_process_listing()` and `active_window_title()`.
- `opstrace.network` – `SessionClient` (`login`, `start_session`,
  `end_session`, `send_load`), which raises `LoginError` when signing in or
  starting a session fails, and `NetworkWorker`, which uploads the latest
  report it was fed.
- `opstrace.tracker.ActivityTracker` – keeps the counters and pushes them to
  a view.
- `opstrace.app` – `LoginManager` and `main()`, the entry point of the
  `opstrace` command.

## What it does not do

- Keyboard and mouse activity is only seen while it goes to opstrace's own
  windows; there is no system-wide keyboard or mouse hook and no query of
  the desktop's idle time.
- Nothing is stored locally; the counters live only for the session and are
  sent to the server.
- The server's replies to reports are parsed but not shown or acted on.

## Running the tests

```
pip install ".[test]"
pytest
```