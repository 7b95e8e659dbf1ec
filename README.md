# catime

Supporting pieces for a desktop timer application. These include the window
settings stored in a plain `KEY=VALUE` config file, the window geometry
helpers, the fade animation of toast notifications, the system tray text,
a log file writer and a check for newer releases.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `catime.update_checker`

- `compare_versions(version1, version2)` reads up to three dot-separated
  integers from each string. Missing parts count as 0. It returns `1`, `0` or
  `-1`.
- `parse_latest_release(json_text)` takes a release document and pulls out
  the `tag_name`, with any leading `v`/`V` removed, and the first
  `browser_download_url`. It returns a `ReleaseInfo`. If either field is
  missing or malformed it raises `UpdateError`.
- `fetch_latest_release(url, timeout=10.0)` downloads the document and parses
  it. If the server cannot be reached it raises `UpdateError`.
- `check_for_update(current_version, fetch)` calls `fetch()` and returns an
  `UpdateCheck`. Its `update_available` property tells whether the latest
  version is newer.

```python
from catime.update_checker import compare_versions

compare_versions("1.2.0", "1.1.9")   # 1
compare_versions("1.1.0", "1.1.0")   # 0
compare_versions("1.0.3", "1.1.0")   # -1
```

### `catime.window`

- `WindowSettings` holds `pos_x`, `pos_y`, `scale`, `edit_mode` and `topmost`.
- `load_window_settings(path)` reads `CLOCK_WINDOW_POS_X`,
  `CLOCK_WINDOW_POS_Y` and `WINDOW_SCALE`. Anything absent keeps its default.
- `save_window_settings(path, settings)` rewrites those lines and
  `CLOCK_EDIT_MODE` in an existing file. It appends the edit-mode and scale
  lines if they are missing. If the file does not exist it returns `False`.
- `write_config_value(path, key, value)` sets a single `key=value` line.
- `Rect` is a rectangle in screen coordinates. The geometry helpers are
  `clamp_to_screen`, `scale_window` (which scales about the centre by a factor
  of 1.1 within limits), `drag_window` and `window_size`.

### `catime.notification`

- `NotificationType` has three members: `CATIME`, `SYSTEM_MODAL` and `OS`.
  `dispatch_notification(kind, message, toast, modal, tray)` calls the
  matching callable. Unknown kinds fall back to the toast.
- `ToastAnimation(max_opacity_percent, step)` tracks the opacity and the
  `AnimationState` of a toast:
  - `on_animation_tick` fades it in or out.
  - `on_timeout` starts the fade-out once the toast is fully shown.
  - `on_click` dismisses the toast early, but only when it is fully shown.
- `notification_width` and `toast_position` size the toast and place it at the
  bottom-right of the work area.

### `catime.tray`

- `tray_tooltip(version)` returns, for example, `"Catime 1.0.0"`.
- `balloon_text(message)` decodes UTF-8 bytes and limits the length of the
  balloon body.

### `catime.log`

- `Logger(path)`:
  - `open(version)` truncates the file and writes a header with system
    details.
  - `write(level, message)` appends a line of the form
    `[YYYY-mm-dd HH:MM:SS] [LEVEL] message` and flushes it.
  - `record_fatal_signal(signum)` notes a fatal signal and closes the file.
  - `close()` writes the exit footer. `Logger` also works as a context manager.
- `LogLevel` lists the levels from `DEBUG` to `FATAL`.
- `log_file_path(config_path)` places `Catime_Logs.log` beside the config
  file.
- `describe_signal`, `windows_version_name` and `architecture_name` turn codes
  into readable names.

## What this package does not do

There is no command-line program. The package does not run a timer, count
down, parse timer input or step through pomodoro cycles. It shows no windows,
tray icons or dialogs of its own. Instead it supplies the state, geometry,
text and file handling that such a front end would use.