# jvmtui

Building blocks for watching a running Java virtual machine from Python:
finding the JDK tools and the local JVMs, parsing what `jcmd` and `jstat`
print, keeping a bounded history of heap and GC samples, exporting that
history, reading a configuration file of saved connections, and the state
and text of a curses monitoring screen.

## Installation

```
pip install .
```

The only runtime dependency is `platformdirs`. A JDK (11 or newer) is needed
for anything that runs the JDK tools. Tests use the `test` extra:

```
pip install ".[test]"
pytest
```

The screen modules (`jvmtui.picker`, `jvmtui.monitoring`) import `curses`,
so they need a platform whose Python ships it.

## What it does not do

The package has no command to start and no interactive main loop. It holds
no connection to a live JVM: there is no object that attaches to a process
and keeps reading from it, nothing that speaks to a Jolokia agent over HTTP,
nothing that runs the tools on another host over SSH, and no background
collector that fills a `MetricsStore` on a timer. `jvmtui.jolokia_types`
only builds and reads Jolokia request and response documents; the SSH and
Jolokia entries of the configuration file are read and validated but not
used to connect. Gathering the tool output and feeding it to the parsers is
left to the caller.

## Finding the JDK tools and local JVMs

```python
from jvmtui.detector import JdkToolsStatus
from jvmtui.discovery import discover_local_jvms

status = JdkToolsStatus.detect()      # probes $JAVA_HOME/bin, then PATH
if not status.is_usable():
    print(status.installation_guidance())
status.validate()                      # raises ToolNotFoundError if unusable

for jvm in discover_local_jvms(status):
    print(jvm.pid, jvm.main_class)
```

`detect_tool(name, java_home)` runs `<tool> -h` and returns a `ToolStatus`
whose `state` is a `ToolState` (`AVAILABLE`, `NOT_FOUND`, `NOT_EXECUTABLE`).
`capabilities()` says which operations the found tools allow.

`discover_local_jvms` runs `jcmd -l`, or `jps -l` when jcmd is missing, with
a two-second limit, and raises `ConfigError` when neither tool is available.
`parse_jcmd_list` and `parse_jps_list` parse that output directly, leaving
out the JDK tools' own processes (`should_filter`).

`jvmtui.executor.execute_command(tool, args, timeout)` runs a program and
returns a `subprocess.CompletedProcess`; the default limit is five seconds.
It raises `CommandTimeoutError` when the limit passes and
`CommandFailedError` when the program cannot be started. A non-zero exit
status is not an error.

## Parsing tool output

```python
from jvmtui.parsers.jcmd import (
    parse_class_histogram, parse_heap_info, parse_jvm_version,
    parse_thread_dump, parse_vm_flags, parse_vm_uptime,
)
from jvmtui.parsers.jstat import parse_gc_stats
```

| Function | Reads | Returns |
| --- | --- | --- |
| `parse_heap_info` | `jcmd <pid> GC.heap_info` | `HeapInfo` with Metaspace and Class Space pools |
| `parse_jvm_version` | `jcmd <pid> VM.version` | the word after `JDK` |
| `parse_vm_uptime` | `jcmd <pid> VM.uptime` | whole seconds |
| `parse_vm_flags` | `jcmd <pid> VM.flags` | list of `-` options |
| `parse_thread_dump` | `jcmd <pid> Thread.print` | list of `ThreadInfo` with stack frames |
| `parse_class_histogram` | `jcmd <pid> GC.class_histogram` | list of `ClassInfo` |
| `parse_gc_stats` | `jstat -gcutil <pid>` | `GcStats` (YGC, YGCT, FGC, FGCT in ms) |

Each raises `jvmtui.errors.ParseError` when the output holds nothing it
recognises. The records live in `jvmtui.types`.

## Keeping and exporting metrics

```python
from jvmtui.store import MetricsStore
from jvmtui import export

store = MetricsStore(300)              # heap and GC history of 300 samples
store.record_heap(parse_heap_info(heap_text))
store.record_gc(parse_gc_stats(jstat_text))
store.record_threads(parse_thread_dump(threads_text))
print(store.latest_heap().usage_ratio())

export.export_metrics_prometheus(store, "~/jvm-exports")
```

`export_thread_dump`, `export_metrics_json`, `export_metrics_prometheus` and
`export_metrics_csv` write `thread_dump_<YYYYmmdd_HHMMSS>.txt` or
`metrics_<YYYYmmdd_HHMMSS>.json|.prom|.csv` into the given directory (a
leading `~` is expanded), or into `default_export_dir()` when none is
given, and return the path. `render_thread_dump`, `render_prometheus` and
`render_csv` return the same text without writing it. `MetricsStore.to_dict`
is the JSON form; `snapshot` returns an independent copy.

## Configuration

`Config.load()` reads the first file it finds among:

1. the path in `JVM_TUI_CONFIG`
2. `./config.toml`
3. `./jvm-tui.toml`
4. `jvm-tui/config.toml` in the user configuration directory
5. `~/.jvm-tui.toml`
6. `~/.config/jvm-tui/config.toml`

and returns the defaults when there is none. `Config.load_from_file(path)`
parses, expands and validates one file; `Config.from_toml(text)` only
parses. Problems raise `ConfigLoadError`. Every setting is optional:

```toml
[preferences]
default_interval = "1s"        # at least 100ms
max_history_samples = 300      # greater than 0
export_directory = "~/jvm-exports"

[advanced]
http_timeout_ms = 5000
ssh_timeout_sec = 10
connection_retry_attempts = 3
connection_retry_delay_ms = 1000

[[connections]]
name = "Local app"
type = "local"
pid = 12345

[[connections]]
name = "Staging"
type = "jolokia"
url = "http://localhost:8778/jolokia"
username = "admin"

[[connections]]
name = "Remote box"
type = "ssh-jdk"
ssh_host = "example.com"
ssh_user = "deploy"
ssh_key = "~/.ssh/id_rsa"
pid = 4242
```

Connection entries become `LocalProfile`, `JolokiaProfile`,
`SshJdkProfile` or `SshJolokiaProfile` (`type = "ssh-jolokia"`, with
`jolokia_port`); `Config.get_connection(name)` finds one by name. A `~` in
`export_directory` and `ssh_key` is expanded, and `$NAME` / `${NAME}` in
`export_directory` are substituted when every variable named is set.

Durations such as `500ms`, `2s` or `1h 30m` are read by
`jvmtui.durations.parse_duration`, which returns a `timedelta`.

## Command-line options

`jvmtui.cli.parse_args(argv)` parses the options a front end would take;
nothing in the package calls it on its own.

| Option | Meaning |
| --- | --- |
| `-p`, `--pid PID` | JVM process ID |
| `-i`, `--interval DURATION` | Polling interval, e.g. `500ms`, `1s` |
| `-c`, `--config PATH` | Configuration file, falling back to `JVM_TUI_CONFIG` |
| `-V`, `--version` | Print the version |

## Screen state and text

- `jvmtui.app.App` holds the current `Tab`, the `Mode` (help, confirmations,
  export format choice, error, loading, search), scrolling, the thread
  search and the chosen `ExportFormat`.
- `jvmtui.event.map_key(key)` turns a character or a curses key name such as
  `KEY_UP` into an `Event`.
- `jvmtui.threads_view` searches threads by name or id and builds the
  thread summary and table rows.
- `jvmtui.monitoring` gives the text of the screen: `header_text`,
  `tab_titles`, `footer_text`, `content_lines` for the current tab and
  `overlay_lines` for the current mode.
- `jvmtui.picker.JvmPickerScreen` lists saved connections followed by
  discovered JVMs, moves the selection with `next` / `previous`, and draws
  itself on a curses window with `render(window, theme)`.
- `jvmtui.theme.Theme` names the colours used.

## Errors

Every error the package raises derives from `jvmtui.errors.AppError`:
`ParseError`, `ConfigError`, `ConfigLoadError`, and the `JdkToolsError`
family (`ToolNotFoundError`, `CommandFailedError`, `CommandTimeoutError`).