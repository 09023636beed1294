"""Stand-in for the jupyter executable used by the supervisor tests.

Run as ``python fake_jupyter.py lab ...``. Behaviour is driven by
environment variables so the supervisor can launch it unchanged:

- FAKE_JUPYTER_LAUNCHES: file that gets one line appended per launch
- FAKE_JUPYTER_ARGS: file receiving the command-line arguments as JSON
- FAKE_JUPYTER_READY: file created once signal handling is in place
- FAKE_JUPYTER_SIGNALS: file receiving "<signal name> <timestamp>" on SIGINT
- FAKE_JUPYTER_IGNORE_SIGINT: "1" to ignore SIGINT entirely
- FAKE_JUPYTER_EXIT_DELAY: seconds to linger after SIGINT before exiting
- FAKE_JUPYTER_EXIT_CODE: exit immediately with this status
"""

import json
import os
import signal
import sys
import time


def _write(env_name, content, mode="w"):
    path = os.environ.get(env_name)
    if path:
        with open(path, mode) as f:
            f.write(content)


def _on_sigint(signum, frame):
    _write("FAKE_JUPYTER_SIGNALS", f"{signal.Signals(signum).name} {time.time()}\n")
    time.sleep(float(os.environ.get("FAKE_JUPYTER_EXIT_DELAY", "0")))
    sys.exit(0)


def main():
    _write("FAKE_JUPYTER_LAUNCHES", f"{os.getpid()}\n", mode="a")
    _write("FAKE_JUPYTER_ARGS", json.dumps(sys.argv[1:]))

    exit_code = os.environ.get("FAKE_JUPYTER_EXIT_CODE")
    if exit_code is not None:
        sys.exit(int(exit_code))

    if os.environ.get("FAKE_JUPYTER_IGNORE_SIGINT") == "1":
        signal.signal(signal.SIGINT, signal.SIG_IGN)
    else:
        signal.signal(signal.SIGINT, _on_sigint)
    _write("FAKE_JUPYTER_READY", "ready")

    while True:
        time.sleep(0.05)


if __name__ == "__main__":
    main()
