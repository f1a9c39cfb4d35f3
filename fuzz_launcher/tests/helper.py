# Copyright (C) 2020 Intel Corporation
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Helper functions for fuzz_launcher tests
"""

import argparse
import os
import stat
import textwrap

from fuzz_launcher.common.errors import CatalogUnavailable
from fuzz_launcher.engine.engine import Engine
from fuzz_launcher.engine.run_outcome import RunOutcome


class FakeEngine(Engine):
    """In-memory engine recording every call"""

    def __init__(self, targets=(), outcome=None, list_error=None):
        self.targets = list(targets)
        self.outcome = outcome or RunOutcome.completed(0)
        self.list_error = list_error
        self.list_calls = 0
        self.requests = []

    def __str__(self):
        return "[fake]"

    def list_targets(self):
        self.list_calls += 1
        if self.list_error:
            raise CatalogUnavailable(self.list_error)
        return list(self.targets)

    def run(self, request):
        self.requests.append(request)
        return self.outcome


def make_config(**kwargs):
    values = dict(
            verbose=False,
            quiet=False,
            log=None,
            engine_path="cargo",
            toolchain=None,
            project_dir=os.getcwd(),
            fuzz_dir=None,
            stop_flag="--stop-after-first-failure",
            failure_markers=[],
            target=None,
            engine_args=[],
            )
    values.update(kwargs)
    return argparse.Namespace(**values)


# Stand-in for `cargo fuzz`. Arguments of each call are appended to args.log
# next to the script.
FAKE_CARGO = """\
#!/bin/sh
echo "$@" >> "$(dirname "$0")/args.log"
[ "$1" = "fuzz" ] || { echo "error: no such command: \\`$1\\`" >&2; exit 101; }
case "$2" in
list)
%(list)s
    ;;
run)
    case "$3" in
    decode_frame)
        echo "INFO: Running with entropic power schedule (0xFF, 100)." >&2
        echo "Done 1000 runs in 1 second(s)" >&2
        exit 0
        ;;
    crashy)
        echo "INFO: Seed: 1234" >&2
        echo "==4242== ERROR: libFuzzer: deadly signal" >&2
        echo "artifact_prefix='fuzz/artifacts/crashy/'; Test unit written to fuzz/artifacts/crashy/crash-da39a3ee" >&2
        exit 77
        ;;
    broken)
        echo "   Compiling broken v0.1.0" >&2
        echo "error[E0425]: cannot find value \\`x\\` in this scope" >&2
        echo "error: could not compile \\`broken\\` due to previous error" >&2
        exit 101
        ;;
    buildpanic)
        echo "error: failed to run custom build command for \\`buildpanic v0.1.0\\`" >&2
        echo "  thread 'main' panicked at build.rs:3:5:" >&2
        exit 1
        ;;
    binary)
        printf 'INFO: bad byte \\377\\n' >&2
        exit 0
        ;;
    *)
        echo "Error: no fuzz target named \\`$3\\`" >&2
        exit 1
        ;;
    esac
    ;;
esac
"""

DEFAULT_LIST = """\
    echo parse_header
    echo decode_frame
"""


def make_fake_cargo(directory, list_body=DEFAULT_LIST):
    path = os.path.join(str(directory), "cargo")
    with open(path, "w") as f:
        f.write(FAKE_CARGO % {"list": textwrap.indent(textwrap.dedent(list_body), "    ")})
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def read_calls(directory):
    with open(os.path.join(str(directory), "args.log")) as f:
        return f.read().splitlines()
