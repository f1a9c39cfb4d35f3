# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Launch cargo-fuzz (libFuzzer) to enumerate and run the fuzz targets of a project.
"""

import collections
import re
import subprocess
import sys

from fuzz_launcher.common.errors import CatalogUnavailable
from fuzz_launcher.common.logger import logger
from fuzz_launcher.common.util import format_cmdline
from fuzz_launcher.engine.engine import Engine
from fuzz_launcher.engine.run_outcome import RunOutcome

FAILURE_MARKERS = (
        "Failing input:",
        "Test unit written to",
        "ERROR: libFuzzer",
        "SUMMARY: libFuzzer",
        "ERROR: AddressSanitizer",
        "ERROR: LeakSanitizer",
        )

# libFuzzer banner lines; anything before them is cargo building the target
ENGINE_START_MARKERS = (
        "INFO: Seed:",
        "INFO: Running with",
        )

ARTIFACT_RE = re.compile(r"Test unit written to (\S+)")

# trailing stderr lines kept for error reporting
DIAGNOSTIC_LINES = 32


class EngineLog:
    """Watch engine stderr for failure markers and keep its tail for diagnostics"""

    def __init__(self, failure_markers):
        self.failure_markers = tuple(failure_markers)
        self.tail = collections.deque(maxlen=DIAGNOSTIC_LINES)
        self.started = False
        self.found_failure = False
        self.artifact = None

    def feed(self, line):
        line = line.rstrip("\r\n")
        self.tail.append(line)

        if not self.started:
            self.started = any(marker in line for marker in ENGINE_START_MARKERS)
            return

        if any(marker in line for marker in self.failure_markers):
            self.found_failure = True

        m = ARTIFACT_RE.search(line)
        if m and not self.artifact:
            self.artifact = m.group(1)

    def diagnostic(self):
        errors = [l for l in self.tail if l.lstrip().lower().startswith("error")]
        if errors:
            return "\n".join(errors)
        for line in reversed(self.tail):
            if line.strip():
                return line
        return None


class CargoFuzzEngine(Engine):

    def __init__(self, config):
        self.engine_path = config.engine_path
        self.toolchain = config.toolchain
        self.project_dir = config.project_dir
        self.fuzz_dir = config.fuzz_dir
        self.stop_flag = config.stop_flag
        self.failure_markers = tuple(config.failure_markers or FAILURE_MARKERS)

    def __str__(self):
        return "[cargo-fuzz]"

    def _base_cmd(self, subcommand):
        cmd = [self.engine_path]
        if self.toolchain:
            cmd.append("+" + self.toolchain)
        cmd.extend(["fuzz", subcommand])
        if self.fuzz_dir:
            cmd.extend(["--fuzz-dir", self.fuzz_dir])
        return cmd

    def list_cmd(self):
        return self._base_cmd("list")

    def run_cmd(self, request):
        cmd = self._base_cmd("run")
        cmd.append(request.target)

        # everything after -- goes to libFuzzer
        engine_args = []
        if request.stop_after_first_failure and self.stop_flag:
            engine_args.append(self.stop_flag)
        engine_args.extend(request.engine_args)
        if engine_args:
            cmd.append("--")
            cmd.extend(engine_args)
        return cmd

    def list_targets(self):
        cmd = self.list_cmd()
        logger.debug("%s Listing fuzz targets: %s" % (self, format_cmdline(cmd)))

        try:
            proc = subprocess.run(cmd,
                    cwd=self.project_dir,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    universal_newlines=True,
                    errors='backslashreplace')
        except OSError as e:
            raise CatalogUnavailable("Failed to launch %s: %s" % (self.engine_path, e))

        if proc.returncode != 0:
            msg = "%s could not list fuzz targets (exit status %d)" % (self.engine_path, proc.returncode)
            if proc.stderr.strip():
                msg += ":\n" + proc.stderr.rstrip()
            raise CatalogUnavailable(msg)

        if proc.stderr.strip():
            logger.debug(proc.stderr.rstrip())

        return [line.strip() for line in proc.stdout.splitlines() if line.strip()]

    def _relay(self, stream, log):
        # pass raw bytes through, decode only for scanning
        sys.stderr.flush()
        out = getattr(sys.stderr, "buffer", None)
        for line in stream:
            if out is not None:
                out.write(line)
                out.flush()
            else:
                sys.stderr.write(line.decode("utf-8", errors="backslashreplace"))
                sys.stderr.flush()
            log.feed(line.decode("utf-8", errors="backslashreplace"))

    def run(self, request):
        cmd = self.run_cmd(request)
        logger.info("%s Launching fuzz target %s..." % (self, request.target))
        logger.debug("%s %s" % (self, format_cmdline(cmd)))

        # stdout is inherited, stderr is relayed unmodified while watching for markers
        try:
            process = subprocess.Popen(cmd,
                    cwd=self.project_dir,
                    stdin=subprocess.DEVNULL,
                    stderr=subprocess.PIPE)
        except OSError as e:
            return RunOutcome.launch_error("Failed to launch %s: %s" % (self.engine_path, e))

        log = EngineLog(self.failure_markers)
        try:
            self._relay(process.stderr, log)
        except KeyboardInterrupt:
            # SIGINT reached the engine as well, let it write its final report
            logger.warn("%s Interrupted, waiting for engine to exit..." % self)
            self._relay(process.stderr, log)
            process.wait()
            raise
        finally:
            process.stderr.close()

        returncode = process.wait()
        logger.debug("%s Engine exit code: %d" % (self, returncode))

        if returncode == 0:
            return RunOutcome.completed(0)
        if log.found_failure:
            return RunOutcome.failure_detected(returncode, log.diagnostic(), log.artifact)
        return RunOutcome.completed(returncode, log.diagnostic())
