# Copyright 2021 Armand Schinkel
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import sys
import time

from datetime import timedelta

from fuzz_launcher.common import color

LOG_LEVEL = {
    "DEBUG": 1, # verbose/debug - enable with --verbose
    "INFO":  2, # normal reporting - disable with --quiet but --log will still include them
    "WARN":  3, # minor/correctable issues
    "ERROR": 4, # major/fatal issues
}

# --quiet - mute debug and info output on the console
# --verbose - enable verbose console output (logger.debug())
# --log <file> - log outputs to file, combine with --verbose for max verbosity
#
# The console is always stderr: stdout belongs to the target catalog and the engine.

class Logger():
    def __init__(self):
        self.init_time = time.time()
        self.stdout_level = LOG_LEVEL["INFO"]
        self.file_level = None
        self.log_file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return

    def init(self, stdout_level="INFO", file_level=None, log_file=None):
        self.close()
        self.stdout_level = LOG_LEVEL[stdout_level]
        self.file_level = None
        if file_level and log_file:
            self.file_level = LOG_LEVEL[file_level]
            self.log_file = open(log_file, "w+")

    def close(self):
        if self.log_file:
            self.log_file.close()
            self.log_file = None

    def file_log(self, msg_level, msg):
        if self.file_level and self.file_level <= LOG_LEVEL[msg_level]:
            self.log_file.write(str(timedelta(seconds=time.time() - self.init_time)) + " " + msg + "\n")
            self.log_file.flush()

    def _console(self, msg, prefix="", tint=None):
        stream = sys.stderr
        if tint and stream.isatty():
            msg = color.FLUSH_LINE + tint + prefix + msg + color.ENDC
        else:
            msg = prefix + msg
        print(msg, file=stream, flush=True)

    def debug(self, msg):
        self.file_log("DEBUG", msg)
        if self.stdout_level <= LOG_LEVEL["DEBUG"]:
            self._console(msg)

    def info(self, msg):
        self.file_log("INFO", msg)
        if self.stdout_level <= LOG_LEVEL["INFO"]:
            self._console(msg, tint=color.OKBLUE)

    def warn(self, msg):
        self.file_log("WARN", color.WARNING_PREFIX + msg)
        self._console(msg, tint=color.WARNING)

    def error(self, msg):
        self.file_log("ERROR", color.ERROR_PREFIX + msg)
        self._console(msg, prefix=color.ERROR_PREFIX, tint=color.FAIL)

logger = Logger()

def init_logger(config):

    # Default is INFO level to console, and no file logging.
    # Useful modifiers:
    #  -v / -q to increase/decrease console logging
    #  -l / --log <file> to enable file logging, at DEBUG level when combined with -v
    if config.quiet:
        stdout_level = "WARN"
    elif config.verbose:
        stdout_level = "DEBUG"
    else:
        stdout_level = "INFO"

    if config.log:
        if config.verbose:
            file_level = "DEBUG"
        else:
            file_level = "INFO"
    else:
        file_level = None

    logger.init(stdout_level, file_level, config.log)
    return logger
