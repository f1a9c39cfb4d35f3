# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import os
import shlex

import psutil

from fuzz_launcher.common.logger import logger


# print any leftover processes of this user still running the given target
def engine_sweep(msg, target):
    def get_target_processes():
        for proc in psutil.process_iter(['pid', 'uids', 'cmdline']):
            if proc.info['pid'] == os.getpid():
                continue
            uids = proc.info['uids']
            if uids is None or uids.real != os.getuid():
                continue
            cmdline = proc.info['cmdline'] or []
            if any(os.path.basename(arg) == target for arg in cmdline):
                yield (proc.info['pid'])

    try:
        pids = [ p for p in get_target_processes() ]
    except psutil.Error as e:
        logger.debug("Skipping process sweep: %s" % e)
        return []

    if (len(pids) > 0):
        logger.warn(msg + " " + repr(pids))
    return pids

# shell-quoted command line, for logging only
def format_cmdline(cmd):
    return " ".join(shlex.quote(str(arg)) for arg in cmd)
