#!/usr/bin/env python3
#
# Copyright (C) 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright (C) 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Launcher for fuzz targets. Without arguments, list the fuzz targets of the
project. With a target name, fuzz it until the first failure. Check
fuzz_launcher/manager/core.py for more.
"""

import sys

from fuzz_launcher.common.errors import EXIT_LAUNCH_ERROR
from fuzz_launcher.common.self_check import self_check
from fuzz_launcher.common.config import ConfigArgsParser

from fuzz_launcher.manager import core as launcher

def main():

    if not self_check():
        return EXIT_LAUNCH_ERROR

    parser = ConfigArgsParser()
    config = parser.parse_launch_options()

    return launcher.start(config)


if __name__ == "__main__":
    sys.exit(main())
