# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import shutil
import sys

from fuzz_launcher.common.logger import logger


def check_version():
    if sys.version_info < (3, 7, 0):
        logger.error("This script requires python 3.7 or newer!")
        return False
    return True


def check_packages():

    deps = [
            'confuse',
            'flatdict',
            'psutil',
            ]

    for pkg in deps:
        try:
            importlib.import_module(pkg)
        except (ImportError):
            logger.error("Failed to import package %s - check dependencies!" % pkg)
            return False

    return True

def check_engine_location(config):
    engine_path = config.engine_path

    if not engine_path or not shutil.which(engine_path):
        logger.warn("Could not find fuzzing engine at %s..." % engine_path)
        return False
    return True

def self_check():
    if not check_version():
        return False
    if not check_packages():
        return False
    return True
