# Copyright (C) 2019-2020 Intel Corporation
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Error categories surfaced by the launcher, each with its own exit status.
"""

EXIT_OK = 0
EXIT_FAILURE_DETECTED = 1
EXIT_USAGE = 2
EXIT_ENGINE_ERROR = 3
EXIT_LAUNCH_ERROR = 4
EXIT_CATALOG_UNAVAILABLE = 5
EXIT_INTERRUPTED = 130


class LauncherError(Exception):
    """Base class for all errors reported to the invoking environment"""
    exit_code = 1


class CatalogUnavailable(LauncherError):
    """The engine could not enumerate the fuzz targets of the project"""
    exit_code = EXIT_CATALOG_UNAVAILABLE


class EngineLaunchError(LauncherError):
    """The engine process could not be started"""
    exit_code = EXIT_LAUNCH_ERROR


class EngineNonFailureError(LauncherError):
    """The engine exited non-zero without having found a failing input"""
    exit_code = EXIT_ENGINE_ERROR

    def __init__(self, msg, returncode=None, diagnostic=None):
        super().__init__(msg)
        self.returncode = returncode
        self.diagnostic = diagnostic


class FailureDetected(LauncherError):
    """The engine found a crashing, hanging or sanitizer-triggering input"""
    exit_code = EXIT_FAILURE_DETECTED

    def __init__(self, msg, target=None, artifact=None):
        super().__init__(msg)
        self.target = target
        self.artifact = artifact
