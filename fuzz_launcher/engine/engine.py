# Copyright (C) 2019-2020 Intel Corporation
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Capability interface of a fuzzing engine, as seen by the launcher.
"""


class Engine:

    def list_targets(self):
        """
        Return the fuzz targets of the project in the order reported by the engine.
        Raise CatalogUnavailable if they cannot be enumerated.
        """
        raise NotImplementedError

    def run(self, request):
        """
        Run request.target once and block until the engine exits.
        Return a RunOutcome.
        """
        raise NotImplementedError
