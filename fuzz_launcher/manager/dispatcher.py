# Copyright (C) 2019-2020 Intel Corporation
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Turn one invocation into either a catalog listing or a single fuzzing session.

Target names are handed to the engine as given; the engine is the only source
of truth on which targets exist. A session is never retried.
"""

from fuzz_launcher.common.errors import EngineLaunchError, EngineNonFailureError, FailureDetected
from fuzz_launcher.common.logger import logger
from fuzz_launcher.engine.run_outcome import RunRequest
from fuzz_launcher.manager.catalog import print_catalog, resolve_catalog


class Dispatcher:

    def __init__(self, engine, out=None):
        self.engine = engine
        self.out = out

    def dispatch(self, target=None, engine_args=()):
        if target is None:
            return self.list_targets()

        request = RunRequest(target, stop_after_first_failure=True, engine_args=tuple(engine_args))
        return self.run(request)

    def list_targets(self):
        catalog = resolve_catalog(self.engine)
        print_catalog(catalog, self.out)
        return 0

    def run(self, request):
        outcome = self.engine.run(request)
        logger.debug("%s Session for %s ended: %r" % (self.engine, request.target, outcome))

        if outcome.is_launch_error():
            raise EngineLaunchError(outcome.diagnostic)

        if outcome.is_failure():
            msg = "Fuzz target %s found a failing input" % request.target
            if outcome.artifact:
                msg += ": %s" % outcome.artifact
            raise FailureDetected(msg, target=request.target, artifact=outcome.artifact)

        if not outcome.is_regular():
            msg = "Engine exited with status %d while running %s" % (outcome.exit_code, request.target)
            if outcome.diagnostic:
                msg += ":\n" + outcome.diagnostic
            raise EngineNonFailureError(msg, returncode=outcome.exit_code, diagnostic=outcome.diagnostic)

        logger.info("%s Fuzz target %s completed without failures." % (self.engine, request.target))
        return 0
