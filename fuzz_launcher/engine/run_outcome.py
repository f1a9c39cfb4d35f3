# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from collections import namedtuple

RunRequest = namedtuple('RunRequest', ['target', 'stop_after_first_failure', 'engine_args'],
                        defaults=(True, ()))


class RunOutcome:
    """
    Result of one engine session. exit_reason is one of
    "completed", "failure" or "launch_error".
    """

    @staticmethod
    def completed(exit_code, diagnostic=None):
        return RunOutcome("completed", exit_code=exit_code, diagnostic=diagnostic)

    @staticmethod
    def failure_detected(exit_code, diagnostic=None, artifact=None):
        return RunOutcome("failure", exit_code=exit_code, diagnostic=diagnostic, artifact=artifact)

    @staticmethod
    def launch_error(message):
        return RunOutcome("launch_error", diagnostic=message)

    def __init__(self, exit_reason, exit_code=None, diagnostic=None, artifact=None):
        self.exit_reason = exit_reason
        self.exit_code = exit_code
        self.diagnostic = diagnostic
        self.artifact = artifact

    def __repr__(self):
        return "RunOutcome(%s, exit_code=%r, artifact=%r)" % (self.exit_reason, self.exit_code, self.artifact)

    def is_failure(self):
        return self.exit_reason == "failure"

    def is_launch_error(self):
        return self.exit_reason == "launch_error"

    def is_regular(self):
        return self.exit_reason == "completed" and self.exit_code == 0
