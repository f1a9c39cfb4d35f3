# Copyright 2017-2019 Sergej Schumilo, Cornelius Aschermann, Tim Blazytko
# Copyright 2019-2020 Intel Corporation
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Startup routines for the fuzz launcher.

Without a target, print the catalog of fuzz targets reported by the engine.
With a target, run it once under the engine with stop-after-first-failure and
translate the outcome into the process exit status.
"""

from fuzz_launcher.common.errors import (EXIT_INTERRUPTED, FailureDetected,
                                         LauncherError)
from fuzz_launcher.common.logger import init_logger, logger
from fuzz_launcher.common.self_check import check_engine_location
from fuzz_launcher.common.util import engine_sweep
from fuzz_launcher.engine.cargo_fuzz import CargoFuzzEngine
from fuzz_launcher.manager.dispatcher import Dispatcher


def start(config, engine=None, out=None):

    init_logger(config)

    if engine is None:
        check_engine_location(config)
        engine = CargoFuzzEngine(config)

    dispatcher = Dispatcher(engine, out)

    try:
        return dispatcher.dispatch(config.target, config.engine_args)
    except FailureDetected as e:
        logger.warn("Found a bug! " + str(e))
        return e.exit_code
    except LauncherError as e:
        logger.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logger.info("Received Ctrl-C, exiting...")
        return EXIT_INTERRUPTED
    finally:
        if config.target:
            engine_sweep("Detected leftover fuzz target processes:", config.target)
        logger.close()
